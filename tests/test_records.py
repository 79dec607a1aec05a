"""Tests for bookit.records module."""

from datetime import date

import pytest

from bookit.records import (
    Alias,
    Contractor,
    HourLog,
    gen_hash,
    is_slug,
    slugify)


class TestSlugs:

    def test_slugify(self):
        assert slugify("Upper spaced") == "upperspaced"
        assert slugify("  Acme\tCorp \n") == "acmecorp"

    def test_is_slug(self):
        assert is_slug("acme")
        assert not is_slug("Acme")
        assert not is_slug("acme corp")
        assert not is_slug("")


class TestGenHash:

    def test_shape(self):
        hashid = gen_hash()
        assert len(hashid) == 4
        assert hashid.isalnum() and hashid == hashid.lower()

    def test_avoids_existing(self, monkeypatch):
        picks = iter("aaaa" "aaaa" "bbbb")
        monkeypatch.setattr(
            "bookit.records.random.choice", lambda chars: next(picks))
        assert gen_hash(["aaaa"]) == "bbbb"


class TestFromDict:

    def test_identifiers(self, acme, alias_x, hourlog):
        assert acme.identifier() == "acme"
        assert alias_x.identifier() == "x"
        assert hourlog("ab12").identifier() == "ab12"

    def test_contractor_slug_must_be_slug(self):
        with pytest.raises(ValueError):
            Contractor.from_dict({"slug": "Acme Corp", "name": "Acme"})

    def test_missing_field(self):
        with pytest.raises(ValueError) as excinfo:
            Contractor.from_dict({"slug": "acme"})
        assert "name" in str(excinfo.value)

    def test_rate_rejects_bool_and_negative(self):
        base = {"slug": "x", "contractor": "acme", "short_description": ""}
        with pytest.raises(ValueError):
            Alias.from_dict(dict(base, hourly_rate=True))
        with pytest.raises(ValueError):
            Alias.from_dict(dict(base, hourly_rate=-1))
        assert Alias.from_dict(dict(base, hourly_rate=0)).hourly_rate == 0

    def test_unknown_keys_ignored(self):
        record = Contractor.from_dict(
            {"slug": "acme", "name": "Acme", "colour": "red"})
        assert record == Contractor(slug="acme", name="Acme")

    def test_hourlog_accepts_date_objects(self, hourlog):
        data = hourlog("ab12").to_dict()
        data["date"] = date(2021, 3, 4)
        assert HourLog.from_dict(data) == hourlog("ab12")

    def test_hourlog_optional_fields(self, hourlog):
        data = hourlog("ab12").to_dict()
        del data["ticket"]
        assert HourLog.from_dict(data).ticket is None
        data["message"] = 5
        with pytest.raises(ValueError):
            HourLog.from_dict(data)
