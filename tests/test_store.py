"""Tests for bookit.store module."""

import os

import pytest

from bookit.codecs import codec_for
from bookit.errors import (
    CorruptionError,
    DuplicateIdentifierError,
    EncodeError,
    MissingIdentifierError,
    ReadError,
    WriteError)
from bookit.records import Alias, Contractor
from bookit.store import Store


class TestLoad:
    """A missing file is an empty collection, a bad one is fatal."""

    def test_missing_file_is_empty(self, contractors):
        assert not os.path.exists(contractors.path)
        assert contractors.load() == {}

    def test_empty_file_is_empty(self, contractors):
        with open(contractors.path, "w", encoding="utf-8") as f:
            f.write("")
        assert contractors.load() == {}

    def test_undecodable_file_is_corruption(self, contractors):
        with open(contractors.path, "w", encoding="utf-8") as f:
            f.write("acme: [unclosed\n")
        with pytest.raises(CorruptionError) as excinfo:
            contractors.load()
        assert excinfo.value.path == contractors.path
        assert excinfo.value.reason

    def test_invalid_record_is_corruption(self, hours):
        with open(hours.path, "w", encoding="utf-8") as f:
            f.write('{"abcd": {"id": "abcd", "alias": "x"}}')
        with pytest.raises(CorruptionError) as excinfo:
            hours.load()
        assert "abcd" in excinfo.value.reason

    def test_unreadable_path_is_read_error(self, tmp_path):
        # a directory in place of the file cannot be read
        path = tmp_path / "contractors.yml"
        path.mkdir()
        store = Store(Contractor, None, path)
        with pytest.raises(ReadError):
            store.load()

    def test_for_record_uses_data_dir(self, config, contractors):
        assert contractors.path == os.path.join(
            config.data_dir, "contractors.yml")


class TestAdd:

    def test_add_then_retrieve(self, contractors, acme):
        contractors.add(acme)
        assert contractors.retrieve("acme") == acme

    def test_duplicate_is_rejected(self, contractors, acme):
        contractors.add(acme)
        with pytest.raises(DuplicateIdentifierError) as excinfo:
            contractors.add(Contractor(slug="acme", name="Other"))
        assert excinfo.value.slug == "acme"
        assert contractors.load() == {"acme": acme}

    def test_identifiers_stay_unique(self, contractors):
        for slug in ["a", "b", "c", "a", "b"]:
            try:
                contractors.add(Contractor(slug=slug, name=slug.upper()))
            except DuplicateIdentifierError:
                pass
        assert contractors.identifiers() == ["a", "b", "c"]

    def test_persists_across_instances(self, config, contractors, acme):
        contractors.add(acme)
        other = Store.for_record(config, Contractor)
        assert other.retrieve_all() == [acme]


class TestDelete:

    def test_delete_then_retrieve_fails(self, contractors, acme):
        contractors.add(acme)
        contractors.delete("acme")
        with pytest.raises(MissingIdentifierError):
            contractors.retrieve("acme")

    def test_delete_missing(self, contractors, acme):
        contractors.add(acme)
        with pytest.raises(MissingIdentifierError) as excinfo:
            contractors.delete("nope")
        assert excinfo.value.available == ["acme"]
        assert contractors.load() == {"acme": acme}


class TestOverwrite:

    def test_overwrite_keeps_size(self, contractors, acme):
        contractors.add(acme)
        contractors.add(Contractor(slug="initech", name="Initech"))
        renamed = Contractor(slug="acme", name="Acme Inc")
        contractors.overwrite(renamed)
        assert len(contractors.load()) == 2
        assert contractors.retrieve("acme") == renamed

    def test_overwrite_does_not_create(self, contractors, acme):
        with pytest.raises(MissingIdentifierError):
            contractors.overwrite(acme)
        assert contractors.load() == {}


class TestRetrieve:

    def test_missing_lists_available(self, contractors, acme):
        contractors.add(acme)
        with pytest.raises(MissingIdentifierError) as excinfo:
            contractors.retrieve("missing")
        assert excinfo.value.slug == "missing"
        assert excinfo.value.available == ["acme"]
        assert excinfo.value.truncated is False

    def test_available_is_truncated(self, contractors):
        for i in range(12):
            contractors.add(Contractor(slug=f"c{i:02d}", name=str(i)))
        with pytest.raises(MissingIdentifierError) as excinfo:
            contractors.retrieve("missing")
        assert len(excinfo.value.available) == 10
        assert excinfo.value.truncated is True

    def test_retrieve_all_empty(self, contractors):
        assert contractors.retrieve_all() == []


class TestCommit:
    """A failed commit leaves the previous file as it was."""

    def test_failed_replace_keeps_old_content(
            self, contractors, acme, monkeypatch):
        contractors.add(acme)
        with open(contractors.path, encoding="utf-8") as f:
            before = f.read()

        def broken_replace(src, dst):
            raise OSError("disk full")

        monkeypatch.setattr("bookit.store.os.replace", broken_replace)
        with pytest.raises(WriteError) as excinfo:
            contractors.add(Contractor(slug="initech", name="Initech"))
        assert "disk full" in excinfo.value.reason
        monkeypatch.undo()

        with open(contractors.path, encoding="utf-8") as f:
            assert f.read() == before
        leftovers = [
            name for name in os.listdir(os.path.dirname(contractors.path))
            if name.endswith(".tmp")]
        assert leftovers == []
        assert contractors.load() == {"acme": acme}

    def test_invalid_record_is_not_written(self, contractors, acme):
        contractors.add(acme)
        with open(contractors.path, encoding="utf-8") as f:
            before = f.read()
        with pytest.raises(EncodeError):
            contractors.add(Contractor(slug="Acme Corp", name="Acme"))
        with open(contractors.path, encoding="utf-8") as f:
            assert f.read() == before
        assert contractors.load() == {"acme": acme}

    def test_invalid_overwrite_is_not_written(self, aliases, alias_x):
        aliases.add(alias_x)
        with pytest.raises(EncodeError):
            aliases.overwrite(Alias("x", "acme", "d", -5))
        assert aliases.retrieve("x") == alias_x

    def test_duplicate_keys_are_never_rewritten(self, contractors):
        text = (
            "acme:\n  slug: acme\n  name: First\n"
            "acme:\n  slug: acme\n  name: Second\n")
        with open(contractors.path, "w", encoding="utf-8") as f:
            f.write(text)
        with pytest.raises(CorruptionError):
            contractors.add(Contractor(slug="b", name="B"))
        with open(contractors.path, encoding="utf-8") as f:
            assert f.read() == text

    def test_missing_directory_is_write_error(self, tmp_path, acme):
        store = Store(
            Contractor, codec_for(Contractor),
            tmp_path / "gone" / "contractors.yml")
        with pytest.raises(WriteError):
            store.add(acme)

    def test_hours_round_trip_through_disk(self, hours, hourlog):
        first = hourlog("ab12", message="standup", ticket="RAS-002")
        second = hourlog("cd34", minutes=90, branch="feature/RAS-002")
        hours.add(first)
        hours.add(second)
        assert hours.load() == {"ab12": first, "cd34": second}
