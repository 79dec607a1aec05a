"""
Pytest configuration for bookit.

Provides fixtures for:
- A resolved Config pointing at a temporary data directory
- Stores per record type
- Sample records
"""

from datetime import date, datetime, timezone

import pytest

from bookit.config import Config
from bookit.records import Alias, Contractor, HourLog
from bookit.store import Store


@pytest.fixture
def config(tmp_path):
    """Config with a fresh data directory and colors off."""
    data_dir = tmp_path / "data"
    data_dir.mkdir()
    return Config(
        str(tmp_path / "config"),
        str(data_dir),
        colors={},
        color_enabled=False)


@pytest.fixture
def contractors(config):
    return Store.for_record(config, Contractor)


@pytest.fixture
def aliases(config):
    return Store.for_record(config, Alias)


@pytest.fixture
def hours(config):
    return Store.for_record(config, HourLog)


@pytest.fixture
def acme():
    return Contractor(slug="acme", name="Acme Corp")


@pytest.fixture
def alias_x():
    return Alias(
        slug="x",
        contractor="acme",
        short_description="project x",
        hourly_rate=80)


def make_hourlog(id, alias="x", minutes=30, day=date(2021, 3, 4),
                 hour=9, **kwargs):
    return HourLog(
        id=id,
        alias=alias,
        minutes=minutes,
        date=day,
        timestamp=datetime(2021, 3, 4, hour, 0, tzinfo=timezone.utc),
        **kwargs)


@pytest.fixture
def hourlog():
    """Factory for HourLog records with sensible defaults."""
    return make_hourlog
