# -*- coding: utf-8 -*-
"""bookit.records
License:  MIT
About:
Record types stored by bookit. Each type knows its identifier, the
file its collection lives in, the codec format of that file, and how
to convert itself to and from plain serializable values.

"""
import random
import string
from dataclasses import dataclass
from datetime import date, datetime
from typing import ClassVar, Optional

from dateutil import parser as dtparser

HASH_CHARS = string.ascii_lowercase + string.digits
HASH_LENGTH = 4


def slugify(text):
    """Lower-case a string and strip all whitespace from it.

    Args:
        text (str): the text to slugify.

    Returns:
        slug (str): the slugified text.

    """
    return ''.join(text.lower().split())


def is_slug(text):
    """Whether a string is usable as-is as a slug."""
    return bool(text) and text == slugify(text)


def gen_hash(existing=None):
    """Generates a short random identifier and checks for collisions.

    Args:
        existing (iterable):    identifiers already in use.

    Returns:
        hashid (str):   a randomly-generated identifier.

    """
    existing = set(existing or [])
    length = HASH_LENGTH
    attempts = 0
    while True:
        hashid = ''.join(random.choice(HASH_CHARS) for x in range(length))
        if hashid not in existing:
            break
        attempts += 1
        # the short space is crowded, widen it
        if attempts % 100 == 0:
            length += 1
    return hashid


def _require(data, field):
    if field not in data or data[field] is None:
        raise ValueError(f"missing field '{field}'")
    return data[field]


def _string(data, field, optional=False):
    if optional and data.get(field) is None:
        return None
    value = _require(data, field)
    if not isinstance(value, str):
        raise ValueError(f"field '{field}' must be a string")
    return value


def _slug(data, field):
    value = _string(data, field)
    if not is_slug(value):
        raise ValueError(
            f"field '{field}' must be lowercase with no spaces: '{value}'")
    return value


def _count(data, field):
    value = _require(data, field)
    # bool is an int subclass
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"field '{field}' must be an integer")
    if value < 0:
        raise ValueError(f"field '{field}' must not be negative")
    return value


def _date(data, field):
    value = _require(data, field)
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    try:
        return dtparser.isoparse(str(value)).date()
    except (TypeError, ValueError) as err:
        raise ValueError(f"field '{field}' is not a date: {err}") from err


def _datetime(data, field):
    value = _require(data, field)
    if isinstance(value, datetime):
        return value
    try:
        return dtparser.isoparse(str(value))
    except (TypeError, ValueError) as err:
        raise ValueError(
            f"field '{field}' is not a timestamp: {err}") from err


@dataclass(frozen=True)
class Contractor:
    """A party that hours are billed to.

    Attributes:
        slug (str): unique reference, lowercase with no spaces.
        name (str): display name.

    """
    slug: str
    name: str

    FILE: ClassVar[str] = "contractors.yml"
    FORMAT: ClassVar[str] = "yaml"
    LABEL: ClassVar[str] = "contractor"

    def identifier(self):
        return self.slug

    def to_dict(self):
        return {"slug": self.slug, "name": self.name}

    @classmethod
    def from_dict(cls, data):
        return cls(slug=_slug(data, "slug"), name=_string(data, "name"))


@dataclass(frozen=True)
class Alias:
    """A project alias that hours are booked against.

    Attributes:
        slug (str):                 unique reference.
        contractor (str):           slug of the billed contractor.
        short_description (str):    what the project is.
        hourly_rate (int):          billed rate per hour.

    """
    slug: str
    contractor: str
    short_description: str
    hourly_rate: int

    FILE: ClassVar[str] = "aliases.yml"
    FORMAT: ClassVar[str] = "yaml"
    LABEL: ClassVar[str] = "alias"

    def identifier(self):
        return self.slug

    def to_dict(self):
        return {
            "slug": self.slug,
            "contractor": self.contractor,
            "short_description": self.short_description,
            "hourly_rate": self.hourly_rate
        }

    @classmethod
    def from_dict(cls, data):
        return cls(
            slug=_slug(data, "slug"),
            contractor=_string(data, "contractor"),
            short_description=_string(data, "short_description"),
            hourly_rate=_count(data, "hourly_rate"))


@dataclass(frozen=True)
class HourLog:
    """Minutes booked against an alias on a given day.

    Attributes:
        id (str):           generated short hash.
        alias (str):        slug of the alias booked against.
        minutes (int):      time spent.
        date (date):        the day the work was done.
        message (str):      description of the work (optional).
        ticket (str):       work ticket reference (optional).
        branch (str):       git branch reference (optional).
        timestamp (datetime):   when the booking was created.

    """
    id: str
    alias: str
    minutes: int
    date: date
    timestamp: datetime
    message: Optional[str] = None
    ticket: Optional[str] = None
    branch: Optional[str] = None

    FILE: ClassVar[str] = "hours.json"
    FORMAT: ClassVar[str] = "json"
    LABEL: ClassVar[str] = "hour log"

    def identifier(self):
        return self.id

    def to_dict(self):
        return {
            "id": self.id,
            "alias": self.alias,
            "minutes": self.minutes,
            "date": self.date.isoformat(),
            "message": self.message,
            "ticket": self.ticket,
            "branch": self.branch,
            "timestamp": self.timestamp.isoformat()
        }

    @classmethod
    def from_dict(cls, data):
        return cls(
            id=_string(data, "id"),
            alias=_string(data, "alias"),
            minutes=_count(data, "minutes"),
            date=_date(data, "date"),
            timestamp=_datetime(data, "timestamp"),
            message=_string(data, "message", optional=True),
            ticket=_string(data, "ticket", optional=True),
            branch=_string(data, "branch", optional=True))


RECORD_TYPES = (Contractor, Alias, HourLog)
