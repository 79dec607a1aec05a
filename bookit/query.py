# -*- coding: utf-8 -*-
"""bookit.query
License:  MIT
About:
Filter and sort operators over an in-memory list of records, and the
per-record-type directives that build them from command-line text
(`alias::acme`, `ts`, ...).

"""
import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Callable, Optional

from bookit.errors import DirectiveError, EmptyResultError
from bookit.records import Alias, Contractor, HourLog

logger = logging.getLogger(__name__)

DIRECTIVE_SEP = "::"


@dataclass(frozen=True)
class Filter:
    """Keeps the records that satisfy a predicate.

    Attributes:
        name (str):         the directive name.
        value (str):        the directive value, if any.
        predicate (func):   record -> bool.

    """
    name: str
    value: Optional[str]
    predicate: Callable[[Any], bool]

    def __call__(self, records):
        return [record for record in records if self.predicate(record)]


@dataclass(frozen=True)
class Sort:
    """Orders records by a key. With no key the order is left as-is.

    Attributes:
        name (str):     the directive name.
        key (func):     record -> sort key, or None.
        reverse (bool): sort descending.

    """
    name: str
    key: Optional[Callable[[Any], Any]] = None
    reverse: bool = False


NO_FILTER = Filter("nofilter", None, lambda record: True)
NO_SORT = Sort("no_sort")


def apply_filter_chain(records, filters):
    """Apply filters strictly left to right.

    A filter step that would receive an empty list is not run; the
    chain fails with EmptyResultError instead. An empty filter list
    passes the records through unchanged, even when there are none.

    Args:
        records (list): the records to filter.
        filters (list): Filter objects, applied in order.

    Returns:
        records (list): the remaining records, in input order.

    """
    records = list(records)
    for step in filters:
        if not records:
            logger.debug("no candidates left before '%s'", step.name)
            raise EmptyResultError(step.name)
        records = step(records)
        logger.debug(
            "filter '%s' (%s) left %d record(s)",
            step.name, step.value, len(records))
    return records


def apply_sort(records, sort):
    """Order records. Never fails.

    Args:
        records (list): the records to order.
        sort (Sort):    the ordering to apply.

    Returns:
        records (list): a new, ordered list.

    """
    if sort.key is None:
        return list(records)
    return sorted(records, key=sort.key, reverse=sort.reverse)


def partition_directive(text):
    """Split `field::value` into its two parts.

    Args:
        text (str): the directive.

    Returns:
        field (str), value (str or None)

    """
    if DIRECTIVE_SEP not in text:
        return text.strip().lower(), None
    field, value = text.split(DIRECTIVE_SEP, 1)
    field = field.strip().lower()
    if not field:
        raise DirectiveError(text, "missing directive")
    value = value.strip()
    if not value:
        raise DirectiveError(text, f"missing value for '{field}'")
    return field, value


def _parse_iso_date(text, value):
    try:
        return datetime.strptime(value, "%Y-%m-%d").date()
    except ValueError as err:
        raise DirectiveError(text, "date must be YYYY-MM-DD") from err


# directive name -> (requires value, builder(value, text) -> Filter)
FILTERS = {
    Contractor: {
        "nofilter": (False, lambda value, text: NO_FILTER),
        "name": (True, lambda value, text: Filter(
            "name", value,
            lambda record: value.lower() in record.name.lower())),
    },
    Alias: {
        "nofilter": (False, lambda value, text: NO_FILTER),
        "contract": (True, lambda value, text: Filter(
            "contract", value,
            lambda record: record.contractor == value)),
        "contractor": (True, lambda value, text: Filter(
            "contractor", value,
            lambda record: record.contractor == value)),
    },
    HourLog: {
        "nofilter": (False, lambda value, text: NO_FILTER),
        "alias": (True, lambda value, text: Filter(
            "alias", value,
            lambda record: record.alias == value)),
        "ticket": (True, lambda value, text: Filter(
            "ticket", value,
            lambda record: record.ticket == value)),
        "date": (True, lambda value, text: _date_filter(value, text)),
    },
}

SORTS = {
    Contractor: {
        "no_sort": NO_SORT,
        "slug": Sort("slug", key=lambda record: record.slug),
    },
    Alias: {
        "no_sort": NO_SORT,
        "slug": Sort("slug", key=lambda record: record.slug),
        "rate": Sort(
            "rate", key=lambda record: record.hourly_rate, reverse=True),
    },
    HourLog: {
        "no_sort": NO_SORT,
        "ts": Sort(
            "timestamp", key=lambda record: record.timestamp, reverse=True),
        "timestamp": Sort(
            "timestamp", key=lambda record: record.timestamp, reverse=True),
        "date": Sort(
            "date", key=lambda record: record.date, reverse=True),
    },
}

DEFAULT_FILTERS = {
    Contractor: NO_FILTER,
    Alias: NO_FILTER,
    HourLog: NO_FILTER,
}

DEFAULT_SORTS = {
    Contractor: NO_SORT,
    Alias: NO_SORT,
    HourLog: NO_SORT,
}


def _date_filter(value, text):
    day = _parse_iso_date(text, value)
    return Filter("date", value, lambda record: record.date == day)


def parse_filter(record_type, text):
    """Build a Filter from a directive for a record type.

    Args:
        record_type (type): the record class being queried.
        text (str):         the directive, e.g. 'alias::acme'.

    Returns:
        filter (Filter):    the filter.

    """
    field, value = partition_directive(text)
    known = FILTERS[record_type]
    if field not in known:
        if value is None:
            raise DirectiveError(text, "invalid filter query")
        raise DirectiveError(text, f"cannot filter on '{field}'")
    needs_value, build = known[field]
    if needs_value and value is None:
        raise DirectiveError(text, f"missing value for '{field}'")
    if not needs_value and value is not None:
        raise DirectiveError(text, f"'{field}' takes no value")
    return build(value, text)


def parse_sort(record_type, text):
    """Look up a Sort by name for a record type.

    Args:
        record_type (type): the record class being queried.
        text (str):         the sort name, e.g. 'ts'.

    Returns:
        sort (Sort):    the sort.

    """
    sort = SORTS[record_type].get(text.strip().lower())
    if sort is None:
        choices = ", ".join(SORTS[record_type])
        raise DirectiveError(text, f"invalid sort (use one of: {choices})")
    return sort


def default_items(records, record_type):
    """Apply a record type's default filter and default sort."""
    records = DEFAULT_FILTERS[record_type](records)
    return apply_sort(records, DEFAULT_SORTS[record_type])


def filtered_view(records, filters, sort):
    """Filter then sort a list of records.

    Args:
        records (list): the records to query.
        filters (list): Filter objects, applied in order.
        sort (Sort):    the ordering of the result.

    Returns:
        records (list): the filtered, ordered records.

    """
    return apply_sort(apply_filter_chain(records, filters), sort)
