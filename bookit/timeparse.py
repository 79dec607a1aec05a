# -*- coding: utf-8 -*-
"""bookit.timeparse
License:  MIT
About:
Shorthand parsers for the `book` command: a time spent expression
(`90`, `h::1.5`, `s::08:30`, `t::17:00`, `s::last`) and a date
expression (`today`, `yesterday`, `mon`, `2021-03-04`).

"""
from datetime import datetime, timedelta

from dateutil.relativedelta import relativedelta, MO, TU, WE, TH, FR, SA, SU

from bookit.errors import DirectiveError

WEEKDAYS = {
    "monday": MO,
    "tuesday": TU,
    "wednesday": WE,
    "thursday": TH,
    "friday": FR,
    "saturday": SA,
    "sunday": SU
}


def _parse_clock(text, value):
    try:
        return datetime.strptime(value, "%H:%M").time()
    except ValueError as err:
        raise DirectiveError(
            text, "incorrect time argument (HH:MM or last)") from err


def _stretch(text, begin, end):
    minutes = int((end - begin).total_seconds() // 60)
    if minutes < 0:
        raise DirectiveError(text, "time stretch ends before it starts")
    return minutes


def interpret_time(text, now, last=None):
    """Parse a time spent expression into minutes.

    Args:
        text (str):         the expression.
        now (datetime):     the current local time.
        last (datetime):    creation time of the most recent booking,
    needed for 's::last'.

    Returns:
        minutes (int):  the time spent.

    """
    text = text.strip()
    if "::" not in text:
        try:
            minutes = int(text)
        except ValueError as err:
            raise DirectiveError(
                text, "could not parse minutes (use an integer)") from err
        if minutes < 0:
            raise DirectiveError(text, "minutes must not be negative")
        return minutes

    directive, value = text.split("::", 1)
    directive = directive.lower()
    if not directive:
        raise DirectiveError(text, "missing directive")
    if not value:
        if directive == "h":
            raise DirectiveError(text, "no hours specified (use 'h::1.5')")
        raise DirectiveError(
            text, "no time specified after directive (use 's::08:00')")

    if directive == "h":
        try:
            hours = float(value)
        except ValueError as err:
            raise DirectiveError(
                text, "could not parse hours (use a float or integer)"
            ) from err
        if hours < 0:
            raise DirectiveError(text, "hours must not be negative")
        return int(60 * hours)
    if directive == "s":
        if value.lower() == "last":
            if last is None:
                raise DirectiveError(text, "there is no previous booking")
            return _stretch(text, last, now)
        clock = _parse_clock(text, value)
        return _stretch(text, datetime.combine(now.date(), clock,
                                               tzinfo=now.tzinfo), now)
    if directive == "t":
        clock = _parse_clock(text, value)
        return _stretch(text, now, datetime.combine(now.date(), clock,
                                                    tzinfo=now.tzinfo))
    raise DirectiveError(text, f"unknown directive '{directive}'")


def parse_date(text, today):
    """Parse a date expression.

    Weekday names resolve to the most recent such day, today included.

    Args:
        text (str):     'today', 'yesterday', a weekday name or
    abbreviation, or YYYY-MM-DD.
        today (date):   the current local date.

    Returns:
        day (date): the resolved date.

    """
    value = text.strip().lower()
    if value == "today":
        return today
    if value == "yesterday":
        return today - timedelta(days=1)
    if "-" in value:
        try:
            return datetime.strptime(value, "%Y-%m-%d").date()
        except ValueError as err:
            raise DirectiveError(text, "invalid date (use YYYY-MM-DD)") from err
    for name, weekday in WEEKDAYS.items():
        if len(value) >= 3 and name.startswith(value):
            return today + relativedelta(weekday=weekday(-1))
    raise DirectiveError(text, "invalid weekday")
