# -*- coding: utf-8 -*-
"""bookit.prompts
License:  MIT
About:
Interactive prompts that build new records and the per-record-type
update hooks used by the `update` commands.

"""
from bookit.records import Alias, Contractor, HourLog, is_slug, slugify


def ask(message, default=None, check=None, convert=str, reader=input):
    """Prompt until a valid answer is given.

    Args:
        message (str):      the prompt text.
        default (obj):      returned for an empty answer (optional).
        check (func):       value -> bool, rejects invalid answers.
        convert (func):     text -> value, may raise ValueError.
        reader (func):      reads one answer (defaults to input()).

    Returns:
        value (obj):    the converted answer.

    """
    while True:
        if default is not None:
            answer = reader(f"{message} [{default}]: ").strip()
        else:
            answer = reader(f"{message}: ").strip()
        if not answer:
            if default is not None:
                return default
            continue
        try:
            value = convert(answer)
        except ValueError:
            print(f"Invalid value: {answer}")
            continue
        if check and not check(value):
            print(f"Invalid value: {answer}")
            continue
        return value


def _rate(text):
    rate = int(text)
    if rate < 0:
        raise ValueError(text)
    return rate


def confirm(message, reader=input):
    """Ask a yes/no question. Anything but yes is no."""
    answer = reader(f"{message} [yes/no]: ").strip().lower()
    return answer in ['yes', 'y']


def new_contractor(reader=input):
    """Prompt for the fields of a new contractor."""
    name = ask("Contractor name", reader=reader)
    slug = ask(
        "Contractor reference (lowercase and no spaces)",
        default=slugify(name),
        check=is_slug,
        reader=reader)
    return Contractor(slug=slug, name=name)


def update_contractor(contractor, reader=input, lookup=None):
    """Prompt for new contractor values, defaulting to the current
    ones. The slug never changes.
    """
    name = ask("Contractor name", default=contractor.name, reader=reader)
    return Contractor(slug=contractor.slug, name=name)


def new_alias(lookup, reader=input):
    """Prompt for the fields of a new alias.

    Args:
        lookup (func):  contractor slug -> Contractor, raises
    MissingIdentifierError for an unknown contractor.
        reader (func):  reads one answer.

    Returns:
        alias (Alias):  the new alias.

    """
    slug = ask("Alias", check=is_slug, reader=reader)
    contractor = lookup(ask("Contractor slug", reader=reader))
    short_description = ask("Brief description", reader=reader)
    hourly_rate = ask("Hourly rate", convert=_rate, reader=reader)
    return Alias(
        slug=slug,
        contractor=contractor.slug,
        short_description=short_description,
        hourly_rate=hourly_rate)


def update_alias(alias, reader=input, lookup=None):
    """Prompt for new alias values, defaulting to the current ones.

    Args:
        alias (Alias):  the alias being updated.
        reader (func):  reads one answer.
        lookup (func):  validates a changed contractor slug (optional).

    Returns:
        alias (Alias):  the updated alias, same slug.

    """
    contractor = ask(
        "Contractor slug", default=alias.contractor, reader=reader)
    if lookup and contractor != alias.contractor:
        contractor = lookup(contractor).slug
    short_description = ask(
        "Brief description", default=alias.short_description,
        reader=reader)
    hourly_rate = ask(
        "Hourly rate", default=alias.hourly_rate, convert=_rate,
        reader=reader)
    return Alias(
        slug=alias.slug,
        contractor=contractor,
        short_description=short_description,
        hourly_rate=hourly_rate)


def update_hourlog(hourlog, reader=input, lookup=None):
    # bookings are immutable, delete and book again
    return hourlog


UPDATE_HOOKS = {
    Contractor: update_contractor,
    Alias: update_alias,
    HourLog: update_hourlog
}
