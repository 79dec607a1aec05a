#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""bookit.cli
License:  MIT
About:
Command-line entry point: argument parsing, dispatch to the stores and
query pipeline, and error reporting.

"""
import argparse
import logging
import sys
from datetime import datetime

import tzlocal

from bookit import APP_NAME, APP_VERS, APP_COPYRIGHT, APP_LICENSE
from bookit.config import load_config
from bookit.errors import (
    BookitError,
    EmptyResultError,
    MissingIdentifierError)
from bookit.presenter import Presenter
from bookit.prompts import UPDATE_HOOKS, confirm, new_alias, new_contractor
from bookit.query import NO_SORT, filtered_view, parse_filter, parse_sort
from bookit.records import (
    RECORD_TYPES,
    Alias,
    Contractor,
    HourLog,
    gen_hash)
from bookit.store import Store
from bookit.timeparse import interpret_time, parse_date

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(levelname)s %(name)s: %(message)s"

SUBJECTS = {
    "hours": HourLog,
    "alias": Alias,
    "contractors": Contractor
}

TITLE_NAMES = {
    HourLog: "hours",
    Alias: "aliases",
    Contractor: "contractors"
}


def format_error(err):
    """Turn a bookit error into a one-line user message.

    Args:
        err (BookitError):  the error to report.

    Returns:
        msg (str):  the message, without the 'ERROR: ' prefix.

    """
    if isinstance(err, MissingIdentifierError):
        msg = f"{err}. Available values are: "
        if err.available:
            msg += " | ".join(err.available)
        else:
            msg += "(none)"
        if err.truncated:
            msg += " (output truncated...)"
        return msg
    return str(err)


class Bookit():
    """Performs booking and record management operations.

    Attributes:
        config (Config):        the resolved configuration.
        presenter (Presenter):  renders records.
        reader (func):          reads interactive answers.
        stores (dict):          record type -> Store.

    """
    def __init__(self, config, presenter=None, reader=None):
        """Initializes a Bookit() object."""
        self.config = config
        self.presenter = presenter or Presenter(config)
        self.reader = reader or input
        self.stores = {}
        for record_type in RECORD_TYPES:
            self.stores[record_type] = Store.for_record(config, record_type)
        self.ltz = tzlocal.get_localzone()

    def _lookup_contractor(self, slug):
        return self.stores[Contractor].retrieve(slug)

    def _dangling(self, record_type, slug):
        """The identifiers of records that reference slug."""
        if record_type is Contractor:
            return [
                alias.slug for alias in self.stores[Alias].retrieve_all()
                if alias.contractor == slug]
        if record_type is Alias:
            return [
                hourlog.id for hourlog in self.stores[HourLog].retrieve_all()
                if hourlog.alias == slug]
        return []

    def add(self, record_type):
        """Create a new contractor or alias interactively.

        Args:
            record_type (type): Contractor or Alias.

        Returns:
            record (obj):   the stored record.

        """
        if record_type is Contractor:
            record = new_contractor(reader=self.reader)
        elif record_type is Alias:
            record = new_alias(self._lookup_contractor, reader=self.reader)
        else:
            raise ValueError(f"cannot add {record_type.LABEL} interactively")
        self.stores[record_type].add(record)
        print(f"Added {record_type.LABEL}: {record.identifier()}")
        return record

    def book(
            self,
            alias,
            time,
            date=None,
            message=None,
            ticket=None,
            branch=None,
            now=None):
        """Book time against an alias.

        Args:
            alias (str):    the alias slug.
            time (str):     time spent expression (e.g. 90, h::1.5).
            date (str):     date expression (default: today).
            message (str):  description of the work (optional).
            ticket (str):   work ticket reference (optional).
            branch (str):   git branch reference (optional).
            now (datetime): the current time (optional).

        Returns:
            hourlog (HourLog):  the stored booking.

        """
        now = now or datetime.now(tz=self.ltz)
        alias = self.stores[Alias].retrieve(alias)
        hours = self.stores[HourLog]
        mapping = hours.load()
        last = None
        if mapping:
            last = max(hourlog.timestamp for hourlog in mapping.values())
        minutes = interpret_time(time, now, last=last)
        day = parse_date(date or "today", now.date())
        hourlog = HourLog(
            id=gen_hash(mapping),
            alias=alias.slug,
            minutes=minutes,
            date=day,
            timestamp=now,
            message=message,
            ticket=ticket,
            branch=branch)
        hours.add(hourlog)
        print(f"Booked: {hourlog.id} ({minutes} minutes on {alias.slug})")
        return hourlog

    def update(self, record_type, slug):
        """Update a record interactively.

        Args:
            record_type (type): the record class.
            slug (str):         the identifier to update.

        Returns:
            record (obj):   the stored record.

        """
        store = self.stores[record_type]
        record = store.retrieve(slug)
        hook = UPDATE_HOOKS[record_type]
        record = hook(
            record, reader=self.reader, lookup=self._lookup_contractor)
        store.overwrite(record)
        print(f"Updated {record_type.LABEL}: {slug}")
        return record

    def delete(self, record_type, slug, force=False):
        """Delete a record identified by slug.

        Args:
            record_type (type): the record class.
            slug (str):         the identifier to delete.
            force (bool):       skip confirmation.

        Returns:
            deleted (bool): the record was deleted.

        """
        store = self.stores[record_type]
        record = store.retrieve(slug)
        dangling = self._dangling(record_type, slug)
        if dangling:
            print(
                f"WARNING: {len(dangling)} record(s) reference "
                f"'{slug}': {', '.join(dangling)}")
        if not force and not confirm(
                f"Delete {record_type.LABEL} '{slug}'?",
                reader=self.reader):
            print("Cancelled")
            return False
        store.delete(record.identifier())
        print(f"Deleted {record_type.LABEL}: {slug}")
        return True

    def detail(self, record_type, slug, pager=False):
        """Show every field of a record."""
        record = self.stores[record_type].retrieve(slug)
        self.presenter.show_detail(record, pager=pager)

    def show(self, record_type, filters=None, sort=None, pager=False):
        """List records matching filter directives, in sort order.

        Args:
            record_type (type): the record class.
            filters (list):     filter directives (e.g. 'alias::acme').
            sort (str):         sort name (optional).
            pager (bool):       paginate output.

        Returns:
            records (list): the records shown.

        """
        filters = [parse_filter(record_type, f) for f in filters or []]
        sort = parse_sort(record_type, sort) if sort else NO_SORT
        records = self.stores[record_type].retrieve_all()
        records = filtered_view(records, filters, sort)
        self.presenter.show_list(record_type, records, pager=pager)
        return records


def parse_args(argv=None):
    """Parse command line arguments.

    Args:
        argv (list):    the arguments (default: sys.argv[1:]).

    Returns:
        parser (obj), args (Namespace)

    """
    parser = argparse.ArgumentParser(
        prog=APP_NAME,
        description='Book billable hours against project aliases.')
    parser._positionals.title = 'commands'
    parser.set_defaults(command=None, action=None)
    subparsers = parser.add_subparsers(
        metavar=f'(for more help: {APP_NAME} <command> -h)')
    pager = argparse.ArgumentParser(add_help=False)
    pager.add_argument(
        '-p',
        '--page',
        dest='page',
        action='store_true',
        help="page output")
    book = argparse.ArgumentParser(add_help=False)
    book.add_argument(
        'alias',
        help='project alias')
    book.add_argument(
        'time',
        help="minutes or a stretch pattern "
             "(<int> | h::<float> | <s or t>::HH:MM | s::last)")
    book.add_argument(
        '-d',
        '--date',
        dest='date',
        default='today',
        metavar='<date>',
        help='YYYY-MM-DD, today, yesterday or a weekday')
    book.add_argument(
        '-m',
        '--message',
        dest='message',
        metavar='<text>',
        help='description of time expenditure')
    book.add_argument(
        '-t',
        '--ticket',
        dest='ticket',
        metavar='<ticket>',
        help='reference to work ticket (e.g. RAS-002)')
    book.add_argument(
        '-b',
        '--branch',
        dest='branch',
        metavar='<branch>',
        help='reference to git branch (e.g. feature/RAS-002)')

    bookcmd = subparsers.add_parser(
        'book',
        parents=[book],
        help='book time for a project alias')
    bookcmd.set_defaults(command='book')

    for name, record_type in SUBJECTS.items():
        if record_type is HourLog:
            subject_help = 'view or delete booked hours'
        else:
            subject_help = f'manage {TITLE_NAMES[record_type]}'
        subject = subparsers.add_parser(name, help=subject_help)
        subject.set_defaults(command=name, subject_parser=subject)
        actions = subject.add_subparsers(
            metavar=f'(for more help: {APP_NAME} {name} <action> -h)')
        if record_type is HourLog:
            create = actions.add_parser(
                'book',
                parents=[book],
                help='add an hour booking')
            create.set_defaults(action='book')
        else:
            create = actions.add_parser(
                'add',
                help=f'create a new {record_type.LABEL} interactively')
            create.set_defaults(action='add')
            update = actions.add_parser(
                'update',
                help=f'update a {record_type.LABEL} interactively')
            update.add_argument('slug', help=f'{record_type.LABEL} slug')
            update.set_defaults(action='update')
        show = actions.add_parser(
            'show',
            parents=[pager],
            help=f'view a collection of {TITLE_NAMES[record_type]}')
        show.add_argument(
            '-f',
            '--filter',
            dest='filters',
            action='append',
            metavar='<field::value>',
            help='filter directive (repeatable, applied in order)')
        show.add_argument(
            '-s',
            '--sort',
            dest='sort',
            metavar='<sort>',
            default='no_sort',
            help='sort order')
        show.set_defaults(action='show')
        detail = actions.add_parser(
            'detail',
            parents=[pager],
            help=f'view a detailed {record_type.LABEL}')
        detail.add_argument('slug', help=f'{record_type.LABEL} identifier')
        detail.set_defaults(action='detail')
        delete = actions.add_parser(
            'delete',
            aliases=['rm'],
            help=f'delete a {record_type.LABEL}')
        delete.add_argument('slug', help=f'{record_type.LABEL} identifier')
        delete.add_argument(
            '-f',
            '--force',
            dest='force',
            action='store_true',
            help="delete without confirmation")
        delete.set_defaults(action='delete')

    version = subparsers.add_parser(
        'version',
        help='show version info')
    version.set_defaults(command='version')
    parser.add_argument(
        '-c',
        '--config',
        dest='config',
        metavar='<file>',
        help='config file')
    parser.add_argument(
        '--debug',
        dest='debug',
        action='store_true',
        help='log diagnostics to stderr')
    args = parser.parse_args(argv)
    return parser, args


def configure_logging(level):
    """Configure the root logger once, on stderr."""
    logging.basicConfig(
        level=getattr(logging, level, logging.WARNING),
        format=LOG_FORMAT,
        stream=sys.stderr,
        force=True)


def run(bookit, args):
    """Dispatch parsed arguments to a Bookit() operation."""
    if args.command == "book" or args.action == "book":
        bookit.book(
            alias=args.alias,
            time=args.time,
            date=args.date,
            message=args.message,
            ticket=args.ticket,
            branch=args.branch)
        return
    record_type = SUBJECTS[args.command]
    if args.action == "add":
        bookit.add(record_type)
    elif args.action == "update":
        bookit.update(record_type, args.slug)
    elif args.action == "show":
        bookit.show(
            record_type,
            filters=args.filters,
            sort=args.sort,
            pager=args.page)
    elif args.action == "detail":
        bookit.detail(record_type, args.slug, pager=args.page)
    elif args.action == "delete":
        bookit.delete(record_type, args.slug, force=args.force)


def main(argv=None):
    """Entry point. Parses arguments, loads the configuration, creates
    a Bookit() object and calls the requested operation.

    Returns:
        status (int):   the process exit status.

    """
    parser, args = parse_args(argv)

    if not args.command:
        parser.print_help(sys.stderr)
        return 1
    if args.command == "version":
        print(f"{APP_NAME} {APP_VERS}")
        print(APP_COPYRIGHT)
        print(APP_LICENSE)
        return 0
    if args.command in SUBJECTS and not args.action:
        args.subject_parser.print_help(sys.stderr)
        return 1

    configure_logging("DEBUG" if args.debug else "WARNING")
    try:
        config = load_config(args.config)
        if not args.debug:
            configure_logging(config.log_level)
        run(Bookit(config), args)
    except EmptyResultError:
        print("No results.")
    except BookitError as err:
        logger.debug("%s error", err.kind, exc_info=True)
        print(f'ERROR: {format_error(err)}.')
        return 1
    return 0


def console_main():
    """Console script wrapper around main()."""
    try:
        sys.exit(main())
    except KeyboardInterrupt:
        print("\nInterrupted.")
        sys.exit(1)


# entry point
if __name__ == "__main__":
    console_main()
