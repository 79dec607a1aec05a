# -*- coding: utf-8 -*-
"""bookit.presenter
License:  MIT
About:
Rich tables for listing and inspecting contractors, aliases and
booked hours.

"""
from rich import box
from rich.color import ColorParseError
from rich.console import Console
from rich.style import Style
from rich.table import Table
from rich.text import Text

from bookit.records import Alias, Contractor, HourLog

# columns per record type: (header, attribute, color element)
COLUMNS = {
    Contractor: [
        ("slug", "slug", "slug"),
        ("name", "name", "name"),
    ],
    Alias: [
        ("alias", "slug", "slug"),
        ("contractor", "contractor", "contractor"),
        ("description", "short_description", "description"),
        ("rate", "hourly_rate", "rate"),
    ],
    HourLog: [
        ("id", "id", "slug"),
        ("date", "date", "date"),
        ("alias", "alias", "alias"),
        ("minutes", "minutes", "minutes"),
        ("ticket", "ticket", "ticket"),
        ("message", "message", "description"),
    ],
}

TITLES = {
    Contractor: "Contractors",
    Alias: "Aliases",
    HourLog: "Hours",
}

BOLD_ELEMENTS = ["title", "header", "slug"]


def format_minutes(minutes):
    """Format minutes as HH:MM."""
    hours, minutes = divmod(minutes, 60)
    return f"{hours:02d}:{minutes:02d}"


def _format_value(value):
    if value is None:
        return ""
    if hasattr(value, "isoformat") and hasattr(value, "hour"):
        return value.strftime("%Y-%m-%d %H:%M:%S")
    if hasattr(value, "isoformat"):
        return value.isoformat()
    return str(value)


class Presenter():
    """Renders records with Rich.

    Attributes:
        config (Config):    colors and paging settings.
        console (Console):  where output goes.

    """
    def __init__(self, config, console=None):
        """Initializes a Presenter() object."""
        self.config = config
        self.console = console or Console()
        self.styles = {}
        for element, color in config.colors.items():
            bold = config.color_bold and element in BOLD_ELEMENTS
            try:
                self.styles[element] = Style(color=color, bold=bold)
            except ColorParseError:
                self.styles[element] = Style(color="default", bold=bold)

    def _table(self, title, show_header=True):
        return Table(
            title=title,
            title_style=self.styles["title"],
            title_justify="left",
            header_style=self.styles["header"],
            border_style=self.styles["border"],
            box=box.SIMPLE,
            show_header=show_header,
            show_lines=False,
            pad_edge=False,
            min_width=len(title),
            collapse_padding=False,
            padding=(0, 1, 0, 1))

    def _print(self, renderable, pager=False):
        layout = Table.grid()
        layout.add_column("single")
        layout.add_row("")
        layout.add_row(renderable)
        # render the output with a pager if -p
        if pager:
            with self.console.pager(styles=self.config.color_pager):
                self.console.print(layout)
        else:
            self.console.print(layout)

    def list_table(self, record_type, records):
        """Build the list table for a set of records.

        Args:
            record_type (type): the record class.
            records (list):     the records to list, already ordered.

        Returns:
            table (Table):  the Rich table.

        """
        table = self._table(TITLES[record_type])
        columns = COLUMNS[record_type]
        for header, attr, element in columns:
            table.add_column(header, style=self.styles[element])
        total = 0
        for record in records:
            row = []
            for header, attr, element in columns:
                value = getattr(record, attr)
                if attr == "minutes":
                    total += value
                    value = format_minutes(value)
                row.append(_format_value(value))
            table.add_row(*row)
        if not records:
            table.show_header = False
            table.add_row("No results.")
        elif record_type is HourLog:
            table.add_row("", "", "total:", format_minutes(total), "", "")
        return table

    def show_list(self, record_type, records, pager=False):
        """Print a list of records."""
        self._print(self.list_table(record_type, records), pager)

    def detail_table(self, record):
        """Build the field/value table for one record."""
        record_type = type(record)
        title = f"{record_type.LABEL.capitalize()} - {record.identifier()}"
        table = self._table(title, show_header=False)
        table.add_column("field", style=self.styles["label"])
        table.add_column("data")
        for field, value in record.to_dict().items():
            if value is None:
                continue
            valuetxt = Text(_format_value(getattr(record, field)))
            for header, attr, element in COLUMNS[record_type]:
                if attr == field:
                    valuetxt.stylize(self.styles[element])
            if field == "minutes":
                valuetxt.append(f" ({format_minutes(value)})")
            table.add_row(f"{field}:", valuetxt)
        return table

    def show_detail(self, record, pager=False):
        """Print every field of one record."""
        self._print(self.detail_table(record), pager)
