"""
Result writers.

Renders Logs Insights result rows to a text sink in one of three formats:

- simple: the first non-pointer value of each row, one per line
- csv: header taken from the first row, values placed by position
- json: a list of objects, keys sorted, two-space indent, `<`, `>` and `&`
  written as \\u escapes

The `@ptr` field is never rendered and absent values become empty strings.
Writers never open or close the sink; the caller owns it.
"""

import csv
import json
import logging
from typing import Iterable, List, Optional, Sequence, TextIO, Union

from .models import LogEvent, OutputFormat, ResultRow
from .utils import format_timestamp

logger = logging.getLogger(__name__)

_JSON_HTML_ESCAPES = (
    ("&", "\\u0026"),
    ("<", "\\u003c"),
    (">", "\\u003e"),
    ("\u2028", "\\u2028"),
    ("\u2029", "\\u2029"),
)


def write_results(
    sink: TextIO,
    rows: Sequence[ResultRow],
    output_format: Union[OutputFormat, str],
    write_header: bool = True
) -> None:
    """
    Write result rows in the requested format.

    Writes nothing for zero rows, whatever the format.

    Raises:
        ValidationError: If there are rows and the format is not simple,
            csv or json
    """
    if not rows:
        return

    output_format = OutputFormat.parse(output_format)

    if output_format is OutputFormat.SIMPLE:
        write_simple(sink, rows)
    elif output_format is OutputFormat.CSV:
        write_csv(sink, rows, write_header)
    else:
        write_json(sink, rows)


def write_simple(sink: TextIO, rows: Sequence[ResultRow]) -> None:
    for row in rows:
        value = ""
        for field in row:
            if not field.is_pointer:
                value = field.value or ""
                break
        sink.write(f"{value}\n")


def write_csv(sink: TextIO, rows: Sequence[ResultRow], write_header: bool = True) -> None:
    """
    Write rows as CSV.

    Columns come from the first row; later rows are placed positionally
    against those columns.
    """
    if not rows:
        return

    writer = csv.writer(sink, lineterminator="\n")

    # Position in a row -> CSV column, pointer positions omitted
    column_index = {}
    headers: List[str] = []
    for position, field in enumerate(rows[0]):
        if not field.is_pointer:
            column_index[position] = len(headers)
            headers.append(field.field)

    if write_header:
        writer.writerow(headers)

    for row in rows:
        values = [""] * len(headers)
        for position, field in enumerate(row):
            if field.is_pointer or position not in column_index:
                continue
            values[column_index[position]] = field.value or ""
        writer.writerow(values)


def write_json(sink: TextIO, rows: Sequence[ResultRow]) -> None:
    """Write rows as a JSON array of objects.

    Characters that are unsafe inside HTML are written as \\u escapes, so a
    message like `<a & b>` renders as `\\u003ca \\u0026 b\\u003e`.
    """
    records = [
        {field.field: field.value or "" for field in row if not field.is_pointer}
        for row in rows
    ]
    text = json.dumps(records, indent=2, sort_keys=True, ensure_ascii=False)
    # these characters only occur inside strings, so escaping stays valid JSON
    for char, escape in _JSON_HTML_ESCAPES:
        text = text.replace(char, escape)
    sink.write(text + "\n")


def write_events(sink: TextIO, events: Iterable[LogEvent], user_timezone: Optional[str] = None) -> None:
    """Print events as '<timestamp>: <message>', one per line."""
    for event in events:
        sink.write(f"{format_timestamp(event.timestamp, user_timezone)}: {event.message}\n")
