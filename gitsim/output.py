"""
Machine and human output for gitsim commands.

Records are written as JSON Lines unless a command is asked for
``--pretty``, in which case they become one rich table. Anything with a
``to_dict()`` (topics, history entries, snapshots) can be emitted.

    from gitsim.output import emit, emit_error

    emit(search_topics("merge"))                 # one JSON object per line
    emit(search_topics("merge"), pretty=True)    # table
    emit_error("No topic", type="not_found")     # JSON on stderr
"""

import json
import sys
from typing import Iterable, Any, Dict, Optional, List

from rich.console import Console
from rich.table import Table

# Leading columns for tables, when present in the records
COLUMN_ORDER = ('id', 'name', 'category', 'command', 'output', 'error', 'description')


def emit(
    items: Iterable[Any],
    pretty: bool = False,
    columns: Optional[List[str]] = None,
    err: bool = False
) -> None:
    """
    Write records to stdout (or stderr with ``err``).

    Args:
        items: Objects with to_dict(), or plain dicts
        pretty: Render a table instead of JSON Lines
        columns: Table columns; derived from the first record when omitted
        err: Write to stderr
    """
    stream = sys.stderr if err else sys.stdout
    records = (_to_dict(item) for item in items)
    if pretty:
        _write_table(list(records), columns, stream)
    else:
        for record in records:
            print(json.dumps(record, ensure_ascii=False), file=stream, flush=True)


def _to_dict(item: Any) -> Dict[str, Any]:
    if hasattr(item, 'to_dict'):
        return item.to_dict()
    if isinstance(item, dict):
        return item
    return {'value': str(item)}


def _write_table(rows: List[Dict[str, Any]], columns: Optional[List[str]], stream) -> None:
    if not rows:
        print("No results found", file=stream)
        return

    table = Table(show_header=True, header_style="bold")
    for name in columns or _auto_columns(rows):
        table.add_column(name)
    names = [column.header for column in table.columns]
    for row in rows:
        table.add_row(*(_format_value(row.get(name, '')) for name in names))

    Console(file=stream).print(table)


def _auto_columns(rows: List[Dict]) -> List[str]:
    """Known columns first, then the rest of the first record's keys in order."""
    keys = list(rows[0].keys()) if rows else []
    leading = [name for name in COLUMN_ORDER if name in keys]
    return leading + [k for k in keys if k not in leading]


def _format_value(value: Any) -> str:
    """Table cell text for a JSON value."""
    if value is None:
        return ''
    if isinstance(value, bool):
        return 'yes' if value else 'no'
    if isinstance(value, (list, tuple)):
        return ', '.join(str(v) for v in value)
    if isinstance(value, dict):
        return json.dumps(value, ensure_ascii=False)
    return str(value)


def emit_error(message: str, type: str = "error", context: Optional[Dict[str, Any]] = None) -> None:
    """Write a structured error as one JSON line on stderr."""
    data: Dict[str, Any] = {'error': message, 'type': type}
    if context:
        data['context'] = context
    print(json.dumps(data, ensure_ascii=False), file=sys.stderr, flush=True)
