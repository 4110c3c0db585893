"""Result rendering for data commands: JSON, Markdown or a Rich table.

Every data command ends in :func:`emit_rows` (or :func:`emit_json`), so
``--json`` / ``--markdown`` behave identically across commands.
"""

from __future__ import annotations

import json
from collections.abc import Mapping, Sequence
from typing import Any

from socket_cli.cli.console import out


def to_json(data: Any) -> str:
    return json.dumps(data, indent=2, sort_keys=False, default=str)


def emit_json(data: Any) -> None:
    """Print *data* as pretty JSON on stdout."""
    out.write(to_json(data))


def _cell(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, (dict, list)):
        return json.dumps(value, default=str)
    return str(value)


def markdown_table(columns: Sequence[tuple[str, str]], rows: Sequence[Mapping[str, Any]]) -> str:
    """Render *rows* as a GitHub-flavoured Markdown table.

    *columns* is a sequence of ``(key, title)`` pairs; ``|`` inside
    cells is escaped.
    """
    titles = [title for _, title in columns]
    cells = [
        [_cell(row.get(key)).replace("|", "\\|").replace("\n", " ") for key, _ in columns]
        for row in rows
    ]
    widths = [
        max([len(title), 3, *(len(line[index]) for line in cells)])
        for index, title in enumerate(titles)
    ]
    header = "| " + " | ".join(title.ljust(widths[i]) for i, title in enumerate(titles)) + " |"
    divider = "| " + " | ".join("-" * width for width in widths) + " |"
    body = [
        "| " + " | ".join(value.ljust(widths[i]) for i, value in enumerate(line)) + " |"
        for line in cells
    ]
    return "\n".join([header, divider, *body])


def rich_table(title: str, columns: Sequence[tuple[str, str]], rows: Sequence[Mapping[str, Any]]) -> Any:
    """Build a Rich :class:`~rich.table.Table` for terminal display."""
    from rich.table import Table

    table = Table(
        title=title,
        show_header=True,
        header_style="bold cyan",
        border_style="dim",
    )
    for _, column_title in columns:
        table.add_column(column_title)
    for row in rows:
        table.add_row(*(_cell(row.get(key)) for key, _ in columns))
    return table


def emit_rows(
    title: str,
    columns: Sequence[tuple[str, str]],
    rows: Sequence[Mapping[str, Any]],
    *,
    as_json: bool = False,
    as_markdown: bool = False,
    raw: Any = None,
) -> None:
    """Print tabular results in the format selected by the output flags.

    Parameters
    ----------
    raw:
        What ``--json`` prints; defaults to *rows*.
    """
    if as_json:
        emit_json(rows if raw is None else raw)
        return
    if as_markdown:
        out.write(f"# {title}\n\n{markdown_table(columns, rows)}")
        return
    try:
        table = rich_table(title, columns, rows)
    except ModuleNotFoundError:
        out.write(markdown_table(columns, rows))
        return
    out.print(table)
