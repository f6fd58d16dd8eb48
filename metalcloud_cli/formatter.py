"""
Output formatting for command results.

Records are rendered through an explicit list of field descriptors:
which key to read, which title to show and how to transform the value.
"""

import csv
import io
import json
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Callable, Dict, List, Optional, Sequence, Union

import yaml
from rich import box
from rich.console import Console
from rich.markup import escape
from rich.table import Table
from rich.text import Text

from metalcloud_cli.exceptions import ValidationError


@dataclass(frozen=True)
class FieldSpec:
    """How one column is read and displayed."""

    key: str
    title: Optional[str] = None
    transformer: Optional[Callable[[Any], str]] = None
    hidden: bool = False

    @property
    def header(self) -> str:
        return self.title or self.key

    def render(self, record: Dict[str, Any]) -> str:
        value = record.get(self.key)
        if self.transformer:
            return self.transformer(value)
        if value is None:
            return ""
        return escape(str(value))


STATUS_STYLES = {
    "active": "green",
    "finished": "green",
    "ongoing": "yellow",
    "ordered": "cyan",
    "not_started": "cyan",
    "error": "red",
    "failed": "red",
    "deleted": "dim",
}


def format_status(value: Any) -> str:
    if not value:
        return ""
    text = escape(str(value))
    style = STATUS_STYLES.get(str(value).lower())
    if style:
        return f"[{style}]{text}[/{style}]"
    return text


def format_datetime(value: Any) -> str:
    if not value:
        return ""
    try:
        parsed = datetime.fromisoformat(str(value).replace("Z", "+00:00"))
    except ValueError:
        return escape(str(value))
    return parsed.strftime("%Y-%m-%d %H:%M:%S")


INFRASTRUCTURE_FIELDS: List[FieldSpec] = [
    FieldSpec("id", "#"),
    FieldSpec("label", "Label"),
    FieldSpec("serviceStatus", "Status", format_status),
    FieldSpec("deployStatus", "Deploy", format_status),
    FieldSpec("userIdOwner", "Owner"),
    FieldSpec("siteId", "Site"),
    FieldSpec("revision", "Revision", hidden=True),
    FieldSpec("createdTimestamp", "Created", format_datetime),
    FieldSpec("updatedTimestamp", "Updated", format_datetime),
]


def render(
    records: Union[Sequence[Dict[str, Any]], Dict[str, Any]],
    fields: Sequence[FieldSpec],
    output_format: str = "text",
    title: Optional[str] = None,
) -> str:
    """
    Render one record or a list of records.

    Args:
        records: Record dict or list of record dicts
        fields: Column descriptors (used by text, csv and md)
        output_format: text, json, yaml, csv or md
        title: Table title (text only)

    Returns:
        Rendered output

    Raises:
        ValidationError: If the format is unknown
    """
    rows = [records] if isinstance(records, dict) else list(records)
    visible = [f for f in fields if not f.hidden]

    if output_format == "json":
        return json.dumps(records, indent=2, default=str)
    if output_format == "yaml":
        return yaml.safe_dump(records, sort_keys=False, default_flow_style=False)
    if output_format == "csv":
        return _render_csv(rows, visible)
    if output_format == "md":
        return _render_markdown(rows, visible)
    if output_format == "text":
        return _render_table(rows, visible, title)

    raise ValidationError(f"{output_format} format not supported yet")


def _plain(fields: Sequence[FieldSpec], record: Dict[str, Any]) -> List[str]:
    # Markup is only meaningful in rich tables
    return [Text.from_markup(f.render(record)).plain for f in fields]


def _render_table(
    rows: List[Dict[str, Any]], fields: Sequence[FieldSpec], title: Optional[str]
) -> str:
    table = Table(title=title, title_justify="left", box=box.SIMPLE_HEAD, padding=(0, 1))
    for field in fields:
        table.add_column(field.header, style="cyan" if field.key == "id" else None)
    for record in rows:
        table.add_row(*[field.render(record) for field in fields])

    buffer = io.StringIO()
    Console(file=buffer, width=160, color_system=None).print(table)
    return buffer.getvalue()


def _render_csv(rows: List[Dict[str, Any]], fields: Sequence[FieldSpec]) -> str:
    buffer = io.StringIO()
    writer = csv.writer(buffer)
    writer.writerow([f.header for f in fields])
    for record in rows:
        writer.writerow(_plain(fields, record))
    return buffer.getvalue()


def _render_markdown(rows: List[Dict[str, Any]], fields: Sequence[FieldSpec]) -> str:
    lines = [
        "| " + " | ".join(f.header for f in fields) + " |",
        "| " + " | ".join("---" for _ in fields) + " |",
    ]
    for record in rows:
        lines.append("| " + " | ".join(_plain(fields, record)) + " |")
    return "\n".join(lines) + "\n"
