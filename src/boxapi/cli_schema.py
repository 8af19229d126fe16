"""Schema describing important fields for CLI table rendering."""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass
from typing import Any

Row = Mapping[str, Any]
ValueExtractor = Callable[[Row], Any]
ValueFormatter = Callable[[Any], str]
SortKey = Callable[[Row], Any]


@dataclass(frozen=True)
class Column:
    """Describe how to pull and format a column for Rich tables."""

    header: str
    keys: tuple[str, ...] = ()
    extractor: ValueExtractor | None = None
    formatter: ValueFormatter | None = None
    justify: str = "left"

    def render(self, row: Row) -> str:
        value: Any | None = None
        for key in self.keys:
            value = row.get(key)
            if value is not None:
                break
        if value is None and self.extractor:
            value = self.extractor(row)
        if value is None:
            return ""
        if self.formatter:
            return self.formatter(value)
        return str(value)


@dataclass(frozen=True)
class TableView:
    """Describe a Rich table for a CLI command."""

    title: str
    columns: tuple[Column, ...]
    sort_key: SortKey | None = None


def _size_formatter(value: Any) -> str:
    try:
        number = float(value)
    except (TypeError, ValueError):
        return ""
    for unit in ("B", "KiB", "MiB", "GiB"):
        if number < 1024 or unit == "GiB":
            return f"{number:.0f} {unit}" if unit == "B" else f"{number:.1f} {unit}"
        number /= 1024
    return ""  # pragma: no cover - loop always returns


def _created_by(row: Row) -> Any:
    creator = row.get("created_by")
    if isinstance(creator, Mapping):
        return creator.get("name") or creator.get("login")
    return None


def _entry_sort_key(row: Row) -> tuple[int, str]:
    # Folders first, then files, each alphabetically.
    return (0 if row.get("type") == "folder" else 1, str(row.get("name") or "").lower())


CLI_TABLE_VIEWS: dict[str, TableView] = {
    "folders.items": TableView(
        title="Folder Items",
        columns=(
            Column("Type", keys=("type",)),
            Column("ID", keys=("id",)),
            Column("Name", keys=("name",)),
            Column("Size", keys=("size",), formatter=_size_formatter, justify="right"),
            Column("ETag", keys=("etag", "sequence_id")),
        ),
        sort_key=_entry_sort_key,
    ),
    "comments.list": TableView(
        title="Comments",
        columns=(
            Column("ID", keys=("id",)),
            Column("Author", extractor=_created_by),
            Column("Created", keys=("created_at",)),
            Column("Message", keys=("message",)),
        ),
    ),
}
