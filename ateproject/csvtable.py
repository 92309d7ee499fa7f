"""A small line-oriented CSV table used for importing and exporting test units."""

from __future__ import annotations

from pathlib import Path
from typing import Any


class CsvError(Exception):
    """Raised when a CSV table cannot be read, written or addressed."""


def _to_text(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


class CsvTable:
    """Rows of comma separated text bound to one file.

    Each row is kept as a single line; cells are the comma separated parts
    of that line. No quoting is applied.
    """

    def __init__(self, path):
        self.path = Path(path)
        self._rows: list[str] = []

    def __len__(self) -> int:
        return len(self._rows)

    def __iter__(self):
        return iter(self._rows)

    def row_count(self) -> int:
        """Number of rows held."""
        return len(self._rows)

    def _line(self, row: int) -> str:
        if not 0 <= row < len(self._rows):
            raise CsvError(f"row {row} out of range")
        return self._rows[row]

    def column_count(self, row: int) -> int:
        """Number of cells in ``row``."""
        return len(self._line(row).split(","))

    def append(self, row: int, value: Any) -> None:
        """Add ``value`` as a new cell at the end of ``row``.

        A row at or past the end starts a new row holding only ``value``.
        """
        if row < 0:
            raise CsvError("row must not be negative")
        text = _to_text(value)
        if row >= len(self._rows):
            self._rows.append(text)
        else:
            self._rows[row] = f"{self._rows[row]},{text}"

    def cell(self, row: int, column: int) -> str:
        """Text of one cell; an empty string when ``column`` is out of range."""
        cells = self._line(row).split(",")
        if not 0 <= column < len(cells):
            return ""
        return cells[column]

    def load(self) -> None:
        """Replace the rows with the lines of the file."""
        try:
            with self.path.open("r", encoding="utf-8", newline=None) as handle:
                lines = [line.rstrip("\n") for line in handle]
        except (OSError, UnicodeDecodeError) as exc:
            raise CsvError(str(exc)) from exc
        self._rows = lines

    def save(self) -> None:
        """Write every row to the file, one line each."""
        try:
            with self.path.open("w", encoding="utf-8", newline="") as handle:
                handle.writelines(f"{line}\n" for line in self._rows)
        except OSError as exc:
            raise CsvError(str(exc)) from exc

    def clear(self) -> None:
        """Drop every row."""
        self._rows.clear()