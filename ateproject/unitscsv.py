"""Export and import of a test unit tree as indented CSV text."""

from __future__ import annotations

from itertools import islice
from typing import Any, Iterator

from .csvtable import CsvTable
from .unititem import UnitItem
from .unitsmodel import UnitsModel


def _text(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def _walk(root: UnitItem) -> Iterator[tuple[UnitItem, int]]:
    """Yield every item depth first with its depth, the root at depth 0."""
    pending = [(root, 0)]
    while pending:
        item, depth = pending.pop()
        yield item, depth
        pending.extend((child, depth + 1) for child in reversed(item.children))


def export_csv(model: UnitsModel, path) -> None:
    """Write the model's tree to ``path``.

    The first row holds the headers; every other row is one item whose name
    is indented by one space per level of depth.
    """
    table = CsvTable(path)
    for row, (item, depth) in enumerate(_walk(model.root)):
        table.append(row, " " * depth + _text(item.data(0)))
        for column in range(1, item.column_count()):
            table.append(row, item.data(column))
    table.save()


def import_csv(model: UnitsModel, path) -> None:
    """Replace the model's project rows with the indented rows of ``path``.

    The header row is skipped; the model keeps its current columns. A row
    indented deeper than the one before becomes a child of the last item.
    """
    table = CsvTable(path)
    table.load()

    root = model.root
    if root.child_count():
        root.remove_children(0, 1)

    parents: list[UnitItem] = [root]
    indents: list[int] = [0]
    for line in islice(table, 1, None):
        cells = line.split(",")
        raw_name = cells[0]
        position = len(raw_name) - len(raw_name.lstrip(" "))
        if not raw_name.strip():
            continue

        if position > indents[-1]:
            last = parents[-1]
            if last.child_count():
                parents.append(last.child(last.child_count() - 1))
                indents.append(position)
        else:
            while position < indents[-1] and len(parents) > 1:
                parents.pop()
                indents.pop()

        parent = parents[-1]
        parent.insert_children(parent.child_count(), 1, root.column_count())
        child = parent.child(parent.child_count() - 1)
        for column, cell in enumerate(cells[: child.column_count()]):
            child.set_data(column, cell.strip())