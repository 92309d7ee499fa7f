"""A node of the test unit tree: project, suite or case."""

from __future__ import annotations

from typing import Any, Iterable, Optional


class UnitItem:
    """A tree node holding one value per column and a list of children."""

    def __init__(self, data: Iterable[Any] = (), parent: Optional["UnitItem"] = None):
        self.parent = parent
        self._data: list[Any] = list(data)
        self._children: list[UnitItem] = []

    def __repr__(self) -> str:
        return f"UnitItem({self._data!r}, children={len(self._children)})"

    @property
    def children(self) -> list["UnitItem"]:
        """A copy of the child list."""
        return list(self._children)

    def child(self, number: int) -> Optional["UnitItem"]:
        """The child at ``number``, or ``None`` when there is none."""
        if 0 <= number < len(self._children):
            return self._children[number]
        return None

    def child_count(self) -> int:
        return len(self._children)

    def child_number(self) -> int:
        """Position of this item among its parent's children; 0 for a root."""
        if self.parent is None:
            return 0
        for index, sibling in enumerate(self.parent._children):
            if sibling is self:
                return index
        return 0

    def column_count(self) -> int:
        return len(self._data)

    def data(self, column: int) -> Any:
        """The value in ``column``, or ``None`` when out of range."""
        if 0 <= column < len(self._data):
            return self._data[column]
        return None

    def insert_children(self, position: int, count: int, columns: int) -> None:
        """Insert ``count`` empty children with ``columns`` columns at ``position``."""
        if not 0 <= position <= len(self._children):
            raise IndexError(f"child position {position} out of range")
        new = [UnitItem([None] * columns, self) for _ in range(count)]
        self._children[position:position] = new

    def insert_columns(self, position: int, columns: int) -> None:
        """Insert empty columns here and in every descendant."""
        if not 0 <= position <= len(self._data):
            raise IndexError(f"column position {position} out of range")
        self._data[position:position] = [None] * columns
        for child in self._children:
            child.insert_columns(position, columns)

    def remove_children(self, position: int, count: int) -> None:
        """Remove ``count`` children starting at ``position``."""
        if position < 0 or position + count > len(self._children):
            raise IndexError("children out of range")
        removed = self._children[position:position + count]
        del self._children[position:position + count]
        for item in removed:
            item.parent = None

    def remove_columns(self, position: int, columns: int) -> None:
        """Remove columns here and in every descendant."""
        if position < 0 or position + columns > len(self._data):
            raise IndexError("columns out of range")
        del self._data[position:position + columns]
        for child in self._children:
            child.remove_columns(position, columns)

    def set_data(self, column: int, value: Any) -> None:
        if not 0 <= column < len(self._data):
            raise IndexError(f"column {column} out of range")
        self._data[column] = value

    def move_row(self, source: int, target: int) -> None:
        """Move the child at ``source`` so that it ends up at ``target``."""
        size = len(self._children)
        if not 0 <= source < size or not 0 <= target < size:
            raise IndexError("row out of range")
        self._children.insert(target, self._children.pop(source))