"""Tree model of a test project: project, suites and cases with parameter columns."""

from __future__ import annotations

import copy
from typing import Any, Optional

from .unititem import UnitItem

# Columns before the parameter columns: name and description.
FIXED_COLUMNS = 2


def _as_map(value: Any) -> dict:
    return value if isinstance(value, dict) else {}


def _as_list(value: Any) -> list:
    return value if isinstance(value, list) else []


def _to_text(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def _row_values(unit: dict, header: bool = False) -> list:
    """Values of one unit's row, or the parameter names when ``header`` is set.

    Parameters are taken in key order.
    """
    values: list = [] if header else [_to_text(unit.get("Name")), _to_text(unit.get("Desc"))]
    parameters = _as_map(unit.get("Parameter"))
    for key in sorted(parameters):
        values.append(key if header else parameters[key])
    return values


class UnitsModel:
    """Holds a test project as a tree of :class:`UnitItem` rows.

    The root item holds the column headers; its single child is the project,
    whose children are suites, whose children are cases.
    """

    def __init__(self, headers):
        self.root = UnitItem(list(headers))
        self._project: dict = {}

    def _item(self, parent: Optional[UnitItem]) -> UnitItem:
        return self.root if parent is None else parent

    def column_count(self) -> int:
        return self.root.column_count()

    def header(self, section: int) -> Any:
        """The header of column ``section``, or ``None`` when out of range."""
        return self.root.data(section)

    def set_header(self, section: int, value: Any) -> None:
        self.root.set_data(section, value)

    def insert_columns(self, position: int, columns: int) -> None:
        """Insert empty columns into every row."""
        self.root.insert_columns(position, columns)

    def remove_columns(self, position: int, columns: int) -> None:
        """Remove columns from every row; with no columns left, all rows go too."""
        self.root.remove_columns(position, columns)
        if self.root.column_count() == 0:
            self.root.remove_children(0, self.root.child_count())

    def insert_rows(self, parent: Optional[UnitItem], position: int, rows: int) -> None:
        """Insert empty rows under ``parent`` (the root when ``None``)."""
        self._item(parent).insert_children(position, rows, self.root.column_count())

    def remove_rows(self, parent: Optional[UnitItem], position: int, rows: int) -> None:
        self._item(parent).remove_children(position, rows)

    def move_row(self, parent: Optional[UnitItem], source: int, target: int) -> None:
        self._item(parent).move_row(source, target)

    def _append_child(self, parent: UnitItem, unit: dict) -> UnitItem:
        position = parent.child_count()
        parent.insert_children(position, 1, self.root.column_count())
        item = parent.child(position)
        for column, value in enumerate(_row_values(unit)[: item.column_count()]):
            item.set_data(column, value)
        return item

    def set_project(self, data: Any) -> None:
        """Replace the tree with the project described by ``data``.

        Parameter columns come from the project's own parameters; suite and
        case parameters fill those columns in their key order.
        """
        if self.root.child_count():
            self.root.remove_children(0, 1)
        extra = self.root.column_count() - FIXED_COLUMNS
        if extra > 0:
            self.root.remove_columns(FIXED_COLUMNS, extra)

        project = _as_map(data)
        self._project = copy.deepcopy(project)

        headers = _row_values(project, header=True)
        first = self.root.column_count()
        self.root.insert_columns(first, len(headers))
        for offset, name in enumerate(headers):
            self.set_header(first + offset, name)

        project_item = self._append_child(self.root, project)
        for suite in _as_list(project.get("TestSuite")):
            suite_map = _as_map(suite)
            suite_item = self._append_child(project_item, suite_map)
            for case in _as_list(suite_map.get("TestCase")):
                self._append_child(suite_item, _as_map(case))

    def _parameters(self, item: UnitItem) -> dict:
        return {
            _to_text(self.root.data(column)): item.data(column)
            for column in range(FIXED_COLUMNS, item.column_count())
        }

    def _unit(self, item: UnitItem) -> dict:
        return {
            "Name": item.data(0),
            "Desc": item.data(1),
            "Parameter": self._parameters(item),
        }

    def project_data(self) -> dict:
        """The project with the tree's current contents written back into it."""
        project = copy.deepcopy(self._project)
        for project_item in self.root.children:
            project.update(self._unit(project_item))
            suites = []
            for suite_item in project_item.children:
                suite = self._unit(suite_item)
                suite["TestCase"] = [self._unit(case) for case in suite_item.children]
                suites.append(suite)
            project["TestSuite"] = suites
        self._project = project
        return copy.deepcopy(project)

    def _public(self) -> dict:
        return _as_map(self._project.get("Public"))

    def parameter_apis(self) -> list[str]:
        """Names usable in scripts: project parameters, then public parameters."""
        apis = sorted(_as_map(self._project.get("Parameter")))
        apis.extend(
            _to_text(_as_map(entry).get("Name"))
            for entry in _as_list(self._public().get("Parameter"))
        )
        return apis

    def public_parameters(self) -> list:
        return copy.deepcopy(_as_list(self._public().get("Parameter")))

    def set_public_parameters(self, parameters) -> None:
        public = dict(self._public())
        public["Parameter"] = list(parameters)
        self._project["Public"] = public

    def public_models(self) -> list:
        return copy.deepcopy(_as_list(self._public().get("Models")))

    def set_public_models(self, models) -> None:
        public = dict(self._public())
        public["Models"] = list(models)
        self._project["Public"] = public

    def version(self) -> str:
        return _to_text(self._project.get("Ver"))

    def set_version(self, version) -> None:
        self._project["Ver"] = version