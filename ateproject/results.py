"""Browsing and exporting stored test results."""

from __future__ import annotations

import argparse
import sqlite3
import sys
from datetime import datetime, timedelta
from pathlib import Path
from typing import Any, Iterable, Optional, Union

DEFAULT_PAGE_SIZE = 10
TIME_FORMAT = "%Y-%m-%d %H:%M"
EXPORT_DAYS_BACK = 7

PASS_COLOR = (124, 249, 185)
FAIL_COLOR = (249, 112, 121)
OTHER_COLOR = (255, 253, 176)

PROJECT_ITEMS = {
    "Name of project": "tp.name",
    "Path/Long Name of project": "tp.longname",
    "Description of project": "tp.desc",
    "Barcode/SN": "tp.barcode",
    "Start time of project": "tp.time",
    "Spend time of project": "tp.spend",
    "User": "tp.user",
    "Result of project": "tp.rst",
    "Version": "tp.version",
    "Working line": "tp.workingline",
    "Station": "tp.station",
}

CASE_ITEMS = {
    "Name of cases": "td.tc_name",
    "Path/Long Name of cases": "td.tc_path",
    "Start time of cases": "td.tc_time",
    "Description of cases": "td.tc_desc",
    "Result of cases": "td.tc_rst",
    "Spend time of cases": "td.tc_spend",
}

DETAIL_ITEMS = {
    "Name of details": "td.dr_name",
    "Value/Description": "td.dr_value",
    "Time of details": "td.dr_time",
    "Standard": "td.dr_standard",
    "Result of details": "td.dr_rst",
}

_EXPORT_FROM = (
    ' FROM TestProject AS tp'
    ' LEFT JOIN (SELECT tc."parentId" AS parentId,'
    ' tc."name" AS tc_name,'
    ' tc."longname" AS tc_path,'
    ' tc."time" AS tc_time,'
    ' tc."desc" AS tc_desc,'
    ' tc."spend" AS tc_spend,'
    ' tc."rst" AS tc_rst,'
    ' der."name" AS dr_name,'
    ' der."time" AS dr_time,'
    ' der."desc" AS dr_value,'
    ' der."standard" AS dr_standard,'
    ' der."rst" AS dr_rst'
    ' FROM TestCase AS tc LEFT JOIN DetailRst AS der ON der."parentId" = tc."id") AS td'
    ' ON td.parentId = tp."id"'
    ' WHERE tp."time" > datetime(?) AND tp."time" < datetime(?) AND tp."name" = ?'
)


class ResultsError(Exception):
    """Raised when the results database cannot be queried or exported."""


def row_color(result: Any) -> tuple[int, int, int]:
    """Background colour (RGB) of a row whose result is ``result``."""
    if result == "Pass":
        return PASS_COLOR
    if result == "Fail":
        return FAIL_COLOR
    return OTHER_COLOR


def export_columns(items: Iterable[str]) -> list[str]:
    """SQL columns for the chosen export items; unknown items are skipped."""
    columns = []
    for item in items:
        for table in (PROJECT_ITEMS, CASE_ITEMS, DETAIL_ITEMS):
            if item in table:
                columns.append(table[item])
                break
    return columns


def _quoted(column: str) -> str:
    alias, _, name = column.partition(".")
    return f'{alias}."{name}"'


def _time_text(value: Union[str, datetime]) -> str:
    if isinstance(value, datetime):
        return value.strftime(TIME_FORMAT)
    return str(value)


def _cell(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


class Pager:
    """Page position over a number of result records."""

    def __init__(self, total_records: int, page_size: int = DEFAULT_PAGE_SIZE):
        if page_size <= 0:
            raise ValueError("page size must be positive")
        self.total_records = max(int(total_records), 0)
        self.page_size = page_size
        self.total_pages = -(-self.total_records // page_size)
        self.current_page = 1

    def offset(self) -> int:
        """Index of the first record on the current page."""
        return (self.current_page - 1) * self.page_size

    def first(self) -> int:
        self.current_page = 1
        return self.offset()

    def previous(self) -> int:
        """Step back one page; nothing changes on the first page."""
        if (self.current_page - 2) * self.page_size >= 0:
            self.current_page -= 1
        return self.offset()

    def next(self) -> int:
        self.current_page += 1
        return self.offset()

    def last(self) -> int:
        self.current_page = self.total_pages
        return self.offset()

    def label(self) -> str:
        """Current page over total pages, such as ``1/3``."""
        return f"{self.current_page}/{self.total_pages}"

    def enabled_actions(self) -> dict[str, bool]:
        """Which of the first, previous, next and last actions can be used."""
        if self.current_page == 1:
            back, forward = False, True
        elif self.current_page == self.total_pages:
            back, forward = True, False
        else:
            back, forward = True, True
        return {"first": back, "previous": back, "next": forward, "last": forward}


class ResultsDatabase:
    """The local SQLite database of test results."""

    def __init__(self, path):
        self.path = Path(path)
        try:
            self._connection = sqlite3.connect(str(self.path))
        except sqlite3.Error as exc:
            raise ResultsError(str(exc)) from exc
        self._connection.row_factory = sqlite3.Row

    def __enter__(self) -> "ResultsDatabase":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def close(self) -> None:
        self._connection.close()

    def _query(self, sql: str, parameters: tuple = ()) -> list[sqlite3.Row]:
        try:
            return self._connection.execute(sql, parameters).fetchall()
        except sqlite3.Error as exc:
            raise ResultsError(str(exc)) from exc

    @staticmethod
    def _barcode_filter(barcode: str) -> tuple[str, tuple]:
        barcode = (barcode or "").strip()
        if not barcode:
            return "", ()
        return ' WHERE "barcode" LIKE ?', (f"%{barcode}%",)

    def count(self, barcode: str = "") -> int:
        """Number of projects whose barcode contains ``barcode``."""
        where, parameters = self._barcode_filter(barcode)
        rows = self._query("SELECT count(*) FROM TestProject" + where, parameters)
        return int(rows[0][0]) if rows else 0

    def page(self, offset: int, size: int = DEFAULT_PAGE_SIZE, barcode: str = "") -> list[dict]:
        """Projects newest first, ``size`` of them starting at ``offset``."""
        where, parameters = self._barcode_filter(barcode)
        sql = 'SELECT * FROM TestProject' + where + ' ORDER BY "time" DESC LIMIT ?, ?'
        return [dict(row) for row in self._query(sql, parameters + (offset, size))]

    def cases(self, project_id) -> list[dict]:
        """Test cases of one project."""
        rows = self._query('SELECT * FROM TestCase WHERE "parentId" = ?', (project_id,))
        return [dict(row) for row in rows]

    def details(self, case_id) -> list[dict]:
        """Detail results of one test case."""
        rows = self._query('SELECT * FROM DetailRst WHERE "parentId" = ?', (case_id,))
        return [dict(row) for row in rows]

    def project_names(self) -> list[str]:
        """Distinct project names in the database."""
        rows = self._query('SELECT DISTINCT "name" FROM TestProject')
        return [_cell(row[0]) for row in rows]

    def export_csv(
        self,
        path,
        items: Iterable[str],
        project: str,
        start: Optional[Union[str, datetime]] = None,
        end: Optional[Union[str, datetime]] = None,
    ) -> int:
        """Write the chosen items of one project's results to a CSV file.

        Only projects started between ``start`` and ``end`` are written; by
        default the last seven days. Returns the number of data rows.
        """
        items = list(items)
        if not items:
            raise ResultsError("Must be select one item.")
        if not project:
            raise ResultsError("Must be select project name.")
        columns = export_columns(items)
        if len(columns) != len(items):
            unknown = [item for item in items if not export_columns([item])]
            raise ResultsError("Unknown export item: " + ", ".join(unknown))

        now = datetime.now()
        start_text = _time_text(start if start is not None else now - timedelta(days=EXPORT_DAYS_BACK))
        end_text = _time_text(end if end is not None else now)

        sql = "SELECT " + ",".join(_quoted(column) for column in columns) + _EXPORT_FROM
        rows = self._query(sql, (start_text, end_text, project))

        lines = [",".join(items)]
        for row in rows:
            cells = [_cell(value) for value in row]
            cells[0] += "\t"
            lines.append(",".join(cells))
        try:
            with Path(path).open("w", encoding="utf-8", newline="") as handle:
                handle.writelines(f"{line}\n" for line in lines)
        except OSError as exc:
            raise ResultsError(f"{exc.strerror or exc}: {path}") from exc
        return len(rows)


def main(argv=None) -> int:
    """List stored results page by page, or export them to CSV."""
    parser = argparse.ArgumentParser(description="Browse stored test results.")
    parser.add_argument("--app-dir", default=str(Path.cwd()),
                        help="directory holding db/treeate.sqlite")
    parser.add_argument("--db", help="results database file")
    parser.add_argument("--barcode", default="", help="part of the barcode to look for")
    parser.add_argument("--page", type=int, default=1, help="page to show")
    parser.add_argument("--page-size", type=int, default=DEFAULT_PAGE_SIZE)
    parser.add_argument("--export", metavar="FILE", help="export to this CSV file")
    parser.add_argument("--project", default="", help="project to export")
    parser.add_argument("--items", default="", help="comma separated export items")
    parser.add_argument("--start", help="export start time, yyyy-mm-dd hh:mm")
    parser.add_argument("--end", help="export end time, yyyy-mm-dd hh:mm")
    args = parser.parse_args(argv)

    db_path = Path(args.db) if args.db else Path(args.app_dir) / "db" / "treeate.sqlite"
    try:
        with ResultsDatabase(db_path) as database:
            if args.export:
                items = [item.strip() for item in args.items.split(",") if item.strip()]
                written = database.export_csv(args.export, items, args.project,
                                              args.start, args.end)
                print(f"Success to export: {args.export} ({written} rows)")
                return 0

            pager = Pager(database.count(args.barcode), args.page_size)
            pager.current_page = max(args.page, 1)
            for row in database.page(pager.offset(), pager.page_size, args.barcode):
                print("\t".join(_cell(value) for value in row.values()))
            print(pager.label())
            return 0
    except ResultsError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1