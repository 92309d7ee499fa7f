"""The project editor's workspace: one open test project with its files."""

from __future__ import annotations

import argparse
import configparser
import json
import re
import shutil
import sys
from pathlib import Path
from typing import Optional

from .csvtable import CsvError
from .devlog import install_log
from .projectconfig import ProjectConfig, ProjectConfigError
from .unitscsv import import_csv
from .unititem import UnitItem
from .unitsmodel import UnitsModel

HEADERS = ("Name", "Description")
SETTINGS_SECTION = "New"
SETTINGS_KEY = "workpath"

# Names offered to scripts by the test engine's result manager.
ENGINE_APIS = (
    "__ate",
    "OutputRst(strName,strValue,strStand)",
    "OutputError(strOutput)",
    "GetProjectName()",
    "GetProjectVer()",
    "GetProjectBarcode()",
    "GetProjectDesc()",
    "GetWorkLine()",
    "GetWorkStation()",
    "GetUserName()",
)

IMPORT_FOLDERS = {"lib": "libs", "image": "images"}
IMPORT_KINDS = ("lib", "image", "csv")
PROTECTED_SUFFIXES = ("tp", "tpx")


class WorkspaceError(Exception):
    """Raised when a project file cannot be read, written or changed."""


def test_function_pattern(name: str, language: str = "js") -> str:
    """Regular expression that finds the script function of the unit ``name``."""
    prefix = r"def\s+\w+_" if language == "py" else r"function\s+\w+_"
    return prefix + re.escape(str(name))


def ensure_test_function(script: str, name: str, language: str = "js") -> str:
    """Return ``script`` with an empty test function for ``name`` appended if missing."""
    if re.search(test_function_pattern(name, language), script, re.IGNORECASE):
        return script
    if language == "py":
        return f"{script}\r\n\r\ndef test_{name}():\r\n\r\n"
    return f"{script}\r\n\r\nfunction test_{name}()\r\n{{\r\n}}"


def _complete_suffix(path: Path) -> str:
    name = path.name
    return name.split(".", 1)[1] if "." in name else ""


def _read_json(path: Path) -> dict:
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise WorkspaceError(f"{exc.strerror or exc}: {path}") from exc
    try:
        document = json.loads(text)
    except ValueError:
        return {}
    return document if isinstance(document, dict) else {}


class Workspace:
    """An open test project: its unit tree, script and configuration."""

    def __init__(self, app_dir):
        self.app_dir = Path(app_dir)
        self.settings_file = self.app_dir / "Config" / "Dev.ini"
        self.workpath = self._load_workpath()
        self.model = UnitsModel(HEADERS)
        self.config: Optional[ProjectConfig] = None
        self.project_file: Optional[Path] = None
        self.script_file: Optional[Path] = None
        self.language = "js"
        self._script = ""
        self.modified = False

    def _settings(self) -> configparser.RawConfigParser:
        parser = configparser.RawConfigParser()
        parser.optionxform = str
        if self.settings_file.is_file():
            parser.read(self.settings_file, encoding="utf-8")
        return parser

    def _load_workpath(self) -> Path:
        stored = self._settings().get(SETTINGS_SECTION, SETTINGS_KEY, fallback="")
        return Path(stored) if stored else self.app_dir / "Example"

    @property
    def script(self) -> str:
        """Text of the project's script."""
        return self._script

    @script.setter
    def script(self, text: str) -> None:
        if text != self._script:
            self._script = text
            self.modified = True

    def open(self, path, tpx: bool = True) -> bool:
        """Open a project; ``False`` when it is already the open one.

        With ``tpx`` the configuration file next to ``path`` names the project file.
        """
        path = Path(path)
        if self.project_file is not None and path == self.project_file:
            return False

        if tpx:
            try:
                config = ProjectConfig.load(path.parent / f"{path.stem}.tpx")
            except ProjectConfigError as exc:
                raise WorkspaceError(str(exc)) from exc
            project_file = path.parent / config.default_project_name()
        else:
            config = self.config
            project_file = path

        document = _read_json(project_file)

        js_file = project_file.parent / f"{project_file.stem}.js"
        if js_file.is_file():
            script_file, language = js_file, "js"
        else:
            script_file, language = project_file.parent / f"{project_file.stem}.py", "py"
        try:
            script = script_file.read_text(encoding="utf-8")
        except OSError as exc:
            raise WorkspaceError(f"{exc.strerror or exc}: {script_file}") from exc

        self.model.set_project(document)
        self.config = config
        self.project_file = project_file
        self.script_file = script_file
        self.language = language
        self._script = script
        self.modified = False
        return True

    def apis(self) -> list[str]:
        """Names offered for completion in the script."""
        names = list(self.model.parameter_apis())
        names.extend(ENGINE_APIS)
        for entry in self.model.public_models():
            obj = entry.get("Obj") if isinstance(entry, dict) else None
            if obj:
                names.append(str(obj))
        return names

    def _require_project(self) -> Path:
        if self.project_file is None:
            raise WorkspaceError("no project is open")
        return self.project_file

    def save(self) -> None:
        """Write the script (when changed), the project file and the configuration."""
        project_file = self._require_project()
        try:
            if self.modified and self.script_file is not None:
                self.script_file.write_text(self._script, encoding="utf-8")
            project_file.write_text(
                json.dumps(self.model.project_data(), indent=4, sort_keys=True,
                           ensure_ascii=False) + "\n",
                encoding="utf-8",
            )
        except OSError as exc:
            raise WorkspaceError(f"{exc.strerror or exc}: {exc.filename}") from exc
        if self.config is not None:
            try:
                self.config.save()
            except ProjectConfigError as exc:
                raise WorkspaceError(str(exc)) from exc
        self.modified = False

    def save_settings(self) -> None:
        """Remember the work path for the next session."""
        parser = self._settings()
        if not parser.has_section(SETTINGS_SECTION):
            parser.add_section(SETTINGS_SECTION)
        parser.set(SETTINGS_SECTION, SETTINGS_KEY, str(self.workpath))
        self.settings_file.parent.mkdir(parents=True, exist_ok=True)
        with self.settings_file.open("w", encoding="utf-8") as handle:
            parser.write(handle)

    def rename(self, new_name: str) -> None:
        """Rename the project, its script and its configuration to ``new_name``."""
        project_file = self._require_project()
        new_name = new_name.strip()
        if not new_name:
            raise ValueError("new project name must not be empty")
        directory = project_file.parent
        old_name = project_file.name.split(".")[0]
        if not old_name:
            raise WorkspaceError(f"project file has no name: {project_file}")

        old_script = directory / f"{old_name}.js"
        if old_script.is_file():
            new_script = directory / f"{new_name}.js"
        else:
            old_script = directory / f"{old_name}.py"
            new_script = directory / f"{new_name}.py"
        new_project = directory / f"{new_name}.tp"
        moves = [
            (old_script, new_script),
            (directory / f"{old_name}.tp", new_project),
            (directory / f"{old_name}.tpx", directory / f"{new_name}.tpx"),
        ]
        for source, target in moves:
            if source.exists():
                try:
                    source.rename(target)
                except OSError as exc:
                    raise WorkspaceError(f"{exc.strerror or exc}: {source}") from exc

        self.project_file = new_project
        self.script_file = new_script
        if self.config is not None:
            self.config.rename_project(new_name)
            try:
                self.config.save()
            except ProjectConfigError as exc:
                raise WorkspaceError(str(exc)) from exc

    def import_files(self, files, kind: str = "lib") -> list[Path]:
        """Bring files into the project and return the copies made.

        ``kind`` is ``"lib"`` or ``"image"`` to copy into the project's
        ``libs`` or ``images`` folder, or ``"csv"`` to load the first file
        as the unit tree.
        """
        if kind not in IMPORT_KINDS:
            raise ValueError(f"unknown import kind: {kind!r}")
        files = [Path(item) for item in files]
        if not files:
            return []

        if kind == "csv":
            try:
                import_csv(self.model, files[0])
            except CsvError as exc:
                raise WorkspaceError(str(exc)) from exc
            self.modified = True
            return []

        target_dir = self._require_project().parent / IMPORT_FOLDERS[kind]
        target_dir.mkdir(parents=True, exist_ok=True)
        copied: list[Path] = []
        failed: list[str] = []
        for source in files:
            if source.resolve().parent == target_dir.resolve():
                continue
            target = target_dir / source.name
            if target.exists():
                failed.append(str(source))
                continue
            try:
                shutil.copyfile(source, target)
            except OSError:
                failed.append(str(source))
                continue
            copied.append(target)
        if failed:
            raise WorkspaceError("Failed to copy this file: " + ", ".join(failed))
        return copied

    def remove_file(self, path) -> bool:
        """Delete a file or folder of the project; project files are kept."""
        path = Path(path)
        if _complete_suffix(path) in PROTECTED_SUFFIXES:
            raise WorkspaceError(f"Don't remove this file: {path}")
        try:
            if path.is_dir():
                shutil.rmtree(path)
            elif path.exists():
                path.unlink()
            else:
                return False
        except OSError:
            return False
        return True


def _tree_lines(item: UnitItem, depth: int = 0):
    for child in item.children:
        name = child.data(0)
        yield "  " * depth + ("" if name is None else str(name))
        yield from _tree_lines(child, depth + 1)


def main(argv=None) -> int:
    """Open a project and print its units."""
    parser = argparse.ArgumentParser(description="Open a test project.")
    parser.add_argument("project", nargs="?", help="project configuration file (.tpx)")
    parser.add_argument("--app-dir", default=str(Path.cwd()),
                        help="directory holding Config/ and Log/")
    args = parser.parse_args(argv)

    handler = install_log(args.app_dir)
    try:
        workspace = Workspace(args.app_dir)
        if args.project:
            try:
                workspace.open(args.project)
            except WorkspaceError as exc:
                print(f"error: {exc}", file=sys.stderr)
                return 1
            print(workspace.project_file)
            for line in _tree_lines(workspace.model.root):
                print(line)
        workspace.save_settings()
        return 0
    finally:
        import logging

        logging.getLogger().removeHandler(handler)
        handler.close()