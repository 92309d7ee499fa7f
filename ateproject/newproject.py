"""Creation of a new test project: the ``.tp``, ``.tpx`` and script files."""

from __future__ import annotations

import json
from pathlib import Path

SCRIPT_SUFFIXES = ("js", "py")
PLACEHOLDER_DESCRIPTION = "Please deleted it before at edit"


class ProjectExistsError(FileExistsError):
    """Raised when the directory of a new project already exists."""


def _clean_name(name: str) -> str:
    return name.strip().replace(" ", "")


def new_project_files(workpath, name: str, suffix: str = "js") -> list[Path]:
    """Paths of the project file, the configuration file and the script.

    The project lives in ``<workpath>/<name>/`` and every file is named
    ``<name>``; spaces in ``name`` are dropped. An empty name gives no files.
    """
    if suffix not in SCRIPT_SUFFIXES:
        raise ValueError(f"unsupported script suffix: {suffix!r}")
    clean = _clean_name(name)
    if not clean:
        return []
    base = Path(str(workpath).strip()) / clean / clean
    return [
        base.with_name(f"{clean}.tp"),
        base.with_name(f"{clean}.tpx"),
        base.with_name(f"{clean}.{suffix}"),
    ]


def _document(project_name: str, with_instance: bool) -> dict:
    document: dict = {"Name": project_name, "Desc": PLACEHOLDER_DESCRIPTION}
    if with_instance:
        document["Instance"] = [{"File": f"{project_name}.tp", "Name": project_name}]
    return document


def create_project(workpath, name: str, suffix: str = "js", overwrite: bool = False) -> list[Path]:
    """Create a new project and return its three files.

    Every file starts with the project's name and a placeholder description;
    the configuration file also lists the project file as its one instance.
    An existing project directory is only written over with ``overwrite``.
    """
    files = new_project_files(workpath, name, suffix)
    if not files:
        raise ValueError("project name must not be empty")

    project_file = files[0]
    project_name = project_file.stem
    directory = project_file.parent
    if directory.exists():
        if not overwrite:
            raise ProjectExistsError(f"{project_name} already exists: {directory}")
    else:
        directory.mkdir(parents=True, exist_ok=True)

    for path in files:
        document = _document(project_name, with_instance=path.suffix == ".tpx")
        path.write_text(
            json.dumps(document, indent=4, sort_keys=True, ensure_ascii=False) + "\n",
            encoding="utf-8",
        )
    return files