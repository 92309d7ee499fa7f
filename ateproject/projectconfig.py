"""Test project configuration files (``.tpx``)."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

log = logging.getLogger(__name__)

LOOP_MIN = 1
LOOP_MAX = 999999


class ProjectConfigError(Exception):
    """Raised when a project configuration or project file cannot be used."""


def _text(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def _flag(value: Any) -> bool:
    if isinstance(value, str):
        return value.strip().lower() not in ("", "0", "false")
    return bool(value)


def _count(value: Any) -> int:
    try:
        number = int(value)
    except (TypeError, ValueError):
        number = 0
    return min(max(number, LOOP_MIN), LOOP_MAX)


def _read_document(path: Path) -> dict:
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ProjectConfigError(f"{exc.strerror or exc}: {path}") from exc
    try:
        document = json.loads(text)
    except ValueError:
        return {}
    return document if isinstance(document, dict) else {}


def _entries(value: Any, second: str) -> list[dict]:
    entries = value if isinstance(value, list) else []
    result = []
    for entry in entries:
        entry = entry if isinstance(entry, dict) else {}
        result.append({"Name": _text(entry.get("Name")), second: _text(entry.get(second))})
    return result


@dataclass
class ProjectConfig:
    """The settings of a ``.tpx`` file.

    ``plugins`` holds ``{"Name", "Com"}`` entries and ``instances`` holds
    ``{"Name", "File"}`` entries. Keys not managed here are kept in
    ``document`` and written back unchanged.
    """

    path: Path
    name: str = ""
    description: str = ""
    barcode_regex: str = ""
    loop_count: int = LOOP_MIN
    failed_to_stop: bool = False
    stopped_for_loop: bool = False
    plugins: list[dict] = field(default_factory=list)
    instances: list[dict] = field(default_factory=list)
    document: dict = field(default_factory=dict)

    @classmethod
    def load(cls, path) -> "ProjectConfig":
        """Read the configuration at ``path``; unparsable JSON reads as empty."""
        path = Path(path)
        document = _read_document(path)
        return cls(
            path=path,
            name=_text(document.get("Name")),
            description=_text(document.get("Desc")),
            barcode_regex=_text(document.get("BarCodeReg")),
            loop_count=_count(document.get("LoopCount")),
            failed_to_stop=_flag(document.get("failedToStop")),
            stopped_for_loop=_flag(document.get("stoppedForLoop")),
            plugins=_entries(document.get("GUIPlugins"), "Com"),
            instances=_entries(document.get("Instance"), "File"),
            document=document,
        )

    def save(self) -> None:
        """Write the configuration, copying each instance's public parameters."""
        instances = []
        for entry in self.instances:
            instance = {"Name": entry.get("Name", ""), "File": entry.get("File", "")}
            try:
                parameters = self.copy_public_parameters(instance["File"])
            except ProjectConfigError as exc:
                log.warning("%s", exc)
                parameters = []
            if parameters:
                instance["Parameter"] = parameters
            instances.append(instance)

        document = dict(self.document)
        document["Instance"] = instances
        document["GUIPlugins"] = [
            {"Name": entry.get("Name", ""), "Com": entry.get("Com", "")}
            for entry in self.plugins
        ]
        document["Name"] = self.name
        document["Desc"] = self.description
        document["BarCodeReg"] = self.barcode_regex
        document["LoopCount"] = _count(self.loop_count)
        document["failedToStop"] = bool(self.failed_to_stop)
        document["stoppedForLoop"] = bool(self.stopped_for_loop)

        try:
            self.path.write_text(
                json.dumps(document, indent=4, sort_keys=True, ensure_ascii=False) + "\n",
                encoding="utf-8",
            )
        except OSError as exc:
            raise ProjectConfigError(f"{exc.strerror or exc}: {self.path}") from exc
        self.document = document

    def rename_project(self, new_name: str) -> None:
        """Point every instance at ``<new_name>.tp`` and this file at ``<new_name>.tpx``."""
        for entry in self.instances:
            entry["File"] = f"{new_name}.tp"
        self.path = self.path.parent / f"{new_name}.tpx"

    def default_project_name(self) -> str:
        """File name of the first instance, or an empty string."""
        if self.instances:
            return self.instances[0].get("File", "")
        return ""

    def copy_public_parameters(self, tp_file_name: str) -> list:
        """The public parameters of the project file next to this configuration."""
        project = _read_document(self.path.parent / tp_file_name)
        public = project.get("Public")
        public = public if isinstance(public, dict) else {}
        parameters = public.get("Parameter")
        return parameters if isinstance(parameters, list) else []