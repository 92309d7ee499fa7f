import json

import pytest

from ateproject import workspace
from ateproject.newproject import create_project
from ateproject.workspace import Workspace, WorkspaceError


@pytest.fixture
def project(tmp_path):
    files = create_project(tmp_path / "work", "Demo", "js")
    return files  # tp, tpx, js


@pytest.fixture
def ws(tmp_path):
    return Workspace(tmp_path / "app")


def test_default_workpath(ws, tmp_path):
    assert ws.workpath == tmp_path / "app" / "Example"


def test_settings_round_trip(ws, tmp_path):
    ws.workpath = tmp_path / "elsewhere"
    ws.save_settings()
    again = Workspace(tmp_path / "app")
    assert again.workpath == tmp_path / "elsewhere"


def test_open_tpx(ws, project):
    tp, tpx, js = project
    assert ws.open(tpx) is True
    assert ws.project_file == tp
    assert ws.script_file == js
    assert ws.language == "js"
    assert ws.model.project_data()["Name"] == "Demo"
    assert ws.modified is False


def test_open_tp_with_python_script(ws, tmp_path):
    directory = tmp_path / "p"
    directory.mkdir()
    (directory / "Unit.tp").write_text(json.dumps({"Name": "Unit"}), encoding="utf-8")
    (directory / "Unit.py").write_text("x = 1\n", encoding="utf-8")
    assert ws.open(directory / "Unit.tp", tpx=False) is True
    assert ws.language == "py"
    assert ws.script == "x = 1\n"


def test_open_same_project_twice(ws, project):
    tp = project[0]
    assert ws.open(tp, tpx=False) is True
    assert ws.open(tp, tpx=False) is False


def test_open_missing_script_raises(ws, tmp_path):
    directory = tmp_path / "p"
    directory.mkdir()
    (directory / "Lone.tp").write_text("{}", encoding="utf-8")
    with pytest.raises(WorkspaceError):
        ws.open(directory / "Lone.tp", tpx=False)


def test_open_missing_project_raises(ws, tmp_path):
    with pytest.raises(WorkspaceError):
        ws.open(tmp_path / "none" / "Nothing.tpx")


def test_save_writes_project_and_script(ws, project):
    tp, tpx, js = project
    ws.open(tpx)
    ws.model.set_version("1.2")
    ws.script = "function test_A()\n{\n}\n"
    assert ws.modified is True
    ws.save()
    assert ws.modified is False
    assert json.loads(tp.read_text(encoding="utf-8"))["Ver"] == "1.2"
    assert js.read_text(encoding="utf-8") == "function test_A()\n{\n}\n"
    config = json.loads(tpx.read_text(encoding="utf-8"))
    assert config["Instance"][0]["File"] == "Demo.tp"


def test_save_without_project_raises(ws):
    with pytest.raises(WorkspaceError):
        ws.save()


def test_rename_moves_files(ws, project):
    tp, tpx, js = project
    ws.open(tpx)
    ws.rename("Renamed")
    directory = tp.parent
    assert (directory / "Renamed.tp").is_file()
    assert (directory / "Renamed.js").is_file()
    assert (directory / "Renamed.tpx").is_file()
    assert not tp.exists()
    assert ws.project_file == directory / "Renamed.tp"
    config = json.loads((directory / "Renamed.tpx").read_text(encoding="utf-8"))
    assert config["Instance"][0]["File"] == "Renamed.tp"


def test_import_lib_copies_file(ws, project, tmp_path):
    ws.open(project[1])
    source = tmp_path / "dev.py"
    source.write_text("pass\n", encoding="utf-8")
    copied = ws.import_files([source], "lib")
    target = project[0].parent / "libs" / "dev.py"
    assert copied == [target]
    assert target.read_text(encoding="utf-8") == "pass\n"
    with pytest.raises(WorkspaceError):
        ws.import_files([source], "lib")


def test_import_image_folder(ws, project, tmp_path):
    ws.open(project[1])
    source = tmp_path / "logo.png"
    source.write_bytes(b"\x89PNG")
    copied = ws.import_files([source], "image")
    assert copied == [project[0].parent / "images" / "logo.png"]


def test_import_csv_builds_tree(ws, project, tmp_path):
    ws.open(project[1])
    csv_file = tmp_path / "units.csv"
    csv_file.write_text("Name,Description\n Demo,d\n  Suite,s\n", encoding="utf-8")
    assert ws.import_files([csv_file], "csv") == []
    top = ws.model.root.child(0)
    assert top.data(0) == "Demo"
    assert top.child(0).data(0) == "Suite"


def test_import_unknown_kind(ws):
    with pytest.raises(ValueError):
        ws.import_files([], "video")


def test_remove_file(ws, project):
    ws.open(project[1])
    with pytest.raises(WorkspaceError):
        ws.remove_file(project[0])
    extra = project[0].parent / "notes.txt"
    extra.write_text("x", encoding="utf-8")
    assert ws.remove_file(extra) is True
    assert not extra.exists()
    assert ws.remove_file(extra) is False


def test_function_patterns():
    assert workspace.test_function_pattern("Init", "js") == "function\\s+\\w+_Init"
    assert workspace.test_function_pattern("Init", "py") == "def\\s+\\w+_Init"


def test_ensure_test_function_keeps_existing():
    script = "function test_Init()\n{\n}\n"
    assert workspace.ensure_test_function(script, "Init", "js") == script


def test_ensure_test_function_appends_js():
    result = workspace.ensure_test_function("var a;", "Init", "js")
    assert result == "var a;\r\n\r\nfunction test_Init()\r\n{\r\n}"


def test_ensure_test_function_appends_py():
    result = workspace.ensure_test_function("", "Init", "py")
    assert result == "\r\n\r\ndef test_Init():\r\n\r\n"
    assert workspace.ensure_test_function(result, "Init", "py") == result


def test_main_opens_project(project, tmp_path, capsys):
    code = workspace.main([str(project[1]), "--app-dir", str(tmp_path / "app")])
    assert code == 0
    out = capsys.readouterr().out
    assert "Demo" in out
    assert (tmp_path / "app" / "Config" / "Dev.ini").is_file()


def test_main_missing_project(tmp_path):
    code = workspace.main([str(tmp_path / "x" / "No.tpx"), "--app-dir", str(tmp_path / "app")])
    assert code == 1