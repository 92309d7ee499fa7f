import json

import pytest

from ateproject.newproject import (
    PLACEHOLDER_DESCRIPTION,
    ProjectExistsError,
    create_project,
    new_project_files,
)


def test_files_are_tp_tpx_and_script(tmp_path):
    files = new_project_files(tmp_path, "Demo")
    assert [f.name for f in files] == ["Demo.tp", "Demo.tpx", "Demo.js"]
    assert all(f.parent == tmp_path / "Demo" for f in files)


def test_spaces_removed_from_name(tmp_path):
    files = new_project_files(tmp_path, "  My Board ")
    assert files[0].name == "MyBoard.tp"
    assert files[0].parent.name == "MyBoard"


def test_python_suffix(tmp_path):
    files = new_project_files(tmp_path, "Demo", "py")
    assert files[2].name == "Demo.py"


def test_empty_name_gives_no_files(tmp_path):
    assert new_project_files(tmp_path, "   ") == []


def test_unknown_suffix_rejected(tmp_path):
    with pytest.raises(ValueError):
        new_project_files(tmp_path, "Demo", "lua")


def test_workpath_is_trimmed(tmp_path):
    files = new_project_files(f"  {tmp_path}  ", "Demo")
    assert files[0] == tmp_path / "Demo" / "Demo.tp"


def test_create_writes_all_files(tmp_path):
    files = create_project(tmp_path, "Demo")
    assert all(f.is_file() for f in files)
    tp = json.loads(files[0].read_text(encoding="utf-8"))
    assert tp == {"Name": "Demo", "Desc": PLACEHOLDER_DESCRIPTION}


def test_configuration_lists_instance(tmp_path):
    files = create_project(tmp_path, "Demo")
    tpx = json.loads(files[1].read_text(encoding="utf-8"))
    assert tpx["Instance"] == [{"File": "Demo.tp", "Name": "Demo"}]
    assert tpx["Name"] == "Demo"


def test_script_has_no_instance(tmp_path):
    files = create_project(tmp_path, "Demo", "py")
    script = json.loads(files[2].read_text(encoding="utf-8"))
    assert "Instance" not in script
    assert script["Name"] == "Demo"


def test_existing_project_raises(tmp_path):
    create_project(tmp_path, "Demo")
    with pytest.raises(ProjectExistsError):
        create_project(tmp_path, "Demo")


def test_overwrite_replaces_contents(tmp_path):
    files = create_project(tmp_path, "Demo")
    files[0].write_text("changed", encoding="utf-8")
    again = create_project(tmp_path, "Demo", overwrite=True)
    assert again == files
    assert json.loads(files[0].read_text(encoding="utf-8"))["Name"] == "Demo"


def test_create_with_empty_name_raises(tmp_path):
    with pytest.raises(ValueError):
        create_project(tmp_path, " ")
    assert list(tmp_path.iterdir()) == []