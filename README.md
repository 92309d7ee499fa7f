# ateproject

Reading, writing and reviewing automated test projects.

A test project lives in its own directory and is made of three files that
share a base name:

- `Name.tp` – the test unit tree as JSON: the project, its test suites and
  their test cases, each with a name, a description and named parameters,
  plus public parameters and models;
- `Name.tpx` – the project configuration: name, description, barcode
  pattern, loop count, stop-on-failure switches, GUI plugins and the list of
  project instances;
- `Name.js` or `Name.py` – the test script holding one `test_<unit>`
  function per test unit.

Test runs recorded in an SQLite results database can be paged through,
filtered by barcode and exported to CSV.

## Installation

```
pip install .
```

For running the tests:

```
pip install ".[test]"
pytest
```

## Commands

### ateproject-dev

```
ateproject-dev path/to/Name/Name.tpx
```

Opens the project named by the configuration file, prints the path of its
`.tp` file and its unit tree (one unit per line, indented by depth), and
exits. `--app-dir DIR` (default: the current directory) sets where
`Config/Dev.ini` keeps the remembered work path and where log records are
appended to daily files under `Log/TreeATEDev/`. Without a project argument
it only writes the settings file. An unreadable project gives exit status 1.

### ateproject-results

```
ateproject-results --barcode SN123 --page 2
```

Prints one page of recorded projects, newest first, followed by the page
label such as `2/5`. The database is `db/treeate.sqlite` under `--app-dir`
unless `--db FILE` is given; `--page-size` sets the rows per page
(default 10).

```
ateproject-results --export out.csv --project Name \
    --items "Name of project,Barcode/SN,Result of cases" \
    --start "2024-01-01 00:00" --end "2024-01-31 23:59"
```

Exports the chosen columns of one project's results between the two times
(by default the last seven days). Item names are the keys of
`PROJECT_ITEMS`, `CASE_ITEMS` and `DETAIL_ITEMS` in `ateproject.results`.

## Library use

### Creating a project

`ateproject.newproject.new_project_files(workpath, name, suffix)` lists the
`.tp`, `.tpx` and script paths a new project would get (spaces are dropped
from the name), and `create_project(workpath, name, suffix, overwrite)`
writes them. An existing project directory raises `ProjectExistsError`
unless `overwrite` is true; an empty name raises `ValueError`.

### The test unit tree

`ateproject.unitsmodel.UnitsModel` holds the project tree. Load the parsed
contents of a `.tp` file with `set_project`, edit units and parameter
columns, and get the document back with `project_data`:

```python
import json
from ateproject.unitsmodel import UnitsModel

model = UnitsModel(["Name", "Description"])
with open("Name.tp", encoding="utf-8") as fh:
    model.set_project(json.load(fh))

model.set_version("1.2")
with open("Name.tp", "w", encoding="utf-8") as fh:
    json.dump(model.project_data(), fh, indent=4)
```

Each node of the tree is an `ateproject.unititem.UnitItem`; out-of-range
positions raise `IndexError`.

### CSV exchange

`ateproject.unitscsv.export_csv(model, path)` writes the tree to a CSV file,
indenting unit names by one space per level; `import_csv(model, path)` reads
such a file back into the model, skipping its header row. The underlying
line-based table is `ateproject.csvtable.CsvTable`, which raises `CsvError`
on failure. Cells are not quoted, so values must not contain commas.

### Project configuration

`ateproject.projectconfig.ProjectConfig.load(path)` reads a `.tpx` file;
`save()` writes it back, copying the public parameters of each instance's
`.tp` file into the instance. `rename_project(new_name)` points the
configuration and its instances at a new base name. Problems raise
`ProjectConfigError`.

### Workspace

`ateproject.workspace.Workspace` ties a project's files together: `open`,
`save`, `rename`, `import_files` (into `libs/`, `images/`, or a CSV unit
tree) and `remove_file` (which refuses `.tp` and `.tpx` files). Errors raise
`WorkspaceError`. `ensure_test_function` appends a `test_<unit>` stub to a
script when it does not have one yet.

### Result output snippets

`ateproject.snippets.output_call` builds the `__ate.OutputRst(...)` or
`__ate.OutputRstEx(...)` call a test script uses to report a measured value
against its standard.

### Results database

`ateproject.results.ResultsDatabase` reads the results database: `count`
and `page` for projects (optionally filtered by barcode), `cases` and
`details` for what belongs to a run, `project_names`, and `export_csv` for a
chosen set of columns over a time range. Errors raise `ResultsError`.
`Pager` tracks page navigation:

```python
from ateproject.results import Pager

pager = Pager(25, 10)
pager.next()
print(pager.label())  # 2/3
```

`row_color(result)` gives the RGB background colour used for passing,
failing and other rows.

## What this package does not do

- It has no graphical editor: there is no tree view, script editor or
  property panel. `ateproject-dev` only opens a project and prints it.
- It does not run test scripts or drive test equipment, and it never writes
  to the results database; it only reads and exports it.
- It does not load test component libraries to list their functions.