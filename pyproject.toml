[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "ateproject"
version = "0.1.0"
description = "Test project files for automated test equipment: unit trees, project configuration, CSV exchange and a results database reader."
requires-python = ">=3.10"
dependencies = []
keywords = [
    "ate",
    "automated test equipment",
    "test project",
    "test results",
    "csv",
    "sqlite",
]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Intended Audience :: Manufacturing",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Software Development :: Testing",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
ateproject-dev = "ateproject.workspace:main"
ateproject-results = "ateproject.results:main"

[tool.hatch.build.targets.wheel]
packages = ["ateproject"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.ruff.lint]
select = ["E", "F", "W", "I", "B", "UP"]

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
warn_redundant_casts = true
