[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "boiltypes"
version = "0.1.0"
description = "PostgreSQL value types: array literals, hstore, JSON, decimals, bytes, timestamps and geometric types, with scan/value conversion."
requires-python = ">=3.10"
dependencies = []
keywords = ["postgresql", "sql", "arrays", "hstore", "geometry", "decimal", "bytea", "database"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Database",
    "Typing :: Typed",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["boiltypes"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
