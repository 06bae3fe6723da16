"""gocov JSON reader.

gocov (github.com/axw/gocov) emits coverage as JSON:

{
  "Packages": [
    {
      "Name": "github.com/user/pkg",
      "Functions": [
        {
          "Name": "Handler",
          "File": "pkg/handler.go",
          "Start": 120, "End": 480,          // byte offsets into File
          "Statements": [                    // may be null
            {"Start": 150, "End": 170, "Reached": 3},
            ...
          ]
        }
      ]
    }
  ]
}
"""

import json
from pathlib import Path
from typing import Any

from covbridge.core.errors import InputFormatError
from covbridge.coverage.models import (
    GocovDocument,
    GocovFunction,
    GocovPackage,
    GocovStatement,
)


def read_gocov(path: Path) -> GocovDocument:
    """Read and parse a gocov JSON file.

    Raises:
        InputFormatError: If the file is not JSON or not shaped like gocov output.
    """
    try:
        with path.open(encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
        raise InputFormatError.invalid_json(str(path), str(e)) from e

    return parse_gocov(data)


def parse_gocov(data: Any) -> GocovDocument:
    """Convert an already-decoded gocov JSON value into a GocovDocument."""
    if not isinstance(data, dict):
        raise InputFormatError.invalid_shape("$", "expected an object")

    packages = _require_list(data, "Packages", "$")
    return GocovDocument(
        packages=tuple(
            _parse_package(pkg, f"$.Packages[{i}]") for i, pkg in enumerate(packages)
        )
    )


def _parse_package(data: Any, where: str) -> GocovPackage:
    if not isinstance(data, dict):
        raise InputFormatError.invalid_shape(where, "expected an object")

    functions = _require_list(data, "Functions", where)
    return GocovPackage(
        name=_require_str(data, "Name", where),
        functions=tuple(
            _parse_function(fn, f"{where}.Functions[{i}]") for i, fn in enumerate(functions)
        ),
    )


def _parse_function(data: Any, where: str) -> GocovFunction:
    if not isinstance(data, dict):
        raise InputFormatError.invalid_shape(where, "expected an object")

    raw_statements = data.get("Statements")
    statements: tuple[GocovStatement, ...] | None = None
    if raw_statements is not None:
        if not isinstance(raw_statements, list):
            raise InputFormatError.invalid_shape(f"{where}.Statements", "expected a list or null")
        statements = tuple(
            _parse_statement(stmt, f"{where}.Statements[{i}]")
            for i, stmt in enumerate(raw_statements)
        )

    return GocovFunction(
        name=_require_str(data, "Name", where),
        file=_require_str(data, "File", where),
        start=_require_int(data, "Start", where),
        end=_require_int(data, "End", where),
        statements=statements,
    )


def _parse_statement(data: Any, where: str) -> GocovStatement:
    if not isinstance(data, dict):
        raise InputFormatError.invalid_shape(where, "expected an object")

    return GocovStatement(
        start=_require_int(data, "Start", where),
        end=_require_int(data, "End", where),
        reached=_require_int(data, "Reached", where),
    )


def _require_list(data: dict[str, Any], key: str, where: str) -> list[Any]:
    value = data.get(key)
    if not isinstance(value, list):
        raise InputFormatError.invalid_shape(f"{where}.{key}", "expected a list")
    return value


def _require_str(data: dict[str, Any], key: str, where: str) -> str:
    value = data.get(key)
    if not isinstance(value, str):
        raise InputFormatError.invalid_shape(f"{where}.{key}", "expected a string")
    return value


def _require_int(data: dict[str, Any], key: str, where: str) -> int:
    value = data.get(key)
    # bool is an int subclass; reject it explicitly
    if not isinstance(value, int) or isinstance(value, bool):
        raise InputFormatError.invalid_shape(f"{where}.{key}", "expected an integer")
    return value
