"""Coverage data model.

Input side mirrors the gocov JSON document (packages -> functions ->
statements with byte offsets). Output side is the Istanbul per-file record,
see accumulator.FileCoverageRecord.
"""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True, slots=True)
class Location:
    """Source position: 1-based line, 0-based column."""

    line: int
    column: int

    def to_dict(self) -> dict[str, int]:
        return {"line": self.line, "column": self.column}


@dataclass(frozen=True, slots=True)
class GocovStatement:
    """One instrumented statement with its reach count."""

    start: int  # byte offset
    end: int  # byte offset
    reached: int


@dataclass(frozen=True, slots=True)
class GocovFunction:
    """A function and, when recorded, its statements.

    statements is None when the report carries no statement detail.
    """

    name: str
    file: str  # as written in the report, possibly relative
    start: int
    end: int
    statements: tuple[GocovStatement, ...] | None = None


@dataclass(frozen=True, slots=True)
class GocovPackage:
    name: str
    functions: tuple[GocovFunction, ...] = ()


@dataclass(frozen=True, slots=True)
class GocovDocument:
    """Parsed gocov report."""

    packages: tuple[GocovPackage, ...] = field(default_factory=tuple)
