"""Istanbul per-file coverage tables.

Each FileCoverageRecord maps to one entry of coverage-final.json:

{
  "/abs/path/handler.go": {
    "path": "/abs/path/handler.go",
    "s": {"1": 3, ...},                      // statement hit counts
    "b": {},                                 // branch hits (gocov has none)
    "f": {"1": 1, ...},                      // function hit counts
    "fnMap": {"1": {"name": ..., "line": ..., "loc": {...}, "skip": false}},
    "statementMap": {"1": {"start": {...}, "end": {...}, "skip": false}},
    "branchMap": {}
  }
}

Statement and function ids are separate per-file counters starting at 1.
Records are appended as-is; identical locations get separate ids.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from covbridge.coverage.models import Location


@dataclass(frozen=True, slots=True)
class FunctionEntry:
    name: str
    start: Location
    end: Location
    skip: bool = False

    @property
    def line(self) -> int:
        return self.start.line

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "line": self.line,
            "loc": {"start": self.start.to_dict(), "end": self.end.to_dict()},
            "skip": self.skip,
        }


@dataclass(frozen=True, slots=True)
class StatementEntry:
    start: Location
    end: Location
    skip: bool = False

    def to_dict(self) -> dict[str, Any]:
        return {"start": self.start.to_dict(), "end": self.end.to_dict(), "skip": self.skip}


@dataclass(slots=True)
class FileCoverageRecord:
    """Coverage tables for one source file, keyed by dense integer ids."""

    path: str  # absolute path
    s: dict[int, int] = field(default_factory=dict)  # statement id -> hits
    statement_map: dict[int, StatementEntry] = field(default_factory=dict)
    f: dict[int, int] = field(default_factory=dict)  # function id -> hits
    fn_map: dict[int, FunctionEntry] = field(default_factory=dict)
    b: dict[int, list[int]] = field(default_factory=dict)  # always empty
    branch_map: dict[int, Any] = field(default_factory=dict)  # always empty
    next_statement_id: int = 1
    next_function_id: int = 1

    def add_function(self, entry: FunctionEntry, hits: int = 1) -> int:
        fn_id = self.next_function_id
        self.fn_map[fn_id] = entry
        self.f[fn_id] = hits
        self.next_function_id += 1
        return fn_id

    def add_statement(self, entry: StatementEntry, hits: int) -> int:
        st_id = self.next_statement_id
        self.statement_map[st_id] = entry
        self.s[st_id] = hits
        self.next_statement_id += 1
        return st_id

    @property
    def skipped_statements(self) -> int:
        return sum(1 for entry in self.statement_map.values() if entry.skip)

    def to_dict(self) -> dict[str, Any]:
        """Serialize to the Istanbul file-coverage shape (ids as string keys)."""
        return {
            "path": self.path,
            "s": {str(k): v for k, v in self.s.items()},
            "b": {str(k): v for k, v in self.b.items()},
            "f": {str(k): v for k, v in self.f.items()},
            "fnMap": {str(k): v.to_dict() for k, v in self.fn_map.items()},
            "statementMap": {str(k): v.to_dict() for k, v in self.statement_map.items()},
            "branchMap": {str(k): v for k, v in self.branch_map.items()},
        }


class CoverageAccumulator:
    """Owns every FileCoverageRecord produced by one conversion run."""

    def __init__(self) -> None:
        self.files: dict[str, FileCoverageRecord] = {}

    def __len__(self) -> int:
        return len(self.files)

    def __contains__(self, path: object) -> bool:
        return path in self.files

    def __getitem__(self, path: str) -> FileCoverageRecord:
        return self.files[path]

    def get_or_create(self, path: str) -> FileCoverageRecord:
        record = self.files.get(path)
        if record is None:
            record = self.files[path] = FileCoverageRecord(path=path)
        return record

    def append_function(self, path: str, name: str, start: Location, end: Location) -> int:
        """Record a function seen in the report. gocov carries no call count, so hits = 1."""
        return self.get_or_create(path).add_function(FunctionEntry(name=name, start=start, end=end))

    def append_statement(
        self, path: str, start: Location, end: Location, hits: int, skip: bool
    ) -> int:
        return self.get_or_create(path).add_statement(
            StatementEntry(start=start, end=end, skip=skip), hits
        )

    @property
    def function_count(self) -> int:
        return sum(len(r.fn_map) for r in self.files.values())

    @property
    def statement_count(self) -> int:
        return sum(len(r.statement_map) for r in self.files.values())

    @property
    def skipped_count(self) -> int:
        return sum(r.skipped_statements for r in self.files.values())

    def to_dict(self) -> dict[str, Any]:
        """Full coverage-final.json mapping: absolute path -> file coverage."""
        return {path: record.to_dict() for path, record in self.files.items()}
