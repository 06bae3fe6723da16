"""gocov JSON -> Istanbul coverage conversion.

Usage:
    from covbridge.coverage import read_gocov, convert, dumps

    document = read_gocov(Path("gocov.json"))
    output = convert(document)
    print(dumps(output))
"""

from covbridge.coverage.accumulator import (
    CoverageAccumulator,
    FileCoverageRecord,
    FunctionEntry,
    StatementEntry,
)
from covbridge.coverage.gocov import parse_gocov, read_gocov
from covbridge.coverage.istanbul import dumps, write_report, write_report_file
from covbridge.coverage.models import (
    GocovDocument,
    GocovFunction,
    GocovPackage,
    GocovStatement,
    Location,
)
from covbridge.coverage.source_index import SourceIndex, SourceIndexCache
from covbridge.coverage.translator import convert, resolve_source_path

__all__ = [
    # Models
    "GocovDocument",
    "GocovFunction",
    "GocovPackage",
    "GocovStatement",
    "Location",
    # Input
    "parse_gocov",
    "read_gocov",
    # Source index
    "SourceIndex",
    "SourceIndexCache",
    # Output tables
    "CoverageAccumulator",
    "FileCoverageRecord",
    "FunctionEntry",
    "StatementEntry",
    # Conversion
    "convert",
    "resolve_source_path",
    # Writer
    "dumps",
    "write_report",
    "write_report_file",
]
