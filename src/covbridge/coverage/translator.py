"""gocov -> Istanbul conversion.

Walks packages -> functions -> statements in report order. For each function
the source file is indexed on first sight, the function is recorded with
whole-line bounds, and each of its statements is recorded with exact
columns and the report's reach count. A statement starting on the line after
an ignore marker is flagged skip.

Any error aborts the whole conversion; a partial report is never returned.
"""

from __future__ import annotations

import os
from pathlib import Path

from covbridge.config.models import DEFAULT_IGNORE_MARKER
from covbridge.core.logging import get_logger
from covbridge.coverage.accumulator import CoverageAccumulator
from covbridge.coverage.models import GocovDocument, GocovFunction
from covbridge.coverage.source_index import SourceIndexCache

log = get_logger(__name__)


def resolve_source_path(file: str, base_dir: Path) -> str:
    """Absolute, normalized path for a report File entry.

    Relative entries are anchored at base_dir; absolute entries are kept.
    """
    return os.path.normpath(base_dir / file)


def convert(
    document: GocovDocument,
    *,
    base_dir: Path | None = None,
    ignore_marker: str = DEFAULT_IGNORE_MARKER,
) -> CoverageAccumulator:
    """Translate a gocov document into Istanbul coverage tables.

    Args:
        document: Parsed gocov report.
        base_dir: Directory that relative File paths resolve against.
                  Defaults to the current working directory.
        ignore_marker: Text that flags statements on the following line as skipped.

    Returns:
        Accumulator holding one FileCoverageRecord per source file.

    Raises:
        SourceFileError: A referenced source file cannot be read.
        OffsetOutOfRangeError: An offset lies outside its source file.
    """
    base = (base_dir or Path.cwd()).absolute()
    sources = SourceIndexCache(ignore_marker=ignore_marker)
    output = CoverageAccumulator()

    for package in document.packages:
        log.debug("package_start", package=package.name, functions=len(package.functions))
        for function in package.functions:
            _translate_function(function, base, sources, output)

    log.info(
        "conversion_complete",
        files=len(output),
        functions=output.function_count,
        statements=output.statement_count,
        skipped=output.skipped_count,
    )
    return output


def _translate_function(
    function: GocovFunction,
    base_dir: Path,
    sources: SourceIndexCache,
    output: CoverageAccumulator,
) -> None:
    path = resolve_source_path(function.file, base_dir)
    index = sources.get(path)

    output.append_function(
        path,
        function.name,
        index.locate_function_start(function.start),
        index.locate_function_end(function.end),
    )

    if function.statements is None:
        return

    for statement in function.statements:
        start = index.locate_statement(statement.start)
        end = index.locate_statement(statement.end)
        output.append_statement(path, start, end, statement.reached, index.is_ignored(start))
