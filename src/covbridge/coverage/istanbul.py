"""Istanbul coverage-final.json writer."""

import json
from pathlib import Path
from typing import TextIO

from covbridge.coverage.accumulator import CoverageAccumulator


def dumps(output: CoverageAccumulator) -> str:
    """Compact JSON, no whitespace, keys in id order, non-ASCII kept as-is."""
    return json.dumps(output.to_dict(), separators=(",", ":"), ensure_ascii=False)


def write_report(output: CoverageAccumulator, stream: TextIO) -> None:
    stream.write(dumps(output))
    stream.write("\n")


def write_report_file(output: CoverageAccumulator, path: Path) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w", encoding="utf-8") as f:
        write_report(output, f)
