"""Byte offset -> line/column translation for Go source files.

gocov reports positions as byte offsets into the source file. Istanbul wants
1-based lines and 0-based columns. A SourceIndex holds one file's bytes, the
start offset of every line, and the lines that follow an ignore marker.

Lines are split on b"\\n" only. CRLF files keep the trailing b"\\r" in each
line's text, so function end columns include it.
"""

from __future__ import annotations

from bisect import bisect_right
from pathlib import Path

from covbridge.config.models import DEFAULT_IGNORE_MARKER
from covbridge.core.errors import OffsetOutOfRangeError, SourceFileError
from covbridge.core.logging import get_logger
from covbridge.coverage.models import Location

log = get_logger(__name__)


class SourceIndex:
    """Line table and ignore markers for one source file.

    Attributes:
        path: Absolute path of the file.
        content: Raw file bytes.
        lines: Line texts as bytes, without the newline.
        line_starts: Byte offset where each line starts; line_starts[i] is the
            summed length of lines 0..i-1 plus i newlines.
        ignored_lines: 1-based numbers of lines containing the ignore marker.
            A statement is skipped when its start line minus one is in this set,
            i.e. when it starts on the line after a marker.
    """

    def __init__(self, path: Path, *, ignore_marker: str = DEFAULT_IGNORE_MARKER) -> None:
        self.path = path
        try:
            content = path.read_bytes()
            content.decode("utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise SourceFileError.unreadable(str(path), str(e)) from e

        self.content = content
        self.lines = content.split(b"\n")

        starts: list[int] = []
        so_far = 0
        for line in self.lines:
            starts.append(so_far)
            so_far += len(line) + 1
        self.line_starts = tuple(starts)

        marker = ignore_marker.encode("utf-8")
        self.ignored_lines = frozenset(
            i + 1 for i, line in enumerate(self.lines) if marker in line
        )

    @property
    def size(self) -> int:
        return len(self.content)

    def is_ignored(self, location: Location) -> bool:
        """True if a statement starting at location follows an ignore marker."""
        return (location.line - 1) in self.ignored_lines

    def line_number(self, offset: int) -> int:
        """1-based line containing offset.

        Equal to the number of newlines in content[:offset] plus one: every
        line start at or before offset other than the first marks one newline
        before it.
        """
        if not 0 <= offset <= self.size:
            raise OffsetOutOfRangeError.for_offset(str(self.path), offset, self.size)
        return bisect_right(self.line_starts, offset)

    def locate_statement(self, offset: int) -> Location:
        line = self.line_number(offset)
        return Location(line=line, column=offset - self.line_starts[line - 1])

    def locate_function_start(self, offset: int) -> Location:
        """Function starts are reported at column 0 of their line."""
        return Location(line=self.line_number(offset), column=0)

    def locate_function_end(self, offset: int) -> Location:
        """Function ends are reported at the end of their line."""
        line = self.line_number(offset)
        return Location(line=line, column=len(self.lines[line - 1]))


class SourceIndexCache:
    """Builds each file's SourceIndex at most once per conversion run."""

    def __init__(self, *, ignore_marker: str = DEFAULT_IGNORE_MARKER) -> None:
        self.ignore_marker = ignore_marker
        self._indexes: dict[str, SourceIndex] = {}

    def __len__(self) -> int:
        return len(self._indexes)

    def __contains__(self, path: object) -> bool:
        return path in self._indexes

    def get(self, path: str) -> SourceIndex:
        index = self._indexes.get(path)
        if index is None:
            index = SourceIndex(Path(path), ignore_marker=self.ignore_marker)
            self._indexes[path] = index
            log.debug(
                "source_indexed",
                path=path,
                lines=len(index.lines),
                ignored=sorted(index.ignored_lines),
            )
        return index
