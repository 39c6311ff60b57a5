"""Source positions and the position-to-location translator.

Positions are plain integers that are globally ordered across every file in a
FileSet, so "declared before" and "used after" questions reduce to integer
comparison regardless of which file a node lives in. Each file occupies the
half-open range [base, base + size] of the position space.

The FileSet converts a position back into a human-readable Position
(filename, line, column) using binary search over the line start offsets.
"""

import bisect
from dataclasses import dataclass

NO_POS = 0
"""The zero position; compares before every valid position."""


@dataclass(frozen=True)
class Position:
    """A resolved source location. Line and column are 1-based."""

    filename: str
    offset: int
    line: int
    column: int

    @property
    def is_valid(self) -> bool:
        return self.line > 0

    def __str__(self) -> str:
        if not self.is_valid:
            return self.filename or "-"
        return f"{self.filename}:{self.line}:{self.column}"


@dataclass(frozen=True)
class SourceFile:
    """A file registered in a FileSet.

    Attributes:
        name: File name as given by the front-end (usually a path)
        base: Position of the first byte of the file
        size: File size in bytes
        line_starts: Byte offsets at which each line begins, ascending, starting with 0
    """

    name: str
    base: int
    size: int
    line_starts: tuple[int, ...]

    def contains(self, pos: int) -> bool:
        return self.base <= pos <= self.base + self.size

    def offset(self, pos: int) -> int:
        """Return the byte offset of pos within this file."""
        if not self.contains(pos):
            msg = f"position {pos} is outside file {self.name!r}"
            raise ValueError(msg)
        return pos - self.base

    def position(self, pos: int) -> Position:
        """Translate a position in this file into a Position."""
        offset = self.offset(pos)
        index = bisect.bisect_right(self.line_starts, offset) - 1
        return Position(
            filename=self.name,
            offset=offset,
            line=index + 1,
            column=offset - self.line_starts[index] + 1,
        )

    def line_pos(self, line: int, column: int = 1) -> int:
        """Return the position of the given 1-based line and column."""
        if not 1 <= line <= len(self.line_starts):
            msg = f"line {line} out of range for {self.name!r} ({len(self.line_starts)} lines)"
            raise ValueError(msg)
        return self.base + self.line_starts[line - 1] + column - 1


class FileSet:
    """Registry of source files sharing one global position space."""

    def __init__(self) -> None:
        self._files: list[SourceFile] = []
        self._next_base = 1

    @property
    def files(self) -> tuple[SourceFile, ...]:
        return tuple(self._files)

    def add_file(self, name: str, size: int, line_starts: tuple[int, ...] | list[int] = (0,)) -> SourceFile:
        """Register a file and assign it the next free base.

        Args:
            name: File name
            size: File size in bytes
            line_starts: Offsets of the first byte of each line

        Returns:
            The registered SourceFile

        Raises:
            ValueError: If size is negative or line_starts is malformed
        """
        if size < 0:
            msg = f"file size must be non-negative, got {size}"
            raise ValueError(msg)
        starts = tuple(line_starts)
        if not starts or starts[0] != 0:
            msg = f"line starts for {name!r} must begin with offset 0"
            raise ValueError(msg)
        if any(b <= a for a, b in zip(starts, starts[1:], strict=False)):
            msg = f"line starts for {name!r} must be strictly ascending"
            raise ValueError(msg)

        source_file = SourceFile(name=name, base=self._next_base, size=size, line_starts=starts)
        self._files.append(source_file)
        self._next_base += size + 1
        return source_file

    def file(self, pos: int) -> SourceFile | None:
        """Return the file containing pos, or None."""
        if pos == NO_POS:
            return None
        index = bisect.bisect_right(self._files, pos, key=lambda f: f.base) - 1
        if index < 0:
            return None
        candidate = self._files[index]
        return candidate if candidate.contains(pos) else None

    def position(self, pos: int) -> Position:
        """Translate pos into a Position; unknown positions yield an invalid Position."""
        source_file = self.file(pos)
        if source_file is None:
            return Position(filename="", offset=0, line=0, column=0)
        return source_file.position(pos)
