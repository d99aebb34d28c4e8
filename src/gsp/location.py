"""Source position tracking for diagnostics.

Provides the Position dataclass used by the scanner, the parser's error
messages and every AST node.

Thread Safety:
Position is frozen (immutable) and safe to share across threads.

"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class Position:
    """Location of the last consumed character.

    Rows are 0-based internally. The column counts characters consumed on the
    current row, so after reading the first character of a line ``col`` is 1.
    ``prev_col`` remembers the column the previous row ended on; it is what
    lets the scanner step back over a line feed.

    Attributes:
        row: 0-based row
        col: Number of characters consumed on the row
        prev_col: Column the previous row ended on
        source_file: Source file path (optional, for messages)

    Examples:
            >>> pos = Position(row=2, col=7)
            >>> str(pos)
            '3:7'
            >>> str(Position(0, 1, source_file="index.gsp"))
            'index.gsp:1:1'

    """

    row: int = 0
    col: int = 0
    prev_col: int = 0
    source_file: str | None = None

    @property
    def lineno(self) -> int:
        """1-based line number."""
        return self.row + 1

    def __str__(self) -> str:
        """Format position as ``row:col``, 1-based to match editors."""
        if self.source_file:
            return f"{self.source_file}:{self.lineno}:{self.col}"
        return f"{self.lineno}:{self.col}"
