"""Source position tracking.

Lines and columns are 1-based. A newline moves to the next line and resets
the column to 1; every other character advances the column by one.
"""

from dataclasses import dataclass


def location_from_index(source: str, index: int) -> tuple[int, int]:
    """Convert a character offset into a (line, column) pair.

    Args:
        source: Full source text.
        index: Character offset; offsets past the end map to the position
            just after the last character.

    Returns:
        Tuple of (line, column).
    """
    cursor = Cursor()
    for ch in source[:index]:
        cursor.advance(ch)
    return cursor.line, cursor.column


@dataclass
class Cursor:
    """Running (line, column) position kept in step with character consumption."""
    line: int = 1
    column: int = 1

    def advance(self, ch: str) -> None:
        if ch == "\n":
            self.line += 1
            self.column = 1
        else:
            self.column += 1

    def snapshot(self) -> tuple[int, int]:
        return self.line, self.column
