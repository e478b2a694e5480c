"""
Cell addressing for range references.

A ``Range`` names the rectangle a reference object points at. References
keep the range unresolved until the function asks them to materialize, at
which point the range drives which cells are read and in which order.
"""

import re
from typing import Optional, Tuple

_CELL_RE = re.compile(r"^([A-Z]+)(\d+)$")


class Range:
    """Represents a rectangular cell region in A1 notation.

    IMPORTANT: Range uses 0-indexed coordinates internally (Python convention),
    but converts to 1-indexed A1 notation for spreadsheet APIs via to_a1().

    Attributes:
        row: Starting row (0-indexed)
        col: Starting column (0-indexed)
        row_end: Ending row (0-indexed, inclusive)
        col_end: Ending column (0-indexed, inclusive)
    """

    def __init__(
        self,
        row: int,
        col: int,
        row_end: Optional[int] = None,
        col_end: Optional[int] = None
    ) -> None:
        """Initialize a Range with 0-indexed coordinates.

        Raises:
            ValueError: If coordinates are negative or the end precedes the start
        """
        if row < 0 or col < 0:
            raise ValueError("Row and column must be non-negative (0-indexed)")

        self.row = row
        self.col = col
        self.row_end = row_end if row_end is not None else row
        self.col_end = col_end if col_end is not None else col

        if self.row_end < self.row or self.col_end < self.col:
            raise ValueError("End coordinates must be >= start coordinates")

    @staticmethod
    def _col_to_letter(col: int) -> str:
        """Convert a 0-indexed column number to A1 letters (0 -> A, 26 -> AA)."""
        col_1indexed = col + 1
        result = ""
        while col_1indexed > 0:
            col_1indexed -= 1
            result = chr(65 + (col_1indexed % 26)) + result
            col_1indexed //= 26
        return result

    @staticmethod
    def _letter_to_col(letters: str) -> int:
        """Convert A1 column letters to a 0-indexed column number (A -> 0)."""
        col_1indexed = 0
        for char in letters.upper():
            col_1indexed = col_1indexed * 26 + (ord(char) - 64)
        return col_1indexed - 1

    @classmethod
    def _parse_cell(cls, cell: str, notation: str) -> Tuple[int, int]:
        match = _CELL_RE.match(cell.strip().replace("$", "").upper())
        if not match:
            raise ValueError(f"Invalid range notation: {notation}")
        letters, row_str = match.groups()
        if int(row_str) < 1:
            raise ValueError(f"Invalid range notation: {notation}")
        return int(row_str) - 1, cls._letter_to_col(letters)

    @classmethod
    def from_a1(cls, notation: str) -> "Range":
        """Parse ``A1`` or ``A1:B10`` (absolute markers allowed) into a Range.

        Raises:
            ValueError: If notation is invalid
        """
        notation = notation.strip()
        if not notation:
            raise ValueError("Empty range notation")

        parts = notation.split(":")
        if len(parts) > 2:
            raise ValueError(f"Invalid range notation: {notation}")

        row, col = cls._parse_cell(parts[0], notation)
        if len(parts) == 1:
            return cls(row=row, col=col)
        row_end, col_end = cls._parse_cell(parts[1], notation)
        return cls(row=row, col=col, row_end=row_end, col_end=col_end)

    def to_a1(self) -> str:
        """Convert Range to A1 notation string (1-indexed for spreadsheet APIs)."""
        start_cell = f"{self._col_to_letter(self.col)}{self.row + 1}"
        if self.row == self.row_end and self.col == self.col_end:
            return start_cell
        end_cell = f"{self._col_to_letter(self.col_end)}{self.row_end + 1}"
        return f"{start_cell}:{end_cell}"

    @property
    def shape(self) -> Tuple[int, int]:
        """(rows, cols) covered by the range."""
        return self.row_end - self.row + 1, self.col_end - self.col + 1

    def __repr__(self) -> str:
        return f"Range({self.to_a1()!r})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Range):
            return NotImplemented
        return (
            self.row == other.row
            and self.col == other.col
            and self.row_end == other.row_end
            and self.col_end == other.col_end
        )
