"""
Value model for formula arguments and results.

The formula engine hands a custom function one of four kinds of value:

- ScalarValue: a single resolved cell value (text, number, boolean, empty)
- ArrayValue: a resolved 2D block of cell values
- ErrorValue: an error produced upstream (``#REF!``, ``#N/A`` ...)
- ReferenceValue: an unresolved cell/range address bound to a workbook unit

Each value carries an explicit ``kind`` discriminator.  Business logic asks
``resolve_argument`` to turn a reference into ``(unit_id, ArrayValue)`` once,
instead of probing capabilities throughout the conversion code.
"""

from __future__ import annotations

import math
from decimal import Decimal
from enum import Enum
from typing import Any, Iterator, List, Optional, Sequence, Tuple

import pandas as pd

from askai.spreadsheet.model import Range


def _is_missing(value: Any) -> bool:
    return pd.api.types.is_scalar(value) and bool(pd.isna(value))


class ValueKind(Enum):
    SCALAR = "scalar"
    ARRAY = "array"
    REFERENCE = "reference"
    ERROR = "error"


class ErrorType(Enum):
    """Formula error codes, valued by their display text."""

    NULL = "#NULL!"
    DIV_BY_ZERO = "#DIV/0!"
    VALUE = "#VALUE!"
    REF = "#REF!"
    NAME = "#NAME?"
    NUM = "#NUM!"
    NA = "#N/A"
    SPILL = "#SPILL!"
    CALC = "#CALC!"
    CONNECT = "#GETTING_DATA"


class BaseValue:
    """Common interface of every formula value."""

    kind: ValueKind

    def is_error(self) -> bool:
        return self.kind is ValueKind.ERROR

    def is_array(self) -> bool:
        return self.kind is ValueKind.ARRAY

    def is_reference_object(self) -> bool:
        return self.kind is ValueKind.REFERENCE

    def get_value(self) -> Any:
        raise NotImplementedError


class ScalarValue(BaseValue):
    """A single resolved cell value.

    Attributes:
        value: The Python value (str, int, float, bool or None for empty)
    """

    kind = ValueKind.SCALAR

    def __init__(self, value: Any) -> None:
        self.value = value

    def get_value(self) -> Any:
        return self.value

    def __repr__(self) -> str:
        return f"ScalarValue({self.value!r})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ScalarValue):
            return NotImplemented
        return self.value == other.value


class ErrorValue(BaseValue):
    """An error value produced by the engine, propagated unchanged."""

    kind = ValueKind.ERROR

    def __init__(self, error_type: ErrorType) -> None:
        self.error_type = error_type

    @classmethod
    def create(cls, error_type: ErrorType) -> "ErrorValue":
        return cls(error_type)

    def get_value(self) -> str:
        return self.error_type.value

    def __repr__(self) -> str:
        return f"ErrorValue({self.error_type.value!r})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ErrorValue):
            return NotImplemented
        return self.error_type is other.error_type


class ArrayValue(BaseValue):
    """A resolved 2D block of cell values.

    Rows may have different lengths; nothing is padded.  Empty cells are
    stored as ``None``.

    Attributes:
        rows: List of rows, each a list of raw cell values
    """

    kind = ValueKind.ARRAY

    def __init__(self, rows: Sequence[Sequence[Any]]) -> None:
        self.rows: List[List[Any]] = [list(row) for row in rows]

    @classmethod
    def create_by_array(cls, array: Any) -> "ArrayValue":
        """Build an ArrayValue from a 2D list, a flat list (one row) or a scalar."""
        if not isinstance(array, (list, tuple)):
            return cls([[array]])
        if array and not isinstance(array[0], (list, tuple)):
            return cls([list(array)])
        return cls(array)

    @classmethod
    def from_dataframe(cls, df: pd.DataFrame, header: bool = True) -> "ArrayValue":
        """Materialize a pandas DataFrame, optionally with its column labels as the first row."""
        rows: List[List[Any]] = [
            [None if _is_missing(v) else v for v in row]
            for row in df.astype(object).values.tolist()
        ]
        if header:
            rows.insert(0, [str(c) for c in df.columns])
        return cls(rows)

    def iterator(self) -> Iterator[Tuple[Any, int, int]]:
        """Yield ``(value, row_index, col_index)`` in row-major order."""
        for r, row in enumerate(self.rows):
            for c, value in enumerate(row):
                yield value, r, c

    def get_first_cell(self) -> Any:
        for value, _, _ in self.iterator():
            return value
        return None

    def get_value(self) -> Any:
        return self.get_first_cell()

    @property
    def row_count(self) -> int:
        return len(self.rows)

    @property
    def column_count(self) -> int:
        return max((len(row) for row in self.rows), default=0)

    def to_list(self) -> List[List[Any]]:
        return [list(row) for row in self.rows]

    def __repr__(self) -> str:
        return f"ArrayValue({self.rows!r})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ArrayValue):
            return NotImplemented
        return self.rows == other.rows


class ReferenceValue(BaseValue):
    """An unresolved cell/range address bound to a workbook unit.

    Subclasses know how to read their cells; nothing is read until
    ``to_array_value`` is called.
    """

    kind = ValueKind.REFERENCE

    def get_unit_id(self) -> str:
        raise NotImplementedError

    def to_array_value(self) -> ArrayValue:
        raise NotImplementedError

    def get_value(self) -> Any:
        return self.to_array_value().get_first_cell()


class BoundReference(ReferenceValue):
    """A block the engine already materialized, tagged with its owning unit."""

    def __init__(self, unit_id: str, array: ArrayValue) -> None:
        self.unit_id = unit_id
        self.array = array

    def get_unit_id(self) -> str:
        return self.unit_id

    def to_array_value(self) -> ArrayValue:
        return self.array

    def __repr__(self) -> str:
        return f"BoundReference({self.unit_id!r}, {self.array!r})"


class GridReference(ReferenceValue):
    """A Range over an in-memory grid of cell values.

    Cells that fall outside the grid read as empty.

    Attributes:
        unit_id: Identifier of the workbook the grid belongs to
        grid: Full sheet contents as a 2D list (0-indexed)
        range: The referenced rectangle
    """

    def __init__(self, unit_id: str, grid: Sequence[Sequence[Any]], range: Range) -> None:
        self.unit_id = unit_id
        self.grid = grid
        self.range = range

    @classmethod
    def from_a1(cls, unit_id: str, grid: Sequence[Sequence[Any]], notation: str) -> "GridReference":
        return cls(unit_id, grid, Range.from_a1(notation))

    def get_unit_id(self) -> str:
        return self.unit_id

    def _cell(self, row: int, col: int) -> Any:
        if row < len(self.grid) and col < len(self.grid[row]):
            return self.grid[row][col]
        return None

    def to_array_value(self) -> ArrayValue:
        rows = [
            [self._cell(r, c) for c in range(self.range.col, self.range.col_end + 1)]
            for r in range(self.range.row, self.range.row_end + 1)
        ]
        return ArrayValue(rows)

    def __repr__(self) -> str:
        return f"GridReference({self.unit_id!r}, {self.range.to_a1()!r})"


def to_value(obj: Any) -> BaseValue:
    """Wrap a raw Python object in the matching value variant."""
    if isinstance(obj, BaseValue):
        return obj
    if isinstance(obj, pd.DataFrame):
        return ArrayValue.from_dataframe(obj)
    if isinstance(obj, (list, tuple)):
        return ArrayValue.create_by_array(obj)
    return ScalarValue(obj)


def resolve_argument(value: BaseValue) -> Tuple[str, BaseValue]:
    """Normalize an argument into ``(unit_id, value)``.

    References are materialized into an ArrayValue and report their owning
    unit.  Every other variant is returned as-is with an empty unit id;
    callers check ``is_error()`` before resolving.
    """
    if value.is_reference_object():
        return value.get_unit_id(), value.to_array_value()
    return "", value


def _number_text(value: float) -> str:
    # Positional between 1e-6 and 1e21, shortest exponent form outside it.
    if math.isinf(value):
        return "Infinity" if value > 0 else "-Infinity"
    if value == 0:
        return "0"
    if 1e-6 <= abs(value) < 1e21:
        if value.is_integer():
            return str(int(value))
        return format(Decimal(repr(value)), "f")
    return repr(value).replace("e-0", "e-").replace("e+0", "e+")


def textual(value: Any) -> str:
    """Render a cell value the way the spreadsheet displays it.

    Missing values (``None``, NaN, ``pd.NA``) become ``""``; booleans become
    ``TRUE``/``FALSE``; integral floats drop their trailing ``.0``.  Numbers
    from 1e-6 up to 1e21 are written out in full (``1.5e20`` renders as
    ``150000000000000000000``, ``1.5e-5`` as ``0.000015``); beyond that they
    use a short exponent such as ``1e+21``.
    """
    if isinstance(value, ErrorValue):
        return value.get_value()
    if isinstance(value, BaseValue):
        return textual(value.get_value())
    if isinstance(value, bool):
        return "TRUE" if value else "FALSE"
    if isinstance(value, float):
        if math.isnan(value):
            return ""
        return _number_text(value)
    if _is_missing(value):
        return ""
    return str(value)


def first_cell(value: BaseValue) -> Optional[Any]:
    """The first cell of an array, or the value itself for scalars."""
    if value.is_array():
        return value.get_first_cell()
    return value
