"""
formualizer host adapter.

Registers ASK_AI on an in-memory formualizer Workbook so formulas such as
``=ASK_AI(A1:B2, "Summarize")`` evaluate locally.  formualizer calls Python
functions with already-evaluated arguments (ranges arrive as nested lists,
scalars as plain values and errors as ``{"type": "Error", "kind": ...}``
dicts) and expects the same shapes back.  This module converts between
those shapes and ``askai.values`` and resolves the deferred handle at the
boundary, since formualizer callbacks are synchronous.

Because formualizer never passes reference objects, the workbook's unit id
is attached here: when ``unit_id`` is given, a non-error ``range`` argument
(array or single cell) is wrapped in a ``BoundReference`` before
``calculate`` sees it.
"""

from __future__ import annotations

import logging
import math
from typing import Any, Dict, List, Optional, Sequence, Union

import formualizer as fz
import pandas as pd

from askai.deferred import AsyncObject
from askai.functions.ask_ai import AskAI
from askai.functions.base import BaseFunction
from askai.spreadsheet.model import Range
from askai.values import (
    ArrayValue,
    BaseValue,
    BoundReference,
    ErrorType,
    ErrorValue,
    ReferenceValue,
    ScalarValue,
    to_value,
)

logger = logging.getLogger(__name__)

_ERROR_KINDS: Dict[ErrorType, str] = {
    ErrorType.NULL: "Null",
    ErrorType.DIV_BY_ZERO: "Div",
    ErrorType.VALUE: "Value",
    ErrorType.REF: "Ref",
    ErrorType.NAME: "Name",
    ErrorType.NUM: "Num",
    ErrorType.NA: "NA",
    ErrorType.SPILL: "Spill",
    ErrorType.CALC: "Calc",
    ErrorType.CONNECT: "Value",
}

_KIND_ALIASES: Dict[str, ErrorType] = {
    "null": ErrorType.NULL,
    "div": ErrorType.DIV_BY_ZERO,
    "div0": ErrorType.DIV_BY_ZERO,
    "value": ErrorType.VALUE,
    "ref": ErrorType.REF,
    "name": ErrorType.NAME,
    "num": ErrorType.NUM,
    "na": ErrorType.NA,
    "n/a": ErrorType.NA,
    "spill": ErrorType.SPILL,
    "calc": ErrorType.CALC,
}


def _is_error(value: Any) -> bool:
    return isinstance(value, dict) and value.get("type") == "Error"


def _error_from_engine(value: Dict[str, Any]) -> ErrorValue:
    kind = str(value.get("kind", "")).lower()
    return ErrorValue(_KIND_ALIASES.get(kind, ErrorType.VALUE))


def _cell_from_engine(value: Any) -> Any:
    if _is_error(value):
        return _error_from_engine(value)
    return value


def from_engine(arg: Any) -> BaseValue:
    """Convert a formualizer argument into a value variant."""
    if _is_error(arg):
        return _error_from_engine(arg)
    if isinstance(arg, list):
        array = ArrayValue.create_by_array(arg)
        return ArrayValue([[_cell_from_engine(v) for v in row] for row in array.rows])
    return ScalarValue(arg)


def to_engine(result: Any) -> Any:
    """Convert a function result into what formualizer spills into the sheet."""
    if isinstance(result, AsyncObject):
        result = result.resolve()
    if isinstance(result, ErrorValue):
        return {"type": "Error", "kind": _ERROR_KINDS[result.error_type]}
    if isinstance(result, ArrayValue):
        return result.to_list()
    if isinstance(result, BaseValue):
        return result.get_value()
    return result


def _bind(unit_id: str, value: BaseValue) -> BoundReference:
    # Single-cell references arrive as scalars; they belong to the workbook too.
    array = value if value.is_array() else ArrayValue([[value.get_value()]])
    return BoundReference(unit_id, array)


def register_function(
    wb: fz.Workbook, function: BaseFunction, unit_id: str = ""
) -> BaseFunction:
    """Register *function* on *wb* under its own name and arity.

    Must be called before formulas using it are set.
    """

    def _callback(*args: Any) -> Any:
        values: List[BaseValue] = [from_engine(a) for a in args]
        if unit_id and values and not values[0].is_error():
            values[0] = _bind(unit_id, values[0])
        return to_engine(function.calculate(*values))

    wb.register_function(
        function.name, _callback,
        min_args=function.min_params, max_args=function.max_params,
    )
    logger.debug("Registered %s on workbook (unit %r)", function.name, unit_id)
    return function


def register_ask_ai(
    wb: fz.Workbook, function: Optional[AskAI] = None, unit_id: str = ""
) -> AskAI:
    """Register ASK_AI on *wb*, creating an AskAI from the environment if needed."""
    return register_function(wb, function or AskAI(), unit_id=unit_id)


def to_literal(value: Any) -> fz.LiteralValue:
    """Convert a Python value to a formualizer LiteralValue."""
    if value is None:
        return fz.LiteralValue.empty()
    if isinstance(value, bool):
        return fz.LiteralValue.boolean(value)
    if isinstance(value, int):
        return fz.LiteralValue.number(float(value))
    if isinstance(value, float):
        if math.isnan(value):
            return fz.LiteralValue.empty()
        return fz.LiteralValue.number(value)
    return fz.LiteralValue.text(str(value))


def write_grid(
    wb: fz.Workbook,
    sheet: str,
    grid: Union[pd.DataFrame, Sequence[Sequence[Any]]],
    row: int = 0,
    col: int = 0,
) -> None:
    """Write a 2D block of values starting at 0-indexed (row, col).

    A DataFrame is written with its column labels as the first row.
    """
    target = wb.sheet(sheet)
    for ri, data_row in enumerate(to_value(grid).to_list()):
        for ci, value in enumerate(data_row):
            target.set_value(row + ri + 1, col + ci + 1, to_literal(value))


class WorkbookReference(ReferenceValue):
    """A range on a formualizer workbook sheet, read on demand.

    Attributes:
        wb: The workbook holding the cells
        sheet: Sheet name
        range: The referenced rectangle (0-indexed)
        unit_id: Identifier reported for the workbook
    """

    def __init__(self, wb: fz.Workbook, sheet: str, range: Range, unit_id: str) -> None:
        self.wb = wb
        self.sheet = sheet
        self.range = range
        self.unit_id = unit_id

    def get_unit_id(self) -> str:
        return self.unit_id

    def to_array_value(self) -> ArrayValue:
        rows = []
        for r in range(self.range.row, self.range.row_end + 1):
            rows.append([
                _cell_from_engine(self.wb.evaluate_cell(self.sheet, r + 1, c + 1))
                for c in range(self.range.col, self.range.col_end + 1)
            ])
        return ArrayValue(rows)

    def __repr__(self) -> str:
        return f"WorkbookReference({self.unit_id!r}, {self.sheet}!{self.range.to_a1()})"
