"""
Unit tests for the formula value model and range addressing.

Tests cover:
- Range: A1 parsing/formatting, shape and cell iteration
- textual(): display text of every kind of cell value
- ArrayValue: construction, row-major iteration, first cell
- References: GridReference / BoundReference materialization
- resolve_argument / to_value normalization
"""

import pandas as pd
import pytest

from askai.spreadsheet.model import Range
from askai.values import (
    ArrayValue,
    BoundReference,
    ErrorType,
    ErrorValue,
    GridReference,
    ScalarValue,
    ValueKind,
    first_cell,
    resolve_argument,
    textual,
    to_value,
)


class TestRange:
    """Test Suite for Range class."""

    def test_single_cell(self):
        r = Range.from_a1("B3")
        assert (r.row, r.col, r.row_end, r.col_end) == (2, 1, 2, 1)
        assert r.to_a1() == "B3"

    def test_multi_cell(self):
        r = Range.from_a1("A1:C10")
        assert (r.row, r.col, r.row_end, r.col_end) == (0, 0, 9, 2)
        assert r.shape == (10, 3)
        assert r.to_a1() == "A1:C10"

    def test_absolute_markers_and_lowercase(self):
        assert Range.from_a1("$a$1:$b$2") == Range(0, 0, 1, 1)

    def test_double_letter_columns(self):
        assert Range.from_a1("AA1").col == 26
        assert Range(row=0, col=27).to_a1() == "AB1"

    @pytest.mark.parametrize("notation", ["", "A", "1A", "A1:B", "A1:B2:C3", "A0"])
    def test_invalid_notation(self, notation):
        with pytest.raises(ValueError):
            Range.from_a1(notation)

    def test_end_before_start(self):
        with pytest.raises(ValueError, match="End coordinates"):
            Range(row=5, col=0, row_end=2)

    def test_negative_start(self):
        with pytest.raises(ValueError, match="non-negative"):
            Range(row=-1, col=0)


class TestTextual:
    """Display text of raw cell values."""

    @pytest.mark.parametrize(
        "value, expected",
        [
            ("hello", "hello"),
            ("", ""),
            (None, ""),
            (0, "0"),
            (42, "42"),
            (3.0, "3"),
            (2.5, "2.5"),
            (-0.0, "0"),
            (1e16, "10000000000000000"),
            (1.5e20, "150000000000000000000"),
            (1e21, "1e+21"),
            (1.5e-5, "0.000015"),
            (1.5e-8, "1.5e-8"),
            (-0.25, "-0.25"),
            (float("inf"), "Infinity"),
            (float("nan"), ""),
            (True, "TRUE"),
            (False, "FALSE"),
            (pd.NA, ""),
            (pd.NaT, ""),
        ],
    )
    def test_raw_values(self, value, expected):
        assert textual(value) == expected

    def test_scalar_value_unwrapped(self):
        assert textual(ScalarValue(7)) == "7"

    def test_error_value_shows_code(self):
        assert textual(ErrorValue(ErrorType.NA)) == "#N/A"

    def test_array_value_uses_first_cell(self):
        assert textual(ArrayValue([["x", "y"]])) == "x"


class TestArrayValue:
    """Construction and traversal of 2D values."""

    def test_kind_flags(self):
        array = ArrayValue([[1]])
        assert array.kind is ValueKind.ARRAY
        assert array.is_array()
        assert not array.is_error()
        assert not array.is_reference_object()

    def test_iterator_row_major(self):
        array = ArrayValue([["A", "B"], ["C", "D"]])
        assert list(array.iterator()) == [
            ("A", 0, 0), ("B", 0, 1), ("C", 1, 0), ("D", 1, 1),
        ]

    def test_ragged_rows_are_not_padded(self):
        array = ArrayValue([["a"], ["b", "c", "d"], []])
        assert array.row_count == 3
        assert array.column_count == 3
        assert [len(row) for row in array.rows] == [1, 3, 0]

    def test_first_cell(self):
        assert ArrayValue([[], ["x"]]).get_first_cell() == "x"
        assert ArrayValue([]).get_first_cell() is None

    def test_create_by_array_shapes(self):
        assert ArrayValue.create_by_array([["a", "b"]]).rows == [["a", "b"]]
        assert ArrayValue.create_by_array(["a", "b"]).rows == [["a", "b"]]
        assert ArrayValue.create_by_array("a").rows == [["a"]]
        assert ArrayValue.create_by_array([]).rows == []

    def test_from_dataframe_with_header(self):
        df = pd.DataFrame({"name": ["Alice", "Bob"], "age": [30, None]})
        array = ArrayValue.from_dataframe(df)
        assert array.rows[0] == ["name", "age"]
        assert array.rows[1][0] == "Alice"
        assert array.rows[2][1] is None

    def test_from_dataframe_without_header(self):
        df = pd.DataFrame({"a": [1, 2]})
        assert ArrayValue.from_dataframe(df, header=False).rows == [[1], [2]]

    def test_to_list_is_a_copy(self):
        array = ArrayValue([["a"]])
        copy = array.to_list()
        copy[0][0] = "changed"
        assert array.rows == [["a"]]


class TestReferences:
    """Reference variants resolve lazily into arrays."""

    def test_grid_reference_reads_range(self, sales_grid):
        ref = GridReference.from_a1("book-1", sales_grid, "A2:B3")
        assert ref.is_reference_object()
        assert ref.get_unit_id() == "book-1"
        assert ref.to_array_value() == ArrayValue([["north", 120], ["south", 80]])

    def test_grid_reference_outside_grid_reads_empty(self):
        ref = GridReference.from_a1("book-1", [["a"]], "A1:B2")
        assert ref.to_array_value().rows == [["a", None], [None, None]]

    def test_bound_reference(self):
        array = ArrayValue([["x"]])
        ref = BoundReference("unit-9", array)
        assert ref.get_unit_id() == "unit-9"
        assert ref.to_array_value() is array
        assert ref.get_value() == "x"


class TestResolveArgument:
    """resolve_argument / to_value normalization."""

    def test_reference_is_materialized_with_unit(self, sales_grid):
        ref = GridReference.from_a1("book-1", sales_grid, "A1:A2")
        unit_id, value = resolve_argument(ref)
        assert unit_id == "book-1"
        assert value == ArrayValue([["region"], ["north"]])

    def test_scalar_passes_through_without_unit(self):
        scalar = ScalarValue("x")
        assert resolve_argument(scalar) == ("", scalar)

    def test_array_passes_through_without_unit(self):
        array = ArrayValue([["x"]])
        unit_id, value = resolve_argument(array)
        assert unit_id == ""
        assert value is array

    def test_to_value_variants(self):
        assert to_value([["a"]]) == ArrayValue([["a"]])
        assert to_value(5) == ScalarValue(5)
        err = ErrorValue(ErrorType.REF)
        assert to_value(err) is err
        assert to_value(pd.DataFrame({"c": [1]})) == ArrayValue([["c"], [1]])

    def test_first_cell_of_scalar_is_itself(self):
        scalar = ScalarValue("q")
        assert first_cell(scalar) is scalar
        assert first_cell(ArrayValue([["p", "q"]])) == "p"

    def test_error_equality(self):
        assert ErrorValue(ErrorType.NA) == ErrorValue.create(ErrorType.NA)
        assert ErrorValue(ErrorType.NA) != ErrorValue(ErrorType.REF)
