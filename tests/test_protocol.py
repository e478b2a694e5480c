"""
Unit tests for the service wire records.

Tests cover:
- Request JSON shape (unitId / prompt / rows / cells)
- CellType decoding, including unknown codes
- Response decoding with and without an error object
"""

import json

import pytest

from askai.protocol import (
    AskFormulaRequest,
    AskFormulaResponse,
    CellType,
    ErrorCode,
    ResponseError,
    Row,
    RowCell,
)


class TestRequest:
    """AskFormulaRequest serialization."""

    def test_to_dict_shape(self):
        request = AskFormulaRequest(
            unit_id="book-1",
            rows=[Row(cells=[RowCell(text="A"), RowCell(text="B")])],
            prompt="Summarize",
        )
        assert request.to_dict() == {
            "unitId": "book-1",
            "prompt": "Summarize",
            "rows": [
                {"cells": [
                    {"type": 1, "text": "A", "url": ""},
                    {"type": 1, "text": "B", "url": ""},
                ]},
            ],
        }

    def test_to_json_is_parseable(self):
        request = AskFormulaRequest(unit_id="", rows=[Row(cells=[RowCell(text="x")])])
        data = json.loads(request.to_json())
        assert data["rows"][0]["cells"][0]["text"] == "x"

    def test_from_dict_restores_request(self):
        data = {
            "unitId": "u",
            "prompt": "p",
            "rows": [{"cells": [{"type": 2, "text": "site", "url": "https://example.com"}]}],
        }
        request = AskFormulaRequest.from_dict(data)
        assert request.unit_id == "u"
        assert request.prompt == "p"
        cell = request.rows[0].cells[0]
        assert cell == RowCell(type=CellType.URL, text="site", url="https://example.com")


class TestCellType:
    """CellType values survive the wire."""

    @pytest.mark.parametrize("cell_type", list(CellType))
    def test_every_variant_round_trips(self, cell_type):
        cell = RowCell(type=cell_type, text="t", url="")
        assert RowCell.from_dict(cell.to_dict()).type is cell_type

    def test_wire_values(self):
        assert [int(t) for t in CellType] == [0, 1, 2, 3, -1]

    @pytest.mark.parametrize("raw", [42, "image", None])
    def test_unknown_code_is_unrecognized(self, raw):
        assert CellType.parse(raw) is CellType.UNRECOGNIZED

    def test_missing_fields_default(self):
        cell = RowCell.from_dict({})
        assert cell == RowCell(type=CellType.UNDEFINED, text="", url="")


class TestResponse:
    """AskFormulaResponse decoding."""

    def test_ok_response(self):
        response = AskFormulaResponse.from_dict(
            {"error": {"code": 0, "message": ""}, "content": '[["a"]]'}
        )
        assert response.error.ok
        assert response.content == '[["a"]]'

    def test_null_error(self):
        response = AskFormulaResponse.from_dict({"error": None, "content": "x"})
        assert response.error is None

    def test_missing_content_is_empty(self):
        response = AskFormulaResponse.from_dict({"error": {"code": 14, "message": "down"}})
        assert response.content == ""
        assert response.error.code == ErrorCode.UNAVAILABLE
        assert not response.error.ok

    def test_unknown_error_code_is_kept(self):
        response = AskFormulaResponse.from_dict({"error": {"code": 999}})
        assert response.error.code == 999
        assert not response.error.ok

    def test_to_dict(self):
        response = AskFormulaResponse(error=ResponseError(code=ErrorCode.INTERNAL, message="boom"))
        assert response.to_dict() == {"error": {"code": 13, "message": "boom"}, "content": ""}
        assert AskFormulaResponse().to_dict() == {"error": None, "content": ""}

    def test_from_dict_rejects_non_dict(self):
        with pytest.raises(TypeError, match="Expected dict"):
            AskFormulaResponse.from_dict(["not", "a", "dict"])

    @pytest.mark.parametrize("content", [5, ["a"], {"k": "v"}])
    def test_from_dict_rejects_non_string_content(self, content):
        with pytest.raises(TypeError, match="Expected str content"):
            AskFormulaResponse.from_dict({"error": None, "content": content})
