"""
Wire records exchanged with the analysis service.

Request JSON::

    {"unitId": "...", "prompt": "...",
     "rows": [{"cells": [{"type": 1, "text": "A", "url": ""}, ...]}, ...]}

Response JSON::

    {"error": {"code": 0, "message": ""} | null, "content": "[[\"Data\"]]"}

``content`` is itself a JSON-encoded 2D array of strings.  The records are
plain dataclasses with ``to_dict``/``from_dict`` so they can be logged,
compared in tests and serialized without a schema library.
"""

import json
from dataclasses import dataclass, field
from enum import IntEnum
from typing import Any, Dict, List, Optional


class CellType(IntEnum):
    UNDEFINED = 0
    TEXT = 1
    URL = 2
    IMAGE = 3
    UNRECOGNIZED = -1

    @classmethod
    def parse(cls, raw: Any) -> "CellType":
        """Decode a wire value; unknown codes become UNRECOGNIZED."""
        try:
            return cls(int(raw))
        except (TypeError, ValueError):
            return cls.UNRECOGNIZED


class ErrorCode(IntEnum):
    """Service status codes. ``OK`` is the only success sentinel."""

    OK = 0
    UNKNOWN_ERROR = 1
    INVALID_ARGUMENT = 3
    DEADLINE_EXCEEDED = 4
    NOT_FOUND = 5
    PERMISSION_DENIED = 7
    RESOURCE_EXHAUSTED = 8
    INTERNAL = 13
    UNAVAILABLE = 14
    UNAUTHENTICATED = 16


@dataclass
class RowCell:
    """A single cell sent to the service.

    Attributes:
        type: What ``text``/``url`` hold; the range converter always sends TEXT
        text: The cell's display text ("" for empty cells)
        url: Link or image location, empty for text cells
    """
    type: CellType = CellType.TEXT
    text: str = ""
    url: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return {"type": int(self.type), "text": self.text, "url": self.url}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "RowCell":
        return cls(
            type=CellType.parse(data.get("type", CellType.UNDEFINED)),
            text=data.get("text") or "",
            url=data.get("url") or "",
        )


@dataclass
class Row:
    cells: List[RowCell] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {"cells": [cell.to_dict() for cell in self.cells]}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Row":
        return cls(cells=[RowCell.from_dict(c) for c in data.get("cells", [])])


@dataclass
class AskFormulaRequest:
    """What one ASK_AI evaluation sends to the service.

    Attributes:
        unit_id: Workbook the range came from ("" when the argument was not a reference)
        rows: Non-empty rows in first-seen order
        prompt: The question asked about the rows
    """
    unit_id: str
    rows: List[Row] = field(default_factory=list)
    prompt: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return {
            "unitId": self.unit_id,
            "prompt": self.prompt,
            "rows": [row.to_dict() for row in self.rows],
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "AskFormulaRequest":
        return cls(
            unit_id=data.get("unitId") or "",
            rows=[Row.from_dict(r) for r in data.get("rows", [])],
            prompt=data.get("prompt") or "",
        )

    def to_json(self, **kwargs) -> str:
        return json.dumps(self.to_dict(), **kwargs)


@dataclass
class ResponseError:
    code: int = ErrorCode.OK
    message: str = ""

    @property
    def ok(self) -> bool:
        return self.code == ErrorCode.OK

    def to_dict(self) -> Dict[str, Any]:
        return {"code": int(self.code), "message": self.message}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ResponseError":
        return cls(code=int(data.get("code", ErrorCode.OK)), message=data.get("message") or "")


@dataclass
class AskFormulaResponse:
    """The service's answer.

    Attributes:
        error: Status of the call; ``None`` means success
        content: JSON-encoded 2D array of strings, or "" when there is nothing to show
    """
    error: Optional[ResponseError] = None
    content: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return {
            "error": self.error.to_dict() if self.error is not None else None,
            "content": self.content,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "AskFormulaResponse":
        if not isinstance(data, dict):
            raise TypeError(f"Expected dict, got {type(data)}")
        error = data.get("error")
        content = data.get("content")
        if content is not None and not isinstance(content, str):
            raise TypeError(f"Expected str content, got {type(content)}")
        return cls(
            error=ResponseError.from_dict(error) if error is not None else None,
            content=content or "",
        )
