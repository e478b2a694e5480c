"""
Conversions between formula values and service records.

``convert_to_request`` flattens the range argument into rows of text cells;
``convert_from_response`` turns the service's answer back into the 2D array
the engine spills into the sheet.
"""

from __future__ import annotations

import json
import logging
from typing import List, Optional

from askai.exceptions import MalformedPayloadError
from askai.protocol import AskFormulaRequest, AskFormulaResponse, CellType, Row, RowCell
from askai.values import BaseValue, first_cell, textual

logger = logging.getLogger(__name__)

FALLBACK_MESSAGE = "Please try again"


def _text_cell(text: str) -> RowCell:
    return RowCell(type=CellType.TEXT, text=text, url="")


def convert_to_request(range: BaseValue, unit_id: str, prompt: BaseValue) -> AskFormulaRequest:
    """Build the service request for one evaluation.

    An array range is walked in row-major order.  Cells are buffered until
    the row index changes, then the buffer is emitted as a Row, so rows come
    out in first-seen order and an empty buffer is never emitted.  A scalar
    range becomes a single one-cell row.  This never fails: anything that
    cannot be rendered becomes empty text.
    """
    prompt_text = textual(first_cell(prompt))

    if not range.is_array():
        return AskFormulaRequest(
            unit_id=unit_id,
            rows=[Row(cells=[_text_cell(textual(range))])],
            prompt=prompt_text,
        )

    rows: List[Row] = []
    current: List[RowCell] = []
    # None rather than -1 so negative row indices still start a new row.
    last_row_index: Optional[int] = None

    for value, row_index, _ in range.iterator():
        if row_index != last_row_index:
            if current:
                rows.append(Row(cells=current))
            current = []
            last_row_index = row_index
        current.append(_text_cell(textual(value)))

    if current:
        rows.append(Row(cells=current))

    logger.debug("Built request for unit %r with %d row(s)", unit_id, len(rows))
    return AskFormulaRequest(unit_id=unit_id, rows=rows, prompt=prompt_text)


def convert_from_response(response: AskFormulaResponse) -> List[List[str]]:
    """Turn a service response into the grid shown in the sheet.

    Service-reported errors and empty content both degrade to
    ``[[FALLBACK_MESSAGE]]``.  Content that is not valid JSON, or that
    decodes to something other than a list, raises ``MalformedPayloadError``;
    the decoded grid is otherwise returned without shape checks or padding.
    """
    error, content = response.error, response.content

    if error is not None and not error.ok:
        logger.warning("Service returned error %s: %s", error.code, error.message)
        return [[FALLBACK_MESSAGE]]

    if content:
        try:
            grid = json.loads(content)
        except json.JSONDecodeError as e:
            raise MalformedPayloadError(f"Response content is not valid JSON: {e}") from e
        if not isinstance(grid, list):
            raise MalformedPayloadError(
                f"Response content must be a JSON array, got {type(grid).__name__}"
            )
        return grid

    logger.warning("Service returned no content")
    return [[FALLBACK_MESSAGE]]
