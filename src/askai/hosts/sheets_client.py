"""
Google Sheets access for ASK_AI references.

``SheetsClient`` wraps an authenticated gspread client with error wrapping
for the reads a reference needs.  ``SheetsReference`` points ASK_AI at a
range of a Google spreadsheet; its unit id is the spreadsheet id.
"""

import logging
from typing import Any, List

import gspread
from gspread.exceptions import APIError, WorksheetNotFound

from askai.exceptions import SheetsAPIError
from askai.spreadsheet.model import Range
from askai.values import ArrayValue, ReferenceValue

logger = logging.getLogger(__name__)


class SheetsClient:
    """
    A wrapper around gspread for the Google Sheets reads ASK_AI performs.

    Attributes:
        gc: The authenticated gspread client instance
    """

    def __init__(self, gc: gspread.Client) -> None:
        """
        Args:
            gc: An authenticated gspread client, e.g. from ``gspread.service_account()``
                or ``gspread.oauth()``.
        """
        self.gc = gc

    def open_spreadsheet(self, key: str) -> gspread.Spreadsheet:
        """
        Open a spreadsheet by its id.

        Raises:
            SheetsAPIError: If the API call fails
        """
        try:
            return self.gc.open_by_key(key)
        except APIError as e:
            raise SheetsAPIError(f"Failed to open spreadsheet '{key}': {e}") from e

    def worksheet(self, spreadsheet: gspread.Spreadsheet, name: str) -> gspread.Worksheet:
        """
        Look up a worksheet (tab) by title.

        Raises:
            SheetsAPIError: If the sheet does not exist or the API call fails
        """
        try:
            return spreadsheet.worksheet(name)
        except (APIError, WorksheetNotFound) as e:
            raise SheetsAPIError(f"Failed to open worksheet '{name}': {e}") from e

    def read_values(self, worksheet: gspread.Worksheet, range_name: str) -> List[List[Any]]:
        """
        Read the displayed values of a range.

        gspread omits trailing empty rows and cells, so the result can be
        smaller than the requested range.

        Raises:
            SheetsAPIError: If the API call fails
        """
        try:
            return [list(row) for row in worksheet.get(range_name)]
        except APIError as e:
            raise SheetsAPIError(
                f"Failed to read values from range '{range_name}': {e}"
            ) from e


class SheetsReference(ReferenceValue):
    """A range of a Google spreadsheet, read when ASK_AI materializes it.

    The materialized block is padded with empty cells back to the full
    range shape.
    """

    def __init__(
        self,
        client: SheetsClient,
        spreadsheet: gspread.Spreadsheet,
        sheet_name: str,
        range: Range,
    ) -> None:
        self.client = client
        self.spreadsheet = spreadsheet
        self.sheet_name = sheet_name
        self.range = range

    @classmethod
    def from_a1(
        cls, client: SheetsClient, spreadsheet: gspread.Spreadsheet, notation: str
    ) -> "SheetsReference":
        """Parse ``Sheet1!A1:B10`` (or ``'My sheet'!A1``) into a reference."""
        sheet_name, sep, cells = notation.rpartition("!")
        if not sep or not sheet_name:
            raise ValueError(f"Reference must name a sheet: {notation}")
        return cls(client, spreadsheet, sheet_name.strip("'"), Range.from_a1(cells))

    def get_unit_id(self) -> str:
        return self.spreadsheet.id

    def to_array_value(self) -> ArrayValue:
        ws = self.client.worksheet(self.spreadsheet, self.sheet_name)
        values = self.client.read_values(ws, self.range.to_a1())
        n_rows, n_cols = self.range.shape
        logger.debug(
            "Read %d row(s) from %s!%s", len(values), self.sheet_name, self.range.to_a1()
        )
        rows = []
        for r in range(n_rows):
            row = values[r] if r < len(values) else []
            rows.append([row[c] if c < len(row) else None for c in range(n_cols)])
        return ArrayValue(rows)

    def __repr__(self) -> str:
        return f"SheetsReference({self.sheet_name}!{self.range.to_a1()})"
