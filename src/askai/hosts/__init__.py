"""
Host adapters for ASK_AI.

``formualizer_host`` evaluates ASK_AI inside a local formualizer Workbook;
``sheets_client`` lets ASK_AI read its range from a Google spreadsheet via
gspread.
"""

from askai.hosts.formualizer_host import (
    WorkbookReference,
    register_ask_ai,
    register_function,
    write_grid,
)
from askai.hosts.sheets_client import SheetsClient, SheetsReference

__all__ = [
    "SheetsClient",
    "SheetsReference",
    "WorkbookReference",
    "register_ask_ai",
    "register_function",
    "write_grid",
]
