"""
askai - an ASK_AI spreadsheet function backed by an external analysis service.

``=ASK_AI(range, [prompt])`` sends the cells of *range* together with a
prompt to the service and spills the tabular answer back into the sheet.

Usage:
    >>> import formualizer as fz
    >>> from askai import AskAI, AsyncDispatcher, MockTransport
    >>> from askai.hosts import register_ask_ai
    >>> wb = fz.Workbook()
    >>> wb.add_sheet("Sheet1")
    >>> register_ask_ai(wb, AskAI(AsyncDispatcher(MockTransport(delay=0))))

Key components:
- values: scalar / array / error / reference argument model
- converters: range -> request, response -> 2D array
- dispatch: AsyncDispatcher and its transports
- functions: the AskAI custom function and its description
- hosts: formualizer and Google Sheets adapters
"""

from .config import Settings
from .converters import FALLBACK_MESSAGE, convert_from_response, convert_to_request
from .deferred import AsyncObject
from .dispatch import AsyncDispatcher, HttpTransport, MockTransport, get_transport
from .exceptions import *
from .functions import DEFAULT_PROMPT, FUNCTION_LIST_USER, FUNCTION_NAMES_USER, AskAI
from .protocol import (
    AskFormulaRequest,
    AskFormulaResponse,
    CellType,
    ErrorCode,
    ResponseError,
    Row,
    RowCell,
)
from .values import (
    ArrayValue,
    ErrorType,
    ErrorValue,
    GridReference,
    ScalarValue,
    resolve_argument,
    textual,
    to_value,
)

# Version
__version__ = "0.1.0"

__all__ = [
    'AskAI',
    'AsyncDispatcher',
    'AsyncObject',
    'HttpTransport',
    'MockTransport',
    'get_transport',
    'Settings',
    'convert_to_request',
    'convert_from_response',
    'FALLBACK_MESSAGE',
    'DEFAULT_PROMPT',
    'FUNCTION_LIST_USER',
    'FUNCTION_NAMES_USER',
    'AskFormulaRequest',
    'AskFormulaResponse',
    'CellType',
    'ErrorCode',
    'ResponseError',
    'Row',
    'RowCell',
    'ArrayValue',
    'ErrorType',
    'ErrorValue',
    'GridReference',
    'ScalarValue',
    'resolve_argument',
    'textual',
    'to_value',
    'TransportError',
    'MalformedPayloadError',
    'SheetsAPIError',
]
