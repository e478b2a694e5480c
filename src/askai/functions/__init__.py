"""
Formula functions provided by askai.
"""

from askai.functions.base import BaseFunction, FunctionInfo, FunctionParameter, FunctionType
from askai.functions.ask_ai import (
    DEFAULT_PROMPT,
    FUNCTION_LIST_USER,
    FUNCTION_NAMES_USER,
    AskAI,
    describe_ask_ai,
    function_user,
)

__all__ = [
    "BaseFunction",
    "FunctionInfo",
    "FunctionParameter",
    "FunctionType",
    "AskAI",
    "DEFAULT_PROMPT",
    "FUNCTION_LIST_USER",
    "FUNCTION_NAMES_USER",
    "describe_ask_ai",
    "function_user",
]
