"""
ASK_AI(range, [prompt]): ask the analysis service about a block of cells.

The result spills into the sheet as a 2D array of text.  Because the
answer comes from a remote call, ``calculate`` returns an ``AsyncObject``
immediately and the engine re-renders the cell when it resolves.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional, Union

from askai.config import Settings
from askai.converters import convert_from_response, convert_to_request
from askai.deferred import AsyncObject
from askai.dispatch import AsyncDispatcher, get_transport
from askai.functions.base import BaseFunction, FunctionInfo, FunctionParameter, FunctionType
from askai.values import ArrayValue, BaseValue, ErrorValue, ScalarValue, resolve_argument

logger = logging.getLogger(__name__)

DEFAULT_PROMPT = "Analyze the data"


class FUNCTION_NAMES_USER:
    ASK_AI = "ASK_AI"


_KEY = "formula.functionList.ASK_AI"

FUNCTION_LIST_USER = [
    FunctionInfo(
        function_name=FUNCTION_NAMES_USER.ASK_AI,
        function_type=FunctionType.USER,
        description=f"{_KEY}.description",
        abstract=f"{_KEY}.abstract",
        function_parameter=[
            FunctionParameter(
                name=f"{_KEY}.functionParameter.range.name",
                detail=f"{_KEY}.functionParameter.range.detail",
                example="A1:B10",
                require=1,
                repeat=0,
            ),
            FunctionParameter(
                name=f"{_KEY}.functionParameter.prompt.name",
                detail=f"{_KEY}.functionParameter.prompt.detail",
                example="A1:B10",
                require=0,
                repeat=0,
            ),
        ],
    ),
]


def describe_ask_ai(locale: Optional[str] = None) -> Dict[str, Any]:
    """Display metadata for ASK_AI in *locale* (defaults to ASK_AI_LOCALE)."""
    return FUNCTION_LIST_USER[0].describe(locale or Settings.from_env().locale)


class AskAI(BaseFunction):
    """Send a range and a prompt to the analysis service, spill its answer."""

    min_params = 1
    max_params = 2
    needs_reference_object = True

    def __init__(self, dispatcher: Optional[AsyncDispatcher] = None) -> None:
        super().__init__(FUNCTION_NAMES_USER.ASK_AI)
        self.dispatcher = dispatcher or AsyncDispatcher(get_transport())

    def is_async(self) -> bool:
        return True

    def calculate(
        self, range: BaseValue, prompt: Optional[BaseValue] = None
    ) -> Union[ErrorValue, AsyncObject]:
        """Validate the arguments and return a deferred handle.

        Error arguments are returned unchanged before anything is sent.
        """
        if range.is_error():
            return range

        unit_id, range_value = resolve_argument(range)

        prompt_value = prompt if prompt is not None else ScalarValue(DEFAULT_PROMPT)
        if prompt_value.is_error():
            return prompt_value
        _, prompt_value = resolve_argument(prompt_value)

        return AsyncObject(self._evaluate(range_value, unit_id, prompt_value))

    async def _evaluate(self, range: BaseValue, unit_id: str, prompt: BaseValue) -> ArrayValue:
        request = convert_to_request(range, unit_id, prompt)
        response = await self.dispatcher.dispatch(request)
        result = ArrayValue.create_by_array(convert_from_response(response))
        logger.debug("ASK_AI for unit %r produced %d row(s)", unit_id, result.row_count)
        return result


function_user = [
    (AskAI, FUNCTION_NAMES_USER.ASK_AI),
]
