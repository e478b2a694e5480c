"""
Custom function contract.

A host engine needs three things from a custom function: how many
arguments it takes, whether it wants unresolved references instead of
resolved values, and whether ``calculate`` returns a deferred handle the
scheduler must not block on.  ``BaseFunction`` declares those; host
adapters (see ``askai.hosts``) read them when registering.

``FunctionInfo`` is the descriptive side used by function pickers and help
panels.  Its strings are locale keys resolved through ``askai.locales``.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional

from askai.locales import DEFAULT_LOCALE, translate
from askai.values import BaseValue


class FunctionType(Enum):
    USER = "user"


@dataclass
class FunctionParameter:
    """One positional parameter.

    Attributes:
        name: Locale key of the parameter name
        detail: Locale key of the parameter help text
        example: Example argument shown to the user (e.g. "A1:B10")
        require: 1 if the parameter must be supplied, 0 if optional
        repeat: 1 if the parameter may repeat, 0 otherwise
    """
    name: str
    detail: str
    example: str
    require: int = 1
    repeat: int = 0


@dataclass
class FunctionInfo:
    function_name: str
    description: str
    abstract: str
    function_type: FunctionType = FunctionType.USER
    function_parameter: List[FunctionParameter] = field(default_factory=list)

    def describe(self, locale: str = DEFAULT_LOCALE) -> Dict[str, Any]:
        """Resolve every locale key for display."""
        return {
            "functionName": self.function_name,
            "description": translate(self.description, locale),
            "abstract": translate(self.abstract, locale),
            "functionParameter": [
                {
                    "name": translate(p.name, locale),
                    "detail": translate(p.detail, locale),
                    "example": p.example,
                    "require": p.require,
                    "repeat": p.repeat,
                }
                for p in self.function_parameter
            ],
        }


class BaseFunction:
    """Base class for functions callable from formulas."""

    min_params: int = 0
    max_params: int = 255
    needs_reference_object: bool = False

    def __init__(self, name: Optional[str] = None) -> None:
        self.name = name or type(self).__name__.upper()

    def is_async(self) -> bool:
        return False

    def calculate(self, *args: BaseValue) -> Any:
        raise NotImplementedError
