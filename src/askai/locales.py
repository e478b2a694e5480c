"""
Display strings for the function list.

Function metadata refers to its texts by dotted keys
(``formula.functionList.ASK_AI.description``); the tables below map those
keys to text per locale.  They are only read when presenting a function to
a user, never while evaluating it.
"""

from typing import Any, Dict, Optional

DEFAULT_LOCALE = "en-US"

function_en_us: Dict[str, Any] = {
    "formula": {
        "functionList": {
            "ASK_AI": {
                "description": "Ask AI for data analysis.",
                "abstract": "Ask AI for data analysis",
                "links": [
                    {"title": "Instruction", "url": "https://univer.ai"},
                ],
                "functionParameter": {
                    "range": {
                        "name": "range",
                        "detail": "The data range to be analyzed.",
                    },
                    "prompt": {
                        "name": "prompt",
                        "detail": "Enter what you want to ask the AI.",
                    },
                },
            },
        },
    },
}

function_zh_cn: Dict[str, Any] = {
    "formula": {
        "functionList": {
            "ASK_AI": {
                "description": "咨询AI做数据分析。",
                "abstract": "咨询AI做数据分析",
                "links": [
                    {"title": "Instruction", "url": "https://univer.ai"},
                ],
                "functionParameter": {
                    "range": {
                        "name": "范围",
                        "detail": "需要分析的数据范围。",
                    },
                    "prompt": {
                        "name": "提示词",
                        "detail": "输入你要咨询AI的内容。",
                    },
                },
            },
        },
    },
}

LOCALES: Dict[str, Dict[str, Any]] = {
    "en-US": function_en_us,
    "zh-CN": function_zh_cn,
}


def _lookup(table: Dict[str, Any], key: str) -> Optional[Any]:
    node: Any = table
    for part in key.split("."):
        if not isinstance(node, dict) or part not in node:
            return None
        node = node[part]
    return node


def translate(key: str, locale: str = DEFAULT_LOCALE) -> Any:
    """Resolve *key* in *locale*, then in en-US; unknown keys return the key itself."""
    for table in (LOCALES.get(locale, {}), LOCALES[DEFAULT_LOCALE]):
        value = _lookup(table, key)
        if value is not None:
            return value
    return key
