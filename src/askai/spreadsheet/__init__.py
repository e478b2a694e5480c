"""
Spreadsheet addressing used by range references.
"""

from askai.spreadsheet.model import Range

__all__ = [
    "Range",
]
