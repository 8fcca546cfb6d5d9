"""
UI helper exports.
"""

from hellobooks_e2e.ui.actions import SOFT_FAILURES, PageActions, text_regex

__all__ = [
    "PageActions",
    "SOFT_FAILURES",
    "text_regex",
]
