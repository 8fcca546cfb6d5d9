"""
Browser automation module exports.
"""

from hellobooks_e2e.browser.driver import PlaywrightDriver

__all__ = [
    "PlaywrightDriver",
]
