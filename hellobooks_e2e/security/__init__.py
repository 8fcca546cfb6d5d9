"""
Security module exports.
"""

from hellobooks_e2e.security.sanitizer import (
    DataSanitizer,
    RedactionMethod,
    SensitiveDataPattern,
    get_default_sanitizer,
    sanitize_dict,
    sanitize_string,
)

__all__ = [
    "DataSanitizer",
    "RedactionMethod",
    "SensitiveDataPattern",
    "get_default_sanitizer",
    "sanitize_dict",
    "sanitize_string",
]
