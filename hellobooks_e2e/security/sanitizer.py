"""
Redaction of credentials and personal data.

Log lines, annotations and run reports all pass through here before they
leave the process, so the seed account's password never ends up in a CI
artifact.
"""

import hashlib
import logging
import re
from copy import deepcopy
from dataclasses import dataclass
from enum import Enum, auto
from typing import Any, Dict, Iterable, List, Optional, Pattern

logger = logging.getLogger(__name__)


class RedactionMethod(Enum):
    """Methods for redacting sensitive data."""
    MASK = auto()          # Replace with asterisks
    HASH = auto()          # Replace with hash
    PARTIAL = auto()       # Show partial (first/last few chars)
    PLACEHOLDER = auto()   # Replace with placeholder text


@dataclass
class SensitiveDataPattern:
    """Pattern for identifying sensitive data."""

    name: str
    pattern: Pattern[str]
    redaction_method: RedactionMethod = RedactionMethod.PLACEHOLDER
    placeholder: str = "[REDACTED]"
    partial_chars: int = 3
    enabled: bool = True

    def matches(self, text: str) -> List[re.Match]:
        """Find all matches in text."""
        if not self.enabled:
            return []
        return list(self.pattern.finditer(text))


SENSITIVE_KEYS = ("password", "passwd", "token", "secret", "authorization", "cookie")


class DataSanitizer:
    """Main sanitizer for protecting sensitive data."""

    def __init__(self, secrets: Optional[Iterable[str]] = None):
        self.patterns: List[SensitiveDataPattern] = []
        self._setup_default_patterns()
        for secret in secrets or ():
            self.add_secret(secret)

    def _setup_default_patterns(self) -> None:
        self.patterns.extend([
            SensitiveDataPattern(
                name="password_field",
                pattern=re.compile(
                    r'(password|passwd|pwd)(\s*[:=]\s*)["\']?([^"\'\s,}]+)["\']?',
                    re.IGNORECASE,
                ),
                placeholder="[PASSWORD]",
            ),
            SensitiveDataPattern(
                name="bearer_token",
                pattern=re.compile(r'Bearer\s+[A-Za-z0-9\-._~+/]+=*', re.IGNORECASE),
            ),
            SensitiveDataPattern(
                name="jwt_token",
                pattern=re.compile(r'eyJ[A-Za-z0-9_-]+\.eyJ[A-Za-z0-9_-]+\.[A-Za-z0-9_-]+'),
                redaction_method=RedactionMethod.HASH,
            ),
            SensitiveDataPattern(
                name="email",
                pattern=re.compile(r'\b[A-Za-z0-9._%+-]+@[A-Za-z0-9.-]+\.[A-Za-z]{2,}\b'),
                redaction_method=RedactionMethod.PARTIAL,
            ),
        ])

    def add_secret(self, secret: str) -> None:
        """Redact an exact literal wherever it appears; repeats are ignored."""
        literal = re.escape(secret)
        if not secret or any(p.pattern.pattern == literal for p in self.patterns):
            return
        self.patterns.insert(0, SensitiveDataPattern(
            name=f"literal_{len(self.patterns)}",
            pattern=re.compile(literal),
        ))

    def sanitize_string(self, text: str) -> str:
        """
        Sanitize a string using every enabled pattern.

        Patterns run in order, so an earlier redaction is never re-matched
        by a later one.
        """
        if not text:
            return text

        result = text
        for pattern in self.patterns:
            # Process matches from the end so earlier spans stay valid
            for match in reversed(pattern.matches(result)):
                result = self._apply_redaction(result, match, pattern)
        return result

    @staticmethod
    def _apply_redaction(
        text: str,
        match: re.Match,
        pattern: SensitiveDataPattern
    ) -> str:
        start, end = match.span()
        matched_text = match.group()

        if pattern.name == "password_field":
            replacement = f"{match.group(1)}{match.group(2)}{pattern.placeholder}"

        elif pattern.redaction_method == RedactionMethod.MASK:
            replacement = "*" * len(matched_text)

        elif pattern.redaction_method == RedactionMethod.HASH:
            hash_val = hashlib.sha256(matched_text.encode()).hexdigest()[:8]
            replacement = f"[HASH:{hash_val}]"

        elif pattern.redaction_method == RedactionMethod.PARTIAL:
            keep = pattern.partial_chars
            if len(matched_text) > keep * 2:
                replacement = (
                    matched_text[:keep] +
                    "*" * (len(matched_text) - keep * 2) +
                    matched_text[-keep:]
                )
            else:
                replacement = "*" * len(matched_text)

        else:
            replacement = pattern.placeholder

        return text[:start] + replacement + text[end:]

    def sanitize_value(self, value: Any, key: Optional[str] = None, max_depth: int = 10) -> Any:
        """Sanitize a JSON-like value recursively."""
        if max_depth <= 0:
            logger.warning("Max recursion depth reached while sanitizing")
            return value

        if key and isinstance(value, str) and any(k in key.lower() for k in SENSITIVE_KEYS):
            return "[REDACTED]"
        if isinstance(value, str):
            return self.sanitize_string(value)
        if isinstance(value, dict):
            return {k: self.sanitize_value(v, str(k), max_depth - 1) for k, v in value.items()}
        if isinstance(value, (list, tuple)):
            return [self.sanitize_value(item, None, max_depth - 1) for item in value]
        return value

    def sanitize_dict(self, data: Dict[str, Any]) -> Dict[str, Any]:
        """Sanitize a dictionary recursively, returning a copy."""
        return self.sanitize_value(deepcopy(data))

    def sanitize_log_record(self, record: logging.LogRecord) -> logging.LogRecord:
        """Sanitize a log record's message and arguments in place."""
        if record.args:
            # Resolve %-style args first so secrets split across msg/args are caught
            record.msg = record.getMessage()
            record.args = None
        record.msg = self.sanitize_string(str(record.msg))
        return record


_default_sanitizer = DataSanitizer()


def get_default_sanitizer() -> DataSanitizer:
    return _default_sanitizer


def sanitize_string(text: str) -> str:
    """Sanitize a string using default patterns."""
    return _default_sanitizer.sanitize_string(text)


def sanitize_dict(data: Dict[str, Any]) -> Dict[str, Any]:
    """Sanitize a dictionary using default rules."""
    return _default_sanitizer.sanitize_dict(data)
