"""
Core module exports.
"""

from hellobooks_e2e.core.annotations import AnnotationLog
from hellobooks_e2e.core.types import (
    Annotation,
    AnnotationType,
    RunSummary,
    TestOutcome,
    TestRecord,
)

__all__ = [
    "Annotation",
    "AnnotationLog",
    "AnnotationType",
    "RunSummary",
    "TestOutcome",
    "TestRecord",
]
