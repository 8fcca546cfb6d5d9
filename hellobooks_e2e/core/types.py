"""
Core data models for test run records.
"""

from datetime import datetime, timezone
from enum import Enum
from typing import Dict, List, Optional

from pydantic import BaseModel, Field


class AnnotationType(str, Enum):
    """Kinds of annotation attached to a test."""

    NOTE = "note"
    ISSUE = "issue"
    SKIP = "skip"


class Annotation(BaseModel):
    """A free-form remark attached to a running test."""

    type: AnnotationType = AnnotationType.NOTE
    description: str
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))


class TestOutcome(str, Enum):
    """Final outcome of a single test."""

    __test__ = False

    PASSED = "passed"
    FAILED = "failed"
    SKIPPED = "skipped"
    ERROR = "error"


class TestRecord(BaseModel):
    """Result of one executed test."""

    __test__ = False

    nodeid: str
    title: str
    case_id: Optional[str] = Field(None, description="Test management case id")
    suite: Optional[str] = None
    tags: List[str] = Field(default_factory=list)
    outcome: TestOutcome
    duration_seconds: float = 0.0
    annotations: List[Annotation] = Field(default_factory=list)
    error_message: Optional[str] = None
    artifacts: Dict[str, str] = Field(
        default_factory=dict, description="Artifact kind -> file path"
    )


class RunSummary(BaseModel):
    """Aggregate of every test in a session."""

    base_url: str
    started_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    finished_at: Optional[datetime] = None
    records: List[TestRecord] = Field(default_factory=list)

    def count(self, outcome: TestOutcome) -> int:
        return sum(1 for record in self.records if record.outcome == outcome)

    @property
    def totals(self) -> Dict[str, int]:
        totals = {outcome.value: self.count(outcome) for outcome in TestOutcome}
        totals["total"] = len(self.records)
        totals["annotations"] = sum(len(r.annotations) for r in self.records)
        return totals

    @property
    def duration_seconds(self) -> float:
        if self.finished_at is None:
            return 0.0
        return (self.finished_at - self.started_at).total_seconds()
