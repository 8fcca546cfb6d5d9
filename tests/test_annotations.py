"""
Tests for the soft-fail annotation log.
"""

import logging

from hellobooks_e2e.core.annotations import AnnotationLog
from hellobooks_e2e.core.types import (
    Annotation,
    AnnotationType,
    RunSummary,
    TestOutcome,
    TestRecord,
)


class TestAnnotationLog:

    def test_note_records_in_order(self):
        log = AnnotationLog(test_id="tests/e2e/test_a.py::test_a")

        log.note("Vendors tab not found; continuing on default tab")
        log.note("Success toast not detected after deleting vendor")

        assert len(log) == 2
        assert log.notes == [
            "Vendors tab not found; continuing on default tab",
            "Success toast not detected after deleting vendor",
        ]
        assert all(a.type == AnnotationType.NOTE for a in log)

    def test_sink_receives_each_annotation(self):
        received = []
        log = AnnotationLog(sink=received.append)

        annotation = log.add("Heads up", AnnotationType.ISSUE)

        assert received == [annotation]
        assert log.notes == []
        assert log.items == [annotation]

    def test_items_is_a_copy(self):
        log = AnnotationLog()
        log.note("one")

        log.items.clear()

        assert len(log) == 1

    def test_contains_is_case_insensitive(self):
        log = AnnotationLog()
        log.note('Vendor "Auto Vendor 123" still appears in list after deletion')

        assert log.contains("still appears")
        assert log.contains("AUTO VENDOR")
        assert not log.contains("toast")

    def test_notes_are_logged(self, caplog):
        log = AnnotationLog(test_id="case-1")

        with caplog.at_level(logging.WARNING, logger="hellobooks_e2e.annotations"):
            log.note("Could not fill Email")

        record = caplog.records[-1]
        assert record.getMessage() == "[note] Could not fill Email"
        assert record.test_id == "case-1"


class TestRunSummary:

    def _record(self, outcome, notes=0):
        return TestRecord(
            nodeid=f"tests/e2e/test_x.py::test_{outcome.value}",
            title=outcome.value,
            outcome=outcome,
            annotations=[Annotation(description=f"n{i}") for i in range(notes)],
        )

    def test_totals(self):
        summary = RunSummary(base_url="https://dev.hellobooks.ai")
        summary.records.extend([
            self._record(TestOutcome.PASSED, notes=2),
            self._record(TestOutcome.PASSED),
            self._record(TestOutcome.FAILED, notes=1),
            self._record(TestOutcome.SKIPPED),
        ])

        assert summary.totals == {
            "passed": 2,
            "failed": 1,
            "skipped": 1,
            "error": 0,
            "total": 4,
            "annotations": 3,
        }

    def test_duration_without_finish(self):
        summary = RunSummary(base_url="https://dev.hellobooks.ai")
        assert summary.duration_seconds == 0.0
