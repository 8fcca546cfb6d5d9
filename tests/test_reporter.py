"""
Tests for run report generation.
"""

import json

import pytest

from hellobooks_e2e.core.types import Annotation, TestOutcome, TestRecord
from hellobooks_e2e.monitoring.reporter import RunReporter
from hellobooks_e2e.security.sanitizer import DataSanitizer


def _record(name, outcome=TestOutcome.PASSED, **kwargs):
    return TestRecord(
        nodeid=f"tests/e2e/test_vendors.py::{name}",
        title=name.replace("_", " "),
        outcome=outcome,
        **kwargs,
    )


@pytest.fixture
def reporter(tmp_path):
    return RunReporter(
        "https://dev.hellobooks.ai",
        tmp_path / "reports",
        sanitizer=DataSanitizer(secrets=["s3cret-pass"]),
    )


class TestRunReporter:

    def test_rerun_replaces_earlier_attempt(self, reporter):
        reporter.add_record(_record("test_a", TestOutcome.FAILED))
        reporter.add_record(_record("test_b"))
        assert reporter.has_failures

        reporter.add_record(_record("test_a", TestOutcome.PASSED))

        assert [r.nodeid.split("::")[1] for r in reporter.summary.records] == ["test_b", "test_a"]
        assert not reporter.has_failures

    def test_error_counts_as_failure(self, reporter):
        reporter.add_record(_record("test_setup", TestOutcome.ERROR))
        assert reporter.has_failures

    def test_write_json(self, reporter, tmp_path):
        reporter.add_record(_record(
            "test_delete_vendor",
            TestOutcome.FAILED,
            case_id="Taqjvd1yr",
            suite="Contacts",
            tags=["vendors"],
            annotations=[Annotation(description="Success toast not detected after deleting vendor")],
            error_message="typed s3cret-pass then failed",
            artifacts={"screenshot": "reports/screenshots/x.png"},
        ))

        path = reporter.write_json()

        assert path == tmp_path / "reports" / "results.json"
        payload = json.loads(path.read_text())
        assert payload["base_url"] == "https://dev.hellobooks.ai"
        assert payload["totals"]["failed"] == 1
        assert payload["totals"]["annotations"] == 1
        record = payload["records"][0]
        assert record["case_id"] == "Taqjvd1yr"
        assert record["outcome"] == "failed"
        assert record["annotations"][0]["description"].startswith("Success toast")
        assert "s3cret-pass" not in record["error_message"]

    def test_write_html(self, reporter):
        reporter.add_record(_record(
            "test_create_vendor",
            case_id="Trejg6gxs",
            annotations=[Annotation(description="<b>Vendors tab</b> not found")],
        ))

        html = reporter.write_html().read_text(encoding="utf-8")

        assert "Trejg6gxs" in html
        assert "test create vendor" in html
        assert "&lt;b&gt;Vendors tab&lt;/b&gt; not found" in html
        assert 'class="passed"' in html

    @pytest.mark.parametrize(
        "report_format, basename, expected",
        [
            ("json", None, "results.json"),
            ("html", None, "index.html"),
            ("json", "results-retry1", "results-retry1.json"),
        ],
    )
    def test_finish(self, reporter, report_format, basename, expected):
        reporter.add_record(_record("test_a"))

        path = reporter.finish(report_format, basename)

        assert path.name == expected
        assert path.exists()
        assert reporter.summary.finished_at is not None
        assert reporter.summary.duration_seconds >= 0
