"""
Run report generation.

Collects one ``TestRecord`` per executed test and writes either a JSON file
(for CI consumption) or a standalone HTML page (for local runs).
"""

import json
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional

from jinja2 import Template

from hellobooks_e2e.core.types import RunSummary, TestOutcome, TestRecord
from hellobooks_e2e.monitoring.logger import get_logger
from hellobooks_e2e.security.sanitizer import DataSanitizer, get_default_sanitizer

logger = get_logger(__name__)


HTML_TEMPLATE = """
<!DOCTYPE html>
<html lang="en">
<head>
    <meta charset="UTF-8">
    <title>E2E Report: {{ summary.base_url }}</title>
    <style>
        body {
            font-family: -apple-system, BlinkMacSystemFont, 'Segoe UI', Roboto, sans-serif;
            margin: 0;
            padding: 20px;
            background: #f5f5f5;
            line-height: 1.6;
        }
        .container {
            max-width: 1400px;
            margin: 0 auto;
            background: white;
            padding: 30px;
            border-radius: 8px;
            box-shadow: 0 2px 8px rgba(0,0,0,0.1);
        }
        .summary {
            display: grid;
            grid-template-columns: repeat(auto-fit, minmax(160px, 1fr));
            gap: 20px;
            margin: 30px 0;
        }
        .metric { background: #f9f9f9; padding: 20px; border-radius: 6px; text-align: center; }
        .metric-value { font-size: 2.2em; font-weight: bold; }
        .metric-label { color: #666; font-size: 0.9em; text-transform: uppercase; }
        .passed { color: #4caf50; }
        .failed, .error { color: #f44336; }
        .skipped { color: #ff9800; }
        table { width: 100%; border-collapse: collapse; margin: 20px 0; }
        th, td { padding: 10px; text-align: left; border-bottom: 1px solid #e0e0e0; vertical-align: top; }
        th { background: #f5f5f5; }
        ul.notes { margin: 0; padding-left: 18px; color: #795548; }
        pre { white-space: pre-wrap; font-size: 0.85em; margin: 0; }
    </style>
</head>
<body>
<div class="container">
    <h1>End-to-end run</h1>
    <div>Target: {{ summary.base_url }}</div>
    <div>Started: {{ summary.started_at.isoformat() }} ({{ "%.1f"|format(summary.duration_seconds) }}s)</div>

    <div class="summary">
        <div class="metric"><div class="metric-value">{{ totals.total }}</div><div class="metric-label">Tests</div></div>
        <div class="metric"><div class="metric-value passed">{{ totals.passed }}</div><div class="metric-label">Passed</div></div>
        <div class="metric"><div class="metric-value failed">{{ totals.failed + totals.error }}</div><div class="metric-label">Failed</div></div>
        <div class="metric"><div class="metric-value skipped">{{ totals.skipped }}</div><div class="metric-label">Skipped</div></div>
        <div class="metric"><div class="metric-value">{{ totals.annotations }}</div><div class="metric-label">Notes</div></div>
    </div>

    <table>
        <tr><th>Case</th><th>Test</th><th>Outcome</th><th>Duration</th><th>Notes</th><th>Artifacts</th></tr>
        {% for record in summary.records %}
        <tr>
            <td>{{ record.case_id or "" }}</td>
            <td>
                {% if record.suite %}<strong>{{ record.suite }}</strong><br>{% endif %}
                {{ record.title }}
                {% if record.error_message %}<pre>{{ record.error_message }}</pre>{% endif %}
            </td>
            <td class="{{ record.outcome.value }}">{{ record.outcome.value }}</td>
            <td>{{ "%.1f"|format(record.duration_seconds) }}s</td>
            <td>
                {% if record.annotations %}
                <ul class="notes">
                {% for annotation in record.annotations %}<li>{{ annotation.description }}</li>{% endfor %}
                </ul>
                {% endif %}
            </td>
            <td>
                {% for kind, path in record.artifacts.items() %}<a href="{{ path }}">{{ kind }}</a><br>{% endfor %}
            </td>
        </tr>
        {% endfor %}
    </table>
</div>
</body>
</html>
"""


class RunReporter:
    """Accumulates test records and writes the session report."""

    def __init__(
        self,
        base_url: str,
        output_dir: Path,
        sanitizer: Optional[DataSanitizer] = None,
    ) -> None:
        self.output_dir = Path(output_dir)
        self.sanitizer = sanitizer or get_default_sanitizer()
        self.summary = RunSummary(base_url=base_url)

    def add_record(self, record: TestRecord) -> None:
        # A rerun of the same node replaces the earlier attempt
        self.summary.records = [r for r in self.summary.records if r.nodeid != record.nodeid]
        self.summary.records.append(record)

    @property
    def has_failures(self) -> bool:
        return any(
            r.outcome in (TestOutcome.FAILED, TestOutcome.ERROR)
            for r in self.summary.records
        )

    def _sanitized_payload(self) -> dict:
        payload = json.loads(self.summary.model_dump_json())
        payload["totals"] = self.summary.totals
        return self.sanitizer.sanitize_dict(payload)

    def write_json(self, filename: str = "results.json") -> Path:
        """Write the run summary as JSON."""
        self.output_dir.mkdir(parents=True, exist_ok=True)
        path = self.output_dir / filename
        path.write_text(json.dumps(self._sanitized_payload(), indent=2))
        return path

    def write_html(self, filename: str = "index.html") -> Path:
        """Render the run summary as a standalone HTML page."""
        self.output_dir.mkdir(parents=True, exist_ok=True)
        path = self.output_dir / filename
        summary = RunSummary.model_validate(self._sanitized_payload())
        html = Template(HTML_TEMPLATE, autoescape=True).render(
            summary=summary, totals=summary.totals
        )
        path.write_text(html, encoding="utf-8")
        return path

    def finish(self, report_format: str, basename: Optional[str] = None) -> Path:
        """Stamp the finish time and write the report in ``report_format``."""
        self.summary.finished_at = datetime.now(timezone.utc)
        if report_format == "json":
            path = self.write_json(f"{basename or 'results'}.json")
        else:
            path = self.write_html(f"{basename or 'index'}.html")
        logger.info(
            "Run report written",
            extra={"path": str(path), **self.summary.totals},
        )
        return path
