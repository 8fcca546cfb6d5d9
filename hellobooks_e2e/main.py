"""
hellobooks-e2e: run the browser scenarios.

Wraps ``pytest`` on ``tests/e2e`` and reruns failed tests with
``--last-failed`` for the configured number of retries.
"""

import argparse
import sys
from pathlib import Path
from typing import Dict, List, Optional

import pytest
from rich.console import Console
from rich.table import Table

from hellobooks_e2e import __version__
from hellobooks_e2e.config.settings import REPORT_FORMATS, Settings, get_settings
from hellobooks_e2e.monitoring.logger import get_logger
from hellobooks_e2e.testing.plugin import apply_overrides

console = Console()
logger = get_logger("main")

E2E_ROOT = Path("tests/e2e")
SUITES: Dict[str, Path] = {
    "vendors": E2E_ROOT / "accountingmasters" / "contacts",
    "invoices": E2E_ROOT / "sales" / "invoices",
    "bills": E2E_ROOT / "purchases" / "bills",
    "auth": E2E_ROOT / "auth",
}
OUTCOME_STYLES = {
    "passed": "green",
    "failed": "red",
    "error": "red",
    "skipped": "yellow",
}


class OutcomeCollector:
    """In-process pytest plugin recording the final outcome of each test."""

    def __init__(self) -> None:
        self.outcomes: Dict[str, str] = {}

    def pytest_runtest_logreport(self, report: pytest.TestReport) -> None:
        if report.when == "call":
            self.outcomes[report.nodeid] = report.outcome
        elif report.failed:
            # Setup or teardown failures
            self.outcomes[report.nodeid] = "error"
        elif report.skipped and report.when == "setup":
            self.outcomes[report.nodeid] = "skipped"

    @property
    def failed(self) -> List[str]:
        return [
            nodeid for nodeid, outcome in self.outcomes.items()
            if outcome in ("failed", "error")
        ]


def non_negative_int(value: str) -> int:
    """argparse type for counts that cannot be negative."""
    try:
        number = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid int value: {value!r}")
    if number < 0:
        raise argparse.ArgumentTypeError(f"must be 0 or more, got {number}")
    return number


def create_parser() -> argparse.ArgumentParser:
    """Create command line argument parser."""
    parser = argparse.ArgumentParser(
        prog="hellobooks-e2e",
        description=f"hellobooks end-to-end suite v{__version__}",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Every scenario, headless
  hellobooks-e2e

  # Only the vendor scenarios, with a visible browser
  hellobooks-e2e --suite vendors --headed

  # Against another environment, passing extra pytest arguments
  hellobooks-e2e --base-url https://staging.example.com -- -k delete
        """,
    )
    parser.add_argument(
        "--suite",
        action="append",
        choices=sorted(SUITES),
        help="Scenario group to run (repeatable; default: all)",
    )
    parser.add_argument(
        "--headed",
        action="store_true",
        help="Show the browser window",
    )
    parser.add_argument(
        "--base-url",
        help="Application origin (overrides BASE_URL)",
    )
    parser.add_argument(
        "--report-format",
        choices=REPORT_FORMATS,
        help="Run report format (default: json on CI, html otherwise)",
    )
    parser.add_argument(
        "--retries",
        type=non_negative_int,
        help="Reruns of failed tests (default: 1 on CI, 0 otherwise)",
    )
    parser.add_argument(
        "--version",
        action="store_true",
        help="Show version information",
    )
    parser.add_argument(
        "pytest_args",
        nargs="*",
        help="Extra arguments passed to pytest (after --)",
    )
    return parser


def build_pytest_args(
    args: argparse.Namespace,
    settings: Settings,
    attempt: int = 0,
) -> List[str]:
    """
    pytest command line for one attempt.

    Attempt 0 runs the selected suites; later attempts rerun only the tests
    that failed last time and write their report under a separate name.
    """
    targets = [str(SUITES[name]) for name in args.suite] if args.suite else [str(E2E_ROOT)]
    pytest_args = [*targets, "--run-e2e"]

    if args.headed:
        pytest_args.append("--headed")
    if args.base_url:
        pytest_args.extend(["--base-url", args.base_url])
    if args.report_format:
        pytest_args.extend(["--report-format", args.report_format])

    if attempt > 0:
        basename = "results" if settings.effective_report_format == "json" else "index"
        pytest_args.extend([
            "--last-failed",
            "--last-failed-no-failures", "none",
            "--report-name", f"{basename}-retry{attempt}",
        ])

    pytest_args.extend(args.pytest_args or [])
    return pytest_args


def print_summary(history: List[Dict[str, str]]) -> None:
    """Print one row per test with its final outcome and attempt count."""
    final: Dict[str, str] = {}
    attempts: Dict[str, int] = {}
    for outcomes in history:
        for nodeid, outcome in outcomes.items():
            final[nodeid] = outcome
            attempts[nodeid] = attempts.get(nodeid, 0) + 1

    table = Table(title="Test Execution Summary")
    table.add_column("Test", style="cyan")
    table.add_column("Outcome")
    table.add_column("Attempts", justify="right")

    for nodeid in sorted(final):
        outcome = final[nodeid]
        style = OUTCOME_STYLES.get(outcome, "white")
        table.add_row(nodeid, f"[{style}]{outcome}[/{style}]", str(attempts[nodeid]))

    console.print(table)


def run(args: argparse.Namespace) -> int:
    settings = apply_overrides(
        get_settings(),
        headed=args.headed,
        base_url=args.base_url,
        report_format=args.report_format,
        retries=args.retries,
    )
    retries = settings.effective_retries

    console.print(f"[cyan]Target:[/cyan] {settings.base_url}")
    if not settings.has_credentials:
        console.print(
            "[yellow]LOGIN_EMAIL / LOGIN_PASSWORD are not set; "
            "scenarios that sign in will fail[/yellow]"
        )

    history: List[Dict[str, str]] = []
    exit_code = 0
    for attempt in range(retries + 1):
        if attempt > 0:
            console.print(f"\n[yellow]Retrying failed tests (attempt {attempt + 1})[/yellow]")

        collector = OutcomeCollector()
        exit_code = int(pytest.main(
            build_pytest_args(args, settings, attempt), plugins=[collector]
        ))
        history.append(collector.outcomes)
        logger.info(
            "pytest attempt finished",
            extra={"attempt": attempt + 1, "exit_code": exit_code},
        )

        if not collector.failed:
            break

    print_summary(history)
    return exit_code


def main(args: Optional[List[str]] = None) -> int:
    """
    Main entry point for hellobooks-e2e.

    Args:
        args: Command line arguments

    Returns:
        pytest exit code of the last attempt
    """
    parser = create_parser()
    parsed = parser.parse_args(args)

    if parsed.version:
        console.print(f"hellobooks-e2e v{__version__}")
        return 0

    try:
        return run(parsed)
    except KeyboardInterrupt:
        console.print("\n[yellow]Test execution interrupted by user[/yellow]")
        return 130


if __name__ == "__main__":
    sys.exit(main())
