"""Plain-text regression report for console output."""

from __future__ import annotations

from apiregress.models.regression import RegressionResult, RegressionSummary, Verdict
from apiregress.regression.response import SCHEMA_PATH, STRUCTURE_PATH

PASS_MARK = "✓"
FAIL_MARK = "✗"


def _title(detail: RegressionResult, mark: str) -> str:
    return f"{mark} {detail.method.upper()} {detail.endpoint}"


def _status_line(detail: RegressionResult) -> list[str]:
    if not detail.status_code_changed:
        return []
    return [f"   Status code: {detail.baseline_status} → {detail.current_status}"]


def _regression_block(detail: RegressionResult) -> list[str]:
    if detail.verdict is Verdict.REMOVED:
        return [_title(detail, FAIL_MARK), "   Removed from the current run (was passing)", ""]

    lines = [_title(detail, FAIL_MARK)]
    lines.extend(_status_line(detail))

    if detail.baseline_success and not detail.current_success:
        lines.append("   Test now fails (was passing)")

    schema_changes = detail.changes_at(SCHEMA_PATH)
    if schema_changes:
        lines.append("   Schema validation regressions:")
        lines.extend(f"     - {change.current_value}" for change in schema_changes)

    structure_changes = detail.changes_at(STRUCTURE_PATH)
    if structure_changes:
        lines.append("   Response structure changes:")
        for change in structure_changes:
            lines.append(f"     - Changed from {change.baseline_value} to {change.current_value}")
            lines.extend(f"       • {item}" for item in change.details or [])

    failed = [a for a in detail.assertion_changes or [] if a.baseline_success and not a.current_success]
    if failed:
        lines.append("   Failed assertions:")
        lines.extend(f"     - {a.name}" for a in failed)

    lines.append("")
    return lines


def _improvement_block(detail: RegressionResult) -> list[str]:
    lines = [_title(detail, PASS_MARK)]
    lines.extend(_status_line(detail))
    fixed = [a for a in detail.assertion_changes or [] if not a.baseline_success and a.current_success]
    if fixed:
        lines.append("   Fixed assertions:")
        lines.extend(f"     - {a.name}" for a in fixed)
    lines.append("")
    return lines


def format_regression_report(summary: RegressionSummary) -> str:
    """Render the summary as sectioned console text."""
    lines = [
        "",
        "== REGRESSION TEST RESULTS ==",
        "",
        f"Total tests: {summary.total_tests}",
        f"New tests: {summary.new_tests}",
        f"Removed tests: {summary.removed_tests}",
        f"Matching tests: {summary.matching_tests}",
        "",
        f"Regressions: {summary.regressed_tests} {FAIL_MARK}",
        f"Improvements: {summary.improved_tests} {PASS_MARK}",
        f"Unchanged: {summary.unchanged_tests}",
        "",
    ]

    regressions = [detail for detail in summary.details if detail.is_regression]
    if regressions:
        lines.extend(["=== REGRESSION DETAILS ===", ""])
        for detail in regressions:
            lines.extend(_regression_block(detail))

    improvements = summary.by_verdict(Verdict.IMPROVED)
    if improvements:
        lines.extend(["=== IMPROVEMENTS ===", ""])
        for detail in improvements:
            lines.extend(_improvement_block(detail))

    new_tests = summary.by_verdict(Verdict.NEW)
    if new_tests:
        lines.extend(["=== NEW TESTS ===", ""])
        lines.extend(
            _title(detail, PASS_MARK if detail.current_success else FAIL_MARK)
            for detail in new_tests
        )
        lines.append("")

    removed = summary.by_verdict(Verdict.REMOVED)
    if removed:
        lines.extend(["=== REMOVED TESTS ===", ""])
        lines.extend(
            _title(detail, FAIL_MARK if detail.baseline_success else "-")
            for detail in removed
        )
        lines.append("")

    return "\n".join(lines)
