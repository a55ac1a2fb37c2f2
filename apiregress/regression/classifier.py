"""Regression classification of matched, new and removed tests."""

from __future__ import annotations

import logging

from apiregress.models.regression import RegressionResult, Verdict

from .assertions import diff_assertions
from .matcher import MatchedPair, SnapshotEntry
from .response import compare_responses, has_schema_validation_regression, has_structural_changes

logger = logging.getLogger(__name__)


def is_status_regression(baseline_status: int, current_status: int) -> bool:
    """Losing a 2xx, or introducing a 5xx, is a regression."""
    baseline_ok = 200 <= baseline_status < 300
    current_ok = 200 <= current_status < 300
    return (baseline_ok and not current_ok) or (baseline_status < 500 and current_status >= 500)


class RegressionClassifier:
    """Turns matcher output into RegressionResult records."""

    def __init__(self, schema_assertion_name: str = "Schema validation"):
        self.schema_assertion_name = schema_assertion_name

    def classify_pair(self, pair: MatchedPair) -> RegressionResult:
        baseline = pair.baseline.result
        current = pair.current.result
        baseline_status = baseline.status_code
        current_status = current.status_code

        status_code_changed = (
            baseline_status is not None
            and current_status is not None
            and baseline_status != current_status
        )

        response_changes = compare_responses(baseline, current, self.schema_assertion_name)
        assertion_changes = diff_assertions(baseline.assertions, current.assertions)

        schema_regression = has_schema_validation_regression(
            baseline, current, self.schema_assertion_name,
        )
        structural_regression = has_structural_changes(response_changes)

        is_regression = (
            (baseline.success and not current.success)
            or (status_code_changed and is_status_regression(baseline_status, current_status))
            or schema_regression
            or structural_regression
        )

        if is_regression:
            verdict = Verdict.REGRESSED
        elif not baseline.success and current.success:
            verdict = Verdict.IMPROVED
        else:
            verdict = Verdict.UNCHANGED

        if is_regression:
            logger.debug("Regression in %s %s (status %s -> %s)",
                         current.method.upper(), current.endpoint, baseline_status, current_status)

        return RegressionResult(
            id=pair.current.test_id,
            method=current.method,
            endpoint=current.endpoint,
            verdict=verdict,
            baseline_success=baseline.success,
            current_success=current.success,
            status_code_changed=status_code_changed,
            baseline_status=baseline_status,
            current_status=current_status,
            response_changed=bool(response_changes),
            response_changes=response_changes or None,
            assertions_changed=bool(assertion_changes),
            assertion_changes=assertion_changes or None,
            is_regression=is_regression,
        )

    def classify_new(self, entry: SnapshotEntry) -> RegressionResult:
        return RegressionResult(
            id=entry.test_id,
            method=entry.result.method,
            endpoint=entry.result.endpoint,
            verdict=Verdict.NEW,
            current_success=entry.result.success,
            current_status=entry.result.status_code,
        )

    def classify_removed(self, entry: SnapshotEntry) -> RegressionResult:
        # Losing coverage of a passing test is a regression; a failing one is not
        return RegressionResult(
            id=entry.test_id,
            method=entry.result.method,
            endpoint=entry.result.endpoint,
            verdict=Verdict.REMOVED,
            baseline_success=entry.result.success,
            baseline_status=entry.result.status_code,
            is_regression=entry.result.success,
        )
