"""Response body comparison for a matched pair of test results."""

from __future__ import annotations

import json
import logging

from apiregress.models.json_value import JsonValueError, structure_summary, to_json_value
from apiregress.models.regression import ResponseDiff
from apiregress.models.test_result import TestResult

from .structure import diff_structure

logger = logging.getLogger(__name__)

BODY_PATH = "response.body"
SCHEMA_PATH = "schema.validation"
STRUCTURE_PATH = "response.structure"


def has_schema_validation_regression(
    baseline: TestResult, current: TestResult, assertion_name: str = "Schema validation"
) -> bool:
    """True when the schema assertion passed in baseline and fails now."""
    baseline_assertion = baseline.find_assertion(assertion_name)
    current_assertion = current.find_assertion(assertion_name)
    return (
        baseline_assertion is not None and baseline_assertion.success
        and current_assertion is not None and not current_assertion.success
    )


def _same_body(baseline_body, current_body) -> bool:
    try:
        return json.dumps(baseline_body, sort_keys=True) == json.dumps(current_body, sort_keys=True)
    except (TypeError, ValueError):
        return baseline_body == current_body
    except RecursionError:
        return False


def compare_responses(
    baseline: TestResult, current: TestResult, assertion_name: str = "Schema validation"
) -> list[ResponseDiff]:
    """Find response differences between two results of the same test.

    Emits a ``response.body`` entry for any value-level change, a
    ``schema.validation`` entry when the schema assertion regressed, and a
    ``response.structure`` entry carrying the structural differences.
    """
    if baseline.response is None or current.response is None:
        return []

    baseline_body = baseline.response.body
    current_body = current.response.body
    if _same_body(baseline_body, current_body):
        return []

    differences = [ResponseDiff(
        path=BODY_PATH, baseline_value=baseline_body, current_value=current_body,
    )]

    if has_schema_validation_regression(baseline, current, assertion_name):
        current_assertion = current.find_assertion(assertion_name)
        differences.append(ResponseDiff(
            path=SCHEMA_PATH,
            baseline_value="passed",
            current_value=current_assertion.error or "failed",
        ))

    try:
        baseline_value = to_json_value(baseline_body)
        current_value = to_json_value(current_body)
        changes = diff_structure(baseline_value, current_value)
    except (JsonValueError, RecursionError) as e:
        logger.warning("Error comparing response structures for %s %s: %s",
                       current.method.upper(), current.endpoint, e)
        return differences

    if changes:
        differences.append(ResponseDiff(
            path=STRUCTURE_PATH,
            baseline_value=structure_summary(baseline_value),
            current_value=structure_summary(current_value),
            details=[str(change) for change in changes],
        ))
    return differences


def has_structural_changes(response_changes: list[ResponseDiff] | None) -> bool:
    return any(
        change.path == STRUCTURE_PATH and change.details
        for change in response_changes or []
    )
