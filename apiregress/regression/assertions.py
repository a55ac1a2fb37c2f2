"""Assertion outcome comparison."""

from __future__ import annotations

from apiregress.models.regression import AssertionDiff
from apiregress.models.test_result import AssertionResult


def diff_assertions(
    baseline: list[AssertionResult], current: list[AssertionResult]
) -> list[AssertionDiff]:
    """Compare named assertion outcomes between two results.

    An assertion missing on one side counts as failed there. Output order:
    flipped outcomes (baseline order), current-only, then baseline-only.
    """
    baseline_outcomes = {a.name: a.success for a in baseline}
    current_outcomes = {a.name: a.success for a in current}
    differences: list[AssertionDiff] = []

    for name, baseline_success in baseline_outcomes.items():
        current_success = current_outcomes.get(name)
        if current_success is not None and current_success != baseline_success:
            differences.append(AssertionDiff(
                name=name, baseline_success=baseline_success, current_success=current_success,
            ))

    for name, current_success in current_outcomes.items():
        if name not in baseline_outcomes:
            differences.append(AssertionDiff(
                name=name, baseline_success=False, current_success=current_success,
            ))

    for name, baseline_success in baseline_outcomes.items():
        if name not in current_outcomes:
            differences.append(AssertionDiff(
                name=name, baseline_success=baseline_success, current_success=False,
            ))

    return differences
