"""Aggregation of classified results into a regression summary."""

from __future__ import annotations

from collections import Counter

from apiregress.models.regression import RegressionResult, RegressionSummary, Verdict


def summarize(details: list[RegressionResult], total_tests: int) -> RegressionSummary:
    """Tally verdicts in one pass. `total_tests` is the size of the current run."""
    counts = Counter(detail.verdict for detail in details)
    new_tests = counts[Verdict.NEW]
    return RegressionSummary(
        total_tests=total_tests,
        new_tests=new_tests,
        removed_tests=counts[Verdict.REMOVED],
        matching_tests=total_tests - new_tests,
        regressed_tests=counts[Verdict.REGRESSED],
        improved_tests=counts[Verdict.IMPROVED],
        unchanged_tests=counts[Verdict.UNCHANGED],
        details=list(details),
    )
