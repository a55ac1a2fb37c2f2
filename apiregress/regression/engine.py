"""Regression engine — compares a current run against a baseline snapshot."""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor

from apiregress.models.config import RegressionConfig
from apiregress.models.regression import RegressionResult, RegressionSummary
from apiregress.models.test_result import Snapshot

from .aggregator import summarize
from .classifier import RegressionClassifier
from .matcher import match_results

logger = logging.getLogger(__name__)


def compare_snapshots(
    baseline: Snapshot,
    current: Snapshot,
    config: RegressionConfig | None = None,
) -> RegressionSummary:
    """Compare two snapshots and summarize regressions, improvements and churn.

    Details are ordered as the current run iterates (matched and new tests
    interleaved), followed by removed tests in baseline order.
    """
    config = config or RegressionConfig()
    classifier = RegressionClassifier(config.schema_assertion_name)
    match = match_results(baseline, current)
    logger.debug("Matched %d tests (%d new, %d removed)",
                 len(match.matched), len(match.only_in_current), len(match.only_in_baseline))

    if config.max_workers > 1 and len(match.matched) > 1:
        with ThreadPoolExecutor(max_workers=config.max_workers) as executor:
            matched_results = list(executor.map(classifier.classify_pair, match.matched))
    else:
        matched_results = [classifier.classify_pair(pair) for pair in match.matched]

    ordered: list[tuple[int, RegressionResult]] = [
        (pair.current.position, result)
        for pair, result in zip(match.matched, matched_results)
    ]
    ordered.extend(
        (entry.position, classifier.classify_new(entry)) for entry in match.only_in_current
    )
    ordered.sort(key=lambda item: item[0])

    details = [result for _, result in ordered]
    details.extend(classifier.classify_removed(entry) for entry in match.only_in_baseline)

    summary = summarize(details, total_tests=len(current))
    if summary.has_regressions:
        logger.warning("Detected %d regressions", summary.regressed_tests)
    return summary
