"""Identity matching of baseline and current results by test key."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from apiregress.models.test_result import Snapshot, TestResult

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SnapshotEntry:
    test_id: str
    result: TestResult
    position: int  # iteration order within its own snapshot


@dataclass(frozen=True)
class MatchedPair:
    baseline: SnapshotEntry
    current: SnapshotEntry


@dataclass
class MatchResult:
    matched: list[MatchedPair] = field(default_factory=list)
    only_in_current: list[SnapshotEntry] = field(default_factory=list)
    only_in_baseline: list[SnapshotEntry] = field(default_factory=list)
    collisions: list[str] = field(default_factory=list)


def _group_by_key(snapshot: Snapshot) -> dict[str, list[SnapshotEntry]]:
    groups: dict[str, list[SnapshotEntry]] = {}
    for position, (test_id, result) in enumerate(snapshot.results.items()):
        groups.setdefault(result.test_key, []).append(SnapshotEntry(test_id, result, position))
    return groups


def _pair_group(
    baseline: list[SnapshotEntry], current: list[SnapshotEntry]
) -> tuple[list[MatchedPair], list[SnapshotEntry], list[SnapshotEntry]]:
    """Pair entries sharing a key: same scenario name first, then by position."""
    pairs: list[MatchedPair] = []
    remaining = list(baseline)
    unpaired: list[SnapshotEntry] = []

    if len(baseline) > 1 or len(current) > 1:
        for entry in current:
            name = entry.result.test_case.name
            match = next(
                (b for b in remaining if name and b.result.test_case.name == name), None
            )
            if match is None:
                unpaired.append(entry)
                continue
            remaining.remove(match)
            pairs.append(MatchedPair(baseline=match, current=entry))
    else:
        unpaired = list(current)

    extra_current: list[SnapshotEntry] = []
    for entry in unpaired:
        if remaining:
            pairs.append(MatchedPair(baseline=remaining.pop(0), current=entry))
        else:
            extra_current.append(entry)
    return pairs, extra_current, remaining


def match_results(baseline: Snapshot, current: Snapshot) -> MatchResult:
    """Partition two snapshots into matched pairs, new tests and removed tests.

    Tests are matched on ``lower(method):endpoint`` rather than on their run
    ids, which are regenerated every run. Several results may share a key
    (distinct scenarios against one endpoint); those are grouped and paired
    by scenario name, then by order, and any surplus on either side is
    reported as new or removed instead of being overwritten.
    """
    baseline_groups = _group_by_key(baseline)
    current_groups = _group_by_key(current)
    result = MatchResult()

    for key, current_entries in current_groups.items():
        baseline_entries = baseline_groups.get(key, [])
        if len(current_entries) > 1 or len(baseline_entries) > 1:
            logger.warning(
                "Test key %s is shared by %d baseline and %d current results; "
                "matching by scenario name and order",
                key, len(baseline_entries), len(current_entries),
            )
            result.collisions.append(key)
        pairs, extra_current, extra_baseline = _pair_group(baseline_entries, current_entries)
        result.matched.extend(pairs)
        result.only_in_current.extend(extra_current)
        result.only_in_baseline.extend(extra_baseline)

    for key, baseline_entries in baseline_groups.items():
        if key in current_groups:
            continue
        if len(baseline_entries) > 1:
            logger.warning("Test key %s is shared by %d baseline results", key, len(baseline_entries))
            result.collisions.append(key)
        result.only_in_baseline.extend(baseline_entries)

    result.matched.sort(key=lambda pair: pair.current.position)
    result.only_in_current.sort(key=lambda entry: entry.position)
    result.only_in_baseline.sort(key=lambda entry: entry.position)
    return result
