"""Regression comparison data structures."""

from __future__ import annotations

from enum import Enum
from typing import Any, ClassVar, Optional

from pydantic import Field, model_serializer

from .test_result import CamelModel


class Verdict(str, Enum):
    REGRESSED = "regressed"
    IMPROVED = "improved"
    UNCHANGED = "unchanged"
    NEW = "new"
    REMOVED = "removed"


class SparseModel(CamelModel):
    """Omits the listed optional fields from output while they are None."""

    omit_if_none: ClassVar[tuple[str, ...]] = ()

    @model_serializer(mode="wrap")
    def _drop_unset(self, handler):
        data = handler(self)
        for name in self.omit_if_none:
            if getattr(self, name) is None:
                data.pop(name, None)
                data.pop(type(self).model_fields[name].alias, None)
        return data


class ResponseDiff(SparseModel):
    """One response discrepancy. `details` lists structural sub-differences."""
    omit_if_none = ("details",)

    path: str
    baseline_value: Any = None
    current_value: Any = None
    details: Optional[list[str]] = None


class AssertionDiff(CamelModel):
    name: str
    baseline_success: bool
    current_success: bool


class RegressionResult(SparseModel):
    """Comparison record for one matched, new, or removed test."""
    omit_if_none = ("baseline_status", "current_status", "response_changes", "assertion_changes")

    id: str
    method: str
    endpoint: str
    verdict: Verdict
    baseline_success: bool = False
    current_success: bool = False
    status_code_changed: bool = False
    baseline_status: Optional[int] = None
    current_status: Optional[int] = None
    response_changed: bool = False
    response_changes: Optional[list[ResponseDiff]] = None
    assertions_changed: bool = False
    assertion_changes: Optional[list[AssertionDiff]] = None
    is_regression: bool = False

    def changes_at(self, path: str) -> list[ResponseDiff]:
        return [change for change in self.response_changes or [] if change.path == path]


class RegressionSummary(CamelModel):
    total_tests: int = 0
    new_tests: int = 0
    removed_tests: int = 0
    matching_tests: int = 0
    regressed_tests: int = 0
    improved_tests: int = 0
    unchanged_tests: int = 0
    details: list[RegressionResult] = Field(default_factory=list)

    @property
    def has_regressions(self) -> bool:
        return self.regressed_tests > 0

    @property
    def exit_code(self) -> int:
        """Process exit status for CI gating."""
        return 1 if self.has_regressions else 0

    def by_verdict(self, verdict: Verdict) -> list[RegressionResult]:
        return [detail for detail in self.details if detail.verdict is verdict]
