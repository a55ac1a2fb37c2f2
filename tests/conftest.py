"""Pytest configuration and shared fixtures."""

from pathlib import Path
from typing import Any, Optional

import pytest

from apiregress.models.config import RegressionConfig
from apiregress.models.test_result import (
    ApiResponse,
    AssertionResult,
    Snapshot,
    TestCase,
    TestResult,
)


# ============================================================================
# Builders
# ============================================================================


def make_result(
    method: str = "GET",
    endpoint: str = "/users",
    success: bool = True,
    status: Optional[int] = 200,
    body: Any = None,
    assertions: Optional[list[tuple[str, bool]]] = None,
    name: str = "",
    with_response: bool = True,
) -> TestResult:
    """Build a TestResult; `assertions` is a list of (name, success) pairs."""
    return TestResult(
        test_case=TestCase(id="", name=name, method=method, endpoint=endpoint),
        success=success,
        response=ApiResponse(status_code=status, body=body) if with_response else None,
        assertions=[
            AssertionResult(name=n, success=s, error=None if s else f"{n} failed")
            for n, s in (assertions or [])
        ],
        duration_ms=42,
    )


def make_snapshot(results: dict[str, TestResult], name: str = "") -> Snapshot:
    return Snapshot(name=name, results=results)


# ============================================================================
# Fixtures
# ============================================================================


@pytest.fixture
def users_body() -> dict:
    return {"id": 1, "name": "Alice", "tags": [{"label": "admin"}], "createdAt": "2025-01-01"}


@pytest.fixture
def baseline_snapshot(users_body: dict) -> Snapshot:
    """A small passing suite against a users/orders API."""
    return make_snapshot({
        "tc_1": make_result("GET", "/users", body=[users_body],
                            assertions=[("Status code", True), ("Schema validation", True)]),
        "tc_2": make_result("POST", "/users", status=201, body=users_body,
                            assertions=[("Status code", True)]),
        "tc_3": make_result("GET", "/orders", body={"orders": []},
                            assertions=[("Status code", True)]),
    }, name="baseline")


@pytest.fixture
def regression_config() -> RegressionConfig:
    return RegressionConfig(report_output_dir="./test-reports")


@pytest.fixture
def temp_config_file(regression_config: RegressionConfig, tmp_path: Path) -> Path:
    config_file = tmp_path / "regress-config.json"
    regression_config.save(config_file)
    return config_file
