"""Configuration model for regression runs."""

from __future__ import annotations

import json
from pathlib import Path

from pydantic import BaseModel, Field, field_validator

DEFAULT_CONFIG_PATH = "regress-config.json"


class RegressionConfig(BaseModel):
    # Snapshots
    baseline_path: str = "regression-baseline.json"
    results_path: str = "test-results.json"

    # Classification
    schema_assertion_name: str = "Schema validation"
    max_workers: int = 1

    # Reporting
    report_formats: list[str] = Field(default_factory=lambda: ["text", "json"])
    report_output_dir: str = "./regression-reports"
    summary_filename: str = "regression-results.json"

    # AI settings
    ai_summary: bool = False
    ai_model: str = "claude-opus-4-6"
    ai_max_tokens: int = 1024

    @field_validator("max_workers")
    @classmethod
    def check_workers(cls, v: int) -> int:
        if v < 1:
            raise ValueError("max_workers must be at least 1")
        return v

    @field_validator("report_formats")
    @classmethod
    def check_formats(cls, v: list[str]) -> list[str]:
        unknown = [fmt for fmt in v if fmt not in ("text", "json")]
        if unknown:
            raise ValueError(f"Unknown report formats: {', '.join(unknown)}")
        return v

    @classmethod
    def load(cls, path: str | Path) -> "RegressionConfig":
        """Load config from a JSON file."""
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Config file not found: {path}")
        with open(path) as f:
            data = json.load(f)
        return cls(**data)

    @classmethod
    def load_or_default(cls, path: str | Path) -> "RegressionConfig":
        try:
            return cls.load(path)
        except FileNotFoundError:
            return cls()

    def save(self, path: str | Path) -> None:
        """Save config to a JSON file."""
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "w") as f:
            json.dump(self.model_dump(), f, indent=2)
