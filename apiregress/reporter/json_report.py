"""JSON report output."""

from __future__ import annotations

import json
from pathlib import Path

from apiregress.models.regression import RegressionSummary


def generate_json_report(summary: RegressionSummary, output_path: Path) -> None:
    """Write the machine-readable regression summary."""
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    with open(output_path, "w", encoding="utf-8") as f:
        json.dump(summary.to_json_dict(), f, indent=2, default=str)
