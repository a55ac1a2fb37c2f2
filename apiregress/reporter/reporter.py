"""Report generation orchestration."""

from __future__ import annotations

import json
import logging
from pathlib import Path

from apiregress.ai.client import AIClient
from apiregress.ai.prompts.summary import SUMMARY_SYSTEM_PROMPT, build_summary_prompt
from apiregress.models.config import RegressionConfig
from apiregress.models.regression import RegressionSummary, Verdict

from .json_report import generate_json_report
from .text_report import format_regression_report

logger = logging.getLogger(__name__)


class Reporter:
    """Generates reports from a regression summary."""

    def __init__(self, config: RegressionConfig, ai_client: AIClient | None = None):
        self.config = config
        self.ai_client = ai_client

    def render_text(self, summary: RegressionSummary) -> str:
        """Text report, preceded by a narrative when an AI client is set."""
        report = format_regression_report(summary)
        if not self.ai_client:
            return report
        return f"{self.generate_narrative(summary)}\n{report}"

    def generate_reports(
        self,
        summary: RegressionSummary,
        output_dir: Path | None = None,
        text: str | None = None,
    ) -> dict[str, str]:
        """Generate all configured report formats. Returns format -> file path.

        `text` reuses an already rendered text report.
        """
        out_dir = Path(output_dir or self.config.report_output_dir)
        out_dir.mkdir(parents=True, exist_ok=True)
        generated = {}
        logger.debug("Report output directory: %s", out_dir)

        if "json" in self.config.report_formats:
            path = out_dir / self.config.summary_filename
            generate_json_report(summary, path)
            generated["json"] = str(path)
            logger.info("JSON report: %s", path)

        if "text" in self.config.report_formats:
            path = out_dir / (Path(self.config.summary_filename).stem + ".txt")
            if text is None:
                text = self.render_text(summary)
            path.write_text(text, encoding="utf-8")
            generated["text"] = str(path)
            logger.info("Text report: %s", path)

        return generated

    def generate_narrative(self, summary: RegressionSummary) -> str:
        """AI-written summary, or a basic one when the AI is unavailable."""
        if not self.ai_client:
            return self._generate_basic_summary(summary)

        try:
            # Keep the prompt small: counts plus the regressed tests only
            payload = {
                "totalTests": summary.total_tests,
                "newTests": summary.new_tests,
                "removedTests": summary.removed_tests,
                "regressedTests": summary.regressed_tests,
                "improvedTests": summary.improved_tests,
                "unchangedTests": summary.unchanged_tests,
                "regressions": [
                    detail.to_json_dict()
                    for detail in summary.details if detail.is_regression
                ][:20],
            }
            text = self.ai_client.complete(
                system_prompt=SUMMARY_SYSTEM_PROMPT,
                user_message=build_summary_prompt(json.dumps(payload, indent=2, default=str)),
                max_tokens=self.config.ai_max_tokens,
            )
            return text.strip()
        except Exception as e:
            logger.warning("AI summary generation failed: %s", e)
            return self._generate_basic_summary(summary)

    def _generate_basic_summary(self, summary: RegressionSummary) -> str:
        parts = [
            f"Compared {summary.total_tests} tests against the baseline: "
            f"{summary.regressed_tests} regressed, {summary.improved_tests} improved, "
            f"{summary.unchanged_tests} unchanged.",
        ]
        if summary.new_tests or summary.removed_tests:
            parts.append(f"{summary.new_tests} new and {summary.removed_tests} removed tests.")
        regressed = summary.by_verdict(Verdict.REGRESSED)
        if regressed:
            parts.append("Regressed: " + ", ".join(
                f"{d.method.upper()} {d.endpoint}" for d in regressed[:5]
            ))
        return " ".join(parts)
