"""CLI entry point for API regression checks."""

from __future__ import annotations

import logging
import sys
from pathlib import Path

import click
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.table import Table

from apiregress.ai.client import AIClient
from apiregress.models.config import DEFAULT_CONFIG_PATH, RegressionConfig
from apiregress.models.regression import RegressionSummary
from apiregress.regression.engine import compare_snapshots
from apiregress.regression.snapshot_store import SnapshotStore
from apiregress.reporter.reporter import Reporter

console = Console()
logger = logging.getLogger(__name__)


def setup_logging(verbose: bool = False) -> None:
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=console, rich_tracebacks=True)],
    )


def _summary_table(summary: RegressionSummary) -> Table:
    table = Table(title="Regression Summary")
    table.add_column("Metric", style="bold")
    table.add_column("Value")
    table.add_row("Total Tests", str(summary.total_tests))
    table.add_row("Matching", str(summary.matching_tests))
    table.add_row("New", str(summary.new_tests))
    table.add_row("Removed", str(summary.removed_tests))
    table.add_row("Regressed", f"[red]{summary.regressed_tests}[/red]")
    table.add_row("Improved", f"[green]{summary.improved_tests}[/green]")
    table.add_row("Unchanged", str(summary.unchanged_tests))
    return table


@click.group()
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
@click.option("--config", "-c", default=DEFAULT_CONFIG_PATH, help="Config file path")
@click.pass_context
def cli(ctx: click.Context, verbose: bool, config: str) -> None:
    """Detect regressions between API test runs."""
    setup_logging(verbose)
    if ctx.invoked_subcommand == "init":
        return
    try:
        ctx.obj = RegressionConfig.load_or_default(config)
    except (OSError, ValueError, TypeError) as e:
        console.print(f"[red]Invalid config file {config}: {escape(str(e))}[/red]")
        sys.exit(1)


@cli.command()
@click.argument("results", required=False)
@click.option("--baseline", "-b", "baseline_path", help="Baseline file to write")
@click.pass_obj
def baseline(cfg: RegressionConfig, results: str | None, baseline_path: str | None) -> None:
    """Save a test results file as the regression baseline."""
    results = results or cfg.results_path
    baseline_path = baseline_path or cfg.baseline_path

    snapshot = SnapshotStore(results).load()
    if snapshot is None:
        console.print(f"[red]No readable test results at {results}[/red]")
        sys.exit(1)

    try:
        SnapshotStore(baseline_path).save(snapshot)
    except OSError as e:
        console.print(f"[red]Failed to save baseline to {baseline_path}: {e}[/red]")
        sys.exit(1)
    console.print(f"[green]Baseline saved:[/green] {len(snapshot)} tests → {baseline_path}")


@cli.command()
@click.argument("results", required=False)
@click.option("--baseline", "-b", "baseline_path", help="Baseline file to compare against")
@click.option("--output-dir", "-o", help="Directory for report files")
@click.option("--workers", "-w", type=int, help="Threads used to classify matched tests")
@click.option("--ai-summary/--no-ai-summary", default=None, help="Prepend an AI-written summary")
@click.pass_obj
def compare(
    cfg: RegressionConfig,
    results: str | None,
    baseline_path: str | None,
    output_dir: str | None,
    workers: int | None,
    ai_summary: bool | None,
) -> None:
    """Compare a test results file against the baseline. Exits 1 on regressions."""
    results = results or cfg.results_path
    baseline_path = baseline_path or cfg.baseline_path
    if workers is not None:
        cfg.max_workers = max(1, workers)
    if ai_summary is not None:
        cfg.ai_summary = ai_summary

    current = SnapshotStore(results).load()
    if current is None:
        console.print(f"[red]No readable test results at {results}[/red]")
        sys.exit(1)

    baseline_snapshot = SnapshotStore(baseline_path).load()
    if baseline_snapshot is None:
        logger.warning("No baseline found at %s; skipping regression check", baseline_path)
        console.print(
            f"[yellow]No baseline found at {baseline_path}.[/yellow] "
            "Run 'api-regress baseline' to create one."
        )
        return

    summary = compare_snapshots(baseline_snapshot, current, cfg)

    ai_client: AIClient | None = None
    if cfg.ai_summary:
        try:
            ai_client = AIClient(model=cfg.ai_model, max_tokens=cfg.ai_max_tokens)
        except EnvironmentError as e:
            logger.warning("AI client unavailable: %s. Using basic summary.", e)

    reporter = Reporter(cfg, ai_client)
    text = reporter.render_text(summary)
    console.print(text, markup=False, highlight=False)
    console.print(_summary_table(summary))

    reports = reporter.generate_reports(summary, Path(output_dir) if output_dir else None, text=text)
    for fmt, path in reports.items():
        console.print(f"  {fmt.upper()} report: [blue]{path}[/blue]")

    if summary.has_regressions:
        console.print(f"[bold red]{summary.regressed_tests} regressions detected[/bold red]")
    sys.exit(summary.exit_code)


@cli.command()
@click.pass_context
def init(ctx: click.Context) -> None:
    """Create a default configuration file."""
    config_path = Path(ctx.parent.params["config"])
    if config_path.exists():
        if not click.confirm(f"{config_path} already exists. Overwrite?"):
            return

    RegressionConfig().save(config_path)
    console.print(f"[green]Created {config_path}[/green]")
    console.print("\nSave a baseline, then check later runs against it:")
    console.print("  [blue]api-regress baseline test-results.json[/blue]")
    console.print("  [blue]api-regress compare test-results.json[/blue]")


if __name__ == "__main__":
    cli()
