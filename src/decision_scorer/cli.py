"""CLI for the Decision Scorer.

Provides command-line interface for comparing options described in a
JSON request file against constraints and weighted priorities.
"""

import json
import sys
from pathlib import Path
from typing import Any, Optional

import click
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from . import __version__
from .app_logging import setup_logging
from .config import find_config_file, load_config
from .engine import DecisionEngine
from .samples import SAMPLE_REQUESTS, get_sample
from .schema import ComparisonResult, ScoredOption
from .service import handle_comparison
from .validation import validate_request

console = Console()


def load_request(path: str) -> Any:
    """Read a JSON request body from a file."""
    with open(path, "r", encoding="utf-8") as f:
        return json.load(f)


@click.group()
@click.version_option(version=__version__, prog_name="decision-scorer")
@click.option(
    "--log-level",
    default="WARNING",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
    help="Logging level for engine diagnostics (written to stderr)"
)
@click.option(
    "--config", "-c",
    "config_path",
    type=click.Path(exists=True),
    help="Path to a scorer configuration YAML file"
)
def main(log_level: str, config_path: Optional[str]):
    """Decision Scorer.

    Ranks technical options against hard constraints and weighted
    priorities, and explains every score.
    """
    setup_logging(level=log_level, dev_mode=True)

    path = Path(config_path) if config_path else find_config_file()
    if path:
        load_config(path)


@main.command("compare")
@click.option(
    "--input", "-i",
    "input_file",
    required=True,
    type=click.Path(exists=True),
    help="Path to comparison request JSON file"
)
@click.option(
    "--out", "-o",
    type=click.Path(),
    help="Output file for the JSON response (default: stdout with --json-output)"
)
@click.option(
    "--max-results", "-n",
    type=int,
    help="Maximum number of ranked options to return (overrides the request settings)"
)
@click.option(
    "--json-output", "-j",
    is_flag=True,
    help="Output the raw JSON response instead of formatted text"
)
@click.option(
    "--verbose", "-v",
    is_flag=True,
    help="Show per-criterion explanations"
)
def compare_cmd(
    input_file: str,
    out: Optional[str],
    max_results: Optional[int],
    json_output: bool,
    verbose: bool,
):
    """Compare options from a request file.

    Examples:
        decision-scorer compare -i request.json
        decision-scorer compare -i request.json -n 2 -v
        decision-scorer compare -i request.json -j -o response.json
    """
    try:
        payload = load_request(input_file)
    except (OSError, json.JSONDecodeError) as e:
        console.print(f"[red]Error reading request: {e}[/red]")
        sys.exit(1)

    if max_results is not None and isinstance(payload, dict):
        settings = dict(payload.get("settings") or {})
        settings["max_results"] = max_results
        payload["settings"] = settings

    if not json_output:
        console.print("\n[bold blue]Decision Scorer[/bold blue]")
        console.print(f"Request: {input_file}")
        console.print()

    engine = DecisionEngine()
    if json_output:
        response = handle_comparison(payload, engine)
    else:
        with console.status("Scoring options..."):
            response = handle_comparison(payload, engine)

    if response["status"] != "success":
        display_error(response)
        if out:
            output_json(response, out)
        sys.exit(1)

    if json_output:
        output_json(response, out)
    else:
        result = ComparisonResult.model_validate(response["results"])
        display_result(result, verbose)
        console.print(
            f"\n[dim]Processed in {response['metadata']['processing_time_ms']} ms "
            f"using {response['metadata']['algorithm_used']}[/dim]"
        )
        if out:
            output_json(response, out)
            console.print(f"\n[green]Results saved to {out}[/green]")


@main.command("validate")
@click.option(
    "--input", "-i",
    "input_file",
    required=True,
    type=click.Path(exists=True),
    help="Path to comparison request JSON file"
)
def validate_cmd(input_file: str):
    """Validate a comparison request file.

    Example:
        decision-scorer validate -i request.json
    """
    try:
        payload = load_request(input_file)
    except (OSError, json.JSONDecodeError) as e:
        console.print(f"[red]✗ Request unreadable: {input_file}[/red]")
        console.print(f"  - {e}")
        sys.exit(1)

    is_valid, issues = validate_request(payload)
    if is_valid:
        console.print(f"[green]✓ Request valid: {input_file}[/green]")
    else:
        console.print(f"[red]✗ Request invalid: {input_file}[/red]")
        for issue in issues:
            console.print(f"  - {issue}")

    sys.exit(0 if is_valid else 1)


@main.command("generate-sample")
@click.option(
    "--sample", "-s",
    default="database",
    type=click.Choice(list(SAMPLE_REQUESTS)),
    help="Which sample comparison to write"
)
@click.option(
    "--out", "-o",
    type=click.Path(),
    default="sample-request.json",
    help="Output path for the sample request"
)
def generate_sample_cmd(sample: str, out: str):
    """Generate a sample comparison request file.

    Example:
        decision-scorer generate-sample -s cloud -o cloud.json
    """
    try:
        with open(out, "w", encoding="utf-8") as f:
            json.dump(get_sample(sample), f, indent=2)

        console.print(f"[green]✓[/green] Sample '{sample}' request saved to: {out}")
        console.print("\nTo compare the options in this sample:")
        console.print(f"  [cyan]decision-scorer compare -i {out}[/cyan]")

    except OSError as e:
        console.print(f"[red]Error:[/red] {e}")
        sys.exit(1)


@main.command("init-config")
@click.option(
    "--out", "-o",
    type=click.Path(),
    default="scorer-config.yaml",
    help="Output path for the configuration file"
)
@click.option(
    "--force", "-f",
    is_flag=True,
    help="Overwrite existing config file"
)
def init_config_cmd(out: str, force: bool):
    """Generate a default scorer configuration file.

    Example:
        decision-scorer init-config --out my-config.yaml
    """
    from .config import save_default_config

    out_path = Path(out)
    if out_path.exists() and not force:
        console.print(f"[red]Error:[/red] Config file already exists: {out}")
        console.print("Use --force to overwrite")
        sys.exit(1)

    try:
        save_default_config(out_path)
        console.print(f"[green]✓[/green] Config file created: {out}")
        console.print("\nThis file configures:")
        console.print("  • performance_bands - Score thresholds for performance levels")
        console.print("  • comparison_bands - Percentile thresholds for comparisons")
        console.print("  • trade_offs - Limits for strengths, weaknesses and differentiators")
        console.print("  • confidence - Top recommendation confidence and reasoning")
        console.print("  • normalization - Scoring when all options share a value")
        console.print("  • insights - Competitiveness thresholds")
        console.print("\nThe scorer will look for config in this order:")
        console.print("  1. DECISION_SCORER_CONFIG environment variable")
        console.print("  2. ./scorer-config.yaml (current directory)")
        console.print("  3. ~/.config/decision-scorer/config.yaml")
    except OSError as e:
        console.print(f"[red]Error creating config:[/red] {e}")
        sys.exit(1)


def display_error(response: dict[str, Any]):
    """Display an error envelope."""
    console.print(f"[red]Error: {response['message']}[/red]")
    for error in response.get("errors", []):
        console.print(f"  - {error}")


def display_result(result: ComparisonResult, verbose: bool):
    """Display comparison result in formatted text."""
    summary = result.summary
    top = summary.top_recommendation

    if top:
        confidence_color = (
            "green" if top.confidence >= 0.75
            else "yellow" if top.confidence >= 0.6
            else "red"
        )
        top_name = next(
            (o.name for o in result.ranked_options if o.option_id == top.option_id),
            top.option_id,
        )
        recommendation = (
            f"Top Recommendation: [bold cyan]{top_name}[/bold cyan]\n"
            f"Confidence: [{confidence_color}]{top.confidence:.0%}[/{confidence_color}]\n"
            f"{top.reasoning}\n"
        )
    else:
        recommendation = "[yellow]No option meets the required constraints[/yellow]\n"

    console.print(Panel(
        f"{recommendation}\n"
        f"Evaluated: {summary.total_options_evaluated} | "
        f"Meeting constraints: {summary.options_meeting_constraints}",
        title="Comparison Summary",
    ))

    if result.ranked_options:
        console.print("\n[bold]Ranked Options:[/bold]\n")
        console.print(build_ranking_table(result.ranked_options))

        for option in result.ranked_options:
            display_option(option, verbose)

    excluded = [
        option_id for option_id, report in result.constraint_results.items()
        if not report.passed
    ]
    if excluded:
        console.print("\n[bold]Excluded by required constraints:[/bold]")
        for option_id in excluded:
            failed = ", ".join(result.constraint_results[option_id].failed_constraints)
            console.print(f"  [red]✗[/red] {option_id} [dim]({failed})[/dim]")

    insights = result.insights
    console.print(f"\n[bold]Competitiveness:[/bold] {insights.competitiveness.value.replace('_', ' ')}")
    if insights.key_factors:
        factors = ", ".join(f.criteria for f in insights.key_factors)
        console.print(f"[bold]Key decision factors:[/bold] {factors}")
    for recommendation in insights.recommendations:
        console.print(f"  [cyan]•[/cyan] {recommendation}")

    if verbose and result.explanations:
        console.print(f"\n[dim]{result.explanations.methodology}[/dim]")
        console.print(f"[dim]{result.explanations.scoring_breakdown}[/dim]")


def build_ranking_table(options: list[ScoredOption]) -> Table:
    """Build a table of ranked options with per-criterion scores."""
    # Every option carries one reason per priority, in priority order
    criteria = [reason.criteria for reason in options[0].reasons]

    table = Table(show_header=True, header_style="bold")
    table.add_column("Rank", justify="right")
    table.add_column("Option", style="cyan")
    table.add_column("Score", justify="right")
    for name in criteria:
        table.add_column(name, justify="right")

    for option in options:
        row = [str(option.rank), option.name, f"{option.total_score:.2f}"]
        for name in criteria:
            score = option.criteria_scores.get(name)
            row.append(f"{score.score:.0f}" if score else "[dim]n/a[/dim]")
        table.add_row(*row)

    return table


def display_option(option: ScoredOption, verbose: bool):
    """Display trade-offs (and, in verbose mode, reasons) for one option."""
    console.print(f"\n  [bold cyan]{option.rank}. {option.name}[/bold cyan] [bold]{option.total_score:.2f}[/bold]")

    trade_offs = option.trade_offs
    if trade_offs:
        for strength in trade_offs.strengths:
            console.print(f"     [green]+[/green] {strength}")
        for weakness in trade_offs.weaknesses:
            console.print(f"     [yellow]-[/yellow] {weakness}")
        if verbose:
            for differentiator in trade_offs.key_differentiators:
                console.print(f"     [dim]• {differentiator}[/dim]")

    if verbose:
        for reason in option.reasons:
            console.print(f"     [dim]{reason.criteria}: {reason.explanation}[/dim]")
        for reason in option.constraint_compliance.constraint_reasons:
            marker = "[green]✓[/green]" if reason.status.value == "passed" else "[red]✗[/red]"
            console.print(f"     {marker} [dim]{reason.explanation}[/dim]")


def output_json(response: dict[str, Any], out_path: Optional[str]):
    """Output a response envelope as JSON."""
    json_str = json.dumps(response, indent=2)

    if out_path:
        with open(out_path, "w", encoding="utf-8") as f:
            f.write(json_str)
    else:
        print(json_str)


if __name__ == "__main__":
    main()
