"""riskprofile CLI - Command Line Interface.

Usage:
    riskprofile questions                    List the questionnaire
    riskprofile assess --user U -a id=value  Score and store an assessment
    riskprofile history --user U             Show past assessments
    riskprofile current --user U             Show the current risk profile
    riskprofile check --user U               Check whether reassessment is due
    riskprofile config init|show|set         Manage configuration
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, List, Optional

import click
import typer
import yaml
from rich.console import Console
from rich.logging import RichHandler
from rich.panel import Panel
from rich.table import Table

from riskprofile_shared.constants.constants import (
    EXIT_CONFIG_ERROR,
    EXIT_GENERAL_ERROR,
    EXIT_NOT_FOUND,
    EXIT_VALIDATION_ERROR,
    KNOWN_LIFE_EVENTS,
    SUPPORTED_FORMATS,
)
from riskprofile_shared.types.models import Answer

from riskprofile.analysis.service import AssessmentResult, AssessmentService
from riskprofile.config import RiskProfileConfig, load_config, save_config
from riskprofile.errors import AssessmentNotFoundError, InvalidSubmissionError
from riskprofile.reporting import json_report
from riskprofile.reporting.html_report import HTMLReportGenerator
from riskprofile.scoring.catalog import QUESTION_CATALOG
from riskprofile.storage.store import AssessmentStore

# ─── App Setup ─────────────────────────────────────────────────────────────────

app = typer.Typer(
    name="riskprofile",
    help="riskprofile -- investor risk-profiling questionnaire engine",
    add_completion=False,
    rich_markup_mode="rich",
)

config_app = typer.Typer(
    name="config",
    help="Manage riskprofile configuration",
)
app.add_typer(config_app, name="config")

console = Console()
error_console = Console(stderr=True)

_CATEGORY_STYLES = {
    "CONSERVATIVE": "green",
    "MODERATE": "yellow",
    "AGGRESSIVE": "bold red",
}


@app.callback()
def main_callback(
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Enable debug logging",
    ),
) -> None:
    """riskprofile -- investor risk-profiling questionnaire engine."""
    if verbose:
        level = logging.DEBUG
    else:
        level = getattr(logging, _load_config_or_exit().log_level, logging.WARNING)
    logging.basicConfig(
        level=level,
        format="%(message)s",
        handlers=[RichHandler(console=error_console, show_path=False)],
        force=True,
    )


def _load_config_or_exit(directory: Optional[str] = None) -> RiskProfileConfig:
    """Load config, exiting with EXIT_CONFIG_ERROR if the file is unreadable."""
    try:
        return load_config(directory)
    except (OSError, ValueError, yaml.YAMLError) as e:
        error_console.print(f"[red]Error:[/red] Failed to load config: {e}")
        raise typer.Exit(code=EXIT_CONFIG_ERROR)


def _build_service(db: Optional[str]) -> AssessmentService:
    config = _load_config_or_exit()
    store = AssessmentStore(db) if db else None
    return AssessmentService(store=store, config=config)


def _db_option() -> Any:
    return typer.Option(
        None,
        "--db",
        help="SQLite database path (default: from config or RISKPROFILE_DB)",
    )


def _user_option() -> Any:
    return typer.Option(..., "--user", "-u", help="User identifier")


# ─── Questions Command ────────────────────────────────────────────────────────

@app.command()
def questions(
    as_json: bool = typer.Option(False, "--json", help="Print the catalog as JSON"),
) -> None:
    """List the risk questionnaire with options and weights."""
    items = QUESTION_CATALOG

    if as_json:
        console.print_json(json_report.dumps(json_report.questions_payload(items)))
        return

    for q in items:
        table = Table(title=f"{q.id} (weight {q.weight})", title_justify="left")
        table.add_column("Value", style="cyan", no_wrap=True)
        table.add_column("Option")
        table.add_column("Score", justify="center")
        for opt in q.options:
            table.add_row(opt.value, opt.label, f"{opt.score:g}")
        console.print(f"\n[bold]{q.prompt}[/bold]")
        console.print(table)

    console.print(f"\n[bold]Total:[/bold] {len(items)} questions")


# ─── Assess Command ───────────────────────────────────────────────────────────

@app.command()
def assess(
    user: str = _user_option(),
    answer: Optional[List[str]] = typer.Option(
        None,
        "--answer",
        "-a",
        help="Answer as question_id=option_value (repeatable)",
    ),
    answers_file: Optional[str] = typer.Option(
        None,
        "--answers-file",
        help="JSON/YAML file with answers (list of {questionId, answer} or a mapping)",
    ),
    interactive: bool = typer.Option(
        False,
        "--interactive",
        "-i",
        help="Prompt for every question",
    ),
    life_event: Optional[str] = typer.Option(
        None,
        "--life-event",
        help=f"Optional life event ({', '.join(KNOWN_LIFE_EVENTS)})",
    ),
    notes: Optional[str] = typer.Option(None, "--notes", help="Optional notes"),
    format: Optional[str] = typer.Option(
        None,
        "--format",
        "-f",
        help="Output format (json, html)",
    ),
    output: Optional[str] = typer.Option(None, "--output", "-o", help="Save report to file"),
    db: Optional[str] = _db_option(),
) -> None:
    """Score a questionnaire submission and store it."""
    try:
        service = _build_service(db)
        report_format = format or service.config.default_report_format
        if report_format not in SUPPORTED_FORMATS:
            error_console.print(
                f"[red]Error:[/red] Unsupported format '{report_format}'. "
                f"Choose one of: {', '.join(SUPPORTED_FORMATS)}"
            )
            raise typer.Exit(code=EXIT_VALIDATION_ERROR)

        raw_answers: list[Any] = []
        if answers_file:
            raw_answers.extend(_load_answers_file(answers_file))
        raw_answers.extend(_parse_answer_pairs(answer or []))
        if interactive:
            raw_answers.extend(_prompt_answers(service))

        if life_event and life_event not in KNOWN_LIFE_EVENTS:
            logging.getLogger(__name__).info("Unrecognised life event tag: %s", life_event)

        result = service.submit(user, raw_answers, life_event=life_event, notes=notes)

        _display_result(result)
        if result.skipped:
            console.print(
                f"[yellow]Ignored {len(result.skipped)} unmatched answer(s):[/yellow] "
                + ", ".join(result.skipped)
            )

        if output:
            _write_report(service, result, report_format, output)
            console.print(f"\n[green]>[/green] Report saved to: [bold]{output}[/bold]")
        elif report_format == "html":
            typer.echo(HTMLReportGenerator().generate(result, _report_history(service, result)))
        else:
            console.print_json(json_report.dumps(json_report.submit_payload(result)))

    except InvalidSubmissionError as e:
        error_console.print(f"[red]Invalid submission:[/red] {e}")
        raise typer.Exit(code=EXIT_VALIDATION_ERROR)
    except (OSError, ValueError, yaml.YAMLError) as e:
        error_console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(code=EXIT_GENERAL_ERROR)


def _parse_answer_pairs(pairs: List[str]) -> list[dict[str, str]]:
    """Turn 'id=value' strings into answer mappings."""
    parsed = []
    for pair in pairs:
        question_id, sep, value = pair.partition("=")
        if not sep or not question_id.strip():
            raise InvalidSubmissionError(f"Expected question_id=option_value, got '{pair}'")
        parsed.append({"questionId": question_id.strip(), "answer": value.strip()})
    return parsed


def _load_answers_file(path: str) -> list[Any]:
    """Load answers from a JSON or YAML file."""
    with open(path, "r", encoding="utf-8") as f:
        data = yaml.safe_load(f)

    if isinstance(data, dict) and "answers" in data:
        data = data["answers"]
    if isinstance(data, dict):
        return [{"questionId": str(k), "answer": str(v)} for k, v in data.items()]
    if isinstance(data, list):
        return data
    raise InvalidSubmissionError(f"{path} does not contain a list or mapping of answers")


def _prompt_answers(service: AssessmentService) -> list[Answer]:
    """Ask each question on the terminal and collect the choices."""
    answers = []
    for q in service.questions():
        console.print(f"\n[bold]{q.prompt}[/bold]")
        for i, opt in enumerate(q.options, start=1):
            console.print(f"  {i}. {opt.label}")
        choice = typer.prompt(
            "Choice",
            type=click.IntRange(1, len(q.options)),
        )
        answers.append(Answer(question_id=q.id, answer=q.options[choice - 1].value))
    return answers


def _report_history(service: AssessmentService, result: AssessmentResult) -> list[AssessmentResult]:
    if not service.config.include_history:
        return []
    return service.history(result.assessment.user_id)


def _write_report(
    service: AssessmentService,
    result: AssessmentResult,
    report_format: str,
    output: str,
) -> None:
    if report_format == "html":
        HTMLReportGenerator().generate_to_file(result, output, _report_history(service, result))
        return
    path = Path(output)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json_report.dumps(json_report.submit_payload(result)), encoding="utf-8")


def _display_result(result: AssessmentResult) -> None:
    """Display the category panel and allocation table."""
    a = result.assessment
    style = _CATEGORY_STYLES.get(a.risk_profile.value, "")
    console.print(
        Panel(
            f"[{style}]{result.profile.name}[/{style}]  "
            f"score [bold]{a.risk_score:.2f}[/bold]\n"
            f"[dim]{result.profile.description}[/dim]",
            title="[bold]Risk Profile[/bold]",
            border_style="blue",
        )
    )

    table = Table(title="Recommended Allocation")
    table.add_column("Asset", style="cyan")
    table.add_column("Range", style="green")
    for asset, pct in result.profile.recommended_allocation.items():
        table.add_row(asset.capitalize(), pct)
    console.print(table)


# ─── History / Current / Check Commands ───────────────────────────────────────

@app.command()
def history(
    user: str = _user_option(),
    as_json: bool = typer.Option(False, "--json", help="Print history as JSON"),
    db: Optional[str] = _db_option(),
) -> None:
    """Show a user's assessments, newest first."""
    service = _build_service(db)
    results = service.history(user)

    if as_json:
        console.print_json(json_report.dumps(json_report.history_payload(results)))
        return

    if not results:
        console.print(f"No assessments found for user {user}")
        return

    table = Table(title=f"Assessments for {user} ({len(results)})")
    table.add_column("Completed", no_wrap=True)
    table.add_column("Score", justify="center")
    table.add_column("Profile", justify="center")
    table.add_column("Trend", justify="center")
    table.add_column("Life event")
    for r in results:
        cat = r.assessment.risk_profile.value
        style = _CATEGORY_STYLES.get(cat, "")
        table.add_row(
            r.assessment.completed_at.strftime("%Y-%m-%d %H:%M"),
            f"{r.assessment.risk_score:.2f}",
            f"[{style}]{cat}[/{style}]",
            r.trend.value if r.trend else "-",
            r.assessment.life_event or "-",
        )
    console.print(table)


@app.command()
def current(
    user: str = _user_option(),
    db: Optional[str] = _db_option(),
) -> None:
    """Show a user's current risk profile."""
    service = _build_service(db)
    try:
        profile = service.current(user)
    except AssessmentNotFoundError as e:
        error_console.print(f"[red]Not found:[/red] {e}")
        raise typer.Exit(code=EXIT_NOT_FOUND)

    console.print_json(json_report.dumps(json_report.current_payload(profile)))


@app.command()
def check(
    user: str = _user_option(),
    db: Optional[str] = _db_option(),
) -> None:
    """Check whether a user should retake the questionnaire."""
    service = _build_service(db)
    decision = service.reassessment_check(user)

    if decision.should_reassess:
        console.print(f"[yellow]Reassessment recommended:[/yellow] {decision.message}")
    else:
        console.print("[green]>[/green] Risk profile is up to date")
    console.print_json(json_report.dumps(json_report.reassessment_payload(decision)))


# ─── Config Commands ──────────────────────────────────────────────────────────

@config_app.command("init")
def config_init(
    directory: Optional[str] = typer.Argument(
        None,
        help="Directory to create config in (default: current directory)",
    ),
) -> None:
    """Create .riskprofile.yaml configuration file."""
    target_dir = directory or str(Path.cwd())

    try:
        config_path = save_config(target_dir)
        console.print(
            f"[green]>[/green] Config file created: [bold]{config_path}[/bold]"
        )
    except OSError as e:
        error_console.print(f"[red]Error:[/red] Failed to create config: {e}")
        raise typer.Exit(code=EXIT_CONFIG_ERROR)


@config_app.command("show")
def config_show(
    directory: Optional[str] = typer.Argument(
        None,
        help="Directory to load config from",
    ),
) -> None:
    """Display current configuration."""
    target_dir = directory or str(Path.cwd())
    config = _load_config_or_exit(target_dir)

    console.print(Panel("[bold]Current Configuration[/bold]", border_style="blue"))
    console.print_json(json.dumps(config.to_dict()))


@config_app.command("set")
def config_set(
    key: str = typer.Argument(help="Config key (dot notation, e.g., reassessment.annual_months)"),
    value: str = typer.Argument(help="Config value"),
    directory: Optional[str] = typer.Option(
        None, "--dir", "-d", help="Directory with config file"
    ),
) -> None:
    """Set a configuration value."""
    target_dir = directory or str(Path.cwd())
    config = _load_config_or_exit(target_dir)

    # Try to parse value as JSON for booleans/numbers
    try:
        parsed_value = json.loads(value)
    except (json.JSONDecodeError, ValueError):
        parsed_value = value

    config.set(key, parsed_value)
    save_config(target_dir, config)
    console.print(f"[green]>[/green] Set [bold]{key}[/bold] = {parsed_value}")


# ─── Main Entry Point ─────────────────────────────────────────────────────────

def main() -> None:
    """CLI entry point for the console script."""
    app(prog_name="riskprofile")


if __name__ == "__main__":
    main()
