from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import List, Optional

import typer
from dotenv import load_dotenv
from pydantic import ValidationError
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from .config import ReporterConfig
from .errors import FeatureParseError
from .locator import resolve_step
from .models import RunnerEvent, UnresolvedStep
from .parsing.feature_cache import FeatureCache
from .reporter import MissingStepsReporter
from .snippets.renderer import render_report
from .snippets.synthesizer import SnippetRegistry


app = typer.Typer(add_completion=False, no_args_is_help=True)
console = Console()


def _load_config(base_dir: Optional[str]) -> ReporterConfig:
    load_dotenv(override=False)
    config = ReporterConfig()
    if base_dir:
        config.base_dir = Path(base_dir)
    return config


def _setup_logging(verbose: bool) -> None:
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(message)s",
            handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        )


def _load_feature(feature: str):
    cache = FeatureCache()
    try:
        return cache.get_document(feature)
    except OSError as e:
        raise typer.BadParameter(f"Feature file not readable: {feature} ({e})")
    except FeatureParseError as e:
        raise typer.BadParameter(str(e))


@app.command()
def report(
    events: str = typer.Argument(..., help="JSON-lines runner event stream, or '-' for stdin"),
    base_dir: Optional[str] = typer.Option(None, help="Directory feature paths in events are relative to"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log skipped events"),
):
    """Replay a runner event stream and print snippets for its undefined steps."""
    _setup_logging(verbose)
    cfg = _load_config(base_dir)
    if cfg.base_dir is None:
        raise typer.BadParameter("Set --base-dir or MISSING_STEPS_BASE_DIR")

    if events == "-":
        stream = sys.stdin
    else:
        path = Path(events).resolve()
        if not path.exists():
            raise typer.BadParameter(f"Event stream not found: {path}")
        stream = path.open(encoding="utf-8")

    reporter = MissingStepsReporter(cfg, console=console)
    ended = False
    try:
        for lineno, raw in enumerate(stream, start=1):
            if not raw.strip():
                continue
            try:
                event = RunnerEvent.model_validate_json(raw)
            except ValidationError as e:
                raise typer.BadParameter(f"Invalid event on line {lineno}: {e.errors()[0]['msg']}")
            reporter.handle(event)
            if event.event == "end":
                ended = True
                break
    finally:
        if stream is not sys.stdin:
            stream.close()

    # Runner died before signalling the end of the run
    if not ended:
        reporter.on_end()


@app.command()
def locate(
    feature: str = typer.Argument(..., help="Path to a .feature file"),
    line: int = typer.Argument(..., help="1-based line number of the step"),
):
    """Show the step at a line and the keyword its step definition needs."""
    document = _load_feature(feature)
    step = resolve_step(document, line)
    if step is None:
        console.print(f"[yellow]No step at[/yellow] {feature}:{line}")
        raise typer.Exit(code=1)

    effective = "-" if isinstance(step, UnresolvedStep) else step.effective_keyword.value
    table = Table(title="Located Step")
    table.add_column("Line")
    table.add_column("Keyword")
    table.add_column("Effective")
    table.add_column("Text")
    table.add_row(str(step.line), step.keyword.strip(), effective, step.text)
    console.print(table)


@app.command()
def snippet(
    feature: str = typer.Argument(..., help="Path to a .feature file"),
    lines: List[int] = typer.Option(..., "--line", "-l", help="Step line number; repeatable"),
):
    """Print deduplicated snippets for the steps on the given lines."""
    cfg = _load_config(None)
    document = _load_feature(feature)
    registry = SnippetRegistry()
    for line in lines:
        step = resolve_step(document, line)
        if step is None or isinstance(step, UnresolvedStep):
            console.print(f"[yellow]Skipping[/yellow] {feature}:{line}")
            continue
        registry.ingest(step)

    snippets, keywords = registry.drain()
    for out in render_report(snippets, keywords, cfg):
        console.print(out, style=cfg.report_style, markup=False, highlight=False, soft_wrap=True)


if __name__ == "__main__":  # pragma: no cover
    app()
