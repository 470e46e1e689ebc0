
from typing import List, Optional
import typer
from .config import load_config, ReporterConfig, RunOptions
from .exceptions import RerunTestkitError
from .logging import setup_logging
from .runners.runner import TestRunner
from .reporters.console import ConsoleReporter
from .reporters.summary import SummaryReporter

app = typer.Typer(add_completion=False, help="Rerun Testkit - run tests with rerun hints for every failure")

@app.command()
def run(
    targets: Optional[List[str]] = typer.Argument(None, help="Test files or directories, optionally path:line"),
    name: Optional[str] = typer.Option(None, "--name", "-n", help="Only run the test with this name (or Group#name)"),
    config: Optional[str] = typer.Option(None, "--config", "-c", help="Path to config YAML"),
    verbose: Optional[bool] = typer.Option(None, "--verbose/--no-verbose", "-v", help="One line per test"),
    color: Optional[bool] = typer.Option(None, "--color/--no-color", help="Colored output on terminals"),
    fail_fast: Optional[bool] = typer.Option(None, "--fail-fast/--no-fail-fast", "-f", help="Abort on the first failure"),
    inline: Optional[bool] = typer.Option(None, "--inline/--no-inline", help="Print failures as they happen"),
    executable: Optional[str] = typer.Option(None, "--executable", help="Command prefix used in rerun snippets"),
    log_level: str = typer.Option("WARNING", "--log-level", help="Logging level"),
):
    log = setup_logging(log_level.upper())
    try:
        cfg: ReporterConfig = load_config(config) if config else ReporterConfig()
        flags = {"verbose": verbose, "color": color, "fail_fast": fail_fast, "output_inline": inline}
        overrides = {k: v for k, v in flags.items() if v is not None}
        if overrides:
            cfg.options = RunOptions(**{**cfg.options.model_dump(), **overrides})
        if executable:
            cfg.executable = executable

        reporters = [SummaryReporter(options=cfg.options), ConsoleReporter.from_config(cfg)]
        result = TestRunner(reporters, log).run(targets or ["tests"], name=name)
    except RerunTestkitError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=2)
    raise typer.Exit(code=0 if result.ok else 1)

@app.command()
def version():
    from . import __version__
    typer.echo(__version__)
