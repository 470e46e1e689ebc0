"""Progress and failure output for a test run.

Prints one colored character per test (or one line per test when verbose),
optionally the failure detail right after the failing test, and finishes
with the commands that rerun each failing test.
"""

from typing import IO, List, Optional
import re
import typer
from ..config import DEFAULT_EXECUTABLE, ReporterConfig, RunOptions, resolve_app_root
from ..runners.runner import Aborted, Outcome, TestResult
from .base import StatisticsReporter

COLOR_CODES_FOR_RESULTS = {
    Outcome.PASS: typer.colors.GREEN,
    Outcome.ERROR: typer.colors.RED,
    Outcome.FAILURE: typer.colors.RED,
    Outcome.SKIP: typer.colors.YELLOW,
}

# trailing "[path:line]" the runner appends to a failing test's location
_ASSERTION_PATH = re.compile(r"\[(.*)\]\Z")

class ConsoleReporter(StatisticsReporter):
    """Progress characters, inline failures and rerun snippets for each test."""

    def __init__(self, io: Optional[IO[str]] = None, options: Optional[RunOptions] = None,
                 executable: str = DEFAULT_EXECUTABLE, app_root: Optional[str] = None):
        super().__init__(io, options)
        self.executable = executable
        self.app_root = resolve_app_root(app_root)

    @classmethod
    def from_config(cls, cfg: ReporterConfig, io: Optional[IO[str]] = None) -> "ConsoleReporter":
        return cls(io, cfg.options, executable=cfg.executable, app_root=cfg.app_root)

    def record(self, result: TestResult) -> Optional[Aborted]:
        super().record(result)
        color = COLOR_CODES_FOR_RESULTS.get(result.outcome)

        if self.options.verbose:
            self.echo(self.color_output(self.format_line(result), color), color=self.colored_output)
        else:
            self.echo(self.color_output(result.code, color), nl=False, color=self.colored_output)

        if self.options.output_inline and result.failure and (not result.is_skipped or self.options.verbose):
            self.echo()
            self.echo()
            for block in self.format_failures(result):
                self.echo(self.color_output(block, color), color=self.colored_output)
            self.echo()
            self.echo(self.rerun_snippet(result))
            self.echo()

        if self.options.fail_fast and result.failure and not result.is_error and not result.is_skipped:
            return Aborted(result)
        return None

    def report(self) -> None:
        if self.options.output_inline or not self.filtered_results():
            return
        self.echo()
        self.echo("Failed tests:")
        self.echo()
        self.echo(self.aggregated_results())

    def aggregated_results(self) -> str:
        return "\n".join(self.rerun_snippet(result) for result in self.filtered_results())

    def filtered_results(self) -> List[TestResult]:
        if self.options.verbose:
            return list(self.results)
        return [r for r in self.results if not r.is_skipped]

    def relative_path_for(self, file: str) -> str:
        return re.sub(rf"^{re.escape(self.app_root)}/?", "", file, count=1)

    def rerun_snippet(self, result: TestResult) -> str:
        match = _ASSERTION_PATH.search(result.location)
        if match:
            assertion_path = match.group(1)
        else:
            source = result.source_location()
            if source is None:
                return f"{self.executable} --name {result.name}"
            assertion_path = "%s:%d" % source
        return f"{self.executable} {self.relative_path_for(assertion_path)}"

    @property
    def colored_output(self) -> bool:
        isatty = getattr(self.io, "isatty", None)
        return bool(self.options.color and callable(isatty) and isatty())

    def color_output(self, string: str, color: Optional[str]) -> str:
        if color and self.colored_output:
            return typer.style(string, fg=color)
        return string

    @staticmethod
    def format_line(result: TestResult) -> str:
        return "%s#%s = %.2f s = %s" % (result.group, result.name, result.time, result.code)

    @staticmethod
    def format_failures(result: TestResult) -> List[str]:
        return [f"{failure.label}:\n{result.group}#{result.name}:\n{failure.message}"
                for failure in result.failures]
