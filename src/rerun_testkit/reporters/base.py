
from typing import IO, List, Optional
import sys, time
import typer
from ..config import RunOptions
from ..runners.runner import Aborted, Outcome, TestResult

class StatisticsReporter:
    """Counts results and keeps the non-passing ones, in record order."""

    def __init__(self, io: Optional[IO[str]] = None, options: Optional[RunOptions] = None):
        self.io = io if io is not None else sys.stdout
        self.options = options or RunOptions()
        self.count = 0
        self.failures = 0
        self.errors = 0
        self.skips = 0
        self.total_time = 0.0
        self.start_time: Optional[float] = None
        self.results: List[TestResult] = []

    def start(self) -> None:
        self.start_time = time.perf_counter()

    def record(self, result: TestResult) -> Optional[Aborted]:
        self.count += 1
        self.total_time += result.time
        if result.outcome is Outcome.FAILURE: self.failures += 1
        elif result.outcome is Outcome.ERROR: self.errors += 1
        elif result.outcome is Outcome.SKIP: self.skips += 1
        if not result.is_passed:
            self.results.append(result)
        return None

    def report(self) -> None:
        return None

    @property
    def passed(self) -> bool:
        return self.failures == 0 and self.errors == 0

    def echo(self, message: str = "", nl: bool = True, color: Optional[bool] = None) -> None:
        typer.echo(message, file=self.io, nl=nl, color=color)
