
import time
from .base import StatisticsReporter

class SummaryReporter(StatisticsReporter):
    """Totals at the end of a run. Failure detail is left out when it was already printed inline."""

    def report(self) -> None:
        elapsed = time.perf_counter() - self.start_time if self.start_time is not None else self.total_time
        rate = self.count / elapsed if elapsed > 0 else 0.0
        self.echo()
        self.echo()
        self.echo(f"Finished in {elapsed:.6f}s, {rate:.4f} runs/s.")
        if not self.options.output_inline:
            shown = [r for r in self.results if self.options.verbose or not r.is_skipped]
            for i, result in enumerate(shown, 1):
                for failure in result.failures:
                    self.echo()
                    self.echo(f"{i:3d}) {failure.label}:\n{result.location}:\n{failure.message}")
        self.echo()
        self.echo(f"{self.count} runs, {self.failures} failures, {self.errors} errors, {self.skips} skips")
