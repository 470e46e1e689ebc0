"""Shared fixtures for rerun_testkit tests."""

import io
import textwrap
from pathlib import Path
from typing import Callable

import pytest

from rerun_testkit.runners.runner import Failure, Outcome, TestResult


class TTYStream(io.StringIO):
    """StringIO that claims to be a terminal."""

    def isatty(self) -> bool:
        return True


@pytest.fixture
def stream() -> io.StringIO:
    return io.StringIO()


@pytest.fixture
def tty_stream() -> TTYStream:
    return TTYStream()


@pytest.fixture
def make_result() -> Callable[..., TestResult]:
    """Build a TestResult for the given outcome."""

    def _make(
        outcome: Outcome = Outcome.PASS,
        name: str = "test_thing",
        group: str = "TestWidget",
        message: str = "boom",
        location: str | None = None,
        source=None,
        time: float = 0.01234,
    ) -> TestResult:
        failures = () if outcome is Outcome.PASS else (Failure(outcome.label, message),)
        return TestResult(
            group=group,
            name=name,
            time=time,
            outcome=outcome,
            failures=failures,
            location=location if location is not None else f"{group}#{name}",
            source=source,
        )

    return _make


@pytest.fixture
def write_tests(tmp_path: Path) -> Callable[[str, str], Path]:
    """Write a test module under tmp_path and return its path."""

    def _write(source: str, filename: str = "test_sample.py") -> Path:
        path = tmp_path / filename
        path.write_text(textwrap.dedent(source))
        return path

    return _write
