# Lightweight package init: avoid eager imports that can fail at console start.
from importlib.metadata import PackageNotFoundError, version as _version

from .exceptions import Skip, skip

try:
    __version__ = _version("rerun-testkit")
except PackageNotFoundError:
    __version__ = "0.0.0"

__all__ = ["ConsoleReporter", "SummaryReporter", "TestRunner", "Skip", "skip", "__version__"]

def __getattr__(name):
    if name == "ConsoleReporter":
        from .reporters.console import ConsoleReporter as _ConsoleReporter
        return _ConsoleReporter
    if name == "SummaryReporter":
        from .reporters.summary import SummaryReporter as _SummaryReporter
        return _SummaryReporter
    if name == "TestRunner":
        from .runners.runner import TestRunner as _TestRunner
        return _TestRunner
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
