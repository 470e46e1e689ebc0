
from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Iterable, List, Optional, Sequence, Tuple
import hashlib
import importlib.util
import inspect
import logging
import pathlib
import sys
import time
import traceback
from ..exceptions import DiscoveryError, Skip

PACKAGE_DIR = pathlib.Path(__file__).resolve().parents[1]

class Outcome(Enum):
    PASS = "."
    ERROR = "E"
    FAILURE = "F"
    SKIP = "S"

    @property
    def code(self) -> str:
        return self.value

    @property
    def label(self) -> Optional[str]:
        return _LABELS[self]

_LABELS = {Outcome.PASS: None, Outcome.ERROR: "Error", Outcome.FAILURE: "Failure", Outcome.SKIP: "Skipped"}

@dataclass(frozen=True)
class Failure:
    label: str
    message: str

@dataclass(frozen=True)
class TestResult:
    """One executed test. Never mutated after the runner builds it."""
    __test__ = False

    group: str
    name: str
    time: float
    outcome: Outcome
    failures: Tuple[Failure, ...] = ()
    location: str = ""
    source: Optional[Callable[..., Any]] = field(default=None, compare=False, repr=False)

    @property
    def code(self) -> str: return self.outcome.code
    @property
    def failure(self) -> Optional[Failure]: return self.failures[0] if self.failures else None
    @property
    def is_passed(self) -> bool: return self.outcome is Outcome.PASS
    @property
    def is_skipped(self) -> bool: return self.outcome is Outcome.SKIP
    @property
    def is_error(self) -> bool: return self.outcome is Outcome.ERROR

    def source_location(self) -> Optional[Tuple[str, int]]:
        """Best-effort (path, line) of the test callable; None when inspect can't tell."""
        if self.source is None:
            return None
        try:
            func = inspect.unwrap(self.source)
            path = inspect.getsourcefile(func)
            _, line = inspect.getsourcelines(func)
        except (TypeError, OSError):
            return None
        if path is None:
            return None
        return path, line

@dataclass
class SuiteResult:
    suite: str
    cases: List[TestResult]
    aborted: bool = False
    @property
    def passed(self) -> int: return sum(c.is_passed for c in self.cases)
    @property
    def failed(self) -> int: return sum(c.outcome is Outcome.FAILURE for c in self.cases)
    @property
    def errors(self) -> int: return sum(c.is_error for c in self.cases)
    @property
    def skipped(self) -> int: return sum(c.is_skipped for c in self.cases)
    @property
    def ok(self) -> bool: return not self.aborted and self.failed == 0 and self.errors == 0

@dataclass(frozen=True)
class Aborted:
    """Returned by a reporter's record() to stop the run after `result`."""
    result: TestResult

class TestCase:
    __test__ = False

    def __init__(self, group: str, name: str, func: Callable[..., Any], path: pathlib.Path, cls: Optional[type] = None):
        self.group = group
        self.name = name
        self.func = func
        self.path = path
        self.cls = cls

    @property
    def id(self) -> str:
        return f"{self.group}#{self.name}"

    def span(self) -> Optional[Tuple[int, int]]:
        try:
            lines, start = inspect.getsourcelines(self.func)
        except (TypeError, OSError):
            return None
        return start, start + len(lines) - 1

    def covers(self, line: int) -> bool:
        span = self.span()
        return span is not None and span[0] <= line <= span[1]

    def run(self) -> TestResult:
        failures: Tuple[Failure, ...] = ()
        exc: Optional[BaseException] = None
        t0 = time.perf_counter()
        try:
            target = getattr(self.cls(), self.name) if self.cls is not None else self.func
            target()
            outcome = Outcome.PASS
        except Skip as e:
            exc, outcome = e, Outcome.SKIP
            failures = (Failure(Outcome.SKIP.label, e.reason),)
        except AssertionError as e:
            exc, outcome = e, Outcome.FAILURE
            failures = (Failure(Outcome.FAILURE.label, str(e) or "Failed assertion, no message given."),)
        except Exception as e:
            exc, outcome = e, Outcome.ERROR
            failures = (Failure(Outcome.ERROR.label, self._error_message(e)),)
        elapsed = time.perf_counter() - t0

        location = self.id
        site = self._assertion_site(exc) if exc is not None else None
        if site:
            location = f"{location} [{site}]"
        return TestResult(group=self.group, name=self.name, time=elapsed, outcome=outcome,
                          failures=failures, location=location, source=self.func)

    def _assertion_site(self, exc: BaseException) -> Optional[str]:
        # only lines inside the test itself, so path:line selects it again
        span = self.span()
        if span is None:
            return None
        here = str(self.path.resolve())
        site = None
        for frame in traceback.extract_tb(exc.__traceback__):
            if str(pathlib.Path(frame.filename).resolve()) == here and span[0] <= (frame.lineno or 0) <= span[1]:
                site = f"{frame.filename}:{frame.lineno}"
        return site

    @staticmethod
    def _error_message(exc: BaseException) -> str:
        frames = [f for f in traceback.extract_tb(exc.__traceback__)
                  if PACKAGE_DIR not in pathlib.Path(f.filename).resolve().parents]
        trace = "\n".join(f"    {f.filename}:{f.lineno}:in {f.name}" for f in frames)
        return f"{type(exc).__name__}: {exc}\n{trace}" if trace else f"{type(exc).__name__}: {exc}"

def parse_target(target: str) -> Tuple[str, Optional[int]]:
    """Split ``path:line`` into its parts; a bare path has no line."""
    path, sep, line = target.rpartition(":")
    if sep and path and line.isdigit():
        return path, int(line)
    return target, None

def expand_targets(targets: Iterable[str]) -> List[Tuple[pathlib.Path, Optional[int]]]:
    expanded: List[Tuple[pathlib.Path, Optional[int]]] = []
    for target in targets:
        raw, line = parse_target(target)
        p = pathlib.Path(raw)
        if p.is_dir():
            files = sorted(set(p.rglob("test_*.py")) | set(p.rglob("*_test.py")))
            expanded.extend((f, None) for f in files)
        elif p.is_file():
            expanded.append((p, line))
        else:
            raise DiscoveryError("no such file or directory", target)
    return expanded

def _load_module(path: pathlib.Path):
    resolved = path.resolve()
    digest = hashlib.md5(str(resolved).encode()).hexdigest()[:8]
    mod_name = f"_rerun_testkit_{path.stem}_{digest}"
    if mod_name in sys.modules:
        return sys.modules[mod_name]
    spec = importlib.util.spec_from_file_location(mod_name, resolved)
    if spec is None or spec.loader is None:
        raise DiscoveryError("not a Python module", str(path))
    # sibling helpers import the way they would under any other runner
    parent = str(resolved.parent)
    if parent not in sys.path:
        sys.path.insert(0, parent)
    module = importlib.util.module_from_spec(spec)
    sys.modules[mod_name] = module
    try:
        spec.loader.exec_module(module)
    except Exception as e:
        del sys.modules[mod_name]
        raise DiscoveryError(f"{type(e).__name__}: {e}", str(path)) from e
    return module

def discover(path: pathlib.Path, line: Optional[int] = None, name: Optional[str] = None) -> List[TestCase]:
    """Collect ``test*`` functions and ``Test*`` classes' ``test*`` methods, in source order."""
    module = _load_module(path)
    cases: List[TestCase] = []
    for attr, obj in vars(module).items():
        if getattr(obj, "__module__", None) != module.__name__:
            continue
        if inspect.isfunction(obj) and attr.startswith("test"):
            cases.append(TestCase(path.stem, attr, obj, path))
        elif inspect.isclass(obj) and attr.startswith("Test"):
            for meth_name, member in vars(obj).items():
                if meth_name.startswith("test") and inspect.isfunction(member):
                    cases.append(TestCase(attr, meth_name, member, path, cls=obj))
    if line is not None:
        cases = [c for c in cases if c.covers(line)]
    if name is not None:
        cases = [c for c in cases if name in (c.name, c.id)]
    return cases

class TestRunner:
    __test__ = False

    def __init__(self, reporters: Sequence[Any], log: Optional[logging.Logger] = None):
        self.reporters = list(reporters)
        self.log = log or logging.getLogger("rerun_testkit")

    def discover(self, targets: Sequence[str], name: Optional[str] = None) -> List[TestCase]:
        tests: List[TestCase] = []
        for path, line in expand_targets(targets):
            found = discover(path, line=line, name=name)
            self.log.debug("Discovered %d test(s) in %s", len(found), path)
            if not found and line is not None:
                self.log.warning("No test at %s:%d", path, line)
                raise DiscoveryError(f"no test at line {line}", f"{path}:{line}")
            tests.extend(found)
        if not tests and name is not None:
            self.log.warning("No test named %s", name)
            raise DiscoveryError(f"no test named '{name}'", " ".join(targets))
        return tests

    def run(self, targets: Sequence[str], name: Optional[str] = None) -> SuiteResult:
        test_cases = self.discover(targets, name=name)
        for reporter in self.reporters:
            reporter.start()
        results: List[TestResult] = []
        aborted = False
        for tc in test_cases:
            res = tc.run()
            results.append(res)
            signals = [reporter.record(res) for reporter in self.reporters]
            if any(isinstance(s, Aborted) for s in signals):
                self.log.warning("Interrupted. Exiting...")
                aborted = True
                break
        for reporter in self.reporters:
            reporter.report()
        return SuiteResult(suite=" ".join(targets), cases=results, aborted=aborted)
