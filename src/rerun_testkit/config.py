
from pydantic import BaseModel, ConfigDict, Field, ValidationError
from typing import Optional
import os, pathlib, yaml

from .exceptions import ConfigError

DEFAULT_EXECUTABLE = "rerun-testkit run"
ROOT_ENV_VAR = "RERUN_TESTKIT_ROOT"

def resolve_app_root(value: Optional[str] = None) -> str:
    root = value or os.environ.get(ROOT_ENV_VAR) or os.getcwd()
    return root.rstrip("/") or "/"

class RunOptions(BaseModel):
    model_config = ConfigDict(frozen=True)

    verbose: bool = Field(False, description="One line per test instead of a progress bar")
    color: bool = Field(True, description="ANSI colors when the stream is a terminal")
    fail_fast: bool = Field(False, description="Abort the run on the first failure")
    output_inline: bool = Field(True, description="Print failures as they happen")

class ReporterConfig(BaseModel):
    executable: str = Field(DEFAULT_EXECUTABLE, description="Command prefix used in rerun snippets")
    app_root: Optional[str] = Field(None, description="Paths in rerun snippets are made relative to this")
    options: RunOptions = Field(default_factory=RunOptions)

    def model_post_init(self, __context) -> None:
        self.app_root = resolve_app_root(self.app_root)

def load_config(path: str) -> ReporterConfig:
    p = pathlib.Path(path)
    if not p.exists():
        raise ConfigError("File does not exist.", path=path)
    try:
        data = yaml.safe_load(p.read_text()) or {}
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML: {e}", path=path) from e
    if not isinstance(data, dict):
        raise ConfigError(f"Expected a mapping, got {type(data).__name__}", path=path)
    try:
        return ReporterConfig.model_validate(data)
    except ValidationError as e:
        raise ConfigError(str(e), path=path) from e
