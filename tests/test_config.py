"""Tests for reporter configuration."""

import os

import pytest
from pydantic import ValidationError

from rerun_testkit.config import DEFAULT_EXECUTABLE, ReporterConfig, RunOptions, load_config
from rerun_testkit.exceptions import ConfigError


class TestRunOptions:
    """Tests for RunOptions."""

    def test_defaults(self) -> None:
        """Default flags match the CLI defaults."""
        options = RunOptions()
        assert options.verbose is False
        assert options.color is True
        assert options.fail_fast is False
        assert options.output_inline is True

    def test_frozen(self) -> None:
        """Options cannot change during a run."""
        options = RunOptions()
        with pytest.raises(ValidationError):
            options.verbose = True  # type: ignore[misc]


class TestReporterConfig:
    """Tests for ReporterConfig."""

    def test_defaults(self, monkeypatch, tmp_path) -> None:
        """The app root defaults to the working directory."""
        monkeypatch.delenv("RERUN_TESTKIT_ROOT", raising=False)
        monkeypatch.chdir(tmp_path)
        cfg = ReporterConfig()
        assert cfg.executable == DEFAULT_EXECUTABLE
        assert cfg.app_root == os.getcwd()

    def test_app_root_from_env(self, monkeypatch) -> None:
        """RERUN_TESTKIT_ROOT is used when no root is given."""
        monkeypatch.setenv("RERUN_TESTKIT_ROOT", "/srv/engine/")
        assert ReporterConfig().app_root == "/srv/engine"

    def test_explicit_root_wins(self, monkeypatch) -> None:
        """An explicit root beats the environment."""
        monkeypatch.setenv("RERUN_TESTKIT_ROOT", "/srv/engine")
        assert ReporterConfig(app_root="/app").app_root == "/app"


class TestLoadConfig:
    """Tests for load_config()."""

    def test_from_yaml(self, tmp_path) -> None:
        """YAML values populate the config."""
        path = tmp_path / "rerun.yaml"
        path.write_text(
            "executable: bin/test\n"
            "app_root: /srv/app\n"
            "options:\n"
            "  verbose: true\n"
            "  color: false\n"
            "  fail_fast: true\n"
            "  output_inline: false\n"
        )
        cfg = load_config(str(path))
        assert cfg.executable == "bin/test"
        assert cfg.app_root == "/srv/app"
        assert cfg.options == RunOptions(verbose=True, color=False, fail_fast=True, output_inline=False)

    def test_empty_file(self, tmp_path) -> None:
        """An empty file gives the defaults."""
        path = tmp_path / "empty.yaml"
        path.write_text("")
        assert load_config(str(path)).options == RunOptions()

    def test_missing_file(self, tmp_path) -> None:
        """A missing file raises ConfigError."""
        with pytest.raises(ConfigError, match="does not exist"):
            load_config(str(tmp_path / "nope.yaml"))

    def test_not_a_mapping(self, tmp_path) -> None:
        """Top-level lists are rejected."""
        path = tmp_path / "list.yaml"
        path.write_text("- a\n- b\n")
        with pytest.raises(ConfigError, match="Expected a mapping"):
            load_config(str(path))

    def test_invalid_value(self, tmp_path) -> None:
        """Validation errors surface as ConfigError."""
        path = tmp_path / "bad.yaml"
        path.write_text("options:\n  verbose: [1, 2]\n")
        with pytest.raises(ConfigError) as excinfo:
            load_config(str(path))
        assert excinfo.value.path == str(path)

    def test_invalid_yaml(self, tmp_path) -> None:
        """Malformed YAML surfaces as ConfigError."""
        path = tmp_path / "broken.yaml"
        path.write_text("options: [unclosed\n")
        with pytest.raises(ConfigError, match="Invalid YAML"):
            load_config(str(path))
