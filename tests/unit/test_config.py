"""Tests for run configuration."""

from pathlib import Path

import pytest

from example_orchestrator.config import RunConfig, default_parallelism
from example_orchestrator.errors import ConfigurationError


def test_defaults(tmp_path: Path) -> None:
    """Unspecified settings fall back to their defaults."""
    config = RunConfig.build(project_path=tmp_path, output_dir=tmp_path / "out")

    assert config.service == "simulate"
    assert config.timeout == 5.0
    assert config.continue_on_error is False
    assert config.parallelism == default_parallelism()
    assert config.tmp_dir == tmp_path / "out" / "tmp"


def test_zero_parallelism_uses_cpu_count(tmp_path: Path) -> None:
    """Parallelism 0 selects one worker per CPU."""
    config = RunConfig.build(project_path=tmp_path, output_dir=tmp_path, parallelism=0)

    assert config.parallelism == default_parallelism()


def test_relative_paths_become_absolute(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    """Relative project and output paths are resolved against the cwd."""
    monkeypatch.chdir(tmp_path)

    config = RunConfig.build(project_path=Path("fw"), output_dir=Path("results"))

    assert config.project_path == tmp_path / "fw"
    assert config.output_dir == tmp_path / "results"


@pytest.mark.parametrize(
    "overrides",
    [
        {"timeout": 0},
        {"timeout": -1.5},
        {"parallelism": -2},
    ],
)
def test_invalid_values_raise_configuration_error(
    tmp_path: Path, overrides: dict[str, object]
) -> None:
    """Validation problems are reported as ConfigurationError."""
    with pytest.raises(ConfigurationError, match="Invalid configuration"):
        RunConfig.build(project_path=tmp_path, output_dir=tmp_path, **overrides)


def test_config_is_immutable(tmp_path: Path) -> None:
    """A built configuration cannot be modified."""
    config = RunConfig.build(project_path=tmp_path, output_dir=tmp_path)

    with pytest.raises(ValueError):
        config.timeout = 10  # type: ignore[misc]
