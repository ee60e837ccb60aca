"""Fixtures for integration tests."""

import sys
import textwrap
from pathlib import Path
from typing import Protocol

import pytest

from example_orchestrator.backends.base import ArtifactPaths, CommandSpec
from example_orchestrator.config import RunConfig
from example_orchestrator.models.descriptor import TestDescriptor


def python_backend(script: str, **capabilities: bool | float) -> CommandSpec:
    """Return a command running a Python script as a fake backend."""
    return CommandSpec(
        program=sys.executable,
        arguments=["-u", "-c", textwrap.dedent(script)],
        **capabilities,  # type: ignore[arg-type]
    )


class PathsFn(Protocol):
    """Protocol for artifact path factory."""

    def __call__(self, descriptor: TestDescriptor) -> ArtifactPaths:
        """Return paths for a descriptor."""


@pytest.fixture
def project(tmp_path: Path) -> Path:
    """Create an empty firmware project directory."""
    project = tmp_path / "fw"
    (project / "examples").mkdir(parents=True)
    return project


@pytest.fixture
def output_dir(tmp_path: Path) -> Path:
    """Return the directory logs are archived to."""
    return tmp_path / "out"


@pytest.fixture
def run_config(project: Path, output_dir: Path) -> RunConfig:
    """Create a configuration with a short timeout."""
    return RunConfig.build(
        project_path=project,
        output_dir=output_dir,
        timeout=2.0,
        parallelism=2,
        continue_on_error=True,
    )


@pytest.fixture
def make_paths(run_config: RunConfig) -> PathsFn:
    """Return a function computing artifact paths for a descriptor."""

    def _paths(descriptor: TestDescriptor) -> ArtifactPaths:
        return ArtifactPaths.for_descriptor(run_config, descriptor)

    return _paths
