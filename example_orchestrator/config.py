"""Validated configuration shared by every run of a batch."""

import os
from pathlib import Path
from typing import Any

from pydantic import Field, ValidationError, field_validator

from example_orchestrator.errors import ConfigurationError
from example_orchestrator.models.base import Model

DEFAULT_TARGET = "riscv32imac-unknown-none-elf"


def default_parallelism() -> int:
    """Return the number of available processing units (at least one)."""
    return os.cpu_count() or 1


class RunConfig(Model):
    """Configuration for one orchestrator batch."""

    project_path: Path = Field(..., description="Root of the firmware project")
    output_dir: Path = Field(..., description="Where serial logs are archived")
    service: str = Field(default="simulate", description="Backend key")
    timeout: float = Field(default=5.0, gt=0, description="Per-test timeout (s)")
    continue_on_error: bool = False
    skip_build: bool = False
    parallelism: int = Field(default_factory=default_parallelism, ge=1)
    target: str = DEFAULT_TARGET
    examples_dir: str = "examples"
    scenarios_dir: str = "scenarios"

    @field_validator("project_path", "output_dir")
    @classmethod
    def _absolute(cls, value: Path) -> Path:
        return value if value.is_absolute() else Path.cwd() / value

    @classmethod
    def build(cls, **values: Any) -> "RunConfig":
        """Create a config, reporting validation problems as ConfigurationError.

        A ``parallelism`` of 0 or None selects the number of CPUs.
        """
        if not values.get("parallelism"):
            values.pop("parallelism", None)
        try:
            return cls(**values)
        except ValidationError as e:
            raise ConfigurationError(f"Invalid configuration: {e}") from e

    @property
    def tmp_dir(self) -> Path:
        """Staging directory for logs of runs in progress."""
        return self.output_dir / "tmp"
