"""Abstract base class for execution backends."""

from abc import ABC, abstractmethod
from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path

from example_orchestrator.config import RunConfig
from example_orchestrator.models.descriptor import TestDescriptor


@dataclass(frozen=True, kw_only=True)
class ArtifactPaths:
    """Filesystem locations involved in running one descriptor."""

    project: Path
    artifact: Path
    scenario: Path
    log: Path

    @classmethod
    def for_descriptor(
        cls, config: RunConfig, descriptor: TestDescriptor
    ) -> "ArtifactPaths":
        """Compute the paths the build tool and backends agree on."""
        project = config.project_path
        return cls(
            project=project,
            artifact=(
                project
                / "target"
                / config.target
                / descriptor.build_mode
                / "examples"
                / descriptor.name
            ),
            scenario=(
                project
                / config.scenarios_dir
                / descriptor.build_mode
                / f"{descriptor.name}.yaml"
            ),
            log=config.tmp_dir / f"{descriptor.label}.txt",
        )


@dataclass(frozen=True, kw_only=True)
class CommandSpec:
    """Everything the run lifecycle needs to launch a backend process.

    ``supplies_scenario`` means the backend checks the scenario itself, so the
    orchestrator does not match serial output. ``captures_log_directly``
    means the backend writes the serial log to ``ArtifactPaths.log`` on its
    own, so the orchestrator does not copy output into it.
    """

    program: str
    arguments: Sequence[str]
    supplies_scenario: bool = False
    captures_log_directly: bool = False
    timeout_grace: float = 0.0

    @property
    def argv(self) -> Sequence[str]:
        return [self.program, *self.arguments]


@dataclass(frozen=True, kw_only=True)
class Backend(ABC):
    """Maps a descriptor to the command running it on some target."""

    @abstractmethod
    def command_spec(
        self,
        descriptor: TestDescriptor,
        paths: ArtifactPaths,
        timeout: float,
    ) -> CommandSpec:
        """Build the command executing a compiled example.

        Args:
            descriptor: Example and build mode to run
            paths: Artifact, scenario and log locations for the descriptor
            timeout: Per-test timeout in seconds

        Returns:
            Program, arguments and capability flags for the run lifecycle

        """
