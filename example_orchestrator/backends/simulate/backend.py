"""Simulator backend implementation."""

from dataclasses import dataclass
from typing import Self

from example_orchestrator.backends.base import ArtifactPaths, Backend, CommandSpec
from example_orchestrator.backends.simulate.config import SimulateConfig
from example_orchestrator.models.descriptor import TestDescriptor


@dataclass(frozen=True, kw_only=True)
class SimulateBackend(Backend):
    """Run the artifact in the simulator CLI.

    The simulator receives the scenario file, enforces the timeout and
    writes the serial log itself; its exit status is the verdict.
    """

    config: SimulateConfig

    @classmethod
    def from_config(cls, config: SimulateConfig) -> Self:
        return cls(config=config)

    def command_spec(
        self,
        descriptor: TestDescriptor,
        paths: ArtifactPaths,
        timeout: float,
    ) -> CommandSpec:
        return CommandSpec(
            program=self.config.program,
            arguments=[
                "--elf",
                str(paths.artifact),
                "--scenario",
                str(paths.scenario),
                "--timeout",
                # The simulator CLI takes milliseconds
                str(round(timeout * 1000)),
                "--serial-log-file",
                str(paths.log),
            ],
            supplies_scenario=True,
            captures_log_directly=True,
            timeout_grace=self.config.timeout_grace,
        )
