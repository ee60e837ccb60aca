"""Hardware flasher backend implementation."""

from dataclasses import dataclass
from typing import Self

from example_orchestrator.backends.base import ArtifactPaths, Backend, CommandSpec
from example_orchestrator.backends.flash.config import FlashConfig
from example_orchestrator.models.descriptor import TestDescriptor


@dataclass(frozen=True, kw_only=True)
class FlashBackend(Backend):
    """Flash the artifact onto a connected board and monitor its serial port.

    The flasher keeps monitoring until it is killed, so the orchestrator
    matches the scenario and records the serial log itself.
    """

    config: FlashConfig

    @classmethod
    def from_config(cls, config: FlashConfig) -> Self:
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
                "flash",
                "-p",
                self.config.device_path,
                "--monitor",
                str(paths.artifact),
            ],
        )
