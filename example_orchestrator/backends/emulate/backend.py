"""Emulator backend implementation."""

from dataclasses import dataclass
from typing import Self

from example_orchestrator.backends.base import ArtifactPaths, Backend, CommandSpec
from example_orchestrator.backends.emulate.config import EmulateConfig
from example_orchestrator.models.descriptor import TestDescriptor


@dataclass(frozen=True, kw_only=True)
class EmulateBackend(Backend):
    """Run the artifact in an emulator.

    The emulator has no scenario or log support of its own.
    """

    config: EmulateConfig

    @classmethod
    def from_config(cls, config: EmulateConfig) -> Self:
        return cls(config=config)

    def command_spec(
        self,
        descriptor: TestDescriptor,
        paths: ArtifactPaths,
        timeout: float,
    ) -> CommandSpec:
        arguments = [str(paths.artifact)]
        if descriptor.build_mode == "release":
            arguments.append("--release")
        return CommandSpec(program=self.config.program, arguments=arguments)
