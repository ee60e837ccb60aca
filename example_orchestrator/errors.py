"""Exceptions raised by the orchestrator."""

from example_orchestrator.models.descriptor import TestDescriptor


class OrchestratorError(Exception):
    """Base class for errors that stop a batch."""


class ConfigurationError(OrchestratorError):
    """Raised for unknown backends, invalid settings or malformed scenarios."""


class BuildFailure(OrchestratorError):
    """Raised when an example fails to compile."""

    def __init__(self, descriptor: TestDescriptor, detail: str) -> None:
        super().__init__(f"Failed to build {descriptor.label}: {detail}")
        self.descriptor = descriptor
        self.detail = detail


class SpawnFailure(OrchestratorError):
    """Raised when a backend executable cannot be started.

    Never stops a batch: the run lifecycle turns it into a failed outcome.
    """

    def __init__(self, program: str, cause: OSError) -> None:
        super().__init__(f"Cannot start {program}: {cause}")
        self.program = program
        self.cause = cause
