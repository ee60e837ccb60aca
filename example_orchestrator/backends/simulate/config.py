"""Configuration for the simulator backend."""

from pydantic import BaseModel, Field


class SimulateConfig(BaseModel):
    """Configuration for the simulator backend.

    The run timeout is configured in seconds and handed to the simulator
    CLI in milliseconds (``--timeout 5000`` for 5s).
    """

    program: str = Field(
        default="wokwi-cli",
        description="Simulator CLI, invoked with --timeout in milliseconds",
    )
    # Extra seconds granted before the orchestrator kills the simulator, so
    # the simulator's own timeout fires first and its exit status is observed
    timeout_grace: float = Field(default=2.0, ge=0)
