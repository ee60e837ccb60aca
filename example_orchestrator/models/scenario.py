"""Models for scenario files describing expected serial output."""

from collections.abc import Sequence

from pydantic import Field

from example_orchestrator.models.base import Model


class ScenarioStep(Model):
    """A single expected serial event."""

    wait_serial: str = Field(
        ...,
        alias="wait-serial",
        min_length=1,
        description="Literal substring to await on the serial output",
    )


class Scenario(Model):
    """Ordered list of serial events a test must observe."""

    steps: Sequence[ScenarioStep] = Field(
        default_factory=list, description="Steps matched strictly in order"
    )
