"""Ordered substring matching over a stream of serial output lines."""

from example_orchestrator.models.scenario import Scenario


class ScenarioMatcher:
    """Track progress through a scenario's steps.

    The state is the index of the next unmatched step. A line advances the
    state by at most one, and only if it contains the text of the current
    step; later steps are never looked at ahead of time. Without a scenario
    the matcher is satisfied from the start.
    """

    def __init__(self, scenario: Scenario | None = None) -> None:
        self._expected = (
            tuple(step.wait_serial for step in scenario.steps) if scenario else ()
        )
        self._position = 0

    @property
    def position(self) -> int:
        """Number of steps matched so far."""
        return self._position

    @property
    def total(self) -> int:
        return len(self._expected)

    @property
    def satisfied(self) -> bool:
        return self._position >= len(self._expected)

    @property
    def pending(self) -> str | None:
        """Text of the step currently awaited, if any."""
        if self.satisfied:
            return None
        return self._expected[self._position]

    def feed(self, line: str) -> bool:
        """Observe one line of output and return whether all steps matched."""
        if not self.satisfied and self._expected[self._position] in line:
            self._position += 1
        return self.satisfied
