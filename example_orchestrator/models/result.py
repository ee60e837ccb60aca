"""Models for test execution results."""

from collections.abc import Sequence
from dataclasses import dataclass, field
from pathlib import Path
from typing import Literal

from example_orchestrator.models.descriptor import TestDescriptor

type FailureReason = Literal[
    "exit-status",
    "timeout",
    "scenario-mismatch",
    "spawn-failure",
    "build-failure",
    "error",
]


@dataclass(frozen=True, kw_only=True)
class RunOutcome:
    """Result of a single test execution.

    Produced exactly once per executed (or failed-to-build) descriptor.
    """

    descriptor: TestDescriptor
    passed: bool
    log_path: Path
    duration: float
    reason: Literal["passed"] | FailureReason = "passed"
    exit_code: int | None = None
    message: str | None = None


@dataclass(frozen=True, kw_only=True)
class BatchSummary:
    """Totals for one orchestrator batch."""

    passed_count: int = 0
    failed_count: int = 0
    skipped_count: int = 0
    total_build_time: float = 0.0
    total_run_time: float = 0.0
    outcomes: Sequence[RunOutcome] = field(default_factory=tuple)

    @property
    def has_failures(self) -> bool:
        """Return True if any test failed or was never started."""
        return self.failed_count > 0 or self.skipped_count > 0
