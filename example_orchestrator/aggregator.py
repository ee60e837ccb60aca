"""Collect run outcomes into a batch summary."""

import asyncio
import logging
from dataclasses import dataclass

from example_orchestrator.models.result import BatchSummary, RunOutcome

log = logging.getLogger(__name__)


@dataclass(frozen=True, kw_only=True)
class BatchFinished:
    """Last message of a batch, sent once every worker has stopped."""

    run_time: float
    skipped_count: int = 0


type AggregatorMessage = RunOutcome | BatchFinished


@dataclass(frozen=True, kw_only=True)
class ResultAggregator:
    """Sole owner of the batch counters.

    Workers never touch the counters; they put outcomes on a queue that this
    aggregator drains.
    """

    build_time: float = 0.0

    async def consume(self, queue: asyncio.Queue[AggregatorMessage]) -> BatchSummary:
        """Receive outcomes until the batch is finished.

        Args:
            queue: Channel carrying RunOutcome messages, closed by BatchFinished

        Returns:
            Totals for the batch

        """
        outcomes: list[RunOutcome] = []

        while not isinstance(message := await queue.get(), BatchFinished):
            outcomes.append(message)
            log.info(
                "Test %s in %s mode: %s",
                message.descriptor.name,
                message.descriptor.build_mode,
                "passed" if message.passed else "failed",
            )

        passed = sum(1 for outcome in outcomes if outcome.passed)
        return BatchSummary(
            passed_count=passed,
            failed_count=len(outcomes) - passed,
            skipped_count=message.skipped_count,
            total_build_time=self.build_time,
            total_run_time=message.run_time,
            outcomes=outcomes,
        )
