"""Bounded-concurrency execution of run lifecycles."""

import asyncio
import logging
import time
from collections.abc import Sequence
from dataclasses import dataclass

from example_orchestrator.aggregator import (
    AggregatorMessage,
    BatchFinished,
    ResultAggregator,
)
from example_orchestrator.archive import FAILED_DIR
from example_orchestrator.backends.base import ArtifactPaths, Backend, CommandSpec
from example_orchestrator.config import RunConfig
from example_orchestrator.lifecycle import RunLifecycle
from example_orchestrator.models.descriptor import TestDescriptor
from example_orchestrator.models.result import BatchSummary, RunOutcome
from example_orchestrator.models.scenario import Scenario
from example_orchestrator.scenario_loader import load_scenario

log = logging.getLogger(__name__)


@dataclass(frozen=True, kw_only=True)
class RunJob:
    """A descriptor with everything needed to run it."""

    descriptor: TestDescriptor
    spec: CommandSpec
    scenario: Scenario | None
    paths: ArtifactPaths


@dataclass(frozen=True, kw_only=True)
class Scheduler:
    """Runs built descriptors on a backend with bounded parallelism."""

    config: RunConfig
    backend: Backend

    async def prepare(self, descriptors: Sequence[TestDescriptor]) -> Sequence[RunJob]:
        """Build commands and load scenarios for every descriptor.

        Raises:
            ConfigurationError: If any scenario file is malformed

        """
        jobs: list[RunJob] = []
        for descriptor in descriptors:
            paths = ArtifactPaths.for_descriptor(self.config, descriptor)
            jobs.append(
                RunJob(
                    descriptor=descriptor,
                    spec=self.backend.command_spec(
                        descriptor, paths, self.config.timeout
                    ),
                    scenario=await load_scenario(paths.scenario),
                    paths=paths,
                )
            )
        return jobs

    async def run_all(
        self,
        descriptors: Sequence[TestDescriptor],
        build_failures: Sequence[RunOutcome] = (),
        build_time: float = 0.0,
    ) -> BatchSummary:
        """Run every descriptor once and summarize the batch.

        Args:
            descriptors: Built descriptors, in run order
            build_failures: Outcomes already recorded by the build phase
            build_time: Duration of the build phase, for the summary

        Returns:
            The batch summary. When continue_on_error is off, the first
            failure stops new runs from starting; runs in flight still
            finish and the never-started ones are counted as skipped. A run
            that raises becomes a failed outcome with reason "error" and
            also stops new runs from starting.

        Raises:
            ConfigurationError: If a scenario is malformed (before any run)

        """
        jobs = await self.prepare(descriptors)
        lifecycle = RunLifecycle(
            output_dir=self.config.output_dir, timeout=self.config.timeout
        )

        messages: asyncio.Queue[AggregatorMessage] = asyncio.Queue()
        aggregator = asyncio.create_task(
            ResultAggregator(build_time=build_time).consume(messages)
        )
        for outcome in build_failures:
            messages.put_nowait(outcome)

        pending: asyncio.Queue[RunJob] = asyncio.Queue()
        for job in jobs:
            pending.put_nowait(job)
        stop = asyncio.Event()

        log.info(
            "Running %d test(s) with parallelism %d",
            len(jobs),
            self.config.parallelism,
        )
        started = time.monotonic()
        results = await asyncio.gather(
            *(
                self._worker(lifecycle, pending, messages, stop)
                for _ in range(self.config.parallelism)
            ),
            return_exceptions=True,
        )

        messages.put_nowait(
            BatchFinished(
                run_time=time.monotonic() - started,
                skipped_count=pending.qsize(),
            )
        )
        summary = await aggregator

        for result in results:
            if isinstance(result, BaseException):
                raise result
        return summary

    async def _worker(
        self,
        lifecycle: RunLifecycle,
        pending: asyncio.Queue[RunJob],
        messages: asyncio.Queue[AggregatorMessage],
        stop: asyncio.Event,
    ) -> None:
        while not stop.is_set():
            try:
                job = pending.get_nowait()
            except asyncio.QueueEmpty:
                return

            started = time.monotonic()
            try:
                outcome = await lifecycle.run(
                    job.descriptor, job.spec, job.scenario, job.paths
                )
            except Exception as e:
                log.exception(
                    "Run of %s crashed, not starting further tests",
                    job.descriptor.label,
                )
                stop.set()
                await messages.put(
                    self._crash_outcome(job, e, time.monotonic() - started)
                )
                continue

            await messages.put(outcome)
            if not outcome.passed and not self.config.continue_on_error:
                log.error(
                    "%s failed and continue-on-error is off, "
                    "not starting further tests",
                    job.descriptor.label,
                )
                stop.set()

    def _crash_outcome(
        self, job: RunJob, error: Exception, duration: float
    ) -> RunOutcome:
        # The staged log may not have been archived, so point at where it belongs
        return RunOutcome(
            descriptor=job.descriptor,
            passed=False,
            log_path=self.config.output_dir / FAILED_DIR / job.paths.log.name,
            duration=duration,
            reason="error",
            message=f"{type(error).__name__}: {error}",
        )
