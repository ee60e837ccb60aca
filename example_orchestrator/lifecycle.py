"""Run one compiled example against a backend process."""

import asyncio
import contextlib
import logging
import os
import shlex
import signal
import time
from dataclasses import dataclass
from pathlib import Path
from typing import BinaryIO

from example_orchestrator.archive import archive_log
from example_orchestrator.backends.base import ArtifactPaths, CommandSpec
from example_orchestrator.errors import SpawnFailure
from example_orchestrator.matcher import ScenarioMatcher
from example_orchestrator.models.descriptor import TestDescriptor
from example_orchestrator.models.result import FailureReason, RunOutcome
from example_orchestrator.models.scenario import Scenario

log = logging.getLogger(__name__)

# Serial lines longer than this are dropped by the relay
STREAM_LIMIT = 1024 * 1024
# Written to the serial log in place of a dropped line
TRUNCATION_MARKER = b"[orchestrator: overlong output line dropped]\n"
# Time allowed for reading output still buffered after the process exited
DRAIN_TIMEOUT = 1.0
# Time allowed for the killed process group to release the output pipe
KILL_TIMEOUT = 2.0


@dataclass(frozen=True, kw_only=True)
class Verdict:
    """Pass/fail decision of a run, before its log is archived."""

    passed: bool
    reason: FailureReason | None = None
    exit_code: int | None = None
    message: str | None = None


@dataclass(frozen=True, kw_only=True)
class RunLifecycle:
    """Spawn a backend, watch its output and classify the result.

    Three things race once the process is started: its natural exit, the
    scenario matcher reaching its last step, and the timeout. The first one
    decides the verdict; the process is killed if still running and its
    output relay is cancelled before the outcome is returned.
    """

    output_dir: Path
    timeout: float

    async def run(
        self,
        descriptor: TestDescriptor,
        spec: CommandSpec,
        scenario: Scenario | None,
        paths: ArtifactPaths,
    ) -> RunOutcome:
        """Execute one test and archive its serial log.

        Args:
            descriptor: Example and build mode being tested
            spec: Backend command and its capabilities
            scenario: Expected serial events, or None to rely on exit status
            paths: Locations of the artifact, scenario and staging log

        Returns:
            The outcome, with the log already moved to passed/ or failed/

        """
        started = time.monotonic()
        paths.log.parent.mkdir(parents=True, exist_ok=True)
        paths.log.unlink(missing_ok=True)

        matcher = ScenarioMatcher(None if spec.supplies_scenario else scenario)
        log.info("Testing %s...", descriptor.label)
        log.info("Command: %s", shlex.join(spec.argv))

        try:
            verdict = await self._execute(descriptor, spec, matcher, paths)
        except SpawnFailure as e:
            log.error("%s: %s", descriptor.label, e)
            with paths.log.open("a", encoding="utf-8") as sink:
                sink.write(f"{e}\n")
            verdict = Verdict(passed=False, reason="spawn-failure", message=str(e))

        log_path = archive_log(paths.log, self.output_dir, verdict.passed)
        return RunOutcome(
            descriptor=descriptor,
            passed=verdict.passed,
            log_path=log_path,
            duration=time.monotonic() - started,
            reason=verdict.reason or "passed",
            exit_code=verdict.exit_code,
            message=verdict.message,
        )

    async def _execute(
        self,
        descriptor: TestDescriptor,
        spec: CommandSpec,
        matcher: ScenarioMatcher,
        paths: ArtifactPaths,
    ) -> Verdict:
        with contextlib.ExitStack() as stack:
            sink = (
                None
                if spec.captures_log_directly
                else stack.enter_context(paths.log.open("wb"))
            )
            process = await spawn(spec, paths.project)

            scenario_met = asyncio.Event()
            relay = asyncio.create_task(
                relay_output(descriptor, process, matcher, sink, scenario_met)
            )
            exited = asyncio.create_task(process.wait())
            matched = asyncio.create_task(scenario_met.wait())
            try:
                return await self._race(
                    descriptor, process, matcher, relay, exited, matched, spec
                )
            finally:
                await terminate(process)
                for task in (relay, exited, matched):
                    task.cancel()
                await asyncio.gather(relay, exited, matched, return_exceptions=True)

    async def _race(
        self,
        descriptor: TestDescriptor,
        process: asyncio.subprocess.Process,
        matcher: ScenarioMatcher,
        relay: asyncio.Task[None],
        exited: asyncio.Task[int],
        matched: asyncio.Task[bool],
        spec: CommandSpec,
    ) -> Verdict:
        done, _ = await asyncio.wait(
            {exited, matched},
            timeout=self.timeout + spec.timeout_grace,
            return_when=asyncio.FIRST_COMPLETED,
        )

        if matched in done:
            log.info(
                "%s: all %d scenario step(s) seen", descriptor.label, matcher.total
            )
            return Verdict(passed=True, exit_code=process.returncode)

        if exited in done:
            await asyncio.wait({relay}, timeout=DRAIN_TIMEOUT)
            exit_code = exited.result()
            if exit_code != 0:
                return Verdict(
                    passed=False,
                    reason="exit-status",
                    exit_code=exit_code,
                    message=f"Backend exited with status {exit_code}",
                )
            if not matcher.satisfied:
                return Verdict(
                    passed=False,
                    reason="scenario-mismatch",
                    exit_code=exit_code,
                    message=_pending_message("Output ended", matcher),
                )
            return Verdict(passed=True, exit_code=exit_code)

        log.warning("%s: timed out after %.1fs", descriptor.label, self.timeout)
        return Verdict(
            passed=False,
            reason="timeout",
            message=_pending_message(f"Timed out after {self.timeout:g}s", matcher),
        )


def _pending_message(prefix: str, matcher: ScenarioMatcher) -> str:
    if matcher.satisfied:
        return prefix
    return (
        f"{prefix} waiting for {matcher.pending!r} "
        f"(step {matcher.position + 1}/{matcher.total})"
    )


async def spawn(spec: CommandSpec, cwd: Path) -> asyncio.subprocess.Process:
    """Start a backend with stdout and stderr merged into one pipe.

    The backend leads its own session, so it and every helper it starts can
    be killed together.

    Raises:
        SpawnFailure: If the program is missing or cannot be executed

    """
    try:
        return await asyncio.create_subprocess_exec(
            *spec.argv,
            cwd=cwd,
            stdin=asyncio.subprocess.DEVNULL,
            stdout=asyncio.subprocess.PIPE,
            stderr=asyncio.subprocess.STDOUT,
            limit=STREAM_LIMIT,
            start_new_session=True,
        )
    except OSError as e:
        raise SpawnFailure(spec.program, e) from e


async def terminate(process: asyncio.subprocess.Process) -> None:
    """Kill the backend's process group and wait until the backend is gone.

    Children left behind by a wrapper script hold the output pipe open, and
    ``process.wait()`` does not return before that pipe is closed.
    """
    # The group outlives its leader while any member is alive
    with contextlib.suppress(ProcessLookupError):
        os.killpg(process.pid, signal.SIGKILL)
    try:
        await asyncio.wait_for(process.wait(), timeout=KILL_TIMEOUT)
    except TimeoutError:
        log.warning(
            "Backend %d still holds its output open after being killed",
            process.pid,
        )


async def relay_output(
    descriptor: TestDescriptor,
    process: asyncio.subprocess.Process,
    matcher: ScenarioMatcher,
    sink: BinaryIO | None,
    scenario_met: asyncio.Event,
) -> None:
    """Forward backend output to the log, the sink and the matcher.

    ``scenario_met`` is set once every step of a non-empty scenario matched.
    """
    assert process.stdout is not None
    gating = matcher.total > 0

    while True:
        try:
            chunk = await process.stdout.readline()
        except ValueError:
            log.warning("%s: dropped an overlong output line", descriptor.label)
            if sink is not None:
                sink.write(TRUNCATION_MARKER)
                sink.flush()
            continue
        if not chunk:
            return

        if sink is not None:
            sink.write(chunk)
            sink.flush()

        line = chunk.decode("utf-8", errors="replace").rstrip("\r\n")
        log.info("[%s] %s", descriptor.label, line)

        if gating and not scenario_met.is_set() and matcher.feed(line):
            scenario_met.set()
