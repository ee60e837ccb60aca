"""Sequential compilation of examples before any test runs."""

import asyncio
import logging
import time
from collections.abc import Sequence
from dataclasses import dataclass, field

from example_orchestrator.archive import archive_log
from example_orchestrator.backends.base import ArtifactPaths
from example_orchestrator.config import RunConfig
from example_orchestrator.errors import BuildFailure
from example_orchestrator.models.descriptor import TestDescriptor
from example_orchestrator.models.result import RunOutcome

log = logging.getLogger(__name__)


@dataclass(frozen=True, kw_only=True)
class BuildReport:
    """Result of the build phase."""

    built: Sequence[TestDescriptor] = field(default_factory=tuple)
    failed: Sequence[RunOutcome] = field(default_factory=tuple)
    duration: float = 0.0


@dataclass(frozen=True, kw_only=True)
class BuildCoordinator:
    """Build every descriptor, one at a time.

    Builds share the build tool's output directory, so they never overlap.
    """

    config: RunConfig
    build_tool: str = "cargo"

    def build_command(self, descriptor: TestDescriptor) -> Sequence[str]:
        """Return the build tool invocation for one descriptor."""
        command = [self.build_tool, "build", "--example", descriptor.name]
        if descriptor.build_mode == "release":
            command.append("--release")
        return command

    async def build_all(self, descriptors: Sequence[TestDescriptor]) -> BuildReport:
        """Build descriptors in order.

        Args:
            descriptors: Descriptors in run order

        Returns:
            Descriptors that built, failed outcomes for those that did not
            (only when continue_on_error is set) and the total build time

        Raises:
            BuildFailure: On the first failing build, unless
                continue_on_error is set

        """
        built: list[TestDescriptor] = []
        failed: list[RunOutcome] = []
        total = 0.0

        for descriptor in descriptors:
            started = time.monotonic()
            output, error = await self._build(descriptor)
            elapsed = time.monotonic() - started
            total += elapsed

            if error is None:
                built.append(descriptor)
                continue

            if not self.config.continue_on_error:
                raise BuildFailure(descriptor, error)

            log.error("Failed to build %s: %s", descriptor.label, error)
            failed.append(self._record_failure(descriptor, output, error, elapsed))

        log.info("Build phase finished in %.2fs", total)
        return BuildReport(built=built, failed=failed, duration=total)

    async def _build(self, descriptor: TestDescriptor) -> tuple[bytes, str | None]:
        """Run the build tool, returning its output and an error, if any."""
        command = self.build_command(descriptor)
        log.info("Building %s in %s mode...", descriptor.name, descriptor.build_mode)

        try:
            process = await asyncio.create_subprocess_exec(
                *command,
                cwd=self.config.project_path,
                stdin=asyncio.subprocess.DEVNULL,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.STDOUT,
            )
        except OSError as e:
            return b"", f"cannot start {self.build_tool}: {e}"

        output, _ = await process.communicate()
        if process.returncode != 0:
            tail = output.decode("utf-8", errors="replace").strip().splitlines()[-5:]
            for line in tail:
                log.warning("[%s build] %s", descriptor.label, line)
            return output, f"{self.build_tool} exited with status {process.returncode}"

        return output, None

    def _record_failure(
        self,
        descriptor: TestDescriptor,
        output: bytes,
        error: str,
        elapsed: float,
    ) -> RunOutcome:
        staging = ArtifactPaths.for_descriptor(self.config, descriptor).log
        staging.parent.mkdir(parents=True, exist_ok=True)
        staging.write_bytes(output + f"\n{error}\n".encode())

        return RunOutcome(
            descriptor=descriptor,
            passed=False,
            log_path=archive_log(staging, self.config.output_dir, passed=False),
            duration=elapsed,
            reason="build-failure",
            message=error,
        )
