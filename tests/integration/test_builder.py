"""Integration tests for the build coordinator with a fake build tool."""

import sys
from pathlib import Path

import pytest

from example_orchestrator.builder import BuildCoordinator
from example_orchestrator.config import RunConfig
from example_orchestrator.errors import BuildFailure
from example_orchestrator.models.descriptor import TestDescriptor

# Invoked as "<python> build --example NAME [--release]" from the project dir
FAKE_BUILD_TOOL = """\
import sys, time
name = sys.argv[2]
mode = "release" if "--release" in sys.argv else "debug"
with open("builds.txt", "a") as log:
    log.write(f"start {name}-{mode}\\n")
time.sleep(0.05)
with open("builds.txt", "a") as log:
    log.write(f"end {name}-{mode}\\n")
if name.startswith("broken"):
    print(f"error[E0425]: cannot find value in {name}")
    sys.exit(101)
"""


@pytest.fixture
def fake_build_tool(project: Path) -> Path:
    """Install a fake build script in the project directory."""
    script = project / "build"
    script.write_text(FAKE_BUILD_TOOL)
    return project / "builds.txt"


def descriptors(*names: str) -> list[TestDescriptor]:
    """Return debug and release descriptors for the given names."""
    return sorted(
        TestDescriptor(name=name, build_mode=mode)
        for name in names
        for mode in ("debug", "release")
    )


def test_build_command() -> None:
    """Release builds add the release flag."""
    coordinator = BuildCoordinator(config=None)  # type: ignore[arg-type]

    assert coordinator.build_command(
        TestDescriptor(name="blinky", build_mode="debug")
    ) == ["cargo", "build", "--example", "blinky"]
    assert coordinator.build_command(
        TestDescriptor(name="blinky", build_mode="release")
    ) == ["cargo", "build", "--example", "blinky", "--release"]


async def test_builds_sequentially(run_config: RunConfig, fake_build_tool: Path) -> None:
    """Every descriptor is built once, one after the other, in order."""
    coordinator = BuildCoordinator(config=run_config, build_tool=sys.executable)

    report = await coordinator.build_all(descriptors("blinky", "wifi"))

    assert [d.label for d in report.built] == [
        "blinky-debug",
        "blinky-release",
        "wifi-debug",
        "wifi-release",
    ]
    assert report.failed == []
    assert report.duration > 0
    assert fake_build_tool.read_text().splitlines() == [
        f"{event} {label}"
        for label in ("blinky-debug", "blinky-release", "wifi-debug", "wifi-release")
        for event in ("start", "end")
    ]


async def test_failure_aborts_without_continue_on_error(
    run_config: RunConfig, fake_build_tool: Path
) -> None:
    """The first failing build raises and later builds never start."""
    config = run_config.model_copy(update={"continue_on_error": False})
    coordinator = BuildCoordinator(config=config, build_tool=sys.executable)

    with pytest.raises(BuildFailure, match="broken-debug") as exc_info:
        await coordinator.build_all(descriptors("broken", "wifi"))

    assert exc_info.value.descriptor == TestDescriptor(name="broken", build_mode="debug")
    assert "wifi" not in fake_build_tool.read_text()


async def test_failure_recorded_with_continue_on_error(
    run_config: RunConfig, fake_build_tool: Path
) -> None:
    """Failed builds become failed outcomes and building continues."""
    coordinator = BuildCoordinator(config=run_config, build_tool=sys.executable)

    report = await coordinator.build_all(descriptors("broken", "wifi"))

    assert [d.label for d in report.built] == ["wifi-debug", "wifi-release"]
    assert [o.descriptor.label for o in report.failed] == [
        "broken-debug",
        "broken-release",
    ]
    outcome = report.failed[0]
    assert not outcome.passed
    assert outcome.reason == "build-failure"
    assert outcome.log_path == run_config.output_dir / "failed" / "broken-debug.txt"
    assert "error[E0425]" in outcome.log_path.read_text()


async def test_missing_build_tool_is_build_failure(
    run_config: RunConfig, tmp_path: Path
) -> None:
    """A build tool that cannot be started fails the build."""
    config = run_config.model_copy(update={"continue_on_error": False})
    coordinator = BuildCoordinator(
        config=config, build_tool=str(tmp_path / "no-such-cargo")
    )

    with pytest.raises(BuildFailure, match="cannot start"):
        await coordinator.build_all(descriptors("blinky"))
