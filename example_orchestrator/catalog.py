"""Discover example programs to build and run."""

import logging
from collections.abc import Sequence
from pathlib import Path

from example_orchestrator.models.descriptor import BUILD_MODES, TestDescriptor

log = logging.getLogger(__name__)


def discover_test_descriptors(
    project_path: Path,
    examples_dir: str = "examples",
    extension: str = ".rs",
) -> Sequence[TestDescriptor]:
    """Enumerate example sources of a project.

    Args:
        project_path: Root of the firmware project
        examples_dir: Directory holding one source file per example
        extension: Suffix of example source files

    Returns:
        One descriptor per example and build mode, sorted by name then mode.
        Empty when the examples directory does not exist.

    """
    examples_path = project_path / examples_dir
    if not examples_path.is_dir():
        log.info("No examples directory at %s", examples_path)
        return []

    descriptors = [
        TestDescriptor(name=source.stem, build_mode=mode, source=source)
        for source in examples_path.iterdir()
        if source.is_file() and source.suffix == extension and source.stem
        for mode in BUILD_MODES
    ]
    descriptors.sort()

    log.info(
        "Discovered %d example(s) in %s",
        len(descriptors) // len(BUILD_MODES),
        examples_path,
    )
    return descriptors
