"""Archiving of serial logs into passed/failed directories."""

import logging
from pathlib import Path

log = logging.getLogger(__name__)

PASSED_DIR = "passed"
FAILED_DIR = "failed"


def archive_log(staging_path: Path, output_dir: Path, passed: bool) -> Path:
    """Move a staged log into the ``passed`` or ``failed`` directory.

    The destination keeps the staged file name and replaces any previous
    file of that name. A copy left in the opposite directory by an earlier
    batch is removed, so the log exists in exactly one place. A missing
    staged log is archived as an empty file.

    Returns:
        Final location of the log

    """
    target_dir = output_dir / (PASSED_DIR if passed else FAILED_DIR)
    stale_dir = output_dir / (FAILED_DIR if passed else PASSED_DIR)
    target_dir.mkdir(parents=True, exist_ok=True)

    if not staging_path.exists():
        log.warning("No serial log was written to %s", staging_path)
        staging_path.parent.mkdir(parents=True, exist_ok=True)
        staging_path.touch()

    destination = staging_path.replace(target_dir / staging_path.name)
    (stale_dir / staging_path.name).unlink(missing_ok=True)
    return destination
