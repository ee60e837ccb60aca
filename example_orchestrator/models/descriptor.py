"""Models identifying a single build and run unit."""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Literal

type BuildMode = Literal["debug", "release"]

BUILD_MODES: tuple[BuildMode, ...] = ("debug", "release")


@dataclass(frozen=True, kw_only=True, order=True)
class TestDescriptor:
    """One example compiled in one build mode.

    Ordering compares ``name`` first, then ``build_mode``, which gives the
    reproducible run order of a batch.
    """

    __test__ = False

    name: str
    build_mode: BuildMode
    source: Path | None = field(default=None, compare=False)

    def __post_init__(self) -> None:
        if not self.name:
            raise ValueError("Test descriptor name must not be empty")

    @property
    def label(self) -> str:
        """File-friendly identifier, e.g. ``blinky-release``."""
        return f"{self.name}-{self.build_mode}"
