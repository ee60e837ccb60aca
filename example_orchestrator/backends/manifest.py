"""Backend manifest definition for the plugin system."""

from collections.abc import Callable
from dataclasses import dataclass

from pydantic import BaseModel

from example_orchestrator.backends.base import Backend


@dataclass(frozen=True, kw_only=True)
class BackendManifest[ConfigT: BaseModel]:
    """Manifest describing a backend plugin.

    The manifest references the backend's configuration class and a factory
    creating the backend from a validated configuration.
    """

    config_cls: type[ConfigT]
    backend_factory: Callable[[ConfigT], Backend]
