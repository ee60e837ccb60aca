"""Loading of backends from entry points."""

import json
import logging
from importlib.metadata import entry_points
from typing import Any

from pydantic import ValidationError

from example_orchestrator.backends.base import Backend
from example_orchestrator.backends.manifest import BackendManifest
from example_orchestrator.errors import ConfigurationError

ENTRY_POINT_GROUP = "example_orchestrator.backends"

log = logging.getLogger(__name__)


class BackendNotFoundError(ConfigurationError):
    """Raised when a backend is not found."""


def load_backend_manifest(key: str) -> BackendManifest[Any]:
    """Load a backend manifest by key.

    Args:
        key: The backend key as registered in pyproject.toml
             (e.g., "flash", "emulate", "simulate")

    Returns:
        The backend manifest instance

    Raises:
        BackendNotFoundError: If no backend with the given key is found

    """
    entries = entry_points(group=ENTRY_POINT_GROUP)

    for entry in entries:
        if entry.name == key:
            manifest: BackendManifest[Any] = entry.load()
            return manifest

    available = sorted(e.name for e in entries)
    raise BackendNotFoundError(
        f"Backend '{key}' not found. Available backends: {available}"
    )


def create_backend(key: str, backend_config_json: str = "{}") -> Backend:
    """Load a backend and configure it from a JSON document.

    Raises:
        ConfigurationError: If the backend is unknown or the configuration
            is not valid for it

    """
    manifest = load_backend_manifest(key)

    try:
        config_dict = json.loads(backend_config_json)
    except json.JSONDecodeError as e:
        raise ConfigurationError(f"Backend configuration is not JSON: {e}") from e

    try:
        config = manifest.config_cls.model_validate(config_dict)
    except ValidationError as e:
        raise ConfigurationError(f"Invalid configuration for '{key}': {e}") from e

    log.debug("Using backend %s with %r", key, config)
    return manifest.backend_factory(config)
