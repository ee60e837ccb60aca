"""Emulator backend manifest."""

from example_orchestrator.backends.emulate.backend import EmulateBackend
from example_orchestrator.backends.emulate.config import EmulateConfig
from example_orchestrator.backends.manifest import BackendManifest

emulate_manifest = BackendManifest(
    config_cls=EmulateConfig,
    backend_factory=EmulateBackend.from_config,
)
