"""Hardware flasher backend manifest."""

from example_orchestrator.backends.flash.backend import FlashBackend
from example_orchestrator.backends.flash.config import FlashConfig
from example_orchestrator.backends.manifest import BackendManifest

flash_manifest = BackendManifest(
    config_cls=FlashConfig,
    backend_factory=FlashBackend.from_config,
)
