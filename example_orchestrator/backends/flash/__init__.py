"""Hardware flasher backend module."""

from example_orchestrator.backends.flash.backend import FlashBackend
from example_orchestrator.backends.flash.config import FlashConfig
from example_orchestrator.backends.flash.manifest import flash_manifest

__all__ = ["FlashBackend", "FlashConfig", "flash_manifest"]
