"""Emulator backend module."""

from example_orchestrator.backends.emulate.backend import EmulateBackend
from example_orchestrator.backends.emulate.config import EmulateConfig
from example_orchestrator.backends.emulate.manifest import emulate_manifest

__all__ = ["EmulateBackend", "EmulateConfig", "emulate_manifest"]
