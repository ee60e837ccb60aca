"""Browser simulator backend module."""

from example_orchestrator.backends.simulate.backend import SimulateBackend
from example_orchestrator.backends.simulate.config import SimulateConfig
from example_orchestrator.backends.simulate.manifest import simulate_manifest

__all__ = ["SimulateBackend", "SimulateConfig", "simulate_manifest"]
