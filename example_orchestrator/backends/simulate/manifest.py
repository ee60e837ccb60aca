"""Simulator backend manifest."""

from example_orchestrator.backends.manifest import BackendManifest
from example_orchestrator.backends.simulate.backend import SimulateBackend
from example_orchestrator.backends.simulate.config import SimulateConfig

simulate_manifest = BackendManifest(
    config_cls=SimulateConfig,
    backend_factory=SimulateBackend.from_config,
)
