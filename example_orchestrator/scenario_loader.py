"""Load scenario files describing expected serial output."""

import asyncio
import logging
from pathlib import Path

import yaml
from pydantic import ValidationError

from example_orchestrator.errors import ConfigurationError
from example_orchestrator.models.scenario import Scenario

log = logging.getLogger(__name__)


async def load_scenario(scenario_path: Path) -> Scenario | None:
    """Load and validate a scenario file.

    Args:
        scenario_path: Path to the YAML scenario document

    Returns:
        The parsed scenario, or None when the file does not exist (the test
        is then judged on the backend's exit status alone).

    Raises:
        ConfigurationError: If the file is empty, not valid YAML or does not
            match the scenario schema

    """
    if not scenario_path.is_file():
        log.debug("No scenario file at %s", scenario_path)
        return None

    content = await asyncio.to_thread(scenario_path.read_text, encoding="utf-8")

    try:
        data = yaml.safe_load(content)
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Invalid YAML in {scenario_path}: {e}") from e

    if data is None:
        raise ConfigurationError(f"Empty scenario file: {scenario_path}")

    try:
        return Scenario.model_validate(data)
    except ValidationError as e:
        raise ConfigurationError(
            f"Invalid scenario schema in {scenario_path}: {e}"
        ) from e
