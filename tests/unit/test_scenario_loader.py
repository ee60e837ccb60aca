"""Tests for scenario loading."""

from pathlib import Path

import pytest

from example_orchestrator.errors import ConfigurationError
from example_orchestrator.scenario_loader import load_scenario


class TestLoadScenario:
    """Tests for load_scenario function."""

    async def test_loads_steps_in_order(self, tmp_path: Path) -> None:
        """Loads and parses a valid scenario file."""
        scenario_file = tmp_path / "blinky.yaml"
        scenario_file.write_text(
            """
name: Blinky
steps:
  - wait-serial: "BOOT"
  - wait-serial: "READY"
"""
        )

        scenario = await load_scenario(scenario_file)

        assert scenario is not None
        assert [step.wait_serial for step in scenario.steps] == ["BOOT", "READY"]

    async def test_returns_none_for_missing_file(self, tmp_path: Path) -> None:
        """A missing scenario file means no scenario gating."""
        assert await load_scenario(tmp_path / "missing.yaml") is None

    async def test_raises_for_invalid_yaml(self, tmp_path: Path) -> None:
        """Raises ConfigurationError for malformed YAML."""
        scenario_file = tmp_path / "bad.yaml"
        scenario_file.write_text("steps: [")

        with pytest.raises(ConfigurationError, match="Invalid YAML"):
            await load_scenario(scenario_file)

    async def test_raises_for_empty_file(self, tmp_path: Path) -> None:
        """Raises ConfigurationError for an empty file."""
        scenario_file = tmp_path / "empty.yaml"
        scenario_file.write_text("")

        with pytest.raises(ConfigurationError, match="Empty scenario file"):
            await load_scenario(scenario_file)

    @pytest.mark.parametrize(
        "content",
        [
            "steps:\n  - wait-serial: ''\n",
            "steps:\n  - delay: 100ms\n",
            "steps: hello\n",
            "- wait-serial: BOOT\n",
        ],
    )
    async def test_raises_for_invalid_schema(
        self, tmp_path: Path, content: str
    ) -> None:
        """Raises ConfigurationError for schema validation errors."""
        scenario_file = tmp_path / "invalid.yaml"
        scenario_file.write_text(content)

        with pytest.raises(ConfigurationError, match="Invalid scenario schema"):
            await load_scenario(scenario_file)
