"""Tests for scenario models."""

import pytest
from pydantic import ValidationError

from example_orchestrator.models.scenario import Scenario


def test_reads_wait_serial_key() -> None:
    """Steps use the hyphenated key of scenario files."""
    scenario = Scenario.model_validate(
        {"steps": [{"wait-serial": "BOOT"}, {"wait-serial": "READY"}]}
    )

    assert [step.wait_serial for step in scenario.steps] == ["BOOT", "READY"]


def test_missing_steps_means_empty_scenario() -> None:
    """A document without steps has nothing to wait for."""
    assert list(Scenario.model_validate({}).steps) == []


def test_rejects_empty_match_text() -> None:
    """Empty match text would match every line."""
    with pytest.raises(ValidationError):
        Scenario.model_validate({"steps": [{"wait-serial": ""}]})
