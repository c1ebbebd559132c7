"""Shared fixtures for journal tests."""

import pytest

from trade_psychology.core.config import ValidationConfig
from trade_psychology.journal.analyser import PsychologyAnalyser


@pytest.fixture
def analyser(settings):
    return PsychologyAnalyser(settings)


@pytest.fixture
def validation_config():
    return ValidationConfig()


@pytest.fixture
def strict_config():
    return ValidationConfig(strict_mode=True)


@pytest.fixture
def radar_points():
    """Well-formed radar points as the dashboard sends them."""
    return [
        {"subject": "DISCIPLINE", "value": 75, "fullMark": 100, "leaning": "Balanced", "side": "Buy"},
        {"subject": "PATIENCE", "value": 80, "fullMark": 100, "leaning": "Balanced", "side": "Buy"},
        {"subject": "TILT", "value": 25, "fullMark": 100, "leaning": "Balanced", "side": "Sell"},
        {"subject": "ANXIOUS", "value": 30, "fullMark": 100, "leaning": "Balanced", "side": "Sell"},
    ]
