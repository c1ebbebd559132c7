"""Shared fixtures for the trade-psychology test suite."""

from __future__ import annotations

import pytest

from trade_psychology.core.config import Settings
from trade_psychology.journal.record import TradeRecord


# ---------------------------------------------------------------------------
# Trade factories
# ---------------------------------------------------------------------------

@pytest.fixture
def make_trade():
    """Return a factory building a TradeRecord from side + emotion tags."""

    def _make(side: str | None = "Buy", *emotions: str, **extra) -> TradeRecord:
        return TradeRecord(side=side, emotional_state=list(emotions), **extra)

    return _make


@pytest.fixture
def fomo_trades(make_trade) -> list[TradeRecord]:
    """Two FOMO buys (one also CONFIDENT) and one FOMO sell."""
    return [
        make_trade("Buy", "FOMO"),
        make_trade("Sell", "FOMO"),
        make_trade("Buy", "FOMO", "CONFIDENT"),
    ]


@pytest.fixture
def journal_rows() -> list[dict]:
    """Loosely-typed rows as they come back from the journal database."""
    return [
        {"id": 1, "symbol": "AAPL", "side": "Buy", "pnl": 120.5,
         "emotional_state": ["DISCIPLINE", "PATIENCE"]},
        {"id": 2, "symbol": "TSLA", "side": "Sell", "pnl": -40.0,
         "emotional_state": '["TILT"]'},
        {"id": 3, "symbol": "NVDA", "side": None, "pnl": 10.0,
         "emotional_state": None},
        {"id": 4, "symbol": "ES", "side": "Buy", "pnl": "",
         "emotionalState": ["FOMO", "fomo"]},
    ]


@pytest.fixture
def settings() -> Settings:
    return Settings()
