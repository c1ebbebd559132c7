"""Emotion search — narrow a trade list to the emotions being reviewed.

Matching is case-insensitive and succeeds when a trade carries at least
one of the searched emotions.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import Any

from .record import TradeRecord, coerce_trade

logger = logging.getLogger(__name__)


def filter_trades_by_emotions(
    trades: Iterable[Any],
    emotions: Iterable[str] | None,
) -> list[TradeRecord]:
    """Return the trades tagged with any of ``emotions``.

    An empty or missing search returns every readable trade.  Trades
    without emotions never match an active search.
    """
    records = [t for t in (coerce_trade(item) for item in trades) if t is not None]

    wanted = {e.strip().upper() for e in emotions or () if isinstance(e, str) and e.strip()}
    if not wanted:
        return records

    matched = [
        trade
        for trade in records
        if any(tag.upper() in wanted for tag in trade.emotional_state)
    ]
    logger.debug(
        "Emotion filter %s matched %d of %d trades",
        sorted(wanted),
        len(matched),
        len(records),
    )
    return matched
