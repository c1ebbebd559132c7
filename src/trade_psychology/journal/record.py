"""Journaled trade record — the engine's input model.

A TradeRecord is the slice of a journal row the psychology engine cares
about: which side the trade was on and which emotions the trader tagged
it with.  The remaining journal columns ride along untouched so callers
can filter or export the same objects.

Journal rows arrive loosely typed (database JSON columns, CSV exports,
hand-edited files).  ``TradeRecord.from_row`` is the single place where
those shapes are coerced; everything downstream works on the typed
record.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel, Field, ValidationError, field_validator

from ..core.enums import TradeSide

logger = logging.getLogger(__name__)

# Row keys accepted for the emotion tags, in lookup order.
_EMOTION_KEYS = ("emotional_state", "emotionalState")


def _first_present(row: Mapping[str, Any], keys: tuple[str, ...]) -> Any:
    """Value of the first key in ``keys`` that is set and not None."""
    return next((row[k] for k in keys if row.get(k) is not None), None)


def normalize_emotions(value: Any) -> list[str]:
    """Coerce a stored ``emotional_state`` value into an ordered tag list.

    Accepts a list/tuple of strings, a JSON-encoded list, a
    comma-separated string, or a mapping whose string values are the
    tags.  Non-string entries are dropped; duplicates are kept.
    Anything unreadable yields an empty list.
    """
    if value is None:
        return []

    if isinstance(value, str):
        text = value.strip()
        if not text:
            return []
        if text.startswith("[") or text.startswith("{"):
            try:
                decoded = json.loads(text)
            except ValueError:
                logger.debug("Unparseable emotional_state JSON: %r", text)
                return []
            return normalize_emotions(decoded)
        return [part.strip() for part in text.split(",") if part.strip()]

    if isinstance(value, Mapping):
        return [v for v in value.values() if isinstance(v, str)]

    if isinstance(value, (list, tuple)):
        return [v for v in value if isinstance(v, str)]

    return []


def parse_side(value: Any) -> TradeSide | None:
    """Exact, case-sensitive match on "Buy" / "Sell"; anything else is None."""
    if isinstance(value, TradeSide):
        return value
    if value == TradeSide.BUY.value:
        return TradeSide.BUY
    if value == TradeSide.SELL.value:
        return TradeSide.SELL
    return None


class TradeRecord(BaseModel):
    """One journaled trade as seen by the psychology engine."""

    side: TradeSide | None = None
    emotional_state: list[str] = Field(default_factory=list)

    # Journal passthrough, ignored by the engine
    trade_id: str | None = None
    symbol: str | None = None
    pnl: float | None = None
    trade_date: str | None = None
    strategy_id: str | None = None

    model_config = {"frozen": True}

    @field_validator("side", mode="before")
    @classmethod
    def coerce_side(cls, v: Any) -> TradeSide | None:
        return parse_side(v)

    @field_validator("emotional_state", mode="before")
    @classmethod
    def coerce_emotions(cls, v: Any) -> list[str]:
        return normalize_emotions(v)

    @field_validator("trade_id", "trade_date", mode="before")
    @classmethod
    def stringify(cls, v: Any) -> str | None:
        if v is None or v == "":
            return None
        return str(v)

    @field_validator("pnl", mode="before")
    @classmethod
    def blank_pnl_is_none(cls, v: Any) -> Any:
        return None if v == "" else v

    @property
    def has_emotions(self) -> bool:
        return bool(self.emotional_state)

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> TradeRecord:
        """Build a record from a loosely-typed journal row.

        Never raises for malformed values: a passthrough column that
        fails validation is dropped and the engine fields are kept.
        """
        data: dict[str, Any] = {
            "side": row.get("side"),
            "emotional_state": _first_present(row, _EMOTION_KEYS),
            "trade_id": _first_present(row, ("trade_id", "id")),
            "symbol": row.get("symbol"),
            "pnl": row.get("pnl"),
            "trade_date": row.get("trade_date"),
            "strategy_id": row.get("strategy_id"),
        }
        try:
            return cls.model_validate(data)
        except ValidationError:
            logger.debug(
                "Dropping invalid passthrough fields for trade %r",
                data.get("trade_id"),
            )
            return cls(side=data["side"], emotional_state=data["emotional_state"])

    def to_row(self) -> dict[str, Any]:
        """Inverse of :meth:`from_row` using the journal's column names."""
        return {
            "trade_id": self.trade_id,
            "symbol": self.symbol,
            "side": self.side.value if self.side else None,
            "emotional_state": list(self.emotional_state),
            "pnl": self.pnl,
            "trade_date": self.trade_date,
            "strategy_id": self.strategy_id,
        }


def coerce_trade(item: Any) -> TradeRecord | None:
    """Return ``item`` as a TradeRecord, or None if it has no readable shape."""
    if isinstance(item, TradeRecord):
        return item
    if isinstance(item, Mapping):
        return TradeRecord.from_row(item)
    return None
