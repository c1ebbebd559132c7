"""Emotion aggregator — per-emotion buy/sell breakdown for radar charts.

Walks a list of journaled trades and, for every emotion tag, counts how
many of the trades carrying it were buys, sells, or had no side.  The
counts become one ``EmotionDatum`` per tag with a signed leaning
percentage and a Buy/Sell/Balanced label.

Usage::

    data = aggregate_emotions(trades)
    for d in data:
        print(d.subject, d.total_trades, d.leaning)

Tags are case-sensitive as supplied ("FOMO" and "fomo" are separate
points).  Output order is first-seen order of the tags across the input.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from typing import Any

from ..core.config import KNOWN_EMOTIONS
from ..core.enums import LEANING_TO_SIDE, Leaning, LeaningSide, TradeSide
from .record import coerce_trade

logger = logging.getLogger(__name__)

DEFAULT_LEANING_THRESHOLD = 15.0
DEFAULT_FULL_MARK_SCALE = 1.2


@dataclass
class _EmotionAggregate:
    """Side counts for one emotion tag."""

    buy_count: int = 0
    sell_count: int = 0
    null_count: int = 0

    @property
    def total(self) -> int:
        return self.buy_count + self.sell_count + self.null_count

    def record(self, side: TradeSide | None) -> None:
        if side == TradeSide.BUY:
            self.buy_count += 1
        elif side == TradeSide.SELL:
            self.sell_count += 1
        else:
            self.null_count += 1


@dataclass(frozen=True)
class EmotionDatum:
    """One radar-chart point: an emotion and how it leans."""

    subject: str
    total_trades: int
    buy_count: int
    sell_count: int
    null_count: int
    full_mark: float
    leaning_value: float  # -100 (all sells) .. +100 (all buys)
    leaning: Leaning
    side: LeaningSide

    @property
    def value(self) -> int:
        """Radar radius; the number of trades carrying this emotion."""
        return self.total_trades

    def to_dict(self) -> dict[str, Any]:
        """Chart payload in the dashboard's field names."""
        return {
            "subject": self.subject,
            "value": self.value,
            "fullMark": self.full_mark,
            "leaning": self.leaning.value,
            "side": self.side.value,
            "leaningValue": self.leaning_value,
            "totalTrades": self.total_trades,
            "buyCount": self.buy_count,
            "sellCount": self.sell_count,
            "nullCount": self.null_count,
        }


def classify_leaning(
    leaning_value: float,
    threshold: float = DEFAULT_LEANING_THRESHOLD,
) -> Leaning:
    """Map a signed leaning percentage onto its label."""
    if leaning_value > threshold:
        return Leaning.BUY
    if leaning_value < -threshold:
        return Leaning.SELL
    return Leaning.BALANCED


def aggregate_emotions(
    trades: Iterable[Any] | None,
    *,
    leaning_threshold: float = DEFAULT_LEANING_THRESHOLD,
    full_mark_scale: float = DEFAULT_FULL_MARK_SCALE,
) -> list[EmotionDatum]:
    """Build one ``EmotionDatum`` per distinct emotion tag.

    Parameters
    ----------
    trades : iterable of TradeRecord or journal row mappings
        Rows are coerced with ``TradeRecord.from_row``.  Items that are
        neither are skipped.  ``None`` is treated as no trades.
    leaning_threshold : float
        Leaning percentage beyond which an emotion is labelled
        "Buy Leaning" / "Sell Leaning".  Default 15.
    full_mark_scale : float
        Radar ceiling multiplier.  Default 1.2.

    Returns
    -------
    list[EmotionDatum]
        In first-seen tag order.  Empty when no trade carries a tag.
    """
    if trades is None:
        return []

    # dicts keep insertion order, which gives first-seen tag order
    buckets: dict[str, _EmotionAggregate] = {}
    for index, item in enumerate(trades):
        trade = coerce_trade(item)
        if trade is None:
            logger.debug("Skipping unreadable trade at index %d: %r", index, type(item))
            continue
        if not trade.emotional_state:
            continue
        for tag in trade.emotional_state:
            bucket = buckets.get(tag)
            if bucket is None:
                bucket = buckets[tag] = _EmotionAggregate()
            bucket.record(trade.side)

    result: list[EmotionDatum] = []
    for tag, bucket in buckets.items():
        total = bucket.total
        leaning_value = (bucket.buy_count - bucket.sell_count) / total * 100
        leaning = classify_leaning(leaning_value, leaning_threshold)
        result.append(
            EmotionDatum(
                subject=tag,
                total_trades=total,
                buy_count=bucket.buy_count,
                sell_count=bucket.sell_count,
                null_count=bucket.null_count,
                full_mark=max(1, total) * full_mark_scale,
                leaning_value=leaning_value,
                leaning=leaning,
                side=LEANING_TO_SIDE[leaning],
            )
        )

    logger.debug("Aggregated %d emotion tags", len(result))
    return result


# ---------------------------------------------------------------------- #
# Radar data sanitation                                                    #
# ---------------------------------------------------------------------- #

def sanitize_radar_data(
    data: Any,
    known_emotions: Iterable[str] = KNOWN_EMOTIONS,
) -> tuple[list[dict[str, Any]], list[str]]:
    """Drop or repair radar points that would break chart rendering.

    Items without a subject, with an emotion outside ``known_emotions``,
    or with a non-finite value are dropped.  Subjects are uppercased,
    ``value`` is clamped to [0, 100], ``leaningValue`` to [-100, 100]
    and ``side`` is coerced to Buy/Sell/NULL.

    Returns
    -------
    (items, warnings)
        Chart-ready dicts and one human-readable warning per problem.
    """
    warnings: list[str] = []
    if not isinstance(data, (list, tuple)):
        return [], [f"Data is not a list: {type(data).__name__}"]

    known = {e.upper() for e in known_emotions}
    items: list[dict[str, Any]] = []

    for i, raw in enumerate(data):
        item = raw.to_dict() if isinstance(raw, EmotionDatum) else raw
        if not isinstance(item, Mapping):
            warnings.append(f"Item {i}: not an object")
            continue

        subject = item.get("subject")
        if not isinstance(subject, str) or not subject.strip():
            warnings.append(f"Item {i}: missing or invalid subject")
            continue
        subject = subject.strip().upper()
        if subject not in known:
            warnings.append(f"Item {i}: unknown emotion {subject!r}")
            continue

        value = item.get("value")
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            warnings.append(f"Item {i}: value is not a number")
            continue
        if not math.isfinite(value):
            warnings.append(f"Item {i}: value is not finite ({value})")
            continue
        if value < 0 or value > 100:
            warnings.append(f"Item {i}: value {value} outside 0-100, clamped")

        leaning = item.get("leaning")
        leaning = leaning.strip() if isinstance(leaning, str) else Leaning.BALANCED.value

        side = item.get("side")
        if side not in (LeaningSide.BUY.value, LeaningSide.SELL.value):
            side = LeaningSide.NULL.value

        leaning_value = 0.0
        raw_leaning = item.get("leaningValue")
        if isinstance(raw_leaning, (int, float)) and not isinstance(raw_leaning, bool):
            if math.isfinite(raw_leaning):
                leaning_value = max(-100.0, min(100.0, float(raw_leaning)))
            else:
                warnings.append(f"Item {i}: leaningValue is not finite")

        total_trades = 0
        raw_total = item.get("totalTrades")
        if isinstance(raw_total, (int, float)) and not isinstance(raw_total, bool):
            if math.isfinite(raw_total) and raw_total >= 0:
                total_trades = int(raw_total)
            else:
                warnings.append(f"Item {i}: totalTrades is invalid ({raw_total})")

        items.append({
            "subject": subject,
            "value": max(0, min(100, value)),
            "fullMark": 100,
            "leaning": leaning,
            "side": side,
            "leaningValue": leaning_value,
            "totalTrades": total_trades,
        })

    if warnings:
        logger.warning("Radar data sanitised with %d warnings", len(warnings))
    return items, warnings
