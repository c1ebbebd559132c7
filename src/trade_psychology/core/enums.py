"""Enumerations used across the trade psychology engine."""

from enum import Enum


class TradeSide(str, Enum):
    """Side of a journaled trade, as stored by the journal form."""

    BUY = "Buy"
    SELL = "Sell"


class Leaning(str, Enum):
    """Directional bias of an emotion across the trades that carry it."""

    BUY = "Buy Leaning"
    SELL = "Sell Leaning"
    BALANCED = "Balanced"


class LeaningSide(str, Enum):
    """Radar-point side marker mirroring a :class:`Leaning` bucket."""

    BUY = "Buy"
    SELL = "Sell"
    NULL = "NULL"


class EmotionCategory(str, Enum):
    POSITIVE = "positive"
    NEGATIVE = "negative"
    NEUTRAL = "neutral"


class ValidationSeverity(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


class ValidationErrorType(str, Enum):
    RANGE_ERROR = "range_error"
    CONSISTENCY_ERROR = "consistency_error"
    TYPE_ERROR = "type_error"
    NULL_VALUE_ERROR = "null_value_error"
    DATA_INTEGRITY_ERROR = "data_integrity_error"
    PERFORMANCE_ERROR = "performance_error"


LEANING_TO_SIDE: dict[Leaning, LeaningSide] = {
    Leaning.BUY: LeaningSide.BUY,
    Leaning.SELL: LeaningSide.SELL,
    Leaning.BALANCED: LeaningSide.NULL,
}
