"""Trade psychology — emotion analytics over journaled trades.

Turns the emotions a trader tags on each journal entry into radar-chart
data and a complementary Discipline Level / Tilt Control gauge pair.

Key components
--------------
**Engine**

TradeRecord              Typed journal row (side + emotion tags)
aggregate_emotions       Per-emotion buy/sell/no-side breakdown
calculate_psychological_metrics  Discipline / Tilt score pair
PsychologyAnalyser       Aggregation + scoring + validation in one call

**Supporting**

filter_trades_by_emotions  Case-insensitive emotion search
sanitize_radar_data        Chart-safe radar points
validate_*                 Metrics / emotional-data / performance checks
load_trades                JSON / CSV journal export loading
"""

from .record import TradeRecord, normalize_emotions
from .emotions import EmotionDatum, aggregate_emotions, sanitize_radar_data
from .psychology import PsychologicalMetrics, calculate_psychological_metrics
from .analyser import AnalysisReport, PsychologyAnalyser
from .filtering import filter_trades_by_emotions
from .loader import load_trades
from .validation import (
    perform_comprehensive_validation,
    validate_emotional_data,
    validate_performance,
    validate_psychological_metrics,
)

__all__ = [
    "TradeRecord",
    "normalize_emotions",
    "EmotionDatum",
    "aggregate_emotions",
    "sanitize_radar_data",
    "PsychologicalMetrics",
    "calculate_psychological_metrics",
    "AnalysisReport",
    "PsychologyAnalyser",
    "filter_trades_by_emotions",
    "load_trades",
    "perform_comprehensive_validation",
    "validate_emotional_data",
    "validate_performance",
    "validate_psychological_metrics",
]
