"""Psychological metrics scorer — Discipline Level and Tilt Control.

Reduces the per-emotion radar data to a pair of complementary gauges.
Each emotion is classified as positive, negative or neutral; category
totals are normalised against ``len(data) * 100`` and combined into an
Emotional State Score (ESS)::

    ess = positive * 2.0 + neutral * 1.0 - negative * 1.5
    psi = clamp((ess + 100) / 2, 0, 100)     # Psychological Stability Index
    discipline = psi
    tilt = 100 - discipline

Emotions outside the three categories add nothing to the numerator but
still count toward the ``len(data) * 100`` denominator, so logging many
unclassified emotions pulls the score toward 50 and below.

The scorer never raises.  Empty input or any failure during the
computation yields the neutral 50/50 pair.

Usage::

    metrics = calculate_psychological_metrics(aggregate_emotions(trades))
    print(metrics.discipline_level, metrics.tilt_control)
"""

from __future__ import annotations

import logging
import math
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from typing import Any

from ..core.config import ScoringConfig
from ..core.enums import EmotionCategory

logger = logging.getLogger(__name__)

_DEFAULT_SCORING = ScoringConfig()


@dataclass(frozen=True)
class PsychologicalMetrics:
    """Complementary gauge pair; the two values always sum to 100."""

    discipline_level: float
    tilt_control: float

    @property
    def psychological_stability_index(self) -> float:
        # (ess + 100) / 2 after clamping, i.e. the discipline gauge itself
        return self.discipline_level

    def to_dict(self) -> dict[str, float]:
        return {
            "disciplineLevel": self.discipline_level,
            "tiltControl": self.tilt_control,
        }


def default_metrics(scoring: ScoringConfig | None = None) -> PsychologicalMetrics:
    """The neutral pair returned when nothing can be scored."""
    cfg = scoring or _DEFAULT_SCORING
    return _complementary_pair(cfg.default_score, cfg.decimals)


def _complementary_pair(discipline: float, decimals: int) -> PsychologicalMetrics:
    discipline = round(max(0.0, min(100.0, discipline)), decimals)
    return PsychologicalMetrics(
        discipline_level=discipline,
        tilt_control=round(100.0 - discipline, decimals),
    )


def _categories(cfg: ScoringConfig) -> dict[str, EmotionCategory]:
    lookup: dict[str, EmotionCategory] = {}
    for tag in cfg.positive_emotions:
        lookup[tag.upper()] = EmotionCategory.POSITIVE
    for tag in cfg.negative_emotions:
        lookup[tag.upper()] = EmotionCategory.NEGATIVE
    for tag in cfg.neutral_emotions:
        lookup[tag.upper()] = EmotionCategory.NEUTRAL
    return lookup


def classify_emotion(
    subject: Any,
    scoring: ScoringConfig | None = None,
) -> EmotionCategory | None:
    """Case-insensitive category lookup; None for unclassified emotions."""
    if not isinstance(subject, str):
        return None
    return _categories(scoring or _DEFAULT_SCORING).get(subject.upper())


def _read_point(point: Any) -> tuple[Any, Any]:
    if isinstance(point, Mapping):
        return point.get("subject"), point.get("value")
    return getattr(point, "subject", None), getattr(point, "value", None)


def _score(data: list[Any], cfg: ScoringConfig) -> PsychologicalMetrics:
    lookup = _categories(cfg)
    totals = {category: 0.0 for category in EmotionCategory}

    for point in data:
        subject, value = _read_point(point)
        category = lookup.get(subject.upper()) if isinstance(subject, str) else None
        if category is None:
            continue
        if isinstance(value, bool):
            raise TypeError(f"Emotion {subject} has boolean value")
        totals[category] += value or 0

    max_possible_score = len(data) * 100
    positive = totals[EmotionCategory.POSITIVE] / max_possible_score * 100
    negative = totals[EmotionCategory.NEGATIVE] / max_possible_score * 100
    neutral = totals[EmotionCategory.NEUTRAL] / max_possible_score * 100

    ess = (
        positive * cfg.positive_weight
        + neutral * cfg.neutral_weight
        - negative * cfg.negative_weight
    )
    if not math.isfinite(ess):
        raise ValueError(f"Non-finite emotional state score: {ess}")

    psi = max(0.0, min(100.0, (ess + 100) / 2))
    return _complementary_pair(psi, cfg.decimals)


def calculate_psychological_metrics(
    data: Iterable[Any] | None,
    *,
    scoring: ScoringConfig | None = None,
) -> PsychologicalMetrics:
    """Score a collection of radar points into Discipline / Tilt.

    Parameters
    ----------
    data : iterable of EmotionDatum or mappings
        Each point needs ``subject`` and ``value`` (trade count).
    scoring : ScoringConfig | None
        Categories and weights.  Defaults to the standard set.

    Returns
    -------
    PsychologicalMetrics
        Never raises; falls back to the default 50/50 pair.
    """
    cfg = scoring or _DEFAULT_SCORING
    try:
        points = list(data) if data is not None else []
        if not points:
            return default_metrics(cfg)
        return _score(points, cfg)
    except Exception:
        logger.warning(
            "Psychological metrics calculation failed; using defaults",
            exc_info=True,
        )
        return default_metrics(cfg)
