"""One-call psychology analysis over a trade list.

Runs the aggregator and scorer with the configured thresholds and,
when enabled, the validation checks.  The analyser holds only its
settings, so one instance can serve any number of threads or requests.

Usage::

    analyser = PsychologyAnalyser()
    report = analyser.analyse(trades)
    print(report.metrics.discipline_level)
    print(json.dumps(report.to_dict()))
"""

from __future__ import annotations

import logging
import time
import uuid
from collections.abc import Iterable
from dataclasses import dataclass
from typing import Any

from ..core.config import Settings
from .emotions import EmotionDatum, aggregate_emotions
from .psychology import PsychologicalMetrics, calculate_psychological_metrics
from .record import TradeRecord, coerce_trade
from .validation import (
    ComprehensiveValidation,
    create_validation_context,
    finalize_validation_context,
    log_validation_results,
    perform_comprehensive_validation,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AnalysisReport:
    """Result of one analysis run."""

    emotional_data: list[EmotionDatum]
    metrics: PsychologicalMetrics
    trade_count: int
    tagged_trade_count: int
    calculation_time_ms: float
    validation: ComprehensiveValidation | None = None

    def to_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "totalTrades": self.trade_count,
            "taggedTrades": self.tagged_trade_count,
            "emotionalData": [d.to_dict() for d in self.emotional_data],
            **self.metrics.to_dict(),
            "calculationTimeMs": round(self.calculation_time_ms, 3),
        }
        if self.validation is not None:
            payload["validation"] = self.validation.to_dict()
        return payload


class PsychologyAnalyser:
    """Aggregate emotions and score discipline for a list of trades.

    Parameters
    ----------
    settings : Settings | None
        Aggregation, scoring and validation configuration.  Defaults to
        ``Settings()``.
    """

    def __init__(self, settings: Settings | None = None) -> None:
        self._settings = settings or Settings()

    @property
    def settings(self) -> Settings:
        return self._settings

    def analyse(
        self,
        trades: Iterable[Any] | None,
        *,
        request_id: str | None = None,
        user_id: str | None = None,
        validate: bool | None = None,
    ) -> AnalysisReport:
        """Run one analysis.

        Parameters
        ----------
        trades : iterable of TradeRecord or journal rows
            Unreadable items are skipped.
        validate : bool | None
            Override ``settings.validation.enabled`` for this call.
        """
        agg = self._settings.aggregation
        vcfg = self._settings.validation
        run_validation = vcfg.enabled if validate is None else validate
        ctx = create_validation_context(
            request_id or str(uuid.uuid4()), user_id, vcfg
        )

        started = time.monotonic()
        records: list[TradeRecord] = [
            t for t in (coerce_trade(item) for item in trades or ()) if t is not None
        ]
        data = aggregate_emotions(
            records,
            leaning_threshold=agg.leaning_threshold,
            full_mark_scale=agg.full_mark_scale,
        )
        metrics = calculate_psychological_metrics(data, scoring=self._settings.scoring)
        elapsed_ms = (time.monotonic() - started) * 1000

        validation = None
        if run_validation:
            validation = perform_comprehensive_validation(
                metrics.discipline_level,
                metrics.tilt_control,
                [d.to_dict() for d in data],
                calculation_time_ms=elapsed_ms,
                config=vcfg,
            )
            log_validation_results(finalize_validation_context(ctx), validation)

        tagged = sum(1 for t in records if t.has_emotions)
        logger.info(
            "Analysed %d trades (%d tagged, %d emotions): discipline=%.2f tilt=%.2f",
            len(records),
            tagged,
            len(data),
            metrics.discipline_level,
            metrics.tilt_control,
        )
        return AnalysisReport(
            emotional_data=data,
            metrics=metrics,
            trade_count=len(records),
            tagged_trade_count=tagged,
            calculation_time_ms=elapsed_ms,
            validation=validation,
        )
