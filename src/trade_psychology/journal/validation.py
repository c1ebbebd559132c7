"""Validation of psychological metrics and emotional radar data.

Diagnostics layered on top of the engine output.  They never alter what
the aggregator or scorer return; they describe it.  Each check produces
human-readable ``errors`` / ``warnings`` plus structured
``ValidationIssue`` entries carrying a type and severity.

Checks
------
Psychological metrics
    Range (both gauges in 0-100), complementarity (the pair must sum to
    100 within ``complement_tolerance``) and the minimum stability
    index.  Optional auto-correction clamps Discipline Level and derives
    Tilt Control as its complement.
Emotional data
    Structure, known emotions, duplicates, non-negative trade counts and
    full-mark ranges.
Performance
    Calculation time budget and memory usage.

Usage::

    ctx = create_validation_context("req-1")
    result = perform_comprehensive_validation(
        metrics.discipline_level, metrics.tilt_control,
        [d.to_dict() for d in data], calculation_time_ms=3.2,
    )
    log_validation_results(finalize_validation_context(ctx), result)
"""

from __future__ import annotations

import math
import time
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from ..core.config import ValidationConfig
from ..core.enums import ValidationErrorType, ValidationSeverity
from ..core.errors import ValidationError
from ..observability.logger import get_logger

log = get_logger(__name__)

_DEFAULT_CONFIG = ValidationConfig()


@dataclass
class ValidationIssue:
    """A single structured validation finding."""

    type: ValidationErrorType
    severity: ValidationSeverity
    message: str
    field_name: str | None = None
    value: Any = None
    expected: Any = None
    timestamp: float = field(default_factory=time.time)


@dataclass
class ValidationResult:
    """Base result: messages split into blocking errors and warnings."""

    errors: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)
    issues: list[ValidationIssue] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return not self.errors

    def add(self, issue: ValidationIssue, *, blocking: bool) -> None:
        (self.errors if blocking else self.warnings).append(issue.message)
        self.issues.append(issue)

    def raise_for_errors(self) -> None:
        """Raise :class:`ValidationError` if any blocking error was found."""
        if self.errors:
            raise ValidationError(self.errors)

    def to_dict(self) -> dict[str, Any]:
        return {
            "is_valid": self.is_valid,
            "errors": list(self.errors),
            "warnings": list(self.warnings),
        }


@dataclass
class PsychologicalMetricsValidation(ValidationResult):
    discipline_level: float = 0.0
    tilt_control: float = 0.0
    psychological_stability_index: float = 0.0
    deviation: float = 0.0
    corrected: dict[str, float] | None = None

    def to_dict(self) -> dict[str, Any]:
        d = super().to_dict()
        d.update(
            discipline_level=self.discipline_level,
            tilt_control=self.tilt_control,
            psychological_stability_index=self.psychological_stability_index,
            deviation=self.deviation,
            corrected=self.corrected,
        )
        return d


@dataclass
class EmotionalDataValidation(ValidationResult):
    valid_emotions: list[str] = field(default_factory=list)
    invalid_emotions: list[str] = field(default_factory=list)
    duplicate_emotions: list[str] = field(default_factory=list)
    total_emotions: int = 0

    def to_dict(self) -> dict[str, Any]:
        d = super().to_dict()
        d.update(
            valid_emotions=list(self.valid_emotions),
            invalid_emotions=list(self.invalid_emotions),
            duplicate_emotions=list(self.duplicate_emotions),
            total_emotions=self.total_emotions,
        )
        return d


@dataclass
class PerformanceValidation(ValidationResult):
    calculation_time_ms: float = 0.0
    memory_usage: int | None = None

    @property
    def is_within_performance_threshold(self) -> bool:
        return not any(
            i.type == ValidationErrorType.PERFORMANCE_ERROR
            and i.field_name == "calculation_time_ms"
            for i in self.issues
        )


@dataclass
class ComprehensiveValidation:
    psychological_metrics: PsychologicalMetricsValidation
    emotional_data: EmotionalDataValidation
    performance: PerformanceValidation
    overall: ValidationResult

    def to_dict(self) -> dict[str, Any]:
        return {
            "psychological_metrics": self.psychological_metrics.to_dict(),
            "emotional_data": self.emotional_data.to_dict(),
            "performance": self.performance.to_dict(),
            "overall": self.overall.to_dict(),
        }


@dataclass
class ValidationContext:
    """Request-scoped bookkeeping for one validation run."""

    request_id: str
    user_id: str | None = None
    config: ValidationConfig = field(default_factory=ValidationConfig)
    timestamp: float = field(default_factory=time.time)
    started: float = field(default_factory=time.monotonic)
    calculation_time_ms: float | None = None


# ---------------------------------------------------------------------- #
# Psychological metrics                                                    #
# ---------------------------------------------------------------------- #

def validate_psychological_metrics(
    discipline_level: float,
    tilt_control: float,
    config: ValidationConfig | None = None,
) -> PsychologicalMetricsValidation:
    """Check a Discipline/Tilt pair for range and complementarity."""
    cfg = config or _DEFAULT_CONFIG
    result = PsychologicalMetricsValidation()

    if discipline_level < 0 or discipline_level > 100:
        result.add(ValidationIssue(
            ValidationErrorType.RANGE_ERROR,
            ValidationSeverity.CRITICAL,
            "Discipline Level must be between 0-100%",
            "discipline_level", discipline_level, "0-100",
        ), blocking=True)

    if tilt_control < 0 or tilt_control > 100:
        result.add(ValidationIssue(
            ValidationErrorType.RANGE_ERROR,
            ValidationSeverity.CRITICAL,
            "Tilt Control must be between 0-100%",
            "tilt_control", tilt_control, "0-100",
        ), blocking=True)

    deviation = abs(discipline_level + tilt_control - 100)
    tolerance = cfg.complement_tolerance
    if deviation > tolerance:
        result.add(ValidationIssue(
            ValidationErrorType.CONSISTENCY_ERROR,
            ValidationSeverity.CRITICAL,
            f"Discipline Level and Tilt Control must sum to 100% "
            f"(off by {deviation:.2f}%)",
            "metrics",
            {"discipline_level": discipline_level, "tilt_control": tilt_control},
            f"|sum - 100| <= {tolerance:g}",
        ), blocking=True)

    # On the complementary scale the stability index is the discipline gauge.
    psi = discipline_level
    min_psi = cfg.min_psychological_stability_index
    if psi < min_psi:
        result.add(ValidationIssue(
            ValidationErrorType.CONSISTENCY_ERROR,
            ValidationSeverity.CRITICAL if cfg.strict_mode else ValidationSeverity.MEDIUM,
            f"Psychological Stability Index ({psi:.1f}%) is below minimum "
            f"threshold ({min_psi:g}%)",
            "psychological_stability_index", psi, f">= {min_psi:g}%",
        ), blocking=cfg.strict_mode)

    corrected_discipline = discipline_level
    corrected_tilt = tilt_control
    if cfg.enable_auto_correction and result.errors:
        corrected_discipline = max(0.0, min(100.0, discipline_level))
        corrected_tilt = 100.0 - corrected_discipline

    result.discipline_level = corrected_discipline
    result.tilt_control = corrected_tilt
    result.psychological_stability_index = psi
    result.deviation = deviation
    if cfg.enable_auto_correction:
        result.corrected = {
            "discipline_level": corrected_discipline,
            "tilt_control": corrected_tilt,
            "psychological_stability_index": corrected_discipline,
        }
    return result


# ---------------------------------------------------------------------- #
# Emotional data                                                           #
# ---------------------------------------------------------------------- #

def _as_mapping(item: Any) -> Mapping[str, Any] | None:
    if isinstance(item, Mapping):
        return item
    to_dict = getattr(item, "to_dict", None)
    if callable(to_dict):
        return to_dict()
    return None


def validate_emotional_data(
    emotional_data: Any,
    config: ValidationConfig | None = None,
) -> EmotionalDataValidation:
    """Check radar data structure, emotion names and values."""
    cfg = config or _DEFAULT_CONFIG
    result = EmotionalDataValidation()

    if emotional_data is None:
        result.add(ValidationIssue(
            ValidationErrorType.NULL_VALUE_ERROR,
            ValidationSeverity.CRITICAL,
            "Emotional data is null",
            "emotional_data",
        ), blocking=True)
        return result

    if not isinstance(emotional_data, (list, tuple)):
        result.add(ValidationIssue(
            ValidationErrorType.TYPE_ERROR,
            ValidationSeverity.CRITICAL,
            "Emotional data must be a list",
            "emotional_data", type(emotional_data).__name__, "list",
        ), blocking=True)
        return result

    if not emotional_data:
        result.add(ValidationIssue(
            ValidationErrorType.DATA_INTEGRITY_ERROR,
            ValidationSeverity.MEDIUM,
            "Emotional data is empty",
            "emotional_data",
        ), blocking=False)
        return result

    known = {e.upper() for e in cfg.known_emotions}
    seen: set[str] = set()

    for index, raw in enumerate(emotional_data):
        item = _as_mapping(raw)
        subject = item.get("subject") if item is not None else None
        if not isinstance(subject, str) or not subject:
            result.add(ValidationIssue(
                ValidationErrorType.DATA_INTEGRITY_ERROR,
                ValidationSeverity.HIGH,
                f"Emotion at index {index} has invalid or missing subject field",
                f"emotional_data[{index}].subject", subject, "string",
            ), blocking=True)
            continue

        name = subject.upper().strip()

        if name in seen:
            result.duplicate_emotions.append(name)
            result.add(ValidationIssue(
                ValidationErrorType.DATA_INTEGRITY_ERROR,
                ValidationSeverity.MEDIUM,
                f"Duplicate emotion found: {name}",
                f"emotional_data[{index}].subject", name,
            ), blocking=False)
        else:
            seen.add(name)

        if name in known:
            result.valid_emotions.append(name)
        else:
            result.invalid_emotions.append(name)
            result.add(ValidationIssue(
                ValidationErrorType.DATA_INTEGRITY_ERROR,
                ValidationSeverity.LOW,
                f"Unknown emotion: {name}",
                f"emotional_data[{index}].subject", name, sorted(known),
            ), blocking=False)

        value = item.get("value")
        if (
            isinstance(value, bool)
            or not isinstance(value, (int, float))
            or not math.isfinite(value)
        ):
            result.add(ValidationIssue(
                ValidationErrorType.TYPE_ERROR,
                ValidationSeverity.HIGH,
                f"Emotion {name} has invalid value: {value}",
                f"emotional_data[{index}].value", value, "number",
            ), blocking=True)
        elif value < 0:
            result.add(ValidationIssue(
                ValidationErrorType.RANGE_ERROR,
                ValidationSeverity.HIGH,
                f"Emotion {name} value ({value}) must not be negative",
                f"emotional_data[{index}].value", value, ">= 0",
            ), blocking=True)

        full_mark = item.get("fullMark", item.get("full_mark"))
        if full_mark is not None and (
            isinstance(full_mark, bool)
            or not isinstance(full_mark, (int, float))
            or full_mark <= 0
        ):
            result.add(ValidationIssue(
                ValidationErrorType.RANGE_ERROR,
                ValidationSeverity.MEDIUM,
                f"Emotion {name} has invalid fullMark: {full_mark}",
                f"emotional_data[{index}].fullMark", full_mark, "positive number",
            ), blocking=True)

        leaning = item.get("leaning")
        if leaning is not None and not isinstance(leaning, str):
            result.add(ValidationIssue(
                ValidationErrorType.TYPE_ERROR,
                ValidationSeverity.LOW,
                f"Emotion {name} has invalid leaning type",
                f"emotional_data[{index}].leaning", type(leaning).__name__, "string",
            ), blocking=False)

    result.total_emotions = len(emotional_data)
    return result


# ---------------------------------------------------------------------- #
# Performance                                                              #
# ---------------------------------------------------------------------- #

def validate_performance(
    calculation_time_ms: float,
    memory_usage: int | None = None,
    config: ValidationConfig | None = None,
) -> PerformanceValidation:
    """Check calculation time (blocking) and memory usage (warning)."""
    cfg = config or _DEFAULT_CONFIG
    result = PerformanceValidation(
        calculation_time_ms=calculation_time_ms,
        memory_usage=memory_usage,
    )

    if calculation_time_ms > cfg.max_calculation_time_ms:
        result.add(ValidationIssue(
            ValidationErrorType.PERFORMANCE_ERROR,
            ValidationSeverity.HIGH,
            f"Calculation time ({calculation_time_ms:.1f}ms) exceeds maximum "
            f"allowed ({cfg.max_calculation_time_ms:g}ms)",
            "calculation_time_ms", calculation_time_ms,
            f"<= {cfg.max_calculation_time_ms:g}ms",
        ), blocking=True)

    if memory_usage is not None and memory_usage > cfg.max_memory_usage_bytes:
        mb = 1024 * 1024
        result.add(ValidationIssue(
            ValidationErrorType.PERFORMANCE_ERROR,
            ValidationSeverity.MEDIUM,
            f"Memory usage ({memory_usage / mb:.2f}MB) exceeds recommended "
            f"limit ({cfg.max_memory_usage_bytes / mb:.2f}MB)",
            "memory_usage", memory_usage, f"<= {cfg.max_memory_usage_bytes} bytes",
        ), blocking=False)

    return result


# ---------------------------------------------------------------------- #
# Aggregate validation & reporting                                         #
# ---------------------------------------------------------------------- #

def perform_comprehensive_validation(
    discipline_level: float,
    tilt_control: float,
    emotional_data: Any,
    calculation_time_ms: float = 0.0,
    memory_usage: int | None = None,
    config: ValidationConfig | None = None,
) -> ComprehensiveValidation:
    """Run every check and merge the messages into ``overall``."""
    psych = validate_psychological_metrics(discipline_level, tilt_control, config)
    emotional = validate_emotional_data(emotional_data, config)
    performance = validate_performance(calculation_time_ms, memory_usage, config)

    overall = ValidationResult()
    for part in (psych, emotional, performance):
        overall.errors.extend(part.errors)
        overall.warnings.extend(part.warnings)
        overall.issues.extend(part.issues)

    return ComprehensiveValidation(
        psychological_metrics=psych,
        emotional_data=emotional,
        performance=performance,
        overall=overall,
    )


def create_validation_report(
    context: ValidationContext,
    results: ComprehensiveValidation,
) -> dict[str, Any]:
    """Summarise a validation run with follow-up recommendations."""
    performance = results.performance
    summary = {
        "total_errors": len(results.overall.errors),
        "total_warnings": len(results.overall.warnings),
        "critical_issues": sum(
            1 for i in results.overall.issues
            if i.severity == ValidationSeverity.CRITICAL
        ),
        "performance_issues": len(performance.errors) + len(performance.warnings),
        "is_overall_valid": results.overall.is_valid,
    }

    recommendations: list[str] = []
    if results.psychological_metrics.errors:
        recommendations.append(
            "Review psychological metrics calculation logic and input data"
        )
    if results.emotional_data.errors:
        recommendations.append(
            "Validate emotional data input and ensure proper data structure"
        )
    if performance.errors:
        recommendations.append(
            "Optimize calculation algorithms and consider caching strategies"
        )
    if results.psychological_metrics.warnings:
        recommendations.append(
            "Monitor psychological metrics consistency and user feedback"
        )

    return {
        "request_id": context.request_id,
        "user_id": context.user_id,
        "summary": summary,
        "recommendations": recommendations,
        "results": results.to_dict(),
    }


def log_validation_results(
    context: ValidationContext,
    results: ComprehensiveValidation,
) -> None:
    """Emit a structured log entry when ``log_validation_failures`` is on."""
    if not context.config.log_validation_failures:
        return

    if not results.overall.is_valid:
        report = create_validation_report(context, results)
        log.error(
            "validation_failed",
            request_id=context.request_id,
            user_id=context.user_id,
            summary=report["summary"],
            errors=results.overall.errors,
            recommendations=report["recommendations"],
        )
    elif results.overall.warnings:
        log.warning(
            "validation_warnings",
            request_id=context.request_id,
            user_id=context.user_id,
            warnings=results.overall.warnings,
        )
    else:
        log.info(
            "validation_passed",
            request_id=context.request_id,
            user_id=context.user_id,
            calculation_time_ms=results.performance.calculation_time_ms,
        )


def create_validation_context(
    request_id: str,
    user_id: str | None = None,
    config: ValidationConfig | None = None,
) -> ValidationContext:
    return ValidationContext(
        request_id=request_id,
        user_id=user_id,
        config=config or ValidationConfig(),
    )


def finalize_validation_context(context: ValidationContext) -> ValidationContext:
    """Stamp the elapsed time since the context was created."""
    context.calculation_time_ms = (time.monotonic() - context.started) * 1000
    return context
