"""Tests for the Discipline Level / Tilt Control scorer."""

import logging

import pytest

from trade_psychology.core.config import ScoringConfig
from trade_psychology.core.enums import EmotionCategory
from trade_psychology.journal.emotions import aggregate_emotions
from trade_psychology.journal.psychology import (
    PsychologicalMetrics,
    calculate_psychological_metrics,
    classify_emotion,
    default_metrics,
)


def _point(subject, value):
    return {"subject": subject, "value": value}


def _assert_complementary(metrics: PsychologicalMetrics):
    assert metrics.discipline_level + metrics.tilt_control == pytest.approx(100.0, abs=0.01)


class TestDefaults:
    def test_empty_list(self):
        m = calculate_psychological_metrics([])
        assert (m.discipline_level, m.tilt_control) == (50.0, 50.0)

    def test_none(self):
        m = calculate_psychological_metrics(None)
        assert (m.discipline_level, m.tilt_control) == (50.0, 50.0)

    def test_default_metrics(self):
        assert default_metrics() == PsychologicalMetrics(50.0, 50.0)


class TestExtremes:
    def test_all_positive(self):
        data = [_point("DISCIPLINE", 100), _point("CONFIDENCE", 100), _point("PATIENCE", 100)]
        m = calculate_psychological_metrics(data)
        assert 90 <= m.discipline_level <= 100
        assert m.discipline_level == 100.0
        assert m.tilt_control == 0.0

    def test_all_negative(self):
        data = [_point("TILT", 100), _point("REVENGE", 100), _point("IMPATIENCE", 100)]
        m = calculate_psychological_metrics(data)
        assert 0 <= m.discipline_level <= 10
        assert m.discipline_level == 0.0
        assert m.tilt_control == 100.0


class TestFormula:
    def test_single_positive_trade(self):
        # positive = 1/100*100 = 1; ess = 2; psi = 51
        m = calculate_psychological_metrics([_point("DISCIPLINE", 1)])
        assert m.discipline_level == pytest.approx(51.0)
        assert m.tilt_control == pytest.approx(49.0)

    def test_negative_weight(self):
        # negative = 20; ess = -30; psi = 35
        m = calculate_psychological_metrics([_point("TILT", 20)])
        assert m.discipline_level == pytest.approx(35.0)
        assert m.tilt_control == pytest.approx(65.0)

    def test_neutral_weight(self):
        # neutral = 30; ess = 30; psi = 65
        m = calculate_psychological_metrics([_point("NEUTRAL", 30)])
        assert m.discipline_level == pytest.approx(65.0)

    def test_unclassified_only_is_neutral(self):
        m = calculate_psychological_metrics([_point("FOMO", 5), _point("REGRET", 9)])
        assert m.discipline_level == pytest.approx(50.0)
        assert m.tilt_control == pytest.approx(50.0)

    def test_unclassified_still_counts_in_denominator(self):
        alone = calculate_psychological_metrics([_point("DISCIPLINE", 10)])
        diluted = calculate_psychological_metrics(
            [_point("DISCIPLINE", 10), _point("FOMO", 10)]
        )
        assert alone.discipline_level == pytest.approx(60.0)
        # max possible doubles to 200: positive = 5, ess = 10, psi = 55
        assert diluted.discipline_level == pytest.approx(55.0)

    def test_case_insensitive_subject(self):
        m = calculate_psychological_metrics([_point("discipline", 10)])
        assert m.discipline_level == pytest.approx(60.0)

    def test_rounded_to_two_decimals(self):
        # positive = 1/300*100 = 0.333..; psi = 50.333..
        data = [_point("DISCIPLINE", 1), _point("FOMO", 1), _point("FOMO2", 1)]
        m = calculate_psychological_metrics(data)
        assert m.discipline_level == pytest.approx(50.33)
        assert m.tilt_control == pytest.approx(49.67)
        assert round(m.discipline_level, 2) == m.discipline_level
        assert round(m.tilt_control, 2) == m.tilt_control
        _assert_complementary(m)

    def test_missing_value_counts_as_zero(self):
        m = calculate_psychological_metrics([{"subject": "DISCIPLINE"}, _point("TILT", None)])
        assert m.discipline_level == pytest.approx(50.0)

    def test_accepts_emotion_datum(self, make_trade):
        trades = [make_trade("Buy", "DISCIPLINE"), make_trade("Sell", "DISCIPLINE")]
        data = aggregate_emotions(trades)
        # one point, value 2: positive = 2, ess = 4, psi = 52
        m = calculate_psychological_metrics(data)
        assert m.discipline_level == pytest.approx(52.0)
        assert m.tilt_control == pytest.approx(48.0)

    def test_custom_weights(self):
        scoring = ScoringConfig(positive_weight=4.0)
        m = calculate_psychological_metrics([_point("DISCIPLINE", 10)], scoring=scoring)
        # positive = 10, ess = 40, psi = 70
        assert m.discipline_level == pytest.approx(70.0)


class TestNeverRaises:
    def test_non_numeric_value_falls_back(self):
        m = calculate_psychological_metrics([_point("TILT", "lots")])
        assert (m.discipline_level, m.tilt_control) == (50.0, 50.0)

    def test_boolean_value_falls_back(self):
        m = calculate_psychological_metrics([_point("DISCIPLINE", True)])
        assert (m.discipline_level, m.tilt_control) == (50.0, 50.0)

    def test_non_finite_value_falls_back(self):
        m = calculate_psychological_metrics([_point("DISCIPLINE", float("nan"))])
        assert (m.discipline_level, m.tilt_control) == (50.0, 50.0)

    def test_unreadable_points_are_unclassified(self):
        m = calculate_psychological_metrics([None, 3, _point(None, 10)])
        assert (m.discipline_level, m.tilt_control) == (50.0, 50.0)

    def test_non_iterable_input_falls_back(self):
        m = calculate_psychological_metrics(12)
        assert (m.discipline_level, m.tilt_control) == (50.0, 50.0)

    def test_failure_is_logged(self, caplog):
        with caplog.at_level(logging.WARNING, logger="trade_psychology.journal.psychology"):
            calculate_psychological_metrics([_point("TILT", "lots")])
        assert "using defaults" in caplog.text


class TestClassifyEmotion:
    @pytest.mark.parametrize(
        "subject, expected",
        [
            ("DISCIPLINE", EmotionCategory.POSITIVE),
            ("confidence", EmotionCategory.POSITIVE),
            ("Tilt", EmotionCategory.NEGATIVE),
            ("ANALYTICAL", EmotionCategory.NEUTRAL),
            ("FOMO", None),
            ("CONFIDENT", None),
            (None, None),
        ],
    )
    def test_categories(self, subject, expected):
        assert classify_emotion(subject) is expected


class TestMetricsModel:
    def test_to_dict(self):
        assert PsychologicalMetrics(60.0, 40.0).to_dict() == {
            "disciplineLevel": 60.0,
            "tiltControl": 40.0,
        }

    @pytest.mark.parametrize("discipline, tilt", [(100.0, 0.0), (10.0, 90.0), (60.0, 40.0)])
    def test_stability_index_is_discipline_level(self, discipline, tilt):
        metrics = PsychologicalMetrics(discipline, tilt)
        assert metrics.psychological_stability_index == discipline

    def test_stability_index_from_scored_data(self):
        metrics = calculate_psychological_metrics([{"subject": "TILT", "value": 20}])
        # neg = 20, ess = -30, psi = 35
        assert metrics.psychological_stability_index == pytest.approx(35.0)
