"""Property tests for the emotion aggregator and psychology scorer.

Uses hypothesis to verify:
- Discipline Level and Tilt Control always sum to 100
- Both gauges stay within [0, 100] and carry at most 2 decimals
- Per-emotion buy/sell/no-side counts always add up to the tag count
- Leaning values stay within [-100, 100]
- Scored pairs clear the blocking metrics validation checks
"""

from collections import Counter

import pytest
from hypothesis import given, settings, strategies as st

from trade_psychology.journal.emotions import aggregate_emotions
from trade_psychology.journal.psychology import calculate_psychological_metrics
from trade_psychology.journal.record import TradeRecord
from trade_psychology.journal.validation import validate_psychological_metrics

_TAGS = [
    "DISCIPLINE", "CONFIDENCE", "PATIENCE",
    "TILT", "REVENGE", "IMPATIENCE",
    "NEUTRAL", "ANALYTICAL",
    "FOMO", "REGRET", "anxious",
]

_points = st.lists(
    st.fixed_dictionaries({
        "subject": st.sampled_from(_TAGS),
        "value": st.floats(min_value=0, max_value=10_000, allow_nan=False),
    }),
    min_size=1,
    max_size=20,
)

_trades = st.lists(
    st.builds(
        TradeRecord,
        side=st.sampled_from(["Buy", "Sell", None, "buy", ""]),
        emotional_state=st.lists(st.sampled_from(_TAGS), max_size=4),
    ),
    max_size=40,
)


@given(data=_points)
@settings(max_examples=200, deadline=None)
def test_gauges_are_complementary(data):
    """disciplineLevel + tiltControl == 100 for any scored input."""
    m = calculate_psychological_metrics(data)
    assert m.discipline_level + m.tilt_control == pytest.approx(100.0, abs=0.01)


@given(data=_points)
@settings(deadline=None)
def test_gauges_in_range_and_rounded(data):
    m = calculate_psychological_metrics(data)
    assert 0 <= m.discipline_level <= 100
    assert 0 <= m.tilt_control <= 100
    assert round(m.discipline_level, 2) == m.discipline_level
    assert round(m.tilt_control, 2) == m.tilt_control


@given(
    data=st.lists(
        st.fixed_dictionaries({
            "subject": st.one_of(st.none(), st.text(max_size=5), st.sampled_from(_TAGS)),
            "value": st.one_of(st.none(), st.integers(), st.floats(), st.text(max_size=3)),
        }),
        max_size=10,
    )
)
@settings(deadline=None)
def test_scorer_never_raises(data):
    """Arbitrary junk still yields a usable pair."""
    m = calculate_psychological_metrics(data)
    assert 0 <= m.discipline_level <= 100
    assert m.discipline_level + m.tilt_control == pytest.approx(100.0, abs=0.01)


@given(trades=_trades)
@settings(max_examples=200, deadline=None)
def test_side_counts_add_up(trades):
    """buy + sell + null == number of (trade, tag) pairs for each tag."""
    expected = Counter(tag for t in trades for tag in t.emotional_state)
    data = aggregate_emotions(trades)

    assert {d.subject: d.total_trades for d in data} == dict(expected)
    for d in data:
        assert d.buy_count + d.sell_count + d.null_count == d.total_trades
        assert -100 <= d.leaning_value <= 100
        assert d.full_mark == pytest.approx(max(1, d.total_trades) * 1.2)


@given(trades=_trades)
@settings(deadline=None)
def test_end_to_end_complementary(trades):
    m = calculate_psychological_metrics(aggregate_emotions(trades))
    assert m.discipline_level + m.tilt_control == pytest.approx(100.0, abs=0.01)


@given(trades=_trades)
@settings(deadline=None)
def test_scored_pair_passes_metrics_validation(trades):
    """Every pair the scorer emits clears the blocking metrics checks."""
    m = calculate_psychological_metrics(aggregate_emotions(trades))
    result = validate_psychological_metrics(m.discipline_level, m.tilt_control)
    assert result.errors == []
    assert result.corrected["discipline_level"] + result.corrected["tilt_control"] == (
        pytest.approx(100.0, abs=0.01)
    )
