import random

from signal_chart.models import SignalType
from signal_chart.signals import REASONS, generate_master_signals

NOW = 1_700_000_000
HORIZON = 1000 * 3600


def _signals(seed: int = 5, **kwargs):
    return generate_master_signals(HORIZON, rng=random.Random(seed), now=NOW, **kwargs)


def test_signals_sorted_and_alternating():
    sigs = _signals()
    assert len(sigs) == 6
    ts = [s.timestamp for s in sigs]
    assert all(a < b for a, b in zip(ts, ts[1:]))
    assert [s.type for s in sigs] == [SignalType.BUY, SignalType.SELL] * 3


def test_one_signal_per_segment_inside_the_margin():
    data_start = NOW - HORIZON
    segment = HORIZON // 6
    for i, s in enumerate(_signals(seed=11)):
        seg_start = data_start + i * segment
        assert seg_start + segment * 0.1 <= s.timestamp <= seg_start + segment * 0.9
        assert data_start <= s.timestamp <= NOW


def test_signal_fields():
    for s in _signals(seed=3):
        assert s.id.startswith("signal_") and s.id.endswith(f"_{s.timestamp}")
        assert 80 <= s.confidence <= 100
        assert 42000 <= s.price <= 48000
        assert s.reason in REASONS[s.type]


def test_custom_count_keeps_alternation():
    sigs = _signals(count=5)
    assert [s.type.value for s in sigs] == ["buy", "sell", "buy", "sell", "buy"]


def test_empty_horizon_or_count_gives_no_signals():
    assert generate_master_signals(0, now=NOW) == []
    assert generate_master_signals(-10, now=NOW) == []
    assert generate_master_signals(HORIZON, now=NOW, count=0) == []


def test_seeded_generation_is_reproducible():
    assert _signals(seed=8) == _signals(seed=8)
