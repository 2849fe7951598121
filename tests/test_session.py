import random

import pytest

import signal_chart.session as session_mod
from signal_chart.config import default_config
from signal_chart.errors import InvalidTimeframe
from signal_chart.models import MasterSignal, SignalType
from signal_chart.session import ChartSession
from signal_chart.timeframes import Timeframe

NOW = 1_700_000_000  # not on any bar boundary


def _session(seed: int = 11) -> ChartSession:
    return ChartSession(default_config(), rng=random.Random(seed), clock=lambda: NOW)


def test_candles_are_cached_per_timeframe():
    s = _session()
    first = s.candles("5m")
    assert s.candles(Timeframe.M5) is first
    assert len(first) == 1000
    assert s.candles("1h") is not first


def test_master_signals_generated_once():
    s = _session()
    master = s.master_signals()
    s.markers("1h")
    s.markers("1d")
    assert s.master_signals() is master
    assert len(master) == 6


def test_markers_land_on_candle_times_for_every_timeframe():
    s = _session()
    for tf in Timeframe:
        times = {c.time for c in s.candles(tf)}
        assert {m.time for m in s.markers(tf)} <= times


def test_whole_horizon_visible_from_hourly_up():
    s = _session()
    for tf in (Timeframe.H1, Timeframe.H4, Timeframe.D1):
        assert len(s.markers(tf)) == 6


def test_generator_and_projection_run_once_per_timeframe(monkeypatch):
    gen_calls, proj_calls = [], []
    real_gen, real_proj = session_mod.generate_series, session_mod.project

    def counting_gen(*args, **kwargs):
        gen_calls.append(args[0])
        return real_gen(*args, **kwargs)

    def counting_proj(*args, **kwargs):
        proj_calls.append(args[1])
        return real_proj(*args, **kwargs)

    monkeypatch.setattr(session_mod, "generate_series", counting_gen)
    monkeypatch.setattr(session_mod, "project", counting_proj)

    s = _session()
    a = s.frame("15m")
    b = s.frame("15m")
    assert a.candles is b.candles
    assert a.markers is b.markers
    assert gen_calls == [Timeframe.M15]
    assert proj_calls == [Timeframe.M15]


def test_sessions_do_not_share_state():
    a, b = _session(), _session()
    assert a.candles("1m") is not b.candles("1m")
    a.markers("1h")
    assert "1h" in a.signal_cache
    assert "1h" not in b.signal_cache


def test_seed_from_config_makes_sessions_reproducible():
    cfg = default_config()
    cfg.app.seed = 99
    a = ChartSession(cfg, clock=lambda: NOW)
    cfg_b = default_config()
    cfg_b.app.seed = 99
    b = ChartSession(cfg_b, clock=lambda: NOW)
    assert a.frame("1h") == b.frame("1h")


def test_unknown_timeframe_raises():
    s = _session()
    with pytest.raises(InvalidTimeframe):
        s.candles("bogus")
    with pytest.raises(InvalidTimeframe):
        s.markers("2h")


def test_markers_stay_on_candles_when_clock_is_on_the_grid(monkeypatch):
    on_grid = 1_699_999_200  # multiple of 60, 300, 900 and 3600
    edge = on_grid - 1000 * 3600 + 10  # bucket one bar before the first 1h candle
    first_bar = on_grid - 999 * 3600 + 10
    signals = [
        MasterSignal(id="signal_0_a", timestamp=edge, type=SignalType.BUY, price=45000, reason="r", confidence=90),
        MasterSignal(id="signal_1_b", timestamp=first_bar, type=SignalType.SELL, price=45000, reason="r", confidence=90),
    ]
    monkeypatch.setattr(session_mod, "generate_master_signals", lambda *args, **kwargs: signals)

    s = ChartSession(default_config(), rng=random.Random(5), clock=lambda: on_grid)
    candles = s.candles("1h")
    assert [m.time for m in s.markers("1h")] == [candles[0].time]
    for tf in Timeframe:
        times = {c.time for c in s.candles(tf)}
        assert {m.time for m in s.markers(tf)} <= times
