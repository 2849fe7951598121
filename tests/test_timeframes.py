import pytest

from signal_chart.errors import InvalidTimeframe
from signal_chart.timeframes import (
    INTERVAL_SECONDS,
    Timeframe,
    align_to_bar,
    interval_seconds,
    parse_timeframe,
    timeframe_name,
    volatility,
)


def test_interval_table_matches_bar_grid():
    table = {tf.value: secs for tf, secs in INTERVAL_SECONDS.items()}
    assert table == {"1m": 60, "5m": 300, "15m": 900, "1h": 3600, "4h": 14400, "1d": 86400}
    assert interval_seconds("4h") == 14400


def test_volatility_grows_with_coarser_timeframes():
    vols = [volatility(tf) for tf in Timeframe]
    assert all(a < b for a, b in zip(vols, vols[1:]))


def test_parse_accepts_ids_and_members():
    assert parse_timeframe("1h") is Timeframe.H1
    assert parse_timeframe(" 4H ") is Timeframe.H4
    assert parse_timeframe(Timeframe.D1) is Timeframe.D1


@pytest.mark.parametrize("bad", ["bogus", "", "2h", None, 60])
def test_unknown_timeframe_is_rejected(bad):
    with pytest.raises(InvalidTimeframe):
        interval_seconds(bad)
    with pytest.raises(InvalidTimeframe):
        volatility(bad)


def test_align_puts_timestamp_on_its_open_bar():
    samples = [0, 1, 59, 60, 3599, 3600, 3700, 86399, 86400, 1_700_000_123, 1_700_003_599]
    for tf in Timeframe:
        step = interval_seconds(tf)
        for ts in samples:
            aligned = align_to_bar(ts, tf)
            assert aligned <= ts < aligned + step
            assert aligned % step == 0


def test_timeframe_names_by_language():
    assert timeframe_name("1h") == "1時間足"
    assert timeframe_name("1d", "ja") == "日足"
    assert timeframe_name("15m", "en") == "15 minutes"
    assert timeframe_name("5m", "fr") == "5m"
