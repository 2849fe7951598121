from __future__ import annotations

from enum import Enum
from typing import Dict, Union

from .errors import InvalidTimeframe


class Timeframe(str, Enum):
    M1 = "1m"
    M5 = "5m"
    M15 = "15m"
    H1 = "1h"
    H4 = "4h"
    D1 = "1d"


# Bar length per timeframe; markers are bucketed on this grid.
INTERVAL_SECONDS: Dict[Timeframe, int] = {
    Timeframe.M1: 60,
    Timeframe.M5: 300,
    Timeframe.M15: 900,
    Timeframe.H1: 3600,
    Timeframe.H4: 14400,
    Timeframe.D1: 86400,
}

# Random-walk step size per bar (finer timeframes swing less).
VOLATILITY: Dict[Timeframe, float] = {
    Timeframe.M1: 50.0,
    Timeframe.M5: 150.0,
    Timeframe.M15: 300.0,
    Timeframe.H1: 500.0,
    Timeframe.H4: 1000.0,
    Timeframe.D1: 2000.0,
}

TIMEFRAME_NAMES: Dict[str, Dict[Timeframe, str]] = {
    "ja": {
        Timeframe.M1: "1分足",
        Timeframe.M5: "5分足",
        Timeframe.M15: "15分足",
        Timeframe.H1: "1時間足",
        Timeframe.H4: "4時間足",
        Timeframe.D1: "日足",
    },
    "en": {
        Timeframe.M1: "1 minute",
        Timeframe.M5: "5 minutes",
        Timeframe.M15: "15 minutes",
        Timeframe.H1: "1 hour",
        Timeframe.H4: "4 hours",
        Timeframe.D1: "1 day",
    },
}


def parse_timeframe(tf: Union[str, Timeframe]) -> Timeframe:
    if isinstance(tf, Timeframe):
        return tf
    key = tf.strip().lower() if isinstance(tf, str) else tf
    try:
        return Timeframe(key)
    except ValueError:
        raise InvalidTimeframe(tf) from None


def interval_seconds(tf: Union[str, Timeframe]) -> int:
    return INTERVAL_SECONDS[parse_timeframe(tf)]


def volatility(tf: Union[str, Timeframe]) -> float:
    return VOLATILITY[parse_timeframe(tf)]


def align_to_bar(ts: int, tf: Union[str, Timeframe]) -> int:
    """Start of the bar that is open at ``ts`` (unix seconds).

    Floor division keeps the invariant ``aligned <= ts < aligned + interval``
    for negative timestamps too.
    """
    step = interval_seconds(tf)
    return (int(ts) // step) * step


def timeframe_name(tf: Union[str, Timeframe], language: str = "ja") -> str:
    tf = parse_timeframe(tf)
    names = TIMEFRAME_NAMES.get(language)
    if names is None:
        return tf.value
    return names[tf]
