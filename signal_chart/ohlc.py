from __future__ import annotations

import random
import time
from typing import List, Optional, Union

from .models import Candle
from .timeframes import Timeframe, align_to_bar, interval_seconds, volatility

DEFAULT_BAR_COUNT = 1000
SEED_PRICE = 45000.0
FLOOR_PRICE = 30000.0


def generate_series(
    timeframe: Union[str, Timeframe],
    bar_count: int = DEFAULT_BAR_COUNT,
    *,
    rng: Optional[random.Random] = None,
    now: Optional[float] = None,
    seed_price: float = SEED_PRICE,
    floor_price: float = FLOOR_PRICE,
    close_scale: float = 0.5,
    wick_scale: float = 0.3,
) -> List[Candle]:
    """Random-walk OHLC series ending at the bar that is open at ``now``.

    Bars are ``interval_seconds(timeframe)`` apart and aligned to that grid.
    Every call without a seeded ``rng`` yields a different series.
    """
    step = interval_seconds(timeframe)
    vol = volatility(timeframe)
    rng = rng or random.Random()
    now = time.time() if now is None else now
    last_open = align_to_bar(int(now), timeframe)

    out: List[Candle] = []
    base = float(seed_price)
    for i in range(bar_count - 1, -1, -1):
        change = (rng.random() - 0.5) * vol
        base = max(floor_price, base + change)

        o = base
        c = o + (rng.random() - 0.5) * (vol * close_scale)
        h = max(o, c) + rng.random() * (vol * wick_scale)
        l = min(o, c) - rng.random() * (vol * wick_scale)

        out.append(
            Candle(
                time=last_open - i * step,
                open=round(o),
                high=round(h),
                low=round(l),
                close=round(c),
            )
        )
        base = c
    return out
