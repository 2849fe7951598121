from __future__ import annotations

import logging
import random
import time
from typing import Dict, List, Optional

from .models import MasterSignal, SignalType

log = logging.getLogger("signals")

DEFAULT_SIGNAL_COUNT = 6

# Cosmetic only; nothing here is computed from the price series.
REASONS: Dict[SignalType, List[str]] = {
    SignalType.BUY: [
        "RSI oversold + bullish divergence detected",
        "Support level bounce + volume surge",
        "Moving average golden cross formation",
        "Bullish flag pattern breakout confirmed",
        "Fibonacci retracement 61.8% support",
    ],
    SignalType.SELL: [
        "RSI overbought + bearish divergence",
        "Resistance level rejection + high volume",
        "Moving average death cross formation",
        "Head and shoulders pattern completed",
        "Double top formation confirmed",
    ],
}


def signal_reason(signal_type: SignalType, rng: random.Random) -> str:
    pool = REASONS[SignalType(signal_type)]
    return pool[int(rng.random() * len(pool))]


def signal_type_at(index: int) -> SignalType:
    return SignalType.BUY if index % 2 == 0 else SignalType.SELL


def generate_master_signals(
    horizon_seconds: int,
    *,
    rng: Optional[random.Random] = None,
    now: Optional[float] = None,
    count: int = DEFAULT_SIGNAL_COUNT,
    base_price: float = 45000.0,
    price_jitter: float = 6000.0,
    confidence_floor: int = 80,
    segment_margin: float = 0.1,
) -> List[MasterSignal]:
    """Session-wide signal set covering ``[now - horizon_seconds, now]``.

    The horizon is cut into ``count`` equal segments with one signal per
    segment, placed at a random offset inside the segment minus
    ``segment_margin`` on each side. Types alternate buy, sell, buy, ...
    """
    if horizon_seconds <= 0 or count <= 0:
        return []

    rng = rng or random.Random()
    now = time.time() if now is None else now
    data_start = now - horizon_seconds
    segment = horizon_seconds / count
    usable = 1.0 - 2 * segment_margin
    confidence_span = 100 - confidence_floor

    signals: List[MasterSignal] = []
    for i in range(count):
        seg_start = data_start + i * segment
        offset = rng.random() * (segment * usable) + segment * segment_margin
        ts = int(seg_start + offset)

        side = signal_type_at(i)
        price = base_price + (rng.random() - 0.5) * price_jitter
        signals.append(
            MasterSignal(
                id=f"signal_{i}_{ts}",
                timestamp=ts,
                type=side,
                price=round(price),
                reason=signal_reason(side, rng),
                confidence=round(rng.random() * confidence_span + confidence_floor),
            )
        )

    signals.sort(key=lambda s: s.timestamp)
    log.info(
        "master_signals_generated count=%d sequence=%s",
        len(signals),
        " -> ".join(s.type.value for s in signals),
    )
    return signals
