from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import List

from .timeframes import Timeframe


class SignalType(str, Enum):
    BUY = "buy"
    SELL = "sell"


class MarkerPosition(str, Enum):
    BELOW_BAR = "belowBar"
    ABOVE_BAR = "aboveBar"


class MarkerShape(str, Enum):
    ARROW_UP = "arrowUp"
    ARROW_DOWN = "arrowDown"


class MarkerColor(str, Enum):
    BUY_GLOW = "buyGlow"
    SELL_GLOW = "sellGlow"


@dataclass(frozen=True)
class Candle:
    time: int  # bar open, unix seconds
    open: float
    high: float
    low: float
    close: float


@dataclass(frozen=True)
class MasterSignal:
    id: str
    timestamp: int  # unix seconds
    type: SignalType
    price: float
    reason: str
    confidence: int


@dataclass(frozen=True)
class Marker:
    time: int  # aligned to the timeframe's bar grid
    position: MarkerPosition
    color_class: MarkerColor
    shape: MarkerShape
    size: float


@dataclass(frozen=True)
class Frame:
    """Everything the display needs for one timeframe."""

    timeframe: Timeframe
    candles: List[Candle]
    markers: List[Marker]
