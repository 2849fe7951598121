from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Dict, Iterable, List, Tuple, Union

from .models import MarkerColor, MarkerPosition, MarkerShape, Marker, MasterSignal, SignalType
from .timeframes import Timeframe, align_to_bar, interval_seconds, parse_timeframe

log = logging.getLogger("projection")

MARKER_SIZE = 5

MARKER_STYLE: Dict[SignalType, Tuple[MarkerPosition, MarkerColor, MarkerShape]] = {
    SignalType.BUY: (MarkerPosition.BELOW_BAR, MarkerColor.BUY_GLOW, MarkerShape.ARROW_UP),
    SignalType.SELL: (MarkerPosition.ABOVE_BAR, MarkerColor.SELL_GLOW, MarkerShape.ARROW_DOWN),
}


@dataclass(frozen=True)
class VisibleWindow:
    start: int
    end: int

    @classmethod
    def trailing(cls, timeframe: Union[str, Timeframe], bar_count: int, now: float) -> "VisibleWindow":
        """Span covered by ``bar_count`` bars, the last one open at ``now``.

        Starts at the first bar's open so every bucket inside has a candle.
        """
        end = int(now)
        last_open = align_to_bar(end, timeframe)
        return cls(start=last_open - (bar_count - 1) * interval_seconds(timeframe), end=end)

    def contains(self, ts: int) -> bool:
        return self.start <= ts <= self.end


def marker_for(signal: MasterSignal, aligned_time: int, size: float = MARKER_SIZE) -> Marker:
    position, color, shape = MARKER_STYLE[signal.type]
    return Marker(time=aligned_time, position=position, color_class=color, shape=shape, size=size)


def project(
    master_signals: Iterable[MasterSignal],
    timeframe: Union[str, Timeframe],
    window: VisibleWindow,
    *,
    size: float = MARKER_SIZE,
) -> List[Marker]:
    """Markers for every master signal whose bar falls inside ``window``.

    Signals sharing a bar on coarse timeframes each keep their own marker.
    """
    tf = parse_timeframe(timeframe)
    markers: List[Marker] = []
    total = 0
    for sig in master_signals:
        total += 1
        aligned = align_to_bar(sig.timestamp, tf)
        if window.contains(aligned):
            markers.append(marker_for(sig, aligned, size))
    log.debug("projected tf=%s visible=%d total=%d", tf.value, len(markers), total)
    return markers
