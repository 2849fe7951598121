from __future__ import annotations

import logging
import random
import time
from typing import Callable, List, Optional, Union

from .cache import TimeframeCache
from .config import Config, default_config
from .models import Candle, Frame, Marker, MasterSignal
from .ohlc import generate_series
from .projection import VisibleWindow, project
from .signals import generate_master_signals
from .timeframes import Timeframe, parse_timeframe

log = logging.getLogger("session")


class ChartSession:
    """Per-session state: generated candles, master signals and projected markers.

    Nothing is shared between instances, so independent sessions (or tests)
    never see each other's data.
    """

    def __init__(
        self,
        cfg: Optional[Config] = None,
        *,
        rng: Optional[random.Random] = None,
        clock: Callable[[], float] = time.time,
    ):
        self.cfg = cfg or default_config()
        if rng is None:
            rng = random.Random(self.cfg.app.seed)
        self.rng = rng
        self.clock = clock
        self.data_cache: TimeframeCache[List[Candle]] = TimeframeCache("data_cache")
        self.signal_cache: TimeframeCache[List[Marker]] = TimeframeCache("signal_cache")
        self._master: Optional[List[MasterSignal]] = None

    def candles(self, timeframe: Union[str, Timeframe]) -> List[Candle]:
        tf = parse_timeframe(timeframe)
        gen = self.cfg.generator
        return self.data_cache.get_or_compute(
            tf,
            lambda: generate_series(
                tf,
                int(gen.bar_count),
                rng=self.rng,
                now=self.clock(),
                seed_price=gen.seed_price,
                floor_price=gen.floor_price,
                close_scale=gen.close_scale,
                wick_scale=gen.wick_scale,
            ),
        )

    def master_signals(self) -> List[MasterSignal]:
        if self._master is None:
            sc = self.cfg.signals
            self._master = generate_master_signals(
                self.cfg.horizon_seconds,
                rng=self.rng,
                now=self.clock(),
                count=int(sc.count),
                base_price=sc.base_price,
                price_jitter=sc.price_jitter,
                confidence_floor=int(sc.confidence_floor),
                segment_margin=sc.segment_margin,
            )
        return self._master

    def markers(self, timeframe: Union[str, Timeframe]) -> List[Marker]:
        tf = parse_timeframe(timeframe)
        signals = self.master_signals()

        def _project() -> List[Marker]:
            window = VisibleWindow.trailing(tf, int(self.cfg.generator.bar_count), self.clock())
            markers = project(signals, tf, window, size=self.cfg.signals.marker_size)
            log.info("signals_in_range tf=%s markers=%d of=%d", tf.value, len(markers), len(signals))
            return markers

        return self.signal_cache.get_or_compute(tf, _project)

    def frame(self, timeframe: Union[str, Timeframe]) -> Frame:
        tf = parse_timeframe(timeframe)
        return Frame(timeframe=tf, candles=self.candles(tf), markers=self.markers(tf))
