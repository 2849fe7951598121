from __future__ import annotations

import logging
from typing import Callable, Dict, Generic, List, Optional, TypeVar, Union

from .timeframes import Timeframe, parse_timeframe

T = TypeVar("T")


class TimeframeCache(Generic[T]):
    """Compute-once store keyed by timeframe. Entries live as long as the cache."""

    def __init__(self, name: str = "cache") -> None:
        self.name = name
        self._entries: Dict[Timeframe, T] = {}
        self._log = logging.getLogger(name)

    def get_or_compute(self, timeframe: Union[str, Timeframe], compute: Callable[[], T]) -> T:
        tf = parse_timeframe(timeframe)
        if tf in self._entries:
            return self._entries[tf]
        value = compute()
        self._entries[tf] = value
        self._log.info("%s_filled tf=%s entries=%d", self.name, tf.value, len(self._entries))
        return value

    def get(self, timeframe: Union[str, Timeframe]) -> Optional[T]:
        return self._entries.get(parse_timeframe(timeframe))

    def timeframes(self) -> List[Timeframe]:
        return list(self._entries)

    def __contains__(self, timeframe: object) -> bool:
        try:
            return parse_timeframe(timeframe) in self._entries
        except ValueError:
            return False

    def __len__(self) -> int:
        return len(self._entries)
