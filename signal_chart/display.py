from __future__ import annotations

import asyncio
import json
import logging
import os
from typing import Any, Dict, List, Optional, Sequence

import aiohttp

from .errors import RenderTargetUnavailable
from .formatters import SERIES_STYLE, candles_payload, markers_payload
from .models import Candle, Marker

log = logging.getLogger("display")

MIN_WIDTH = 300
MIN_HEIGHT = 400


def clamp_size(width: int, height: int) -> tuple[int, int]:
    return max(MIN_WIDTH, int(width)), max(MIN_HEIGHT, int(height))


class ChartDisplay:
    """Surface that draws one candle series plus its marker overlay."""

    async def render(self, candles: Sequence[Candle]) -> None:
        raise NotImplementedError

    async def set_markers(self, markers: Sequence[Marker]) -> None:
        raise NotImplementedError

    async def resize(self, width: int, height: int) -> None:
        raise NotImplementedError

    async def close(self) -> None:
        return None


class FileDisplay(ChartDisplay):
    """Keeps the chart state in ``<output_dir>/chart.json`` for a static page to poll."""

    filename = "chart.json"

    def __init__(self, output_dir: str, *, width: int = 800, height: int = 600):
        self.output_dir = output_dir
        self.width, self.height = clamp_size(width, height)
        self._candles: List[Dict[str, Any]] = []
        self._markers: List[Dict[str, Any]] = []

    @property
    def path(self) -> str:
        return os.path.join(self.output_dir, self.filename)

    def _write(self) -> None:
        if not os.path.isdir(self.output_dir):
            raise RenderTargetUnavailable(f"output dir missing: {self.output_dir}")
        state = {
            "width": self.width,
            "height": self.height,
            "series_style": SERIES_STYLE,
            "candles": self._candles,
            "markers": self._markers,
        }
        tmp = self.path + ".tmp"
        with open(tmp, "w", encoding="utf-8") as f:
            json.dump(state, f, ensure_ascii=False, separators=(",", ":"))
        os.replace(tmp, self.path)

    async def render(self, candles: Sequence[Candle]) -> None:
        self._candles = candles_payload(candles)
        self._write()
        log.info("rendered bars=%d path=%s", len(self._candles), self.path)

    async def set_markers(self, markers: Sequence[Marker]) -> None:
        self._markers = markers_payload(markers)
        self._write()

    async def resize(self, width: int, height: int) -> None:
        self.width, self.height = int(width), int(height)
        self._write()
        log.info("resized width=%d height=%d", self.width, self.height)


class WebhookDisplay(ChartDisplay):
    """POSTs every display operation as JSON to a chart front-end."""

    def __init__(self, url: str, *, timeout_s: int = 10, headers: Optional[dict] = None):
        self.url = url or ""
        self.timeout_s = int(timeout_s) if timeout_s is not None else 10
        self.headers = headers or {}
        self._session: Optional[aiohttp.ClientSession] = None

    async def close(self) -> None:
        if self._session is not None and not self._session.closed:
            await self._session.close()

    async def _post(self, payload: Dict[str, Any]) -> None:
        if not self.url:
            raise RenderTargetUnavailable("display url not configured")
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession(timeout=aiohttp.ClientTimeout(total=self.timeout_s))
        try:
            async with self._session.post(
                self.url,
                data=json.dumps(payload, ensure_ascii=False),
                headers={"Content-Type": "application/json", **self.headers},
            ) as resp:
                if resp.status >= 400:
                    text = await resp.text()
                    raise RenderTargetUnavailable(f"display bad status={resp.status} body={text[:200]}")
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            raise RenderTargetUnavailable(f"display unreachable: {e}") from e

    async def render(self, candles: Sequence[Candle]) -> None:
        await self._post({"op": "render", "series_style": SERIES_STYLE, "candles": candles_payload(candles)})

    async def set_markers(self, markers: Sequence[Marker]) -> None:
        await self._post({"op": "set_markers", "markers": markers_payload(markers)})

    async def resize(self, width: int, height: int) -> None:
        await self._post({"op": "resize", "width": int(width), "height": int(height)})
