from __future__ import annotations

import logging
from typing import Optional, Union

from .config import Config
from .display import ChartDisplay, FileDisplay, WebhookDisplay, clamp_size
from .errors import InvalidTimeframe, RenderTargetUnavailable
from .formatters import message
from .models import Frame
from .notifier.webhook import WebhookNotifier
from .session import ChartSession
from .timeframes import TIMEFRAME_NAMES, Timeframe, parse_timeframe, timeframe_name

log = logging.getLogger("runner")


def build_display(cfg: Config) -> ChartDisplay:
    if cfg.display.target == "webhook":
        return WebhookDisplay(cfg.display.url, timeout_s=cfg.display.timeout_s, headers=cfg.display.headers or {})
    return FileDisplay(cfg.display.output_dir, width=cfg.chart.width, height=cfg.chart.height)


class ChartRunner:
    """Drives a session from UI events: startup, timeframe switch, resize, language."""

    def __init__(
        self,
        cfg: Config,
        *,
        session: Optional[ChartSession] = None,
        display: Optional[ChartDisplay] = None,
        notifier: Optional[WebhookNotifier] = None,
    ):
        self.cfg = cfg
        self.session = session or ChartSession(cfg)
        self.display = display or build_display(cfg)
        self.notifier = notifier or WebhookNotifier(
            enabled=cfg.webhook.enabled,
            url=cfg.webhook.url,
            secret=cfg.webhook.secret,
            timeout_s=cfg.webhook.timeout_s,
            headers=cfg.webhook.headers or {},
        )
        self.language = cfg.app.language
        self.current_timeframe: Timeframe = cfg.default_timeframe
        self.started = False

    async def start(self) -> Frame:
        log.info("start app=%s tf=%s", self.cfg.app.name, self.current_timeframe.value)
        frame = self.session.frame(self.current_timeframe)
        await self._present(frame)
        self.started = True
        return frame

    async def change_timeframe(self, timeframe: Union[str, Timeframe]) -> Optional[Frame]:
        try:
            tf = parse_timeframe(timeframe)
        except InvalidTimeframe:
            log.warning("timeframe_change_rejected tf=%r", timeframe)
            await self.notifier.error(message("timeframe_change_failed", self.language))
            raise

        if tf == self.current_timeframe and self.started:
            return None

        frame = self.session.frame(tf)
        shown = await self._present(frame)
        self.current_timeframe = tf
        self.started = True
        log.info("timeframe_changed tf=%s bars=%d markers=%d", tf.value, len(frame.candles), len(frame.markers))
        if shown:
            await self.notifier.success(message("timeframe_changed", self.language, name=self.timeframe_label()))
        return frame

    async def resize(self, width: int, height: int) -> None:
        w, h = clamp_size(width, height)
        try:
            await self.display.resize(w, h)
        except RenderTargetUnavailable as e:
            log.error("resize_failed err=%s", e)
            await self.notifier.error(message("render_target_missing", self.language))

    def change_language(self, language: str) -> None:
        if language not in TIMEFRAME_NAMES:
            raise ValueError(f"Unsupported language: {language}")
        self.language = language
        log.info("language_changed lang=%s", language)

    def timeframe_label(self) -> str:
        return timeframe_name(self.current_timeframe, self.language)

    async def close(self) -> None:
        await self.display.close()

    async def _present(self, frame: Frame) -> bool:
        try:
            await self.display.render(frame.candles)
            await self.display.set_markers(frame.markers)
        except RenderTargetUnavailable as e:
            # Data is cached already; it is shown once the surface is back.
            log.error("render_target_unavailable tf=%s err=%s", frame.timeframe.value, e)
            await self.notifier.error(message("render_target_missing", self.language))
            return False
        return True
