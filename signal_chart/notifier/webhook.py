from __future__ import annotations

import asyncio
import json
import logging

import aiohttp

from ..formatters import NOTIFY_TTL_S

log = logging.getLogger("webhook")


class WebhookNotifier:
    """Relays on-screen notifications (error/success toasts) to the page.

    With no webhook configured the notification is only logged.
    """

    def __init__(self, *, enabled: bool, url: str, secret: str = "", timeout_s: int = 10, headers: dict = None):
        self.enabled = bool(enabled) and bool(url)
        self.url = url or ""
        self.secret = secret or ""
        self.timeout_s = int(timeout_s) if timeout_s is not None else 10
        self.headers = headers or {}

    async def error(self, text: str) -> None:
        log.error("notify_error msg=%s", text)
        await self._send("error", text)

    async def success(self, text: str) -> None:
        log.info("notify_success msg=%s", text)
        await self._send("success", text)

    async def _send(self, level: str, text: str) -> None:
        if not self.enabled:
            return
        payload = {
            "secret": self.secret,
            "level": level,
            "message": text,
            "ttl_s": NOTIFY_TTL_S[level],
        }
        try:
            timeout = aiohttp.ClientTimeout(total=self.timeout_s)
            async with aiohttp.ClientSession(timeout=timeout) as session:
                async with session.post(
                    self.url,
                    data=json.dumps(payload, ensure_ascii=False),
                    headers={"Content-Type": "application/json", **self.headers},
                ) as resp:
                    if resp.status >= 400:
                        body = await resp.text()
                        log.warning("webhook_bad_status status=%s body=%s", resp.status, body[:200])
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            # Log but do not crash
            log.warning("webhook_post_failed err=%s", e)
