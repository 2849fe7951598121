from __future__ import annotations


class InvalidTimeframe(ValueError):
    """Unknown timeframe id passed to an interval/volatility lookup or projection."""

    def __init__(self, timeframe: object):
        self.timeframe = timeframe
        super().__init__(f"Unsupported timeframe: {timeframe!r}")


class RenderTargetUnavailable(RuntimeError):
    """The display surface the chart renders into is missing."""
