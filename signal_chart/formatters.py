from __future__ import annotations

from typing import Any, Dict, Iterable, List, Optional

from .models import Candle, Frame, Marker, MarkerColor
from .timeframes import timeframe_name


MARKER_COLORS: Dict[MarkerColor, str] = {
    MarkerColor.BUY_GLOW: "rgba(0, 255, 255, 0.3)",
    MarkerColor.SELL_GLOW: "rgba(255, 20, 147, 0.3)",
}

SERIES_STYLE: Dict[str, Any] = {
    "upColor": "#0361ad",
    "downColor": "#ea5394",
    "borderUpColor": "#0361ad",
    "borderDownColor": "#ea5394",
    "wickUpColor": "#0361ad",
    "wickDownColor": "#ea5394",
    "priceLineColor": "#ffffff",
}

MESSAGES: Dict[str, Dict[str, str]] = {
    "render_target_missing": {
        "ja": "チャートコンテナが見つかりません",
        "en": "Chart container not found",
    },
    "timeframe_change_failed": {
        "ja": "時間足の切り替えに失敗しました",
        "en": "Failed to switch timeframe",
    },
    "timeframe_changed": {
        "ja": "{name}に切り替えました",
        "en": "Switched to {name}",
    },
}

# Seconds a notification stays on screen.
NOTIFY_TTL_S = {"error": 5, "success": 3}


def message(key: str, language: str = "ja", **kwargs: Any) -> str:
    texts = MESSAGES[key]
    text = texts.get(language) or texts["en"]
    return text.format(**kwargs) if kwargs else text


def candle_payload(c: Candle) -> Dict[str, Any]:
    return {"time": c.time, "open": c.open, "high": c.high, "low": c.low, "close": c.close}


def marker_payload(m: Marker) -> Dict[str, Any]:
    return {
        "time": m.time,
        "position": m.position.value,
        "color": MARKER_COLORS[m.color_class],
        "shape": m.shape.value,
        "size": m.size,
    }


def candles_payload(candles: Iterable[Candle]) -> List[Dict[str, Any]]:
    return [candle_payload(c) for c in candles]


def markers_payload(markers: Iterable[Marker]) -> List[Dict[str, Any]]:
    return [marker_payload(m) for m in markers]


def frame_payload(frame: Frame, language: Optional[str] = "ja") -> Dict[str, Any]:
    """Full chart state for one timeframe in lightweight-charts shape."""
    return {
        "timeframe": frame.timeframe.value,
        "label": timeframe_name(frame.timeframe, language or "ja"),
        "series_style": dict(SERIES_STYLE),
        "candles": candles_payload(frame.candles),
        "markers": markers_payload(frame.markers),
    }
