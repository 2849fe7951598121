from signal_chart.formatters import frame_payload, marker_payload, message
from signal_chart.models import Candle, Frame, Marker, MarkerColor, MarkerPosition, MarkerShape
from signal_chart.timeframes import Timeframe


def _buy_marker(t: int = 3600) -> Marker:
    return Marker(time=t, position=MarkerPosition.BELOW_BAR, color_class=MarkerColor.BUY_GLOW, shape=MarkerShape.ARROW_UP, size=5)


def test_marker_payload_uses_glow_colors():
    assert marker_payload(_buy_marker()) == {
        "time": 3600,
        "position": "belowBar",
        "color": "rgba(0, 255, 255, 0.3)",
        "shape": "arrowUp",
        "size": 5,
    }


def test_frame_payload():
    frame = Frame(timeframe=Timeframe.H4, candles=[Candle(time=0, open=1, high=2, low=0, close=1)], markers=[_buy_marker(0)])
    payload = frame_payload(frame, "ja")
    assert payload["timeframe"] == "4h"
    assert payload["label"] == "4時間足"
    assert payload["candles"] == [{"time": 0, "open": 1, "high": 2, "low": 0, "close": 1}]
    assert payload["series_style"]["upColor"] == "#0361ad"
    assert frame_payload(frame, "en")["label"] == "4 hours"


def test_messages_fall_back_to_english():
    assert message("render_target_missing") == "チャートコンテナが見つかりません"
    assert message("render_target_missing", "de") == "Chart container not found"
    assert message("timeframe_changed", "en", name="1 day") == "Switched to 1 day"
