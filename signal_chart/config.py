from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional
import os
import yaml

from .timeframes import TIMEFRAME_NAMES, Timeframe, interval_seconds, parse_timeframe


def _env_override(value: Any, env_key: str) -> Any:
    env_val = os.getenv(env_key)
    if env_val is None:
        return value
    # basic parsing
    if isinstance(value, bool):
        return env_val.strip().lower() in ("1", "true", "yes", "y", "on")
    if isinstance(value, int):
        try:
            return int(env_val)
        except ValueError:
            return value
    if isinstance(value, float):
        try:
            return float(env_val)
        except ValueError:
            return value
    return env_val


@dataclass
class AppConfig:
    name: str = "Bitcoin AI Signal Tool"
    log_level: str = "INFO"
    language: str = "ja"  # ja | en
    seed: Optional[int] = None  # fixed RNG seed for reproducible sessions


@dataclass
class GeneratorConfig:
    bar_count: int = 1000
    seed_price: float = 45000.0
    floor_price: float = 30000.0
    close_scale: float = 0.5
    wick_scale: float = 0.3


@dataclass
class SignalConfig:
    count: int = 6
    horizon_timeframe: str = "1h"
    horizon_bars: int = 1000
    base_price: float = 45000.0
    price_jitter: float = 6000.0
    confidence_floor: int = 80
    segment_margin: float = 0.1
    marker_size: float = 5


@dataclass
class ChartConfig:
    default_timeframe: str = "1m"
    width: int = 800
    height: int = 600


@dataclass
class DisplayConfig:
    target: str = "file"  # file | webhook
    output_dir: str = "chart_out"
    url: str = ""
    timeout_s: int = 10
    headers: Dict[str, str] = None


@dataclass
class WebhookConfig:
    enabled: bool = False
    url: str = ""
    secret: str = ""
    timeout_s: int = 10
    headers: Dict[str, str] = None


@dataclass
class Config:
    app: AppConfig
    generator: GeneratorConfig
    signals: SignalConfig
    chart: ChartConfig
    display: DisplayConfig
    webhook: WebhookConfig

    @property
    def horizon_seconds(self) -> int:
        return int(self.signals.horizon_bars) * interval_seconds(self.signals.horizon_timeframe)

    @property
    def default_timeframe(self) -> Timeframe:
        return parse_timeframe(self.chart.default_timeframe)


def default_config() -> Config:
    return Config(
        app=AppConfig(),
        generator=GeneratorConfig(),
        signals=SignalConfig(),
        chart=ChartConfig(),
        display=DisplayConfig(headers={}),
        webhook=WebhookConfig(headers={}),
    )


def validate_config(cfg: Config) -> None:
    errs = []
    if int(cfg.generator.bar_count) < 1:
        errs.append("generator.bar_count must be >= 1")
    if cfg.app.language not in TIMEFRAME_NAMES:
        errs.append(f"app.language must be one of {sorted(TIMEFRAME_NAMES)}")
    if cfg.display.target not in ("file", "webhook"):
        errs.append("display.target must be 'file' or 'webhook'")
    if not 0.0 <= float(cfg.signals.segment_margin) < 0.5:
        errs.append("signals.segment_margin must be in [0, 0.5)")
    if not 0 <= int(cfg.signals.confidence_floor) <= 100:
        errs.append("signals.confidence_floor must be in [0, 100]")
    for key in ("chart.default_timeframe", "signals.horizon_timeframe"):
        section, field = key.split(".")
        try:
            parse_timeframe(getattr(getattr(cfg, section), field))
        except ValueError as e:
            errs.append(f"{key}: {e}")
    if errs:
        raise ValueError("Config violation: " + "; ".join(errs))


def load_config(path: Optional[str] = None) -> Config:
    raw: Dict[str, Any] = {}
    if path:
        with open(path, "r", encoding="utf-8") as f:
            raw = yaml.safe_load(f) or {}

    cfg = Config(
        app=AppConfig(**raw.get("app", {})),
        generator=GeneratorConfig(**raw.get("generator", {})),
        signals=SignalConfig(**raw.get("signals", {})),
        chart=ChartConfig(**raw.get("chart", {})),
        display=DisplayConfig(**raw.get("display", {})),
        webhook=WebhookConfig(**raw.get("webhook", {})),
    )

    # env overrides (useful on servers)
    seed_env = os.getenv("SIGNAL_CHART_SEED")
    if seed_env:
        cfg.app.seed = int(seed_env)
    cfg.app.language = _env_override(cfg.app.language, "SIGNAL_CHART_LANGUAGE")
    cfg.display.url = _env_override(cfg.display.url, "DISPLAY_URL")
    cfg.webhook.secret = _env_override(cfg.webhook.secret, "WEBHOOK_SECRET")
    cfg.webhook.url = _env_override(cfg.webhook.url, "WEBHOOK_URL")
    if cfg.display.headers is None:
        cfg.display.headers = {}
    if cfg.webhook.headers is None:
        cfg.webhook.headers = {}

    validate_config(cfg)
    return cfg
