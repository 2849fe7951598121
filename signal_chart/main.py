from __future__ import annotations

import argparse
import asyncio
import logging
import os

from .config import load_config
from .display import FileDisplay
from .runner import ChartRunner


def _setup_logging(level: str) -> None:
    lvl = getattr(logging, (level or "INFO").upper(), logging.INFO)
    logging.basicConfig(
        level=lvl,
        format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
    )


def main(argv=None) -> int:
    p = argparse.ArgumentParser(description="Bitcoin AI Signal Tool - synthetic chart with projected signals")
    p.add_argument("--config", help="Path to YAML config (defaults built in)")
    p.add_argument(
        "--timeframes",
        nargs="*",
        default=[],
        help="Timeframes to switch through after startup, e.g. 5m 1h 1d",
    )
    p.add_argument("--seed", type=int, help="RNG seed for a reproducible session")
    p.add_argument("--width", type=int, help="Chart width (min 300)")
    p.add_argument("--height", type=int, help="Chart height (min 400)")
    args = p.parse_args(argv)

    cfg = load_config(args.config)
    if args.seed is not None:
        cfg.app.seed = args.seed
    _setup_logging(cfg.app.log_level)
    log = logging.getLogger("main")

    runner = ChartRunner(cfg)
    if isinstance(runner.display, FileDisplay):
        os.makedirs(runner.display.output_dir, exist_ok=True)

    async def _run() -> None:
        try:
            await runner.start()
            if args.width is not None or args.height is not None:
                await runner.resize(args.width or cfg.chart.width, args.height or cfg.chart.height)
            for tf in args.timeframes:
                await runner.change_timeframe(tf)
            cached = ", ".join(tf.value for tf in runner.session.data_cache.timeframes())
            log.info("done current=%s cached=[%s]", runner.timeframe_label(), cached)
        finally:
            await runner.close()

    try:
        asyncio.run(_run())
        return 0
    except KeyboardInterrupt:
        return 0
    except Exception as e:
        log.exception("fatal err=%s", e)
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
