from __future__ import annotations

import argparse
import json
import random

from signal_chart.config import default_config
from signal_chart.formatters import frame_payload
from signal_chart.session import ChartSession
from signal_chart.timeframes import Timeframe, align_to_bar, interval_seconds


def main():
    p = argparse.ArgumentParser(description="Print master signals and where they land on every timeframe")
    p.add_argument("--seed", type=int, default=7)
    p.add_argument("--now", type=int, default=1_700_000_000, help="Session clock (unix seconds)")
    p.add_argument("--dump", help="Write the frame payload of this timeframe as JSON to stdout")
    args = p.parse_args()

    session = ChartSession(default_config(), rng=random.Random(args.seed), clock=lambda: args.now)

    print("Master signals:")
    for s in session.master_signals():
        print(f"  {s.id:<24} {s.type.value:<4} ts={s.timestamp} price={s.price} conf={s.confidence} ({s.reason})")

    print("\nProjection per timeframe:")
    for tf in Timeframe:
        markers = session.markers(tf)
        step = interval_seconds(tf)
        buckets = sorted({align_to_bar(s.timestamp, tf) for s in session.master_signals()})
        print(f"  {tf.value:<4} interval={step:<6} markers={len(markers)} buckets={buckets}")

    if args.dump:
        print(json.dumps(frame_payload(session.frame(args.dump)), ensure_ascii=False)[:2000])


if __name__ == "__main__":
    main()
