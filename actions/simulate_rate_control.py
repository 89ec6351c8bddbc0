#!/usr/bin/env python3
"""
Simulate a burst of calls through a Debouncer and a Throttler.

**Purpose**: Shows, on a virtual timeline, which calls reach the target
operation under each controller. Useful for picking wait/limit values before
wiring a controller into real code.

**What it does**:
  1. Builds a burst of call times (evenly spaced, or given explicitly)
  2. Replays the burst through a Debouncer and a Throttler on a ManualScheduler
  3. Prints when each controller forwarded a call and with which arguments

**Usage**:
    From project root:
    ```bash
    python actions/simulate_rate_control.py --wait 100 --limit 100 --times 0 40 90 250
    python actions/simulate_rate_control.py --calls 10 --spacing 30 --trailing
    ```
"""

import argparse
import sys
from pathlib import Path

# Ensure project root is on path for imports
repo_root = Path(__file__).parent.parent
if str(repo_root) not in sys.path:
    sys.path.insert(0, str(repo_root))

from utilkit.ratecontrol.debounce import Debouncer
from utilkit.ratecontrol.throttle import Throttler
from utilkit.utils.logging_setup import setup_logging
from utilkit.utils.math import range_sequence
from utilkit.utils.time import ManualScheduler


def replay(call_times, build_controller, settle_ms):
    """
    Replay calls at the given virtual times and record forwarded calls.

    Args:
        call_times: Sorted call times in ms; call i passes argument i.
        build_controller: Function (target, scheduler) -> controller.
        settle_ms: Extra time to advance after the last call so deferred fires run.

    Returns:
        List of (fire_time_ms, argument) tuples.
    """
    scheduler = ManualScheduler()
    fired = []
    controller = build_controller(lambda arg: fired.append((scheduler.now(), arg)), scheduler)

    for index, at in enumerate(call_times):
        scheduler.advance(at - scheduler.now())
        controller.invoke(index)
    scheduler.advance(settle_ms)
    return fired


def parse_args():
    parser = argparse.ArgumentParser(description="Simulate debounce/throttle on a virtual timeline")
    parser.add_argument("--wait", type=float, default=100, help="Debounce wait in ms (default 100)")
    parser.add_argument("--limit", type=float, default=100, help="Throttle window in ms (default 100)")
    parser.add_argument("--times", type=float, nargs="*", help="Explicit call times in ms")
    parser.add_argument("--calls", type=int, default=8, help="Number of evenly spaced calls (default 8)")
    parser.add_argument("--spacing", type=float, default=30, help="Spacing of generated calls in ms (default 30)")
    parser.add_argument("--trailing", action="store_true", help="Use the trailing-edge throttle variant")
    parser.add_argument("--verbose", action="store_true", help="Log controller decisions at DEBUG")
    return parser.parse_args()


def main():
    args = parse_args()
    setup_logging("DEBUG" if args.verbose else "WARNING")

    if args.times:
        call_times = sorted(args.times)
    else:
        call_times = range_sequence(0, args.calls * args.spacing, args.spacing)

    settle_ms = max(args.wait, args.limit) * 2

    print("=" * 60)
    print("Rate control simulation")
    print("=" * 60)
    print(f"  Calls at (ms): {', '.join(f'{t:g}' for t in call_times)}")
    print()

    debounced = replay(
        call_times,
        lambda target, scheduler: Debouncer(target, wait_ms=args.wait, scheduler=scheduler),
        settle_ms,
    )
    print(f"Debouncer (wait={args.wait:g} ms): {len(debounced)} fire(s)")
    for at, arg in debounced:
        print(f"  t={at:>8g} ms  call #{arg}")
    print()

    throttled = replay(
        call_times,
        lambda target, scheduler: Throttler(
            target, limit_ms=args.limit, scheduler=scheduler, trailing=args.trailing
        ),
        settle_ms,
    )
    mode = "trailing" if args.trailing else "leading"
    print(f"Throttler (limit={args.limit:g} ms, {mode}): {len(throttled)} fire(s)")
    for at, arg in throttled:
        print(f"  t={at:>8g} ms  call #{arg}")


if __name__ == "__main__":
    main()
