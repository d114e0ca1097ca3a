"""Headless runner: sort one array in the terminal and log every step."""

from __future__ import annotations

import argparse
import logging
import signal
import sys

from .config import ALGORITHM_KEYS, DEFAULT_ARRAY_SIZE, DEFAULT_SPEED, MAX_ARRAY_SIZE
from .controller import ScheduleController
from .errors import ConfigurationError
from .events import AuxState, RunState

logger = logging.getLogger("stepsort")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Step through a sorting algorithm in the terminal")
    parser.add_argument(
        "--algorithm",
        choices=ALGORITHM_KEYS,
        default="bubble",
        help="Algorithm to run.",
    )
    parser.add_argument(
        "--size",
        type=int,
        default=DEFAULT_ARRAY_SIZE,
        help=f"Number of random values to sort (1..{MAX_ARRAY_SIZE}).",
    )
    parser.add_argument(
        "--speed",
        type=int,
        default=DEFAULT_SPEED,
        help="Speed level; higher is faster (10 and above run at the 10ms floor).",
    )
    parser.add_argument(
        "--delay-ms",
        "--delay_ms",
        type=float,
        default=None,
        dest="delay_ms",
        help="Explicit per-step delay in milliseconds, overriding --speed.",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=None,
        help="Seed for the random input.",
    )
    parser.add_argument(
        "--quiet",
        action="store_true",
        help="Only log the summary, not every step.",
    )
    return parser


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.WARNING if args.quiet else logging.INFO,
        format="%(asctime)s %(levelname)s: %(message)s",
    )

    try:
        controller = ScheduleController(size=args.size, seed=args.seed)
    except ConfigurationError as exc:
        logger.error("%s", exc)
        return 2

    def show_step(event):
        if isinstance(event, AuxState):
            logger.debug("aux %s", event.payload)
        else:
            logger.info("%-9s %s", event.kind, list(event.indices))

    if not args.quiet:
        controller.on_step(show_step)
    controller.on_state_change(lambda state: logger.info("state: %s", state.value))

    before = controller.array.values()
    try:
        handle = controller.start(args.algorithm, speed=args.speed, delay_ms=args.delay_ms)
    except ConfigurationError as exc:
        logger.error("%s", exc)
        return 2

    # Ctrl-C cancels the run instead of killing the process mid-step
    previous = signal.signal(signal.SIGINT, lambda *_: controller.cancel())
    try:
        while not handle.done:
            handle.wait(0.2)
        state = handle.wait()
    finally:
        signal.signal(signal.SIGINT, previous)

    stats = handle.statistics()
    print(f"{handle.config.name}: {state.value}")
    print(f"  input:       {before}")
    print(f"  output:      {handle.array.values()}")
    print(f"  comparisons: {stats.comparisons}")
    print(f"  swaps:       {stats.swaps}")
    print(f"  elapsed:     {stats.elapsed:.2f}s")
    return 0 if state is RunState.COMPLETED else 1


if __name__ == "__main__":
    sys.exit(main())
