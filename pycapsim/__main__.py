"""
pycapsim/__main__.py

Command line runner: steps one capacity profile through a number of hourly
time steps and prints the resulting capacities.
"""

import argparse
import logging
import os
import sys

from .engine import CapacityEngine
from .exceptions import CapacityError
from .interfaces import FlatRateSubscription, SimulationClock, StaticWeatherSource, WeatherObservation
from .logs import get_logger
from .profile import load_profile


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Simulate base and adjusted capacities of a customer profile"
    )
    parser.add_argument("--profile", required=True, help="Path to the profile YAML file.")
    parser.add_argument("--steps", type=int, default=24, help="Number of time steps to simulate.")
    parser.add_argument("--start", default="2026-01-05T00:00", help="Instant of step 1.")
    parser.add_argument("--seed", type=int, default=None, help="Seed for stochastic draws.")
    parser.add_argument("--committed", type=int, default=None,
                        help="Customers committed to the tariff (default: whole population).")
    parser.add_argument("--temperature", type=float, default=20.0)
    parser.add_argument("--wind-speed", type=float, default=0.0)
    parser.add_argument("--wind-direction", type=float, default=0.0)
    parser.add_argument("--cloud-cover", type=float, default=0.0)
    parser.add_argument("--output", type=str, help="Write the per-step capacities to this CSV file.")
    parser.add_argument("--loglevel", type=str, default="WARNING", help="Set logging level.")
    parser.add_argument("--log-dir", type=str, default=None,
                        help="Also write the run log to <log-dir>/<profile>_<customer>.log.")
    return parser


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=args.loglevel.upper(), format="%(levelname)s %(name)s: %(message)s")

    customer, profile = load_profile(args.profile, seed=args.seed)
    if args.log_dir:
        run_name = os.path.splitext(os.path.basename(args.profile))[0]
        get_logger(run_name, customer.name, log_dir=args.log_dir, level=args.loglevel)
    clock = SimulationClock(args.start)
    weather = StaticWeatherSource(WeatherObservation(
        temperature=args.temperature,
        wind_speed=args.wind_speed,
        wind_direction=args.wind_direction,
        cloud_cover=args.cloud_cover,
    ))
    committed = customer.population if args.committed is None else args.committed
    subscription = FlatRateSubscription("benchmark", committed, profile.benchmark_rates)

    engine = CapacityEngine(customer, profile, clock, weather)
    try:
        for step in range(1, args.steps + 1):
            clock.set_step(step)
            subscription.record_usage(engine.use_capacity(step, subscription))
    except CapacityError as e:
        print(f"[ERROR] {e}", file=sys.stderr)
        return 1

    frame = engine.history.steps_frame()
    print(frame.to_string(index=False))
    if args.output:
        frame.to_csv(args.output, index=False)
    return 0


if __name__ == "__main__":
    sys.exit(main())
