#!/usr/bin/env python3
"""
Incremental heat diffusion - Main entry point.

Runs the interactive pygame viewer, or a headless batch of sweeps that
prints summary statistics.
"""

import argparse
import sys
from typing import Optional

try:
    from .config import DiffusionConfig, ConfigurationError
    from .simulation import HeatSimulation
    from .scenarios import get_scenario_names
except ImportError:
    from config import DiffusionConfig, ConfigurationError
    from simulation import HeatSimulation
    from scenarios import get_scenario_names


def build_parser() -> argparse.ArgumentParser:
    scenarios = get_scenario_names()

    parser = argparse.ArgumentParser(
        description="Chunked explicit heat diffusion on a 2-D grid",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Scenarios:
  random    - Uniform random temperature per tile
  noise     - Smooth coherent noise
  uniform   - Equilibrium field
  hot_row   - Cold grid, hot bottom row
  hot_spot  - Cold grid, hot disk in the middle

Examples:
  python -m heatgrid.main                          # 16x16 random grid
  python -m heatgrid.main --scenario noise --size 64 --chunk-size 8
  python -m heatgrid.main --headless --sweeps 100 --scenario hot_row
        """
    )

    parser.add_argument('--scenario', '-s', choices=scenarios, default='random',
                        help='Initial temperature field (default: random)')
    parser.add_argument('--size', type=int, default=16,
                        help='Grid size (square, default: 16)')
    parser.add_argument('--width', type=int, help='Grid width (overrides --size)')
    parser.add_argument('--height', type=int, help='Grid height (overrides --size)')
    parser.add_argument('--chunk-size', type=int, default=4,
                        help='Chunk edge length in cells (default: 4)')
    parser.add_argument('--seed', type=int, help='Random seed for the scenario')
    parser.add_argument('--shadow', action='store_true',
                        help='Run an independent shadow grid alongside the primary one')
    parser.add_argument('--headless', action='store_true',
                        help='Run without a window and print a summary')
    parser.add_argument('--sweeps', type=int, default=10,
                        help='Number of sweeps for --headless (default: 10)')
    parser.add_argument('--log-level', default='INFO',
                        help='Logging level (default: INFO)')
    return parser


def run_headless(sim: HeatSimulation, sweeps: int) -> None:
    ticks = sim.run_sweeps(sweeps)
    info = sim.get_info()
    print(f"Ran {ticks} ticks ({info['sweep_count']} sweeps, {info['time']:.3f} s simulated)")
    print(f"Temperature: avg={info['avg_temperature']:.3f} "
          f"min={info['min_temperature']:.3f} max={info['max_temperature']:.3f}")
    print(f"Total heat: {info['total_heat']:.4f}")
    if sim.shadow is not None:
        print(f"Shadow drift: {info['shadow_drift']:.3g}")


def main(argv: Optional[list] = None) -> int:
    """Main entry point."""
    args = build_parser().parse_args(argv)

    width = args.width if args.width is not None else args.size
    height = args.height if args.height is not None else args.size

    try:
        config = DiffusionConfig(width=width, height=height, chunk_size=args.chunk_size)
    except ConfigurationError as e:
        print(f"Invalid configuration: {e}")
        return 1

    sim = HeatSimulation(config, scenario=args.scenario, seed=args.seed, shadow=args.shadow,
                         paused=not args.headless, log_level=args.log_level)

    if args.headless:
        run_headless(sim, args.sweeps)
        return 0

    try:
        from .visualizer import HeatVisualizer
    except ImportError:
        from visualizer import HeatVisualizer

    try:
        HeatVisualizer(sim).run()
    except KeyboardInterrupt:
        print("\nSimulation terminated by user")
        return 0
    return 0


if __name__ == "__main__":
    sys.exit(main())
