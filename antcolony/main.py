"""Entry point for the ant colony evolution simulation.

Usage:
    python -m antcolony.main --generations 20
    python -m antcolony.main --seed 7 --workers 16 --steps 300 --record
    python -m antcolony.main --realtime --generations 2
"""

from __future__ import annotations

import argparse
import logging
import sys

from antcolony.config import ColonyConfig
from antcolony.errors import ColonyError
from antcolony.simulation.engine import ColonySimulation
from antcolony.simulation.renderer import StatusRenderer
from antcolony.simulation.scheduler import TickScheduler


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Evolve a voxel ant colony with neuro-evolution",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--generations", type=int, default=10, help="Generations to run (default: 10)"
    )
    parser.add_argument("--seed", type=int, help="Random seed (default: 1337)")
    parser.add_argument("--workers", type=int, help="Worker ants per generation (default: 32)")
    parser.add_argument("--steps", type=int, help="Ticks per generation (default: 700)")
    parser.add_argument(
        "--realtime",
        action="store_true",
        help="Pace ticks with the wall clock at tick_seconds per tick",
    )
    parser.add_argument("--record", action="store_true", help="Record generation history")
    parser.add_argument("--output", type=str, help="History output directory")
    parser.add_argument("--quiet", action="store_true", help="Only log warnings and errors")
    return parser


def config_from_args(args: argparse.Namespace) -> ColonyConfig:
    """Apply CLI overrides on top of environment/default settings."""
    config = ColonyConfig()
    if args.seed is not None:
        config.seed = args.seed
    if args.workers is not None:
        config.worker_count = args.workers
    if args.steps is not None:
        config.evaluation_steps = args.steps
    if args.record:
        config.history_recording = True
    if args.output:
        config.history_output_dir = args.output
    return config


def main(argv: list[str] | None = None) -> int:
    """Run the simulation."""
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.WARNING if args.quiet else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    config = config_from_args(args)
    renderer = StatusRenderer()
    try:
        sim = ColonySimulation(config)
    except ColonyError as e:
        renderer.console.print(f"[red]Error:[/red] {e}")
        return 1

    renderer.console.print("  antcolony v0.1.0", highlight=False)
    renderer.console.print(
        f"  World: {sim.terrain.size_x}x{sim.terrain.size_y}x{sim.terrain.size_z} "
        f"| Seed: {config.seed} | Workers: {config.effective_worker_count} "
        f"| Steps: {config.effective_evaluation_steps}",
        highlight=False,
    )
    if sim.recorder is not None:
        renderer.console.print(f"  Recording history to {sim.recorder.output_dir}")

    try:
        sim.start()
        if args.realtime:
            _run_realtime(sim, renderer, args.generations)
        else:
            for _ in range(args.generations):
                renderer.show_summary(sim.run_generation())
    except KeyboardInterrupt:
        renderer.console.print(f"\n  Stopped at generation {sim.state.generation}")
    finally:
        sim.close()

    renderer.show_status(sim)
    perf = sim.perf_monitor.summary
    if perf:
        renderer.console.print(
            f"  Avg tick: {perf['avg_tick_ms']:.2f}ms | "
            f"Slowest: {perf['slowest_tick_ms']:.2f}ms",
            highlight=False,
        )
    return 0


def _run_realtime(sim: ColonySimulation, renderer: StatusRenderer, generations: int) -> None:
    """Drive the engine from the wall clock, printing each finished generation."""
    shown = len(sim.state.history)

    def tick() -> None:
        nonlocal shown
        sim.step()
        while shown < len(sim.state.history):
            renderer.show_summary(sim.state.history[shown])
            shown += 1

    scheduler = TickScheduler(tick, sim.config.tick_seconds)
    scheduler.run_realtime(until=lambda: len(sim.state.history) >= generations)


if __name__ == "__main__":
    sys.exit(main())
