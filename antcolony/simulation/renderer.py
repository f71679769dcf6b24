"""Rich terminal renderer for the colony simulation."""

from __future__ import annotations

import io
import sys
from typing import TYPE_CHECKING

from rich.console import Console

if TYPE_CHECKING:
    from antcolony.evolution.population import GenerationSummary
    from antcolony.simulation.engine import ColonySimulation, ColonyStatus


def _make_console() -> Console:
    """Create a Rich Console that works on Windows (force UTF-8)."""
    if sys.platform == "win32" and hasattr(sys.stdout, "buffer"):
        utf8_stdout = io.TextIOWrapper(sys.stdout.buffer, encoding="utf-8", errors="replace")
        return Console(file=utf8_stdout, force_terminal=True)
    return Console()


class StatusRenderer:
    """Renders the colony counters and generation summaries as text frames."""

    def __init__(self, console: Console | None = None):
        self.console = console or _make_console()

    def render_status(self, status: ColonyStatus) -> str:
        """Render the live counters of the running generation."""
        return "\n".join(
            [
                f"  antcolony | Generation {status.generation:>4} | "
                f"Step {status.step:>4}/{status.evaluation_steps} | "
                f"Alive: {status.alive}/{status.agent_count}",
                f"  Nest blocks: {status.nest_blocks}",
                f"  Last generation | nests={status.last_nest_blocks} "
                f"| best={status.last_best_fitness:.2f} "
                f"| avg={status.last_average_fitness:.2f} "
                f"| bestWorker={status.last_best_worker_fitness:.2f}",
            ]
        )

    def render_summary(self, summary: GenerationSummary) -> str:
        """Render one finished generation as a single line."""
        queen = "-" if summary.queen_fitness is None else f"{summary.queen_fitness:.2f}"
        return (
            f"  Gen {summary.generation:>4} | steps={summary.steps:>4} "
            f"| survivors={summary.survivors}/{summary.agent_count} "
            f"| nests={summary.queen_nests} | best={summary.best_fitness:.2f} "
            f"| avg={summary.average_fitness:.2f} "
            f"| bestWorker={summary.best_worker_fitness:.2f} | queen={queen}"
        )

    def render_history(self, history: list[GenerationSummary]) -> str:
        if not history:
            return "  (no finished generations)"
        return "\n".join(self.render_summary(summary) for summary in history)

    def show_status(self, sim: ColonySimulation) -> None:
        self.console.print(self.render_status(sim.status), highlight=False)

    def show_summary(self, summary: GenerationSummary) -> None:
        style = "bold green" if summary.queen_nests > 0 else None
        self.console.print(self.render_summary(summary), style=style, highlight=False)
