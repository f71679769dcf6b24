"""History recorder: captures per-generation statistics during a run.

Hooks into ColonySimulation.end_generation() and streams to JSONL for crash
safety. On end_run the history is also exported to Parquet.
"""

from __future__ import annotations

import json
import logging
import uuid
from datetime import UTC, datetime
from pathlib import Path
from typing import TYPE_CHECKING, TextIO

from antcolony.errors import SerializationError
from antcolony.trajectory.schema import GenerationRecord, RunHistory, RunMetadata

if TYPE_CHECKING:
    from antcolony.evolution.population import GenerationSummary
    from antcolony.simulation.engine import ColonySimulation

logger = logging.getLogger(__name__)


class HistoryRecorder:
    """Records generation history during a run.

    Writes incrementally to <output_dir>/<run_id>/history.jsonl.
    """

    def __init__(
        self,
        output_dir: str = "data/history",
        run_id: str | None = None,
        export_parquet: bool = True,
    ):
        self.run_id = run_id or str(uuid.uuid4())[:12]
        self.output_dir = Path(output_dir) / self.run_id
        self.export_parquet = export_parquet
        self._records: list[GenerationRecord] = []
        self._metadata: RunMetadata | None = None
        self._jsonl_file: TextIO | None = None

    @property
    def records(self) -> list[GenerationRecord]:
        return list(self._records)

    @property
    def jsonl_path(self) -> Path:
        return self.output_dir / "history.jsonl"

    def start_run(self, sim: ColonySimulation) -> None:
        """Initialize recording. Called before the first generation spawns."""
        self.output_dir.mkdir(parents=True, exist_ok=True)
        self._metadata = self._build_metadata(sim)
        self._jsonl_file = self.jsonl_path.open("w")
        self._write_jsonl({"type": "metadata", **self._metadata.to_dict()})

    def record_generation(self, summary: GenerationSummary, elapsed_ms: float = 0.0) -> None:
        """Record one finished generation."""
        record = GenerationRecord(
            generation=summary.generation,
            steps=summary.steps,
            agent_count=summary.agent_count,
            survivors=summary.survivors,
            queen_nests=summary.queen_nests,
            best_fitness=summary.best_fitness,
            average_fitness=summary.average_fitness,
            best_worker_fitness=summary.best_worker_fitness,
            queen_fitness=summary.queen_fitness,
            elapsed_ms=elapsed_ms,
        )
        self._records.append(record)
        self._write_jsonl({"type": "generation", **record.to_dict()})

    def end_run(self, sim: ColonySimulation) -> None:
        """Finalize recording. Called after the last generation."""
        if self._metadata:
            self._metadata.generations_completed = len(self._records)
            self._write_jsonl({"type": "run_complete", **self._metadata.to_dict()})
        if self._jsonl_file:
            self._jsonl_file.close()
            self._jsonl_file = None

        if self.export_parquet:
            from antcolony.trajectory.parquet import ParquetExporter

            ParquetExporter.export(self.to_history(), str(self.output_dir))
            logger.info(f"Exported {len(self._records)} generations to {self.output_dir}")

    def to_history(self) -> RunHistory:
        return RunHistory(metadata=self._metadata, generations=list(self._records))

    @staticmethod
    def load(path: str) -> RunHistory:
        """Read a history.jsonl file back.

        Raises:
            SerializationError: If a line is not valid JSON
        """
        metadata = None
        generations = []
        with open(path) as f:
            for line_no, line in enumerate(f, start=1):
                line = line.strip()
                if not line:
                    continue
                try:
                    data = json.loads(line)
                except json.JSONDecodeError as e:
                    raise SerializationError(path, f"line {line_no}: {e}") from e
                kind = data.pop("type", None)
                if kind in ("metadata", "run_complete"):
                    metadata = RunMetadata.from_dict(data)
                elif kind == "generation":
                    generations.append(GenerationRecord.from_dict(data))
        return RunHistory(metadata=metadata, generations=generations)

    def _write_jsonl(self, data: dict) -> None:
        if self._jsonl_file is None:
            return
        self._jsonl_file.write(json.dumps(data) + "\n")
        self._jsonl_file.flush()

    def _build_metadata(self, sim: ColonySimulation) -> RunMetadata:
        config = sim.config
        return RunMetadata(
            run_id=self.run_id,
            timestamp=datetime.now(UTC).isoformat(),
            seed=config.seed,
            worker_count=config.effective_worker_count,
            evaluation_steps=config.effective_evaluation_steps,
            elite_count=config.elite_count,
            mutation_strength=config.mutation_strength,
            world_size=(sim.terrain.size_x, sim.terrain.size_y, sim.terrain.size_z),
            config=config.model_dump(),
        )
