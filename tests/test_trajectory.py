"""Tests for generation history recording and Parquet export."""

from __future__ import annotations

import pytest

from antcolony.config import ColonyConfig
from antcolony.errors import SerializationError
from antcolony.simulation.engine import ColonySimulation
from antcolony.trajectory import (
    GenerationRecord,
    HistoryRecorder,
    ParquetExporter,
    RunHistory,
)


@pytest.fixture
def recorded_run(config: ColonyConfig, tmp_path) -> HistoryRecorder:
    """Three short generations recorded to tmp_path/run1."""
    config.evaluation_steps = 4
    recorder = HistoryRecorder(str(tmp_path), run_id="run1")
    sim = ColonySimulation(config, recorder=recorder)
    sim.run(3)
    sim.close()
    return recorder


class TestHistoryRecorder:
    """Test JSONL streaming."""

    def test_jsonl_reloads(self, recorded_run: HistoryRecorder):
        history = HistoryRecorder.load(str(recorded_run.jsonl_path))
        assert [g.generation for g in history.generations] == [1, 2, 3]
        assert history.metadata.seed == 42
        assert history.metadata.worker_count == 4
        assert history.metadata.generations_completed == 3
        assert history.metadata.world_size == (16, 16, 16)

    def test_records_match_engine_summaries(self, config: ColonyConfig, tmp_path):
        config.evaluation_steps = 4
        recorder = HistoryRecorder(str(tmp_path), export_parquet=False)
        sim = ColonySimulation(config, recorder=recorder)
        summaries = sim.run(2)
        sim.close()

        for record, summary in zip(recorder.records, summaries):
            assert record.best_fitness == summary.best_fitness
            assert record.queen_nests == summary.queen_nests
        assert not (recorder.output_dir / "generations.parquet").exists()

    def test_malformed_line_raises(self, tmp_path):
        path = tmp_path / "history.jsonl"
        path.write_text("\nnot json\n")
        with pytest.raises(SerializationError) as exc_info:
            HistoryRecorder.load(str(path))
        assert "line 2" in str(exc_info.value)


class TestParquetExporter:
    """Test columnar export."""

    def test_export_reloads(self, recorded_run: HistoryRecorder):
        history = ParquetExporter.load(str(recorded_run.output_dir))
        assert [g.generation for g in history.generations] == [1, 2, 3]
        assert history.metadata.run_id == "run1"
        assert history.best_fitness_curve == [r.best_fitness for r in recorded_run.records]
        assert history.total_nests == sum(r.queen_nests for r in recorded_run.records)

    def test_empty_history_exports(self, tmp_path):
        paths = ParquetExporter.export(RunHistory(metadata=None), str(tmp_path))
        assert paths["generations"].exists()
        assert ParquetExporter.load(str(tmp_path)).generations == []

    def test_missing_file_raises(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            ParquetExporter.load(str(tmp_path))

    def test_missing_queen_fitness_survives(self, tmp_path):
        record = GenerationRecord(
            generation=1,
            steps=0,
            agent_count=0,
            survivors=0,
            queen_nests=0,
            best_fitness=0.0,
            average_fitness=0.0,
            best_worker_fitness=0.0,
        )
        ParquetExporter.export(RunHistory(metadata=None, generations=[record]), str(tmp_path))
        loaded = ParquetExporter.load(str(tmp_path)).generations[0]
        assert loaded.queen_fitness is None


class TestSchema:
    def test_from_dict_ignores_unknown_keys(self):
        record = GenerationRecord.from_dict(
            {
                "generation": 2,
                "steps": 700,
                "agent_count": 33,
                "survivors": 5,
                "queen_nests": 1,
                "best_fitness": 99.0,
                "average_fitness": 10.0,
                "best_worker_fitness": 20.0,
                "extra": "ignored",
            }
        )
        assert record.generation == 2
        assert record.elapsed_ms == 0.0

    def test_run_totals(self):
        records = [
            GenerationRecord(
                generation=i + 1,
                steps=700,
                agent_count=33,
                survivors=0,
                queen_nests=nests,
                best_fitness=best,
                average_fitness=1.0,
                best_worker_fitness=1.0,
            )
            for i, (nests, best) in enumerate([(0, 4.5), (2, 201.0), (1, 110.0)])
        ]
        history = RunHistory(metadata=None, generations=records)
        assert history.total_nests == 3
        assert history.best_fitness_curve == [4.5, 201.0, 110.0]
