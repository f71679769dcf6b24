"""Parquet export/import for generation history.

Converts between RunHistory and columnar Parquet format.
"""

from __future__ import annotations

import json
from pathlib import Path

import pyarrow as pa
import pyarrow.parquet as pq

from antcolony.errors import SerializationError
from antcolony.trajectory.schema import GenerationRecord, RunHistory, RunMetadata


class ParquetExporter:
    """Export/import generation history to/from Parquet format."""

    SCHEMA_VERSION = "1.0.0"

    @staticmethod
    def export(history: RunHistory, output_dir: str) -> dict[str, Path]:
        """Export RunHistory to Parquet.

        Creates two files:
        - generations.parquet: one row per generation
        - metadata.json: run metadata + schema version

        Args:
            history: RunHistory to export
            output_dir: Directory to write files to (created if needed)

        Returns:
            Dict mapping file type to Path: {"generations": Path, "metadata": Path}

        Raises:
            SerializationError: If the files cannot be written
        """
        output_path = Path(output_dir)
        output_path.mkdir(parents=True, exist_ok=True)
        schema = ParquetExporter._build_schema()

        rows = [record.to_dict() for record in history.generations]
        if rows:
            table = pa.Table.from_pylist(rows, schema=schema)
        else:
            arrays = [pa.array([], type=f.type) for f in schema]
            table = pa.Table.from_arrays(arrays, schema=schema)

        generations_path = output_path / "generations.parquet"
        metadata_path = output_path / "metadata.json"
        try:
            pq.write_table(table, generations_path)
            metadata_dict = history.metadata.to_dict() if history.metadata else {}
            metadata_dict["schema_version"] = ParquetExporter.SCHEMA_VERSION
            with open(metadata_path, "w") as f:
                json.dump(metadata_dict, f, indent=2)
        except (OSError, pa.ArrowException) as e:
            raise SerializationError(str(output_path), str(e)) from e

        return {"generations": generations_path, "metadata": metadata_path}

    @staticmethod
    def load(input_dir: str) -> RunHistory:
        """Load RunHistory from Parquet files.

        Raises:
            FileNotFoundError: If generations.parquet is missing
        """
        input_path = Path(input_dir)
        generations_file = input_path / "generations.parquet"
        metadata_file = input_path / "metadata.json"

        if not generations_file.exists():
            raise FileNotFoundError(f"Missing generations.parquet in {input_dir}")

        metadata = None
        if metadata_file.exists():
            with open(metadata_file) as f:
                metadata_dict = json.load(f)
            metadata_dict.pop("schema_version", None)
            if metadata_dict:
                metadata = RunMetadata.from_dict(metadata_dict)

        table = pq.read_table(generations_file)
        generations = [GenerationRecord.from_dict(row) for row in table.to_pylist()]
        return RunHistory(metadata=metadata, generations=generations)

    @staticmethod
    def _build_schema() -> pa.Schema:
        return pa.schema(
            [
                ("generation", pa.int32()),
                ("steps", pa.int32()),
                ("agent_count", pa.int32()),
                ("survivors", pa.int32()),
                ("queen_nests", pa.int32()),
                ("best_fitness", pa.float64()),
                ("average_fitness", pa.float64()),
                ("best_worker_fitness", pa.float64()),
                ("queen_fitness", pa.float64()),
                ("elapsed_ms", pa.float64()),
            ]
        )
