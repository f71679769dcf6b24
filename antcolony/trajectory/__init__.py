"""Generation history recording.

Captures per-generation fitness statistics of an evolution run so learning
curves can be analysed after the fact.
"""

from antcolony.trajectory.parquet import ParquetExporter
from antcolony.trajectory.recorder import HistoryRecorder
from antcolony.trajectory.schema import GenerationRecord, RunHistory, RunMetadata

__all__ = [
    "GenerationRecord",
    "RunHistory",
    "RunMetadata",
    "HistoryRecorder",
    "ParquetExporter",
]
