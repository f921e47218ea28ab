from schemas.charts import (
    Annotation,
    AxisConfig,
    BuiltSeries,
    ChartEntry,
    ChartModel,
    SeriesStyle,
    Snapshot,
)
from schemas.metrics import MetricObservation, TeamSeries

__all__ = [
    "MetricObservation",
    "TeamSeries",
    "Annotation",
    "BuiltSeries",
    "SeriesStyle",
    "AxisConfig",
    "ChartModel",
    "ChartEntry",
    "Snapshot",
]
