"""
Assembles builder output into a renderer-agnostic chart description.
Pure; an empty series yields an empty but valid chart.
"""
from datetime import datetime, timezone

from schemas.charts import AxisConfig, BuiltSeries, ChartModel, SeriesStyle

CYCLE_TIME_LABEL = "Cycle time (days)"
THROUGHPUT_LABEL = "Throughput (# of tasks)"

CYCLE_TIME_COLOR = "#f27713"
THROUGHPUT_COLOR = "#2a317c"
STROKE_WIDTH = 2.0

BACKGROUND_CLASS = "background"
CANVAS_CLASS = "canvas"


def format_date_tick(value: float) -> str:
    """YYYY-M-D without zero padding, from a UTC epoch timestamp."""
    d = datetime.fromtimestamp(int(value), tz=timezone.utc)
    return f"{d.year}-{d.month}-{d.day}"


def assemble_chart(title: str, built: BuiltSeries) -> ChartModel:
    series = (
        SeriesStyle(name=CYCLE_TIME_LABEL, color=CYCLE_TIME_COLOR, stroke_width=STROKE_WIDTH),
        SeriesStyle(name=THROUGHPUT_LABEL, color=THROUGHPUT_COLOR, stroke_width=STROKE_WIDTH),
    )
    return ChartModel(
        title=title,
        x_values=built.x_values,
        cycle_series=built.cycle_values,
        throughput_series=built.throughput_values,
        annotations=built.annotations,
        x_axis=AxisConfig(name="Date", time_based=True, tick_format="YYYY-M-D"),
        series=series,
        legend=tuple(s.name for s in series),
        background_class=BACKGROUND_CLASS,
        canvas_class=CANVAS_CLASS,
    )
