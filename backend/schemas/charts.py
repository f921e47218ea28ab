from datetime import datetime

from pydantic import BaseModel, ConfigDict

_FROZEN = ConfigDict(frozen=True)


class Annotation(BaseModel):
    model_config = _FROZEN

    x: float
    y: float
    label: str


class BuiltSeries(BaseModel):
    """Index-aligned arrays for one team plus its annotation points."""

    model_config = _FROZEN

    x_values: tuple[float, ...] = ()
    cycle_values: tuple[float, ...] = ()
    throughput_values: tuple[float, ...] = ()
    annotations: tuple[Annotation, ...] = ()


class SeriesStyle(BaseModel):
    model_config = _FROZEN

    name: str
    color: str  # hex, e.g. "#f27713"
    stroke_width: float = 2.0


class AxisConfig(BaseModel):
    model_config = _FROZEN

    name: str = "Date"
    time_based: bool = True
    tick_format: str = "YYYY-M-D"


class ChartModel(BaseModel):
    model_config = _FROZEN

    title: str
    x_values: tuple[float, ...]
    cycle_series: tuple[float, ...]
    throughput_series: tuple[float, ...]
    annotations: tuple[Annotation, ...]
    x_axis: AxisConfig
    series: tuple[SeriesStyle, SeriesStyle]
    legend: tuple[str, ...]
    background_class: str = "background"
    canvas_class: str = "canvas"


class ChartEntry(BaseModel):
    model_config = _FROZEN

    title: str
    chart: ChartModel
    svg: str


class Snapshot(BaseModel):
    """Unit of publication: replaced whole, never mutated."""

    model_config = _FROZEN

    charts: tuple[ChartEntry, ...] = ()
    last_update: datetime | None = None
