import datetime

from pydantic import BaseModel, ConfigDict


class MetricObservation(BaseModel):
    model_config = ConfigDict(frozen=True)

    date: datetime.date
    cycle_time: float
    throughput: float
    comment: str | None = None


class TeamSeries(BaseModel):
    """One team's observations in source order (not re-sorted)."""

    model_config = ConfigDict(frozen=True)

    name: str
    observations: tuple[MetricObservation, ...] = ()
