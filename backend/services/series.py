from datetime import date, datetime, time, timezone

from schemas.charts import Annotation, BuiltSeries
from schemas.metrics import TeamSeries


def to_timestamp(d: date) -> float:
    """Seconds since epoch for midnight UTC of d."""
    return datetime.combine(d, time.min, tzinfo=timezone.utc).timestamp()


def build_series(team: TeamSeries) -> BuiltSeries:
    """
    One x/cycle/throughput entry per observation, in input order.
    Each commented observation adds two annotations: cycle-time point, then throughput point.
    """
    x_values: list[float] = []
    cycle_values: list[float] = []
    throughput_values: list[float] = []
    annotations: list[Annotation] = []

    for obs in team.observations:
        x = to_timestamp(obs.date)
        x_values.append(x)
        cycle_values.append(obs.cycle_time)
        throughput_values.append(obs.throughput)
        if obs.comment:
            annotations.append(Annotation(x=x, y=obs.cycle_time, label=obs.comment))
            annotations.append(Annotation(x=x, y=obs.throughput, label=obs.comment))

    return BuiltSeries(
        x_values=tuple(x_values),
        cycle_values=tuple(cycle_values),
        throughput_values=tuple(throughput_values),
        annotations=tuple(annotations),
    )
