"""
Strict parsing of raw sheet rows into typed observations.
Columns (relative to the read range): 0 date, 1 cycle time, 2 throughput, 5 comment.
Any bad row fails the whole team; partial ingestion is not supported.
"""
from datetime import date, datetime
from typing import Any, Callable, Sequence

from core.errors import MalformedRow
from schemas.metrics import MetricObservation, TeamSeries

_DATE_FORMAT = "%Y-%m-%d"
_COMMENT_COLUMN = 5
_MIN_COLUMNS = 3


def _parse_date(team: str, index: int, value: Any) -> date:
    try:
        return datetime.strptime(str(value).strip(), _DATE_FORMAT).date()
    except ValueError:
        raise MalformedRow(team, index, f"invalid date {value!r}, expected YYYY-MM-DD")


def _parse_float(team: str, index: int, field: str, value: Any) -> float:
    try:
        return float(str(value).strip())
    except ValueError:
        raise MalformedRow(team, index, f"non-numeric {field} {value!r}")


def parse_row(team: str, index: int, row: Sequence[Any]) -> MetricObservation:
    if len(row) < _MIN_COLUMNS:
        raise MalformedRow(team, index, f"expected at least {_MIN_COLUMNS} cells, got {len(row)}")
    comment = None
    if len(row) > _COMMENT_COLUMN:
        comment = str(row[_COMMENT_COLUMN]).strip() or None
    return MetricObservation(
        date=_parse_date(team, index, row[0]),
        cycle_time=_parse_float(team, index, "cycle time", row[1]),
        throughput=_parse_float(team, index, "throughput", row[2]),
        comment=comment,
    )


def parse_rows(team: str, rows: Sequence[Sequence[Any]]) -> TeamSeries:
    observations = tuple(parse_row(team, i, row) for i, row in enumerate(rows))
    return TeamSeries(name=team, observations=observations)


def team_series_loader(
    fetch_rows: Callable[[str], Sequence[Sequence[Any]]],
) -> Callable[[str], TeamSeries]:
    """Compose a raw-row fetcher with parsing into the refresh loop's fetch callable."""

    def load(team: str) -> TeamSeries:
        return parse_rows(team, fetch_rows(team))

    return load
