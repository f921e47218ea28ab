from datetime import date

import pytest

from schemas.metrics import MetricObservation, TeamSeries


def make_series(name: str = "DevOps", comments=(None, "retro feedback", None)) -> TeamSeries:
    cycle = [2.0, 1.5, 1.0]
    throughput = [5.0, 6.0, 7.0]
    observations = tuple(
        MetricObservation(
            date=date(2023, 1, i + 1),
            cycle_time=cycle[i],
            throughput=throughput[i],
            comment=comments[i],
        )
        for i in range(3)
    )
    return TeamSeries(name=name, observations=observations)


@pytest.fixture
def devops_series() -> TeamSeries:
    return make_series()
