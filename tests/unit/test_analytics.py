"""Unit tests for the health and green-days reducers."""

import random
from decimal import Decimal

import pytest

from app.models.daily_status import DailyStatus
from app.models.metric import Metric
from app.schemas.analytics import GreenDaysAnalytics, HealthAnalytics
from app.services.analytics_service import summarize_green_days, summarize_health


def metric(uptime, mttr=30, mtbf=14400, resource_utilization=75.0, occupancy=80.0) -> Metric:
    return Metric(
        environment_id=1,
        uptime=uptime,
        mttr=mttr,
        mtbf=mtbf,
        resource_utilization=resource_utilization,
        occupancy=occupancy,
    )


def status_days(healthy: int, issues: int, down: int):
    statuses = ["healthy"] * healthy + ["issues"] * issues + ["down"] * down
    return [DailyStatus(environment_id=1, status=s, uptime_percentage=99.0) for s in statuses]


class TestSummarizeHealth:
    def test_empty_is_all_zero(self):
        summary = summarize_health([])
        assert summary == HealthAnalytics()
        assert summary.average_uptime == 0
        assert summary.average_mttr == 0
        assert summary.average_mtbf == 0
        assert summary.average_resource_utilization == 0
        assert summary.average_occupancy == 0

    def test_average_uptime(self):
        summary = summarize_health([metric(98.0), metric(99.0), metric(100.0)])
        assert summary.average_uptime == 99.0

    def test_each_field_averaged_independently(self):
        records = [
            metric(99.5, mttr=30, mtbf=1000, resource_utilization=70.0, occupancy=90.0),
            metric(98.5, mttr=60, mtbf=2000, resource_utilization=80.0, occupancy=70.0),
        ]
        summary = summarize_health(records)
        assert summary.average_uptime == 99.0
        assert summary.average_mttr == 45.0
        assert summary.average_mtbf == 1500.0
        assert summary.average_resource_utilization == 75.0
        assert summary.average_occupancy == 80.0

    def test_accepts_decimal_columns(self):
        records = [metric(Decimal("99.10")), metric(Decimal("99.20"))]
        assert summarize_health(records).average_uptime == 99.15

    def test_rounds_to_precision(self):
        records = [metric(99.0), metric(99.0), metric(100.0)]
        assert summarize_health(records).average_uptime == 99.33
        assert summarize_health(records, precision=4).average_uptime == 99.3333

    def test_order_independent(self):
        rng = random.Random(42)
        records = [
            metric(
                round(rng.uniform(95, 100), 2),
                mttr=rng.randint(10, 90),
                mtbf=rng.randint(1000, 30000),
                resource_utilization=round(rng.uniform(50, 95), 2),
                occupancy=round(rng.uniform(50, 95), 2),
            )
            for _ in range(50)
        ]
        expected = summarize_health(records)

        for _ in range(10):
            shuffled = records[:]
            rng.shuffle(shuffled)
            assert summarize_health(shuffled) == expected


class TestSummarizeGreenDays:
    def test_empty_is_all_zero(self):
        summary = summarize_green_days([])
        assert summary == GreenDaysAnalytics()
        assert summary.green_days_percentage == 0

    def test_counts_and_percentage(self):
        summary = summarize_green_days(status_days(8, 1, 1))
        assert summary.total_days == 10
        assert summary.green_days == 8
        assert summary.yellow_days == 1
        assert summary.red_days == 1
        assert summary.green_days_percentage == 80.0

    def test_no_healthy_days(self):
        summary = summarize_green_days(status_days(0, 2, 1))
        assert summary.total_days == 3
        assert summary.green_days == 0
        assert summary.green_days_percentage == 0.0

    def test_percentage_rounded(self):
        assert summarize_green_days(status_days(2, 1, 0)).green_days_percentage == 66.67

    @pytest.mark.parametrize("seed", [1, 2, 3])
    def test_order_independent(self, seed):
        records = status_days(17, 5, 3)
        expected = summarize_green_days(records)
        random.Random(seed).shuffle(records)
        assert summarize_green_days(records) == expected
