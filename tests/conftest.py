"""Shared test fixtures for all test modules."""

from collections.abc import Callable, Sequence
from datetime import UTC, datetime

import pytest

from metricbridge.core.legacy import (
    Bucket,
    BucketOptions,
    Distribution,
    LabelKey,
    LabelValue,
    LegacyMetric,
    MetricDescriptor,
    MetricKind,
    Point,
    PointValue,
    TimeSeries,
)

START_TIME = datetime(2024, 1, 1, 12, 0, 0, tzinfo=UTC)
POINT_TIME = datetime(2024, 1, 1, 12, 0, 30, tzinfo=UTC)


@pytest.fixture
def start_time() -> datetime:
    return START_TIME


@pytest.fixture
def point_time() -> datetime:
    return POINT_TIME


@pytest.fixture
def make_series() -> Callable[..., TimeSeries]:
    """Factory fixture for creating legacy time series.

    Label values given as None become absent values.
    """

    def _series(
        *values: PointValue,
        labels: Sequence[str | None] = (),
        start: datetime = START_TIME,
        time: datetime = POINT_TIME,
    ) -> TimeSeries:
        return TimeSeries(
            start_time=start,
            label_values=tuple(
                LabelValue.absent() if v is None else LabelValue(v) for v in labels
            ),
            points=tuple(Point(time=time, value=v) for v in values),
        )

    return _series


@pytest.fixture
def make_metric() -> Callable[..., LegacyMetric]:
    """Factory fixture for creating legacy metrics."""

    def _metric(
        kind: MetricKind,
        *series: TimeSeries,
        name: str = "test_metric",
        description: str = "a test metric",
        unit: str = "1",
        label_keys: Sequence[str] = (),
    ) -> LegacyMetric:
        return LegacyMetric(
            descriptor=MetricDescriptor(
                name=name,
                description=description,
                unit=unit,
                kind=kind,
                label_keys=tuple(LabelKey(k) for k in label_keys),
            ),
            time_series=tuple(series),
        )

    return _metric


@pytest.fixture
def make_distribution() -> Callable[..., Distribution]:
    """Factory fixture for creating distributions from bucket counts."""

    def _distribution(
        bucket_counts: Sequence[int],
        bounds: Sequence[float] = (),
        count: int | None = None,
        total: float = 0.0,
    ) -> Distribution:
        return Distribution(
            count=sum(bucket_counts) if count is None else count,
            sum=total,
            bucket_options=BucketOptions(bounds=tuple(bounds)),
            buckets=tuple(Bucket(count=c) for c in bucket_counts),
        )

    return _distribution
