"""Target (OpenTelemetry-style) metric data model.

These are the outputs of a conversion.
"""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Generic, TypeVar

from metricbridge.core.attributes import AttributeSet

N = TypeVar("N", int, float)


class Temporality(str, Enum):
    """Aggregation temporality of a Sum or Histogram."""

    CUMULATIVE = "cumulative"
    DELTA = "delta"


@dataclass(frozen=True)
class NumberDataPoint(Generic[N]):
    """A single numeric value of a Gauge or Sum.

    Attributes:
        attributes: Attribute set of the originating time series.
        start_time: Start of the cumulative period.
        time: When the value was recorded.
        value: The value, int or float depending on the aggregation.
    """

    attributes: AttributeSet
    start_time: datetime
    time: datetime
    value: N


@dataclass(frozen=True)
class HistogramDataPoint:
    """A single bucketed distribution.

    Attributes:
        attributes: Attribute set of the originating time series.
        start_time: Start of the cumulative period.
        time: When the distribution was recorded.
        count: Number of recorded values.
        sum: Sum of the recorded values.
        bounds: Bucket boundaries, ascending.
        bucket_counts: Count per bucket.
        exemplars: Always empty; exemplars are not converted.
    """

    attributes: AttributeSet
    start_time: datetime
    time: datetime
    count: int
    sum: float
    bounds: tuple[float, ...]
    bucket_counts: tuple[int, ...]
    exemplars: tuple[()] = ()


@dataclass(frozen=True)
class Gauge(Generic[N]):
    data_points: tuple[NumberDataPoint[N], ...] = ()


@dataclass(frozen=True)
class Sum(Generic[N]):
    """A sum aggregation.

    Attributes:
        data_points: Converted points.
        temporality: Aggregation temporality.
        is_monotonic: Whether the sum only ever increases.
    """

    data_points: tuple[NumberDataPoint[N], ...] = ()
    temporality: Temporality = Temporality.CUMULATIVE
    is_monotonic: bool = True


@dataclass(frozen=True)
class Histogram:
    data_points: tuple[HistogramDataPoint, ...] = ()
    temporality: Temporality = Temporality.CUMULATIVE


Aggregation = Gauge[int] | Gauge[float] | Sum[int] | Sum[float] | Histogram


@dataclass(frozen=True)
class Metric:
    """A converted metric.

    Attributes:
        name: Metric name, copied verbatim.
        description: Description, copied verbatim.
        unit: Unit token, copied verbatim.
        data: The converted aggregation.
    """

    name: str
    description: str
    unit: str
    data: Aggregation
