"""Legacy (OpenCensus-style) metric data model.

These are the input records of a conversion. They are produced elsewhere
(instrumentation, a decoder) and are treated as read-only here.
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum


class MetricKind(str, Enum):
    """Aggregation kind declared by a legacy metric descriptor."""

    GAUGE_INT64 = "gauge_int64"
    GAUGE_FLOAT64 = "gauge_float64"
    GAUGE_DISTRIBUTION = "gauge_distribution"
    CUMULATIVE_INT64 = "cumulative_int64"
    CUMULATIVE_FLOAT64 = "cumulative_float64"
    CUMULATIVE_DISTRIBUTION = "cumulative_distribution"
    SUMMARY = "summary"


@dataclass(frozen=True)
class LabelKey:
    """Name of a label dimension.

    Attributes:
        key: Label name (e.g., "method").
        description: Optional human readable description.
    """

    key: str
    description: str = ""


@dataclass(frozen=True)
class LabelValue:
    """Value of a label for one time series.

    Attributes:
        value: The label value. Ignored when ``present`` is False.
        present: False marks the label as unset for the series.
    """

    value: str = ""
    present: bool = True

    @classmethod
    def absent(cls) -> "LabelValue":
        """Create a label value that is not set."""
        return cls(value="", present=False)


@dataclass(frozen=True)
class MetricDescriptor:
    """Describes a legacy metric.

    Attributes:
        name: Metric name.
        description: Human readable description.
        unit: Unit token (e.g., "1", "By", "ms"), carried as an opaque string.
        kind: Declared aggregation kind.
        label_keys: Ordered label keys; each time series provides one value
            per key, positionally.
    """

    name: str
    description: str
    unit: str
    kind: MetricKind
    label_keys: tuple[LabelKey, ...] = ()


@dataclass(frozen=True)
class BucketOptions:
    """Explicit bucket boundaries of a distribution."""

    bounds: tuple[float, ...] = ()


@dataclass(frozen=True)
class Exemplar:
    """Example measurement recorded in a distribution bucket."""

    value: float
    timestamp: datetime
    attachments: tuple[tuple[str, str], ...] = ()


@dataclass(frozen=True)
class Bucket:
    """A distribution bucket.

    Attributes:
        count: Number of values in the bucket. Expected to be non-negative.
        exemplar: Optional exemplar for the bucket.
    """

    count: int
    exemplar: Exemplar | None = None


@dataclass(frozen=True)
class Distribution:
    """Distribution value of a point.

    Attributes:
        count: Number of recorded values. Expected to be non-negative.
        sum: Sum of the recorded values.
        sum_of_squared_deviation: Sum of squared deviations from the mean.
        bucket_options: Bucket boundaries.
        buckets: Ordered buckets, one more than the number of boundaries.
    """

    count: int
    sum: float
    sum_of_squared_deviation: float = 0.0
    bucket_options: BucketOptions = field(default_factory=BucketOptions)
    buckets: tuple[Bucket, ...] = ()


@dataclass(frozen=True)
class ValueAtPercentile:
    percentile: float
    value: float


@dataclass(frozen=True)
class Summary:
    """Summary value of a point. Has no counterpart in the target model."""

    count: int
    sum: float
    percentiles: tuple[ValueAtPercentile, ...] = ()


PointValue = int | float | Distribution | Summary


@dataclass(frozen=True)
class Point:
    """A single timestamped value.

    Attributes:
        time: When the value was recorded.
        value: int, float, Distribution or Summary depending on the metric kind.
    """

    time: datetime
    value: PointValue


@dataclass(frozen=True)
class TimeSeries:
    """Points sharing one set of label values.

    Attributes:
        start_time: Start of the cumulative period.
        label_values: Values positionally matching the descriptor label keys.
        points: Ordered points of the series.
    """

    start_time: datetime
    label_values: tuple[LabelValue, ...] = ()
    points: tuple[Point, ...] = ()


@dataclass(frozen=True)
class LegacyMetric:
    """A legacy metric: descriptor plus its time series."""

    descriptor: MetricDescriptor
    time_series: tuple[TimeSeries, ...] = ()
