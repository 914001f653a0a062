"""Projection of legacy time series into target data points.

Each projector converts what it can and collects what it cannot: a series
with a bad label mapping is skipped, a point with a bad value is skipped, and
the skipped units are reported together as one joined error.
"""

import logging
from collections.abc import Sequence

from metricbridge.core.attributes import build_attribute_set
from metricbridge.core.errors import (
    ConversionError,
    ConversionErrorGroup,
    ErrorCollector,
    NegativeBucketCountError,
    NegativeDistributionCountError,
    ValueTypeMismatchError,
)
from metricbridge.core.legacy import Bucket, Distribution, LabelKey, TimeSeries
from metricbridge.core.models import (
    N,
    Gauge,
    Histogram,
    HistogramDataPoint,
    NumberDataPoint,
    Sum,
    Temporality,
)

logger = logging.getLogger(__name__)

_POINTS_ERROR = "error converting data points"


def _matches(value_type: type, value: object) -> bool:
    # bool is an int subclass but never a legacy sample value
    return isinstance(value, value_type) and not isinstance(value, bool)


def convert_number_data_points(
    value_type: type[N],
    label_keys: Sequence[LabelKey],
    series: Sequence[TimeSeries],
) -> tuple[tuple[NumberDataPoint[N], ...], ConversionErrorGroup | None]:
    """Convert time series into numeric data points.

    Args:
        value_type: int or float; every point value must be of this type.
        label_keys: Label keys of the metric descriptor.
        series: Time series to convert.

    Returns:
        The converted points in series order, and a joined error for the
        skipped series and points (None if nothing was skipped).
    """
    points: list[NumberDataPoint[N]] = []
    errors = ErrorCollector()
    for ts in series:
        try:
            attrs = build_attribute_set(label_keys, ts.label_values)
        except ConversionError as exc:
            logger.debug("Skipping time series: %s", exc)
            errors.add(exc)
            continue
        for point in ts.points:
            if not _matches(value_type, point.value):
                errors.add(ValueTypeMismatchError(value_type, point.value))
                continue
            points.append(
                NumberDataPoint(
                    attributes=attrs,
                    start_time=ts.start_time,
                    time=point.time,
                    value=point.value,
                )
            )
    return tuple(points), errors.build(_POINTS_ERROR)


def convert_gauge(
    value_type: type[N],
    label_keys: Sequence[LabelKey],
    series: Sequence[TimeSeries],
) -> tuple[Gauge[N], ConversionErrorGroup | None]:
    """Convert legacy gauge time series to a Gauge."""
    points, err = convert_number_data_points(value_type, label_keys, series)
    return Gauge(data_points=points), err


def convert_sum(
    value_type: type[N],
    label_keys: Sequence[LabelKey],
    series: Sequence[TimeSeries],
) -> tuple[Sum[N], ConversionErrorGroup | None]:
    """Convert legacy cumulative time series to a Sum.

    Legacy cumulatives are always monotonic with cumulative temporality.
    """
    points, err = convert_number_data_points(value_type, label_keys, series)
    return (
        Sum(
            data_points=points,
            temporality=Temporality.CUMULATIVE,
            is_monotonic=True,
        ),
        err,
    )


def convert_histogram(
    label_keys: Sequence[LabelKey],
    series: Sequence[TimeSeries],
) -> tuple[Histogram, ConversionErrorGroup | None]:
    """Convert legacy distribution time series to a cumulative Histogram.

    A point is skipped when its value is not a Distribution, when its count
    is negative, or when any of its buckets has a negative count. Exemplars
    are not converted.
    """
    points: list[HistogramDataPoint] = []
    errors = ErrorCollector()
    for ts in series:
        try:
            attrs = build_attribute_set(label_keys, ts.label_values)
        except ConversionError as exc:
            logger.debug("Skipping time series: %s", exc)
            errors.add(exc)
            continue
        for point in ts.points:
            dist = point.value
            if not isinstance(dist, Distribution):
                errors.add(ValueTypeMismatchError(Distribution, dist))
                continue
            if dist.count < 0:
                errors.add(NegativeDistributionCountError(dist.count))
                continue
            try:
                bucket_counts = convert_bucket_counts(dist.buckets)
            except NegativeBucketCountError as exc:
                errors.add(exc)
                continue
            if any(b.exemplar is not None for b in dist.buckets):
                logger.debug("Dropping exemplars of histogram point at %s", point.time)
            points.append(
                HistogramDataPoint(
                    attributes=attrs,
                    start_time=ts.start_time,
                    time=point.time,
                    count=dist.count,
                    sum=float(dist.sum),
                    bounds=tuple(dist.bucket_options.bounds),
                    bucket_counts=bucket_counts,
                )
            )
    return (
        Histogram(data_points=tuple(points), temporality=Temporality.CUMULATIVE),
        errors.build(_POINTS_ERROR),
    )


def convert_bucket_counts(buckets: Sequence[Bucket]) -> tuple[int, ...]:
    """Convert bucket records to their non-negative counts.

    Raises:
        NegativeBucketCountError: On the first negative count; no partial
            result is returned.
    """
    counts: list[int] = []
    for bucket in buckets:
        if bucket.count < 0:
            raise NegativeBucketCountError(bucket.count)
        counts.append(int(bucket.count))
    return tuple(counts)
