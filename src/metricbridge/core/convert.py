"""Conversion of legacy metrics into target metrics.

Example:
    ```python
    from metricbridge import convert_metrics

    metrics, err = convert_metrics(legacy_metrics)
    if err is not None:
        for failure in err.exceptions:
            ...
    export(metrics)
    ```
"""

import logging
from collections.abc import Callable, Iterable, Sequence
from functools import partial

from metricbridge.core.config import DEFAULT_OPTIONS, ConversionOptions
from metricbridge.core.errors import (
    BatchConversionError,
    ConversionErrorGroup,
    ErrorCollector,
    MetricConversionError,
    UnsupportedAggregationKindError,
)
from metricbridge.core.legacy import LabelKey, LegacyMetric, MetricKind, TimeSeries
from metricbridge.core.models import Aggregation, Metric
from metricbridge.core.projection import convert_gauge, convert_histogram, convert_sum

logger = logging.getLogger(__name__)

AggregationConverterFunc = Callable[
    [Sequence[LabelKey], Sequence[TimeSeries]],
    tuple[Aggregation, ConversionErrorGroup | None],
]

# GAUGE_DISTRIBUTION and SUMMARY have no target aggregation.
_AGGREGATION_CONVERTERS: dict[MetricKind, AggregationConverterFunc] = {
    MetricKind.GAUGE_INT64: partial(convert_gauge, int),
    MetricKind.GAUGE_FLOAT64: partial(convert_gauge, float),
    MetricKind.CUMULATIVE_INT64: partial(convert_sum, int),
    MetricKind.CUMULATIVE_FLOAT64: partial(convert_sum, float),
    MetricKind.CUMULATIVE_DISTRIBUTION: convert_histogram,
}


def supported_kinds() -> frozenset[MetricKind]:
    """Return the legacy aggregation kinds that can be converted."""
    return frozenset(_AGGREGATION_CONVERTERS)


def convert_aggregation(
    metric: LegacyMetric,
) -> tuple[Aggregation, ConversionErrorGroup | None]:
    """Convert the aggregation payload of a legacy metric.

    Returns:
        The aggregation with every point that converted, and a joined error
        for the series and points that did not (None if all converted).

    Raises:
        UnsupportedAggregationKindError: If the descriptor's kind has no
            target aggregation.
    """
    descriptor = metric.descriptor
    # a bare string equal to a kind value is not a kind
    if not isinstance(descriptor.kind, MetricKind):
        raise UnsupportedAggregationKindError(descriptor.kind)
    converter = _AGGREGATION_CONVERTERS.get(descriptor.kind)
    if converter is None:
        raise UnsupportedAggregationKindError(descriptor.kind)
    return converter(descriptor.label_keys, metric.time_series)


def convert_metric(
    metric: LegacyMetric,
    options: ConversionOptions = DEFAULT_OPTIONS,
) -> tuple[Metric | None, MetricConversionError | None]:
    """Convert one legacy metric.

    Args:
        metric: The legacy metric.
        options: Conversion options.

    Returns:
        ``(metric, None)`` on success. On failure ``(None, error)``, or, with
        ``options.keep_partial_metrics``, ``(metric, error)`` where the metric
        holds only the points that converted. A metric with no converted
        points is never kept.
    """
    name = metric.descriptor.name
    try:
        data, err = convert_aggregation(metric)
    except UnsupportedAggregationKindError as exc:
        return None, MetricConversionError(name, [exc])

    error = None
    if err is not None:
        error = MetricConversionError(name, err.exceptions)
        if not options.keep_partial_metrics or not data.data_points:
            return None, error
        logger.debug(
            "Keeping partial metric %s (%d failures)", name, len(err.exceptions)
        )

    return (
        Metric(
            name=name,
            description=metric.descriptor.description,
            unit=str(metric.descriptor.unit),
            data=data,
        ),
        error,
    )


class BatchConverter:
    """Converts batches of legacy metrics with a fixed set of options.

    Every metric is converted independently. Failed metrics are left out of
    the output and reported together; a failure never stops the batch.
    """

    def __init__(self, options: ConversionOptions | None = None) -> None:
        self._options = options or DEFAULT_OPTIONS

    @property
    def options(self) -> ConversionOptions:
        return self._options

    def convert(
        self, metrics: Iterable[LegacyMetric | None]
    ) -> tuple[list[Metric], BatchConversionError | None]:
        """Convert a batch.

        Args:
            metrics: Legacy metrics in order. None entries are skipped.

        Returns:
            The converted metrics in input order, and a BatchConversionError
            holding one MetricConversionError per failed metric (None if
            nothing failed).
        """
        converted: list[Metric] = []
        errors = ErrorCollector()
        skipped = 0
        for legacy in metrics:
            if legacy is None:
                skipped += 1
                continue
            metric, err = convert_metric(legacy, self._options)
            errors.add(err)
            if metric is not None:
                converted.append(metric)

        logger.debug(
            "Converted %d metrics (%d failed, %d empty entries skipped)",
            len(converted),
            len(errors),
            skipped,
        )
        if not errors:
            return converted, None
        return converted, BatchConversionError(errors.errors)

    def convert_strict(self, metrics: Iterable[LegacyMetric | None]) -> list[Metric]:
        """Convert a batch, raising if anything failed.

        Raises:
            BatchConversionError: If any metric, series or point failed.
        """
        converted, err = self.convert(metrics)
        if err is not None:
            raise err
        return converted


def convert_metrics(
    metrics: Iterable[LegacyMetric | None],
    options: ConversionOptions | None = None,
) -> tuple[list[Metric], BatchConversionError | None]:
    """Convert a batch of legacy metrics. See BatchConverter.convert."""
    return BatchConverter(options).convert(metrics)


def convert_metrics_strict(
    metrics: Iterable[LegacyMetric | None],
    options: ConversionOptions | None = None,
) -> list[Metric]:
    """Convert a batch of legacy metrics, raising BatchConversionError on failure."""
    return BatchConverter(options).convert_strict(metrics)
