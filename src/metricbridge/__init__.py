"""metricbridge - convert legacy OpenCensus-style metrics to OpenTelemetry-style metrics."""

from metricbridge.adapters.logging import iter_failures, log_conversion_errors
from metricbridge.core.attributes import AttributeSet, build_attribute_set
from metricbridge.core.config import ConversionOptions
from metricbridge.core.convert import (
    BatchConverter,
    convert_aggregation,
    convert_metric,
    convert_metrics,
    convert_metrics_strict,
    supported_kinds,
)
from metricbridge.core.errors import (
    AttributeArityMismatchError,
    BatchConversionError,
    ConversionError,
    ConversionErrorGroup,
    ErrorCollector,
    MetricConversionError,
    NegativeBucketCountError,
    NegativeCountError,
    NegativeDistributionCountError,
    UnsupportedAggregationKindError,
    ValueTypeMismatchError,
)
from metricbridge.core.models import (
    Gauge,
    Histogram,
    HistogramDataPoint,
    Metric,
    NumberDataPoint,
    Sum,
    Temporality,
)

__all__ = [
    # Conversion
    "BatchConverter",
    "ConversionOptions",
    "convert_aggregation",
    "convert_metric",
    "convert_metrics",
    "convert_metrics_strict",
    "supported_kinds",
    # Attributes
    "AttributeSet",
    "build_attribute_set",
    # Target model
    "Gauge",
    "Histogram",
    "HistogramDataPoint",
    "Metric",
    "NumberDataPoint",
    "Sum",
    "Temporality",
    # Errors
    "AttributeArityMismatchError",
    "BatchConversionError",
    "ConversionError",
    "ConversionErrorGroup",
    "ErrorCollector",
    "MetricConversionError",
    "NegativeBucketCountError",
    "NegativeCountError",
    "NegativeDistributionCountError",
    "UnsupportedAggregationKindError",
    "ValueTypeMismatchError",
    # Logging
    "iter_failures",
    "log_conversion_errors",
]
