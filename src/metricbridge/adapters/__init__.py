"""Adapters for consumers of converted metrics."""

from metricbridge.adapters.logging import iter_failures, log_conversion_errors

__all__ = [
    "iter_failures",
    "log_conversion_errors",
]
