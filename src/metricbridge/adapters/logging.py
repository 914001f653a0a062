"""Python logging adapter for conversion errors.

Bridges a batch conversion error to the standard library logging module so a
consumer can export the converted metrics and log what was dropped.
"""

import logging
from collections.abc import Iterator

from metricbridge.core.errors import MetricConversionError

_default_logger = logging.getLogger("metricbridge.conversion")


def iter_failures(
    error: BaseExceptionGroup | None,
) -> Iterator[tuple[str | None, Exception]]:
    """Yield every leaf failure of a conversion error.

    Args:
        error: A BatchConversionError, MetricConversionError or any other
            exception group. None yields nothing.

    Yields:
        (metric_name, error) pairs. metric_name is None for failures that are
        not nested in a MetricConversionError.
    """
    if error is None:
        return
    yield from _walk(error, None)


def _walk(
    group: BaseExceptionGroup, metric_name: str | None
) -> Iterator[tuple[str | None, Exception]]:
    if isinstance(group, MetricConversionError):
        metric_name = group.metric_name
    for exc in group.exceptions:
        if isinstance(exc, BaseExceptionGroup):
            yield from _walk(exc, metric_name)
        else:
            yield metric_name, exc


def log_conversion_errors(
    error: BaseExceptionGroup | None,
    logger: logging.Logger | None = None,
    level: int = logging.WARNING,
) -> int:
    """Log one record per conversion failure.

    Each record carries the extra fields ``metric_name`` and ``error_kind``.

    Example:
        ```python
        metrics, err = convert_metrics(batch)
        log_conversion_errors(err)
        exporter.export(metrics)
        ```

    Args:
        error: The error returned by a conversion, or None.
        logger: Logger to write to. Defaults to ``metricbridge.conversion``.
        level: Log level of the records.

    Returns:
        Number of records logged.
    """
    target = logger or _default_logger
    logged = 0
    for metric_name, exc in iter_failures(error):
        target.log(
            level,
            "Dropped data converting metric %s: %s",
            metric_name or "<unknown>",
            exc,
            extra={"metric_name": metric_name or "", "error_kind": type(exc).__name__},
        )
        logged += 1
    return logged
