"""Conversion errors and the accumulator used to join them.

Leaf errors describe a single dropped unit (metric, series or point). They
are collected rather than raised while a batch is being converted, and are
handed back to the caller as exception groups so each failure can still be
inspected with ``.exceptions``, ``.subgroup()`` or ``except*``.
"""

from collections.abc import Iterator, Sequence
from typing import Any


class ConversionError(Exception):
    """Base class for all conversion failures."""


class UnsupportedAggregationKindError(ConversionError):
    """The metric's aggregation kind has no mapping. The metric is dropped."""

    def __init__(self, kind: object) -> None:
        self.kind = kind
        super().__init__(f"unsupported aggregation kind: {_kind_name(kind)!r}")


class AttributeArityMismatchError(ConversionError):
    """Label key and label value counts differ. The series is dropped."""

    def __init__(self, keys: int, values: int) -> None:
        self.keys = keys
        self.values = values
        super().__init__(
            f"mismatched number of attribute keys and values: "
            f"keys({keys}) values({values})"
        )


class ValueTypeMismatchError(ConversionError):
    """A point value has the wrong type for its aggregation. The point is dropped."""

    def __init__(self, expected: type, value: Any) -> None:
        self.expected = expected
        self.value = value
        super().__init__(
            f"wrong value type for data point: expected {expected.__name__}, "
            f"got {type(value).__name__} ({value!r})"
        )


class NegativeCountError(ConversionError):
    """A distribution or bucket count is negative. The point is dropped."""

    what = "count"

    def __init__(self, count: int) -> None:
        self.count = count
        super().__init__(f"{self.what} is negative: {count}")


class NegativeDistributionCountError(NegativeCountError):
    what = "distribution count"


class NegativeBucketCountError(NegativeCountError):
    what = "distribution bucket count"


class ConversionErrorGroup(ExceptionGroup):
    """Joined conversion failures."""

    def derive(self, excs: Sequence[Exception]) -> "ConversionErrorGroup":
        return ConversionErrorGroup(self.message, excs)


class MetricConversionError(ConversionErrorGroup):
    """All failures of one metric, tagged with the metric name."""

    def __new__(
        cls, metric_name: str, exceptions: Sequence[Exception]
    ) -> "MetricConversionError":
        self = super().__new__(
            cls, f"error converting metric {metric_name}", exceptions
        )
        self.metric_name = metric_name
        return self

    def __init__(self, metric_name: str, exceptions: Sequence[Exception]) -> None:
        super().__init__(f"error converting metric {metric_name}", exceptions)

    def derive(self, excs: Sequence[Exception]) -> "MetricConversionError":
        return MetricConversionError(self.metric_name, excs)


class BatchConversionError(ConversionErrorGroup):
    """Failures of a whole batch, one MetricConversionError per failed metric."""

    def __new__(
        cls, exceptions: Sequence[Exception]
    ) -> "BatchConversionError":
        return super().__new__(cls, BATCH_ERROR_MESSAGE, exceptions)

    def __init__(self, exceptions: Sequence[Exception]) -> None:
        super().__init__(BATCH_ERROR_MESSAGE, exceptions)

    def derive(self, excs: Sequence[Exception]) -> "BatchConversionError":
        return BatchConversionError(excs)

    @property
    def metric_names(self) -> list[str]:
        """Names of the metrics that failed, in batch order."""
        return [
            exc.metric_name
            for exc in self.exceptions
            if isinstance(exc, MetricConversionError)
        ]


BATCH_ERROR_MESSAGE = "error converting from legacy to target metric model"


class ErrorCollector:
    """Accumulates errors for continue-on-error processing.

    Example:
        ```python
        errors = ErrorCollector()
        errors.add(None)  # ignored
        errors.add(ValueTypeMismatchError(int, 1.5))
        if errors:
            raise errors.build("conversion failed")
        ```
    """

    def __init__(self) -> None:
        self._errors: list[Exception] = []

    def add(self, error: Exception | None) -> None:
        """Merge in an error. ``None`` is ignored.

        A plain ConversionErrorGroup is flattened into its members so joined
        errors do not nest once per layer.
        """
        if error is None:
            return
        if type(error) is ConversionErrorGroup:
            self._errors.extend(error.exceptions)
        else:
            self._errors.append(error)

    def __bool__(self) -> bool:
        return bool(self._errors)

    def __len__(self) -> int:
        return len(self._errors)

    def __iter__(self) -> Iterator[Exception]:
        return iter(self._errors)

    @property
    def errors(self) -> tuple[Exception, ...]:
        return tuple(self._errors)

    def build(self, message: str) -> ConversionErrorGroup | None:
        """Join the collected errors, or return None if there are none."""
        if not self._errors:
            return None
        return ConversionErrorGroup(message, self._errors)


def _kind_name(kind: object) -> str:
    value = getattr(kind, "value", kind)
    return str(value)
