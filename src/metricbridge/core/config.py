"""Conversion options."""

from dataclasses import dataclass


@dataclass(frozen=True)
class ConversionOptions:
    """Options controlling how a batch is converted.

    Attributes:
        keep_partial_metrics: Emit a metric even when some of its series or
            points failed to convert, carrying only the valid points. The
            failures are still reported. By default any failure drops the
            whole metric. Unsupported aggregation kinds always drop it.
    """

    keep_partial_metrics: bool = False


DEFAULT_OPTIONS = ConversionOptions()
