"""BDD step definitions for batch conversion features."""

from dataclasses import dataclass, field
from datetime import UTC, datetime

import pytest
from pytest_bdd import given, parsers, then, when

from metricbridge.adapters.logging import iter_failures
from metricbridge.core.config import ConversionOptions
from metricbridge.core.convert import BatchConverter
from metricbridge.core.errors import BatchConversionError
from metricbridge.core.legacy import (
    Bucket,
    BucketOptions,
    Distribution,
    LegacyMetric,
    MetricDescriptor,
    MetricKind,
    Point,
    PointValue,
    TimeSeries,
)
from metricbridge.core.models import Metric, Sum, Temporality

_START = datetime(2024, 1, 1, tzinfo=UTC)
_TIME = datetime(2024, 1, 1, 0, 1, tzinfo=UTC)


@dataclass
class ConversionScenarioContext:
    """Shared state between steps in a conversion scenario."""

    batch: list[LegacyMetric | None] = field(default_factory=list)
    options: ConversionOptions = field(default_factory=ConversionOptions)
    output: list[Metric] = field(default_factory=list)
    error: BatchConversionError | None = None

    def metric(self, name: str) -> Metric:
        return next(m for m in self.output if m.name == name)


@pytest.fixture
def ctx() -> ConversionScenarioContext:
    """Fresh scenario context for each test."""
    return ConversionScenarioContext()


def _legacy(kind: MetricKind, name: str, *values: PointValue) -> LegacyMetric:
    series = (
        TimeSeries(
            start_time=_START,
            points=tuple(Point(time=_TIME, value=v) for v in values),
        ),
    )
    return LegacyMetric(
        descriptor=MetricDescriptor(name=name, description="", unit="1", kind=kind),
        time_series=series if values else (),
    )


def _parse_value(raw: str) -> int | float:
    return float(raw) if "." in raw else int(raw)


def _names(raw: str) -> list[str]:
    return [n for n in raw.split(",") if n]


# === Given ===
@given("an empty batch")
def step_empty_batch(ctx: ConversionScenarioContext) -> None:
    ctx.batch = []


@given("partial metrics are kept")
def step_keep_partial(ctx: ConversionScenarioContext) -> None:
    ctx.options = ConversionOptions(keep_partial_metrics=True)


@given("an empty entry")
def step_empty_entry(ctx: ConversionScenarioContext) -> None:
    ctx.batch.append(None)


@given(
    parsers.re(
        r'a "(?P<kind>[^"]+)" metric named "(?P<name>[^"]+)" '
        r'with values "(?P<values>[^"]+)"'
    )
)
def step_metric_with_values(
    ctx: ConversionScenarioContext, kind: str, name: str, values: str
) -> None:
    parsed = [_parse_value(v) for v in values.split(",")]
    ctx.batch.append(_legacy(MetricKind(kind), name, *parsed))


@given(parsers.re(r'a "(?P<kind>[^"]+)" metric named "(?P<name>[^"]+)" with no series'))
def step_metric_without_series(
    ctx: ConversionScenarioContext, kind: str, name: str
) -> None:
    ctx.batch.append(_legacy(MetricKind(kind), name))


@given(
    parsers.re(
        r'a distribution metric named "(?P<name>[^"]+)" '
        r'with bucket counts "(?P<counts>[^"]+)"'
    )
)
def step_distribution_metric(
    ctx: ConversionScenarioContext, name: str, counts: str
) -> None:
    bucket_counts = [int(c) for c in counts.split(",")]
    dist = Distribution(
        count=max(sum(bucket_counts), 0),
        sum=1.0,
        bucket_options=BucketOptions(
            bounds=tuple(float(i) for i in range(1, len(bucket_counts)))
        ),
        buckets=tuple(Bucket(count=c) for c in bucket_counts),
    )
    ctx.batch.append(_legacy(MetricKind.CUMULATIVE_DISTRIBUTION, name, dist))


# === When ===
@when("the batch is converted")
def step_convert(ctx: ConversionScenarioContext) -> None:
    ctx.output, ctx.error = BatchConverter(ctx.options).convert(ctx.batch)


# === Then ===
@then(parsers.re(r'the output contains metrics "(?P<names>[^"]+)"'))
def step_output_names(ctx: ConversionScenarioContext, names: str) -> None:
    assert [m.name for m in ctx.output] == _names(names)


@then("no metrics are output")
def step_no_output(ctx: ConversionScenarioContext) -> None:
    assert ctx.output == []


@then("no error is returned")
def step_no_error(ctx: ConversionScenarioContext) -> None:
    assert ctx.error is None


@then(parsers.re(r'the error names metrics "(?P<names>[^"]+)"'))
def step_error_names(ctx: ConversionScenarioContext, names: str) -> None:
    assert ctx.error is not None
    assert ctx.error.metric_names == _names(names)


@then(parsers.re(r'the error mentions "(?P<text>[^"]+)"'))
def step_error_mentions(ctx: ConversionScenarioContext, text: str) -> None:
    messages = [str(exc) for _, exc in iter_failures(ctx.error)]
    assert any(text in m for m in messages), messages


@then(parsers.re(r'metric "(?P<name>[^"]+)" is a cumulative monotonic sum'))
def step_cumulative_sum(ctx: ConversionScenarioContext, name: str) -> None:
    data = ctx.metric(name).data
    assert isinstance(data, Sum)
    assert data.temporality is Temporality.CUMULATIVE
    assert data.is_monotonic is True


@then(
    parsers.re(r'metric "(?P<name>[^"]+)" has (?P<count>\d+) data points'),
    converters={"count": int},
)
def step_point_count(ctx: ConversionScenarioContext, name: str, count: int) -> None:
    assert len(ctx.metric(name).data.data_points) == count
