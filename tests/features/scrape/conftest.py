"""BDD step definitions for scrape aggregation features."""

import asyncio
from dataclasses import dataclass, field

import pytest
from pytest_bdd import given, parsers, then, when

from tests.fakes import DomainStats, FakeCdnDataSource
from ucdn_exporter.core.aggregator import ScrapeAggregator
from ucdn_exporter.core.errors import DataSourceError
from ucdn_exporter.core.models import (
    HitRatePoint,
    HttpCodePoint,
    MonitoredResource,
    ReportWindow,
    ScrapeResult,
)


@dataclass
class ScrapeScenarioContext:
    """State shared between steps of one scenario."""

    window: ReportWindow | None = None
    resources: list[MonitoredResource] = field(default_factory=list)
    source: FakeCdnDataSource = field(default_factory=FakeCdnDataSource)
    result: ScrapeResult | None = None

    def stats(self, resource_id: str) -> DomainStats:
        return self.source.stats.setdefault(resource_id, DomainStats())

    def gauges(self, fq_name: str) -> dict[str, float]:
        assert self.result is not None
        return {
            o.label_values[0]: o.value
            for o in self.result.observations
            if o.descriptor.fq_name == fq_name
        }


@pytest.fixture
def ctx() -> ScrapeScenarioContext:
    """Fresh scenario context for each test."""
    return ScrapeScenarioContext()


@given(parsers.parse("a report window of {range_s:d} seconds delayed by {delay_s:d} seconds"))
def step_window(ctx: ScrapeScenarioContext, range_s: int, delay_s: int) -> None:
    ctx.window = ReportWindow(range_seconds=range_s, delay_seconds=delay_s)


@given(parsers.parse('a monitored domain "{resource_id}" named "{name}"'))
def step_domain(ctx: ScrapeScenarioContext, resource_id: str, name: str) -> None:
    ctx.resources.append(MonitoredResource(resource_id, name))


@given(parsers.re(r'domain "(?P<resource_id>[^"]+)" reports hit rates (?P<pairs>[\d./ and]+)$'))
def step_hit_rates(ctx: ScrapeScenarioContext, resource_id: str, pairs: str) -> None:
    points = []
    for i, pair in enumerate(pairs.split(" and ")):
        request, flow = pair.split("/")
        points.append(HitRatePoint(i, float(request), float(flow)))
    ctx.stats(resource_id).hit_rate = points


@given(parsers.parse('domain "{resource_id}" reports 4xx totals {totals}'))
def step_4xx(ctx: ScrapeScenarioContext, resource_id: str, totals: str) -> None:
    ctx.stats(resource_id).http_codes = [
        HttpCodePoint(i, http_4xx=int(t)) for i, t in enumerate(totals.split(","))
    ]


@given(
    parsers.parse(
        'domain "{resource_id}" reports a 95th percentile bandwidth of {value:g}'
    )
)
def step_bandwidth_95(ctx: ScrapeScenarioContext, resource_id: str, value: float) -> None:
    ctx.stats(resource_id).bandwidth_95 = value


@given(parsers.parse('domain "{resource_id}" reports no data'))
def step_no_data(ctx: ScrapeScenarioContext, resource_id: str) -> None:
    ctx.source.stats[resource_id] = DomainStats()


@given(parsers.parse('fetching "{statistic}" for domain "{resource_id}" fails'))
def step_fetch_fails(ctx: ScrapeScenarioContext, statistic: str, resource_id: str) -> None:
    ctx.source.fail(resource_id, statistic, DataSourceError("upstream unavailable"))


@when("a scrape runs")
def step_scrape(ctx: ScrapeScenarioContext) -> None:
    assert ctx.window is not None
    aggregator = ScrapeAggregator(ctx.resources, "org-test", ctx.window, ctx.source)
    ctx.result = asyncio.run(aggregator.scrape())


@then(parsers.parse('the gauge "{fq_name}" for "{name}" is {value:g}'))
def step_gauge_value(
    ctx: ScrapeScenarioContext, fq_name: str, name: str, value: float
) -> None:
    assert ctx.gauges(fq_name)[name] == value


@then(parsers.parse('no gauge "{fq_name}" is emitted for "{name}"'))
def step_gauge_absent(ctx: ScrapeScenarioContext, fq_name: str, name: str) -> None:
    assert name not in ctx.gauges(fq_name)


@then(parsers.parse('the scrape status is "{status}"'))
def step_status(ctx: ScrapeScenarioContext, status: str) -> None:
    assert ctx.result is not None
    assert ctx.result.status == status


@then(parsers.parse("{count:d} failure is recorded"))
def step_failure_count(ctx: ScrapeScenarioContext, count: int) -> None:
    assert ctx.result is not None
    assert len(ctx.result.failures) == count
