"""Pytest fixtures for ga4lens tests."""

from collections.abc import Callable, Generator

import pytest
from fastapi.testclient import TestClient
from google.analytics.data_v1beta import types as ga

from ga4lens.api.app import create_app
from ga4lens.config import Settings
from ga4lens.executor.ga4_executor import GA4Executor
from ga4lens.gateway import ReportGateway


def make_response(
    dimensions: list[str],
    metrics: list[str],
    rows: list[tuple[list[str], list[str]]],
    row_count: int | None = None,
    sampling: list[tuple[int, int]] | None = None,
) -> ga.RunReportResponse:
    """Build a real RunReportResponse from plain lists.

    each row is (dimension_values, metric_values); pass shorter lists than
    the headers to simulate missing cells.
    """
    return ga.RunReportResponse(
        dimension_headers=[ga.DimensionHeader(name=n) for n in dimensions],
        metric_headers=[ga.MetricHeader(name=n) for n in metrics],
        rows=[
            ga.Row(
                dimension_values=[ga.DimensionValue(value=v) for v in dim_values],
                metric_values=[ga.MetricValue(value=v) for v in metric_values],
            )
            for dim_values, metric_values in rows
        ],
        row_count=len(rows) if row_count is None else row_count,
        metadata=ga.ResponseMetaData(
            sampling_metadatas=[
                ga.SamplingMetadata(samples_read_count=read, sampling_space_size=space)
                for read, space in (sampling or [])
            ]
        ),
    )


class FakeAnalyticsClient:
    """Stands in for BetaAnalyticsDataClient - records calls, replays a response."""

    def __init__(
        self,
        response: ga.RunReportResponse | None = None,
        error: Exception | None = None,
    ) -> None:
        self.response = response if response is not None else ga.RunReportResponse()
        self.error = error
        self.calls: list[dict] = []

    def run_report(self, request=None, retry=None, timeout=None):
        self.calls.append({"request": request, "retry": retry, "timeout": timeout})
        if self.error is not None:
            raise self.error
        return self.response

    @property
    def last_request(self) -> ga.RunReportRequest:
        return self.calls[-1]["request"]


@pytest.fixture
def fake_client() -> FakeAnalyticsClient:
    """Fake client with an empty response."""
    return FakeAnalyticsClient()


@pytest.fixture
def make_gateway() -> Callable[..., ReportGateway]:
    """Factory for gateways around a fake client."""

    def _make(client: FakeAnalyticsClient, **kwargs) -> ReportGateway:
        executor = GA4Executor(property_id="123456", client=client, timeout=5)
        return ReportGateway(executor, **kwargs)

    return _make


@pytest.fixture
def gateway(make_gateway, fake_client) -> ReportGateway:
    return make_gateway(fake_client)


@pytest.fixture
def page_rows() -> list[tuple[list[str], list[str]]]:
    """Top-pages style rows, deliberately not in view-count order."""
    return [
        (["Home", "/"], ["120", "80"]),
        (["Pricing", "/pricing"], ["300", "150"]),
        (["Blog", "/blog"], ["45", "30"]),
        (["Docs", "/docs"], ["300", "90"]),
        (["About", "/about"], ["10", "9"]),
    ]


@pytest.fixture
def api_client(make_gateway) -> Callable[[FakeAnalyticsClient], TestClient]:
    """Factory for a TestClient wired to a fake upstream."""

    def _make(client: FakeAnalyticsClient, **kwargs) -> TestClient:
        app = create_app(make_gateway(client, **kwargs), Settings(property_id="123456"))
        return TestClient(app)

    return _make


@pytest.fixture
def clean_env(monkeypatch, tmp_path) -> Generator[None, None, None]:
    """Strip gateway env vars and run from an empty dir (no stray .env)."""
    for name in [
        "PROPERTY_ID",
        "GA4_PROPERTY_ID",
        "GOOGLE_APPLICATION_CREDENTIALS",
        "PORT",
        "HOST",
        "UPSTREAM_TIMEOUT",
        "DEFAULT_DAYS",
        "STRICT_LIMITS",
        "CORS_ORIGINS",
        "LOG_LEVEL",
    ]:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)
    yield
