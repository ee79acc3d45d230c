"""GA4 Data API executor for ga4lens.

owns the one BetaAnalyticsDataClient the process uses, runs reports through
it and flattens the columnar response into FlatRows. every failure on the
way out to google (or coming back malformed) is reported as UpstreamFailure.
"""

import logging
import time
from collections.abc import Sequence
from typing import Any

from google.analytics.data_v1beta import BetaAnalyticsDataClient
from google.oauth2 import service_account

from ga4lens.compiler.request_builder import ReportRequestBuilder
from ga4lens.errors import UpstreamFailure
from ga4lens.models.report import (
    FlatRow,
    Number,
    ReportMeta,
    ReportResult,
    ReportSpec,
    SamplingMetadata,
)

logger = logging.getLogger(__name__)

READONLY_SCOPE = "https://www.googleapis.com/auth/analytics.readonly"


def _to_number(value: str | None) -> Number:
    """Coerce a metric value string to int or float. missing/empty is 0."""
    if value is None or value == "":
        return 0
    try:
        return int(value)
    except ValueError:
        return float(value)  # raises ValueError for non-numeric text


def flatten_rows(
    rows: Sequence[Any] | None,
    dimension_headers: Sequence[Any] | None,
    metric_headers: Sequence[Any] | None,
) -> list[FlatRow]:
    """Convert columnar report rows into FlatRows.

    header i names value i. rows shorter than the headers get None for the
    missing dimensions and 0 for the missing metrics.
    """
    dimension_names = [h.name for h in dimension_headers or []]
    metric_names = [h.name for h in metric_headers or []]

    flat = []
    for row in rows or []:
        dim_values = row.dimension_values
        metric_values = row.metric_values

        dimensions = {
            name: dim_values[i].value if i < len(dim_values) else None
            for i, name in enumerate(dimension_names)
        }
        metrics = {
            name: _to_number(metric_values[i].value if i < len(metric_values) else None)
            for i, name in enumerate(metric_names)
        }
        flat.append(FlatRow(dimensions=dimensions, metrics=metrics))
    return flat


def build_meta(response: Any) -> ReportMeta:
    """Pull row count and sampling info off a RunReportResponse."""
    metadata = getattr(response, "metadata", None)
    samplings = [
        SamplingMetadata(
            samples_read_count=s.samples_read_count,
            sampling_space_size=s.sampling_space_size,
        )
        for s in (getattr(metadata, "sampling_metadatas", None) or [])
    ]
    return ReportMeta(
        row_count=getattr(response, "row_count", 0) or 0,
        samples_read_count=sum(s.samples_read_count for s in samplings),
        sampling_metadatas=samplings,
    )


class GA4Executor:
    """Run reports against the GA4 Data API.

    thin wrapper that keeps the google client bits isolated. the client is
    created lazily unless one is passed in - tests hand in a fake, the server
    forces creation at startup via connect().
    """

    def __init__(
        self,
        property_id: str,
        credentials_path: str | None = None,
        timeout: float | None = None,
        client: Any | None = None,
    ) -> None:
        """Initialize the executor.

        Args:
            property_id: Numeric GA4 property id.
            credentials_path: Service account JSON key, or None for
                application default credentials.
            timeout: Per-call timeout in seconds, None/0 to wait forever.
            client: Pre-built client (anything with a run_report method).
        """
        self.builder = ReportRequestBuilder(property_id)
        self.credentials_path = credentials_path
        self.timeout = timeout or None
        self._client = client

    @property
    def client(self) -> Any:
        """Get or create the shared BetaAnalyticsDataClient."""
        if self._client is None:
            if self.credentials_path:
                credentials = service_account.Credentials.from_service_account_file(
                    self.credentials_path, scopes=[READONLY_SCOPE]
                )
                self._client = BetaAnalyticsDataClient(credentials=credentials)
            else:
                # falls back to GOOGLE_APPLICATION_CREDENTIALS / gcloud auth
                self._client = BetaAnalyticsDataClient()
        return self._client

    def connect(self) -> None:
        """Build the client now instead of on the first request."""
        _ = self.client

    def execute(self, spec: ReportSpec) -> ReportResult:
        """Run one report and return flattened rows.

        exactly one call, no retries. whatever goes wrong is wrapped into
        UpstreamFailure with google's message.
        """
        request = self.builder.build(spec)
        start = time.perf_counter()

        try:
            response = self.client.run_report(
                request=request, retry=None, timeout=self.timeout
            )
        except Exception as e:
            raise UpstreamFailure(getattr(e, "message", None) or str(e)) from e

        elapsed_ms = (time.perf_counter() - start) * 1000
        logger.debug(
            "report dims=%s metrics=%s returned %s rows in %.1fms",
            spec.dimensions,
            spec.metrics,
            len(response.rows),
            elapsed_ms,
        )

        try:
            rows = flatten_rows(
                response.rows, response.dimension_headers, response.metric_headers
            )
        except ValueError as e:
            raise UpstreamFailure(f"Malformed report response: {e}") from e

        return ReportResult(meta=build_meta(response), rows=rows)

    def close(self) -> None:
        """Close the client's transport, if one was created."""
        transport = getattr(self._client, "transport", None)
        if transport is not None:
            transport.close()
        self._client = None

    # context manager support for clean resource management
    def __enter__(self) -> "GA4Executor":
        return self

    def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        self.close()
