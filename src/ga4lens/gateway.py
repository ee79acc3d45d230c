"""Main ReportGateway interface for ga4lens.

the five dashboard views live here. each one is the same little pipeline:
resolve the date range, build a ReportSpec, run it, then sort/trim/reshape
the flattened rows into a response model.
"""

import logging
from datetime import date

from ga4lens.config import Settings
from ga4lens.errors import InvalidQueryParameter
from ga4lens.executor.ga4_executor import GA4Executor
from ga4lens.models.report import DateRange, FlatRow, ReportResult, ReportSpec
from ga4lens.models.views import (
    OverviewKpis,
    OverviewResponse,
    RowsResponse,
    TimeSeriesResponse,
    ViewDefinition,
)
from ga4lens.ranges import DEFAULT_DAYS, DEFAULT_LIMIT, parse_limit, resolve_range

logger = logging.getLogger(__name__)

DEFAULT_TIMESERIES_METRIC = "activeUsers"

# fixed view definitions. timeseries has a caller-chosen metric so its
# definition only lists the default.
VIEWS: dict[str, ViewDefinition] = {
    view.name: view
    for view in [
        ViewDefinition(
            name="overview",
            tag="overview_failed",
            description="Headline KPIs for the whole property",
            metrics=[
                "totalUsers",
                "activeUsers",
                "newUsers",
                "sessions",
                "screenPageViews",
                "engagementRate",
                "averageSessionDuration",
                "bounceRate",
            ],
        ),
        ViewDefinition(
            name="timeseries",
            tag="timeseries_failed",
            description="One metric per day",
            dimensions=["date"],
            metrics=[DEFAULT_TIMESERIES_METRIC],
        ),
        ViewDefinition(
            name="top-pages",
            tag="top_pages_failed",
            description="Most viewed pages",
            dimensions=["pageTitle", "pagePath"],
            metrics=["screenPageViews", "activeUsers"],
            sort_by="screenPageViews",
        ),
        ViewDefinition(
            name="sources",
            tag="sources_failed",
            description="Sessions by default channel group",
            dimensions=["sessionDefaultChannelGroup"],
            metrics=["sessions", "activeUsers", "engagedSessions"],
            sort_by="sessions",
            rename={"sessionDefaultChannelGroup": "channel"},
        ),
        ViewDefinition(
            name="devices",
            tag="devices_failed",
            description="Users and sessions by device category",
            dimensions=["deviceCategory"],
            metrics=["activeUsers", "sessions"],
        ),
    ]
}


def describe_views() -> list[dict]:
    """Describe the fixed views."""
    return [
        {
            "name": v.name,
            "tag": v.tag,
            "description": v.description,
            "dimensions": v.dimensions,
            "metrics": v.metrics,
            "sort_by": v.sort_by,
        }
        for v in VIEWS.values()
    ]


def rank_rows(rows: list[FlatRow], sort_by: str, limit: int | None) -> list[FlatRow]:
    """Sort descending by one metric and keep the first `limit` rows.

    sorted() is stable, so ties keep the api's order. limit follows slice
    semantics: None keeps everything, negative drops from the end.
    """
    ranked = sorted(rows, key=lambda row: row.metrics.get(sort_by, 0), reverse=True)
    return ranked[:limit]


class ReportGateway:
    """Main interface for ga4lens - one method per dashboard view."""

    def __init__(
        self,
        executor: GA4Executor,
        default_days: int = DEFAULT_DAYS,
        strict_limits: bool = True,
    ) -> None:
        """Initialize the gateway.

        Args:
            executor: Executor wrapping the shared GA4 client.
            default_days: Size of the trailing window when no range is given.
            strict_limits: Reject bad `limit` values instead of coercing them.
        """
        self.executor = executor
        self.default_days = default_days
        self.strict_limits = strict_limits

    @classmethod
    def from_settings(cls, settings: Settings, client=None) -> "ReportGateway":
        """Build a gateway (and its executor) from settings.

        raises ConfigurationError when the property id is missing.
        """
        executor = GA4Executor(
            property_id=settings.require_property_id(),
            credentials_path=settings.credentials_path,
            timeout=settings.upstream_timeout,
            client=client,
        )
        return cls(
            executor,
            default_days=settings.default_days,
            strict_limits=settings.strict_limits,
        )

    # --- helpers ---

    def resolve_range(
        self, start: str | None, end: str | None, today: date | None = None
    ) -> DateRange:
        return resolve_range(start, end, days=self.default_days, today=today)

    def run(
        self, date_range: DateRange, dimensions: list[str], metrics: list[str]
    ) -> ReportResult:
        """Build a spec for one date range and execute it."""
        try:
            spec = ReportSpec(date_ranges=[date_range], dimensions=dimensions, metrics=metrics)
        except ValueError as e:
            # pydantic's ValidationError is a ValueError subclass
            raise InvalidQueryParameter("metrics", metrics, str(e)) from e
        return self.executor.execute(spec)

    def _ranked_view(
        self, view: ViewDefinition, start: str | None, end: str | None, limit
    ) -> RowsResponse:
        # parse before calling upstream so a bad limit costs no quota
        bound = parse_limit(limit, default=DEFAULT_LIMIT, strict=self.strict_limits)
        date_range = self.resolve_range(start, end)
        result = self.run(date_range, view.dimensions, view.metrics)
        rows = rank_rows(result.rows, view.sort_by, bound)
        return RowsResponse(range=date_range, rows=[r.to_record(view.rename) for r in rows])

    # --- views ---

    def overview(self, start: str | None = None, end: str | None = None) -> OverviewResponse:
        """Headline KPIs. no dimensions, so there's one row or none at all."""
        view = VIEWS["overview"]
        date_range = self.resolve_range(start, end)
        result = self.run(date_range, view.dimensions, view.metrics)

        row = result.rows[0] if result.rows else FlatRow()
        kpis = OverviewKpis.model_validate(
            {name: row.metrics.get(name, 0) for name in view.metrics}
        )
        return OverviewResponse(range=date_range, kpis=kpis, meta=result.meta)

    def timeseries(
        self,
        start: str | None = None,
        end: str | None = None,
        metric: str = DEFAULT_TIMESERIES_METRIC,
    ) -> TimeSeriesResponse:
        """Daily values of one metric, in the order the api returns them."""
        view = VIEWS["timeseries"]
        metric = str(metric) if metric else DEFAULT_TIMESERIES_METRIC
        date_range = self.resolve_range(start, end)
        result = self.run(date_range, view.dimensions, [metric])
        return TimeSeriesResponse(
            range=date_range,
            metric=metric,
            rows=[r.to_record() for r in result.rows],
        )

    def top_pages(
        self, start: str | None = None, end: str | None = None, limit=DEFAULT_LIMIT
    ) -> RowsResponse:
        """Pages ranked by screenPageViews."""
        return self._ranked_view(VIEWS["top-pages"], start, end, limit)

    def sources(
        self, start: str | None = None, end: str | None = None, limit=DEFAULT_LIMIT
    ) -> RowsResponse:
        """Channel groups ranked by sessions."""
        return self._ranked_view(VIEWS["sources"], start, end, limit)

    def devices(self, start: str | None = None, end: str | None = None) -> RowsResponse:
        view = VIEWS["devices"]
        date_range = self.resolve_range(start, end)
        result = self.run(date_range, view.dimensions, view.metrics)
        return RowsResponse(range=date_range, rows=[r.to_record() for r in result.rows])

    def close(self) -> None:
        """Release the upstream client."""
        self.executor.close()

    def __enter__(self) -> "ReportGateway":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()
