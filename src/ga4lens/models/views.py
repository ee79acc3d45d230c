"""Pydantic models for the dashboard views and their responses."""

from pydantic import BaseModel, Field

from ga4lens.models.report import CamelModel, DateRange, Number, ReportMeta


class ViewDefinition(BaseModel):
    """A fixed dashboard view: which fields to request and how to rank them.

    sort_by is None for views that keep the api's row order. rename maps
    api field names to the keys the dashboard expects.
    """

    name: str
    tag: str  # error tag used in failure responses, e.g. "overview_failed"
    description: str | None = None
    dimensions: list[str] = Field(default_factory=list)
    metrics: list[str] = Field(default_factory=list)
    sort_by: str | None = None
    rename: dict[str, str] = Field(default_factory=dict)


class OverviewKpis(CamelModel):
    """Headline numbers for the overview card. all default to 0."""

    total_users: Number = 0
    active_users: Number = 0
    new_users: Number = 0
    sessions: Number = 0
    screen_page_views: Number = 0
    engagement_rate: Number = 0
    average_session_duration: Number = 0
    bounce_rate: Number = 0


class OverviewResponse(CamelModel):
    range: DateRange
    kpis: OverviewKpis
    meta: ReportMeta


class TimeSeriesResponse(CamelModel):
    range: DateRange
    metric: str
    rows: list[dict]


class RowsResponse(CamelModel):
    """Shared shape for top pages, sources and devices."""

    range: DateRange
    rows: list[dict]
