"""Pydantic models for ga4lens."""

from ga4lens.models.report import (
    DateRange,
    FlatRow,
    ReportMeta,
    ReportResult,
    ReportSpec,
    SamplingMetadata,
)
from ga4lens.models.views import (
    OverviewKpis,
    OverviewResponse,
    RowsResponse,
    TimeSeriesResponse,
    ViewDefinition,
)

__all__ = [
    "DateRange",
    "FlatRow",
    "OverviewKpis",
    "OverviewResponse",
    "ReportMeta",
    "ReportResult",
    "ReportSpec",
    "RowsResponse",
    "SamplingMetadata",
    "TimeSeriesResponse",
    "ViewDefinition",
]
