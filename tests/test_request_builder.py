"""Tests for the report request builder."""

from ga4lens.compiler.request_builder import ReportRequestBuilder
from ga4lens.models.report import DateRange, ReportSpec


class TestReportRequestBuilder:
    def test_property_path(self):
        builder = ReportRequestBuilder("123456")
        assert builder.property_path == "properties/123456"

    def test_build_wraps_names(self):
        """Dimension and metric names become named objects, in order."""
        builder = ReportRequestBuilder("42")
        spec = ReportSpec(
            date_ranges=[DateRange(start_date="2024-01-01", end_date="2024-01-31")],
            dimensions=["pageTitle", "pagePath"],
            metrics=["screenPageViews", "activeUsers"],
        )
        request = builder.build(spec)

        assert request.property == "properties/42"
        assert [d.name for d in request.dimensions] == ["pageTitle", "pagePath"]
        assert [m.name for m in request.metrics] == ["screenPageViews", "activeUsers"]
        assert request.date_ranges[0].start_date == "2024-01-01"
        assert request.date_ranges[0].end_date == "2024-01-31"

    def test_build_without_dimensions(self):
        builder = ReportRequestBuilder("42")
        spec = ReportSpec(
            date_ranges=[DateRange(start_date="a", end_date="b")], metrics=["sessions"]
        )
        request = builder.build(spec)
        assert len(request.dimensions) == 0
        assert len(request.metrics) == 1

    def test_no_limit_or_ordering(self):
        """Sorting and truncation happen after flattening, not upstream."""
        builder = ReportRequestBuilder("42")
        spec = ReportSpec(
            date_ranges=[DateRange(start_date="a", end_date="b")], metrics=["sessions"]
        )
        request = builder.build(spec)
        assert request.limit == 0
        assert len(request.order_bys) == 0
