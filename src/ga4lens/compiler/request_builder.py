"""Report request builder for ga4lens.

turns a ReportSpec into the RunReportRequest protobuf the GA4 Data API
expects. kept separate from the executor so the request can be inspected
(and tested) without a client or credentials.
"""

from google.analytics.data_v1beta import types as ga

from ga4lens.models.report import ReportSpec


class ReportRequestBuilder:
    """Builds RunReportRequest messages for a single GA4 property.

    stateless apart from the property id, so one instance is shared for the
    life of the process.
    """

    def __init__(self, property_id: str) -> None:
        self.property_id = str(property_id)

    @property
    def property_path(self) -> str:
        """Resource name the api wants, e.g. "properties/123456"."""
        return f"properties/{self.property_id}"

    def build(self, spec: ReportSpec) -> ga.RunReportRequest:
        """Convert a ReportSpec into a RunReportRequest.

        names get wrapped as Dimension/Metric objects. no limit or ordering is
        set - sorting happens on our side after flattening.
        """
        return ga.RunReportRequest(
            property=self.property_path,
            date_ranges=[
                ga.DateRange(start_date=r.start_date, end_date=r.end_date)
                for r in spec.date_ranges
            ],
            dimensions=[ga.Dimension(name=name) for name in spec.dimensions],
            metrics=[ga.Metric(name=name) for name in spec.metrics],
        )
