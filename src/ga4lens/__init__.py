"""ga4lens - a small GA4 reporting gateway for dashboards."""

from ga4lens.gateway import ReportGateway

__all__ = ["ReportGateway"]
