"""Basic usage example for ga4lens.

needs PROPERTY_ID and GOOGLE_APPLICATION_CREDENTIALS in the environment
(or a .env file) pointing at a real GA4 property.
"""

from ga4lens import ReportGateway
from ga4lens.config import Settings


def main():
    """Print each dashboard view for the last 28 days."""
    with ReportGateway.from_settings(Settings()) as gateway:
        print("=" * 60)
        print("ga4lens dashboard views")
        print("=" * 60)

        # 1. headline numbers
        overview = gateway.overview()
        print(f"\n1. Overview {overview.range.start_date} to {overview.range.end_date}:")
        for name, value in overview.kpis.model_dump(by_alias=True).items():
            print(f"   {name}: {value}")

        # 2. daily sessions
        print("\n2. Sessions per day:")
        for row in gateway.timeseries(metric="sessions").rows:
            print(f"   {row['date']}: {row['sessions']}")

        # 3. top pages
        print("\n3. Top 5 pages:")
        for row in gateway.top_pages(limit=5).rows:
            print(f"   {row['screenPageViews']:>8}  {row['pagePath']}")

        # 4. channels
        print("\n4. Top channels:")
        for row in gateway.sources(limit=5).rows:
            print(f"   {row['channel']}: {row['sessions']} sessions")

        # 5. devices
        print("\n5. Devices:")
        for row in gateway.devices().rows:
            print(f"   {row['deviceCategory']}: {row['activeUsers']} users")


if __name__ == "__main__":
    main()
