"""Finding ingestion, filtering, aggregation and CSV export for Prowler scan output."""

from analyzer.aggregate import aggregate, chart_series, region_series, service_series, severity_series
from analyzer.export import csv_filename, to_csv
from analyzer.filters import filter_counts, filter_records
from analyzer.ingest import normalize, records_from_objects
from analyzer.session import ReportSession

__all__ = [
    "aggregate",
    "chart_series",
    "csv_filename",
    "filter_counts",
    "filter_records",
    "normalize",
    "records_from_objects",
    "region_series",
    "ReportSession",
    "service_series",
    "severity_series",
    "to_csv",
]
