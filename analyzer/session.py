# analyzer/session.py
"""
Report session: the currently loaded batch plus the active filter values.

- A new batch replaces the old one only once it has been ingested successfully;
  a ParseError leaves the previous batch and filters untouched.
- Stats, chart series and the findings list are recomputed on every call, so
  nothing derived can go stale after a filter change or a new upload.
"""

import logging
from dataclasses import replace
from typing import Dict, List, Optional, Tuple

from analyzer.aggregate import aggregate, chart_series
from analyzer.export import to_csv
from analyzer.filters import filter_counts, filter_records
from analyzer.ingest import normalize
from models import AggregateStats, ChartSeries, FilterCriteria, Record

logger = logging.getLogger(__name__)


class ReportSession:
    def __init__(self, criteria: Optional[FilterCriteria] = None):
        self._records: Tuple[Record, ...] = ()
        self._loaded = False
        self.criteria = criteria or FilterCriteria()

    @property
    def records(self) -> Tuple[Record, ...]:
        return self._records

    @property
    def loaded(self) -> bool:
        return self._loaded

    def load_text(self, raw_text: str) -> int:
        """
        Ingest a new batch. Raises ParseError without touching the current batch.
        Returns the number of records loaded.
        """
        records = normalize(raw_text)
        if self._loaded:
            logger.info("Replacing %d findings with %d new findings", len(self._records), len(records))
        self._records = tuple(records)
        self._loaded = True
        return len(self._records)

    def set_filters(self, framework: Optional[str] = None, region: Optional[str] = None,
                    status_or_severity: Optional[str] = None) -> FilterCriteria:
        """Update only the filter values that are given (None keeps the current one)."""
        changes = {
            k: v for k, v in (
                ("framework", framework),
                ("region", region),
                ("status_or_severity", status_or_severity),
            ) if v is not None
        }
        self.criteria = replace(self.criteria, **changes)
        return self.criteria

    def stats(self) -> Optional[AggregateStats]:
        if not self._loaded:
            return None
        scoped = filter_records(self._records, self.criteria.without_status())
        return aggregate(scoped, universe=self._records)

    def charts(self) -> Optional[ChartSeries]:
        stats = self.stats()
        if stats is None:
            return None
        return chart_series(stats, self._records)

    def findings(self) -> List[Record]:
        return filter_records(self._records, self.criteria)

    def option_counts(self) -> Dict[str, int]:
        """Counts shown next to each status/severity option, within the compliance/region scope."""
        return filter_counts(filter_records(self._records, self.criteria.without_status()))

    def export_csv(self) -> bytes:
        return to_csv(self.findings())
