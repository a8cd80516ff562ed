# analyzer/filters.py
"""
Filter engine.

Three independent predicates, ANDed together. Each one is a no-op when its
criterion is empty, so the result does not depend on the order they run in.
"""

from typing import Dict, Iterable, List

from config import FILTER_ALL, FILTER_OPTIONS, STATUS_FAIL
from models import FilterCriteria, Record


def _normalize_key(value: str) -> str:
    return value.lower().replace("-", "_")


def matches_framework(record: Record, framework: str) -> bool:
    """
    True if any compliance key contains the framework value, ignoring case and '-' vs '_'.
    """
    if not framework:
        return True
    if record.compliance is None:
        return False
    needle = _normalize_key(framework)
    return any(needle in _normalize_key(key) for key in record.compliance)


def matches_region(record: Record, region: str) -> bool:
    if not region:
        return True
    return record.region == region


def matches_status_or_severity(record: Record, value: str) -> bool:
    if not value or value == FILTER_ALL:
        return True
    if value == STATUS_FAIL:
        return record.status_code == STATUS_FAIL
    return record.severity == value


def filter_records(records: Iterable[Record], criteria: FilterCriteria) -> List[Record]:
    """Return the records passing every active criterion, in input order."""
    return [
        r for r in records
        if matches_framework(r, criteria.framework)
        and matches_region(r, criteria.region)
        and matches_status_or_severity(r, criteria.status_or_severity)
    ]


def filter_counts(records: Iterable[Record]) -> Dict[str, int]:
    """Number of records each status/severity filter option would show."""
    records = list(records)
    return {
        option: sum(1 for r in records if matches_status_or_severity(r, option))
        for option in FILTER_OPTIONS
    }
