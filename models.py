# models.py
"""
Data models used by the report analyzer.

- Record is a typed, immutable view over one raw scanner finding.
- FilterCriteria carries the three independent filter values.
- AggregateStats and the chart points are derived results, rebuilt on every query.
"""

from dataclasses import dataclass, field, replace
from typing import Any, Dict, Mapping, Optional, Tuple, Union

from config import FILTER_ALL, SEVERITIES, UNKNOWN_SEVERITY, OTHER_SERVICE

ComplianceValue = Union[str, Tuple[str, ...]]


class ParseError(ValueError):
    """The whole input batch could not be decoded."""


@dataclass(frozen=True)
class Remediation:
    description: Optional[str] = None
    references: Tuple[str, ...] = ()


@dataclass(frozen=True)
class Record:
    """
    Represents a single security check result.

    Fields:
    - status_code: "PASS", "FAIL", "MANUAL" or None
    - severity: severity name as emitted by the scanner, or None
    - region / account_id: cloud location of the scanned resource
    - service_name / resource_id: taken from the first associated resource
    - title / description / risk_details: free text, never parsed
    - check_id: scanner check identifier (metadata.event_code)
    - remediation: optional description plus ordered reference URLs
    - compliance: optional ordered mapping of control key -> requirement id(s)
    - raw: the decoded source object, kept for the JSON report
    """
    status_code: Optional[str] = None
    severity: Optional[str] = None
    region: Optional[str] = None
    account_id: Optional[str] = None
    service_name: Optional[str] = None
    title: Optional[str] = None
    description: Optional[str] = None
    risk_details: Optional[str] = None
    resource_id: Optional[str] = None
    check_id: Optional[str] = None
    remediation: Optional[Remediation] = None
    compliance: Optional[Mapping[str, ComplianceValue]] = field(default=None, hash=False)
    raw: Dict[str, Any] = field(default_factory=dict, compare=False, repr=False)

    @property
    def severity_bucket(self) -> str:
        return self.severity if self.severity in SEVERITIES else UNKNOWN_SEVERITY

    @property
    def service_bucket(self) -> str:
        return self.service_name or OTHER_SERVICE

    @property
    def summary_text(self) -> str:
        # Risk details win over the plain description when both exist
        return self.risk_details or self.description or ""


@dataclass(frozen=True)
class FilterCriteria:
    """
    Active filter values. An empty string means the filter is inactive.
    """
    framework: str = ""
    region: str = ""
    status_or_severity: str = FILTER_ALL

    def without_status(self) -> "FilterCriteria":
        """Criteria used for the stats input: compliance and region only."""
        return replace(self, status_or_severity=FILTER_ALL)


@dataclass(frozen=True)
class AggregateStats:
    total: int
    failed: int
    passed: int
    manual: int
    regions: Tuple[str, ...]
    severity_breakdown: Mapping[str, int]
    services: Mapping[str, int]
    compliance_frameworks: Mapping[str, int]
    security_score: int
    critical_high: int
    account_id: str


@dataclass(frozen=True)
class SeverityPoint:
    name: str
    value: int
    color: str


@dataclass(frozen=True)
class ServicePoint:
    name: str
    value: int


@dataclass(frozen=True)
class RegionPoint:
    name: str
    failed: int
    passed: int
    total: int


@dataclass(frozen=True)
class ChartSeries:
    severity: Tuple[SeverityPoint, ...]
    services: Tuple[ServicePoint, ...]
    regions: Tuple[RegionPoint, ...]
