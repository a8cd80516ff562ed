# tests/test_session.py
"""
Report session tests: batch replacement, failed re-uploads and filter-driven recomputation.
"""

import json

import pytest

from analyzer.session import ReportSession
from models import FilterCriteria, ParseError

from conftest import make_finding


def test_nothing_loaded():
    session = ReportSession()
    assert not session.loaded
    assert session.stats() is None
    assert session.charts() is None
    assert session.findings() == []


def test_failed_reload_keeps_previous_batch(sample_text):
    session = ReportSession()
    assert session.load_text(sample_text) == 5
    before = session.records
    with pytest.raises(ParseError):
        session.load_text("{not json")
    assert session.records == before
    assert session.stats().total == 5


def test_new_batch_replaces_old(sample_text):
    session = ReportSession()
    session.load_text(sample_text)
    session.load_text(json.dumps([make_finding("PASS", "Low")]))
    assert len(session.records) == 1
    assert session.stats().security_score == 100


def test_stats_ignore_status_filter_but_findings_do_not(sample_text):
    session = ReportSession(FilterCriteria(status_or_severity="FAIL"))
    session.load_text(sample_text)
    assert session.stats().total == 5
    assert len(session.findings()) == 2


def test_filter_change_recomputes_everything(sample_text):
    session = ReportSession()
    session.load_text(sample_text)
    assert session.stats().total == 5

    session.set_filters(region="us-east-1")
    stats = session.stats()
    assert stats.total == 2
    assert stats.regions == ("eu-west-1", "us-east-1")
    assert len(session.charts().regions) == 2

    session.set_filters(framework="cis", region="")
    assert session.criteria == FilterCriteria(framework="cis", region="", status_or_severity="all")
    assert [r.title for r in session.findings()] == ["Bucket public", "Root MFA"]


def test_option_counts_use_compliance_and_region_scope(sample_text):
    session = ReportSession(FilterCriteria(region="eu-west-1", status_or_severity="Low"))
    session.load_text(sample_text)
    assert session.option_counts() == {"all": 2, "FAIL": 1, "Critical": 1, "High": 0, "Medium": 0, "Low": 1}


def test_export_csv_uses_filtered_findings(sample_text):
    session = ReportSession(FilterCriteria(status_or_severity="Critical"))
    session.load_text(sample_text)
    data = session.export_csv()
    header, row = data.decode("utf-8").split("\n")
    assert header.startswith('"Status","Severity"')
    assert row.startswith('"FAIL","Critical"')
    assert row.endswith('"CIS-1.4: 2.1.5; GDPR: article_25"')
