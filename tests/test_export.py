# tests/test_export.py
"""
CSV export tests: header, quoting, compliance cell and row counts.
"""

import csv
import io
from datetime import date

from analyzer.export import compliance_cell, csv_filename, to_csv
from analyzer.ingest import record_from_object, records_from_objects

from conftest import make_finding

HEADER = '"Status","Severity","Service","Region","Title","Description","Resource","Compliance"'


def _rows(data: bytes):
    return list(csv.reader(io.StringIO(data.decode("utf-8"))))


def test_empty_export_is_header_only():
    data = to_csv([])
    assert data == HEADER.encode("utf-8")
    assert _rows(data) == [["Status", "Severity", "Service", "Region", "Title", "Description", "Resource", "Compliance"]]


def test_one_row_per_record(sample_findings):
    records = records_from_objects(sample_findings)
    rows = _rows(to_csv(records))
    assert len(rows) == len(records) + 1
    assert rows[1] == [
        "FAIL", "Critical", "s3", "eu-west-1", "Bucket public", "Bucket public description",
        "arn:aws:s3:::bucket", "CIS-1.4: 2.1.5; GDPR: article_25",
    ]


def test_every_field_quoted_and_quotes_doubled():
    record = record_from_object({"status_code": "PASS", "finding_info": {"title": 'Say "hi"'}})
    assert to_csv([record]) == (HEADER + "\n" + '"PASS","","","","Say ""hi""","","",""').encode("utf-8")


def test_newlines_kept_inside_quoted_field():
    record = record_from_object({"finding_info": {"desc": "line one\nline two"}})
    rows = _rows(to_csv([record]))
    assert len(rows) == 2
    assert rows[1][5] == "line one\nline two"
    assert '"line one\nline two"' in to_csv([record]).decode("utf-8")


def test_empty_resources_give_blank_resource_and_other_service():
    record = record_from_object({"status_code": "FAIL", "resources": []})
    assert record.service_bucket == "Other"
    assert _rows(to_csv([record]))[1][6] == ""


def test_compliance_cell_joins_lists_and_strings():
    record = records_from_objects([make_finding(compliance={"CIS-1.4": ["1.1", "1.2"], "SOC2": "cc_6.1"})])[0]
    assert compliance_cell(record) == "CIS-1.4: 1.1, 1.2; SOC2: cc_6.1"
    assert compliance_cell(record_from_object({})) == ""


def test_export_keeps_given_order():
    records = records_from_objects([make_finding(title="B"), make_finding(title="A")])
    assert [row[4] for row in _rows(to_csv(records))[1:]] == ["B", "A"]


def test_csv_filename():
    assert csv_filename(date(2024, 3, 9)) == "security_report_2024-03-09.csv"
    assert csv_filename().startswith("security_report_")


def test_rows_joined_without_trailing_newline(sample_findings):
    data = to_csv(records_from_objects(sample_findings[:2]))
    assert not data.endswith(b"\n")
    assert data.count(b"\n") == 2
    assert data.startswith(HEADER.encode("utf-8") + b"\n")
