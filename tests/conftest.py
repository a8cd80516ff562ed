# tests/conftest.py
"""
Shared sample findings in Prowler OCSF layout.
"""

import json

import pytest


def make_finding(status="FAIL", severity="High", region="eu-west-1", service="s3",
                 title="Check", compliance=None, account="123456789012", resource_uid="arn:aws:s3:::bucket"):
    finding = {
        "status_code": status,
        "severity": severity,
        "cloud": {"region": region, "account": {"uid": account}},
        "resources": [{"uid": resource_uid, "group": {"name": service}}],
        "finding_info": {"title": title, "desc": f"{title} description"},
        "metadata": {"event_code": title.lower().replace(" ", "_")},
    }
    if compliance is not None:
        finding["unmapped"] = {"compliance": compliance}
    if region is None:
        del finding["cloud"]["region"]
    return finding


@pytest.fixture
def sample_findings():
    return [
        make_finding("FAIL", "Critical", "eu-west-1", "s3", "Bucket public",
                     compliance={"CIS-1.4": ["2.1.5"], "GDPR": "article_25"}),
        make_finding("PASS", "Low", "eu-west-1", "iam", "Root MFA",
                     compliance={"CIS-1.4-AWS": ["1.5", "1.6"]}),
        make_finding("FAIL", "High", "us-east-1", "ec2", "Open SSH",
                     compliance={"PCI-4.0": "1.3.1"}),
        make_finding("MANUAL", "Medium", "us-east-1", "iam", "Review policies"),
        make_finding("PASS", "Info", None, "cloudtrail", "Trail enabled"),
    ]


@pytest.fixture
def sample_text(sample_findings):
    return json.dumps(sample_findings)


@pytest.fixture
def sample_file(tmp_path, sample_findings):
    path = tmp_path / "prowler-output.ocsf.json"
    path.write_text("\n".join(json.dumps(f) for f in sample_findings), encoding="utf-8")
    return str(path)
