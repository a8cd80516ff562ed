"""
Central configuration and tunable constants.

- Report directory can be overridden by CLI args or the PROWLER_REPORT_DIR environment variable.
- Severity names, colors and chart limits are centralized for easy tuning.
- The compliance framework list is selectable filter metadata only; input is never validated against it.
"""

# Status codes emitted by the scanner
STATUS_PASS = "PASS"
STATUS_FAIL = "FAIL"
STATUS_MANUAL = "MANUAL"

# Recognized severities, most severe first. Anything else is grouped as "Unknown".
SEVERITIES = ("Critical", "High", "Medium", "Low", "Info")
UNKNOWN_SEVERITY = "Unknown"
OTHER_SERVICE = "Other"
UNKNOWN_ACCOUNT = "Unknown"

SEVERITY_COLORS = {
    "Critical": "#dc2626",
    "High": "#dc2626",
    "Medium": "#d97706",
    "Low": "#0284c7",
    "Info": "#0891b2",
}
NEUTRAL_COLOR = "#6b7280"

# Status/severity filter: "all" disables it, "FAIL" matches on status, anything else on severity
FILTER_ALL = "all"
FILTER_OPTIONS = (FILTER_ALL, STATUS_FAIL, "Critical", "High", "Medium", "Low")

# Chart and display limits
CHART_SERIES_LIMIT = 8
DISPLAY_LIMIT = 15
REFERENCE_LIMIT = 2
COMPLIANCE_PREVIEW_LIMIT = 4

CSV_COLUMNS = ("Status", "Severity", "Service", "Region", "Title", "Description", "Resource", "Compliance")
CSV_FILENAME_PREFIX = "security_report"

DEFAULT_REPORT_DIR = "reports"
REPORT_DIR_ENV = "PROWLER_REPORT_DIR"

COMPLIANCE_FRAMEWORKS = (
    "aws_account_security_onboarding_aws",
    "aws_audit_manager_control_tower_guardrails_aws",
    "aws_foundational_security_best_practices_aws",
    "aws_foundational_technical_review_aws",
    "aws_well_architected_framework_reliability_pillar_aws",
    "aws_well_architected_framework_security_pillar_aws",
    "cis_1.4_aws", "cis_1.5_aws", "cis_2.0_aws", "cis_3.0_aws", "cis_4.0_aws", "cis_5.0_aws",
    "cisa_aws", "ens_rd2022_aws", "fedramp_low_revision_4_aws", "fedramp_moderate_revision_4_aws",
    "ffiec_aws", "gdpr_aws", "gxp_21_cfr_part_11_aws", "gxp_eu_annex_11_aws", "hipaa_aws",
    "iso27001_2013_aws", "iso27001_2022_aws", "kisa_isms_p_2023_aws", "kisa_isms_p_2023_korean_aws",
    "mitre_attack_aws", "nis2_aws", "nist_800_171_revision_2_aws", "nist_800_53_revision_4_aws",
    "nist_800_53_revision_5_aws", "nist_csf_1.1_aws", "pci_3.2.1_aws", "pci_4.0_aws",
    "prowler_threatscore_aws", "rbi_cyber_security_framework_aws", "soc2_aws",
)
