# utils.py
"""
Utility helpers: input loading, report generation, and console output.

- Uses Rich for colorful, wrapped tables in the terminal.
- Saves CSV (the filtered findings), JSON (stats, charts and findings), and HTML reports.
"""

from dataclasses import asdict, fields
from datetime import datetime, timezone
from html import escape
from typing import Any, Dict, List, Mapping
import json
import os

from rich.console import Console
from rich.table import Table
from rich.text import Text

from analyzer.export import csv_filename
from analyzer.session import ReportSession
from config import (
    COMPLIANCE_PREVIEW_LIMIT,
    DISPLAY_LIMIT,
    NEUTRAL_COLOR,
    REFERENCE_LIMIT,
    SEVERITY_COLORS,
    STATUS_FAIL,
    STATUS_PASS,
)
from models import Record

_console = Console()

def read_text_file(path: str) -> str:
    """
    Read a scanner output file as text (a leading BOM is dropped).
    """
    if not os.path.exists(path):
        raise FileNotFoundError(f"Input findings file not found: {path}.")
    with open(path, "r", encoding="utf-8-sig") as fh:
        return fh.read()

def ensure_reports_dir(path: str = "reports") -> str:
    os.makedirs(path, exist_ok=True)
    return path

def _plain(value: Any) -> Any:
    # read-only mappings on records and stats become plain dicts for json
    if isinstance(value, Mapping):
        return {k: _plain(v) for k, v in value.items()}
    if isinstance(value, tuple):
        return [_plain(v) for v in value]
    return value

def record_to_dict(record: Record) -> Dict[str, Any]:
    data = {f.name: _plain(getattr(record, f.name)) for f in fields(record) if f.name != "raw"}
    if record.remediation is not None:
        data["remediation"] = _plain(asdict(record.remediation))
    return data

def stats_to_dict(stats) -> Dict[str, Any]:
    return {f.name: _plain(getattr(stats, f.name)) for f in fields(stats)}

def build_report(session: ReportSession) -> Dict[str, Any]:
    """
    Assemble the JSON report document for the session's current batch and filters.
    """
    stats = session.stats()
    charts = session.charts()
    findings = session.findings()
    now = datetime.now(timezone.utc).replace(microsecond=0).isoformat().replace("+00:00", "Z")
    return {
        "generated_at": now,
        "filters": asdict(session.criteria),
        "summary": {"findings_count": len(findings), "batch_size": len(session.records)},
        "stats": stats_to_dict(stats) if stats else None,
        "charts": asdict(charts) if charts else None,
        "filter_counts": session.option_counts(),
        "findings": [record_to_dict(r) for r in findings],
    }

def _html_finding(record: Record) -> str:
    color = SEVERITY_COLORS.get(record.severity or "", NEUTRAL_COLOR)
    parts = [
        "<tr>",
        f"<td>{escape(record.status_code or '')}</td>",
        f"<td style='color:{color}'>{escape(record.severity or '')}</td>",
        f"<td>{escape(record.region or '')}</td>",
        f"<td>{escape(record.service_name or 'N/A')}</td>",
        f"<td>{escape(record.check_id or 'N/A')}</td>",
        f"<td><strong>{escape(record.title or '')}</strong><pre>{escape(record.summary_text)}</pre>",
    ]
    if record.remediation:
        parts.append(f"<p class='remediation'>{escape(record.remediation.description or '')}</p>")
        for ref in record.remediation.references[:REFERENCE_LIMIT]:
            parts.append(f"<a href='{escape(ref)}'>{escape(ref)}</a><br>")
    if record.compliance:
        items = list(record.compliance.items())[:COMPLIANCE_PREVIEW_LIMIT]
        parts.append("<ul class='compliance'>")
        for key, values in items:
            text = values if isinstance(values, str) else ", ".join(values)
            parts.append(f"<li>{escape(key)}: {escape(text)}</li>")
        parts.append("</ul>")
    parts.append("</td></tr>")
    return "".join(parts)

def render_html(report: Dict[str, Any], session: ReportSession) -> str:
    stats = session.stats()
    findings = session.findings()
    html_rows: List[str] = []
    html_rows.append("<!doctype html>")
    html_rows.append("<html><head><meta charset='utf-8'><title>Security Assessment Report</title>")
    html_rows.append("<style>body{font-family:Arial,Helvetica,sans-serif;margin:20px}table{border-collapse:collapse;width:100%}th,td{border:1px solid #ddd;padding:8px;vertical-align:top}th{background:#f2f2f2;text-align:left}tr:nth-child(even){background:#fafafa}pre{white-space:pre-wrap;word-wrap:break-word}</style>")
    html_rows.append("</head><body>")
    html_rows.append(f"<h2>Security Assessment Report - {report['generated_at']} - account: {escape(stats.account_id if stats else 'Unknown')}</h2>")
    if stats:
        html_rows.append("<table class='summary'><tbody>")
        for label, value in (("Security score", f"{stats.security_score}%"), ("Total checks", stats.total),
                             ("Passed", stats.passed), ("Failed", stats.failed), ("Manual", stats.manual),
                             ("Critical + High", stats.critical_high)):
            html_rows.append(f"<tr><th>{label}</th><td>{value}</td></tr>")
        html_rows.append("</tbody></table>")
    html_rows.append("<div><strong>Filters:</strong><ul>")
    for k, v in report["filters"].items():
        html_rows.append(f"<li>{k}: {escape(v or '-')}</li>")
    html_rows.append("</ul></div>")
    html_rows.append(f"<p>Security findings: {len(findings)}</p>")
    html_rows.append("<table class='findings'><thead><tr><th>Status</th><th>Severity</th><th>Region</th><th>Service</th><th>Check</th><th>Finding</th></tr></thead><tbody>")
    for record in findings[:DISPLAY_LIMIT]:
        html_rows.append(_html_finding(record))
    html_rows.append("</tbody></table>")
    if not findings:
        html_rows.append("<p>No findings match your filters</p>")
    html_rows.append("</body></html>")
    return "\n".join(html_rows)

def save_report(session: ReportSession, out_dir: str = "reports") -> Dict[str, str]:
    """
    Save CSV, JSON, and HTML reports for the filtered findings and return their paths.
    """
    out_dir = ensure_reports_dir(out_dir)
    report = build_report(session)

    csv_path = os.path.join(out_dir, csv_filename())
    base = os.path.splitext(csv_path)[0]
    json_path = base + ".json"
    html_path = base + ".html"

    # CSV
    with open(csv_path, "wb") as fh:
        fh.write(session.export_csv())

    # JSON
    with open(json_path, "w", encoding="utf-8") as fh:
        json.dump(report, fh, indent=2)

    # HTML
    with open(html_path, "w", encoding="utf-8") as fh:
        fh.write(render_html(report, session))

    return {"json": json_path, "csv": csv_path, "html": html_path}

# --- Console printing with color/wrapping ---

_RICH_SEVERITY_STYLES = {
    "Critical": "bold red",
    "High": "red",
    "Medium": "bold yellow",
    "Low": "cyan",
    "Info": "blue",
}

def _rich_severity_text(severity: str):
    """
    Return a Rich Text object styled by severity.
    """
    return Text(severity, style=_RICH_SEVERITY_STYLES.get(severity, "dim"))

def _rich_status_text(status: str):
    if status == STATUS_FAIL:
        return Text(status, style="bold red")
    if status == STATUS_PASS:
        return Text(status, style="green")
    return Text(status or "-", style="yellow")

def _counts_table(title: str, counts: Dict[str, int]) -> Table:
    table = Table(title=title, show_header=True, header_style="bold cyan")
    table.add_column("Name", overflow="fold")
    table.add_column("Count", justify="right")
    for name, count in counts.items():
        table.add_row(name, str(count))
    return table

def print_summary_and_report_path(session: ReportSession, report_paths: Dict[str, str], show_top: int = 5, print_full_table: bool = False):
    """
    Print a compact summary, breakdown tables and a colorful table of findings.
    """
    stats = session.stats()
    findings = session.findings()
    print("\nScan summary:")
    if stats:
        print(f"- Account: {stats.account_id}")
        print(f"- Security score: {stats.security_score}%")
        print(f"- Total checks: {stats.total} (passed {stats.passed}, failed {stats.failed}, manual {stats.manual})")
        print(f"- Critical + High: {stats.critical_high}")
        print(f"- Regions: {', '.join(stats.regions) or '-'}")
        _console.print(_counts_table("Severity", stats.severity_breakdown))
        _console.print(_counts_table("Services", stats.services))
    print(f"- Findings after filters: {len(findings)}")
    if findings:
        table = Table(show_header=True, header_style="bold cyan")
        table.add_column("Status")
        table.add_column("Severity")
        table.add_column("Region", style="magenta")
        table.add_column("Service", style="cyan")
        table.add_column("Title", overflow="fold")
        table.add_column("Resource", overflow="fold")
        for r in (findings if print_full_table else findings[:show_top]):
            table.add_row(
                _rich_status_text(r.status_code or ""),
                _rich_severity_text(r.severity or "Unknown"),
                r.region or "",
                r.service_name or "",
                r.title or "",
                r.resource_id or "",
            )
        _console.print(table)
    print("\nSaved reports:")
    print(f"- JSON: {report_paths.get('json')}")
    print(f"- CSV:  {report_paths.get('csv')}")
    print(f"- HTML: {report_paths.get('html')}\n")
