# main.py
"""
CLI entrypoint for the report analyzer.

- Loads a Prowler output file (JSON array or JSON lines).
- Applies the compliance framework, region and status/severity filters.
- Produces CSV, JSON, and HTML reports and prints a colorful summary table.
"""

import argparse
import logging
import os

from analyzer.session import ReportSession
from config import COMPLIANCE_FRAMEWORKS, DEFAULT_REPORT_DIR, FILTER_ALL, REPORT_DIR_ENV
from models import FilterCriteria, ParseError
from utils import read_text_file, save_report, print_summary_and_report_path

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger("prowler_report")


def run_report(file_path: str, criteria: FilterCriteria, report_dir: str = None,
               print_table: bool = False) -> ReportSession:
    """
    Load a findings file, apply the filters and write the reports.
    """
    # Resolve report dir: CLI -> env -> config default
    report_dir = report_dir or os.environ.get(REPORT_DIR_ENV) or DEFAULT_REPORT_DIR

    logger.info("Loading findings from %s", file_path)
    session = ReportSession(criteria)
    session.load_text(read_text_file(file_path))

    report_paths = save_report(session, out_dir=report_dir)
    print_summary_and_report_path(
        session, report_paths, print_full_table=print_table
    )
    return session


def parse_args(argv=None):
    p = argparse.ArgumentParser(
        description="Security assessment report for Prowler scan output."
    )
    p.add_argument(
        "--file",
        help="Path to Prowler output (JSON array or JSON lines)",
    )
    p.add_argument(
        "--framework",
        default="",
        help="Compliance framework filter, e.g. cis_1.4_aws (see --list-frameworks)",
    )
    p.add_argument(
        "--region",
        default="",
        help="Only include findings from this region",
    )
    p.add_argument(
        "--filter",
        default=FILTER_ALL,
        help="Status/severity filter: all, FAIL, or a severity name (default: all)",
    )
    p.add_argument(
        "--report-dir",
        help=f"Directory to save reports (default: ${REPORT_DIR_ENV} or {DEFAULT_REPORT_DIR})",
    )
    p.add_argument(
        "--print-table",
        action="store_true",
        help="Print full findings table to stdout",
    )
    p.add_argument(
        "--list-frameworks",
        action="store_true",
        help="List known compliance framework names and exit",
    )
    return p.parse_args(argv)


def main(argv=None):
    args = parse_args(argv)
    if args.list_frameworks:
        print("\n".join(COMPLIANCE_FRAMEWORKS))
        return
    if not args.file:
        raise SystemExit("--file path to Prowler output is required")
    criteria = FilterCriteria(
        framework=args.framework,
        region=args.region,
        status_or_severity=args.filter,
    )
    try:
        run_report(
            args.file,
            criteria,
            report_dir=args.report_dir,
            print_table=args.print_table,
        )
    except (FileNotFoundError, UnicodeDecodeError, ParseError) as e:
        raise SystemExit(f"Error loading findings: {e}") from e


if __name__ == "__main__":
    main()
