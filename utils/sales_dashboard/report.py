# utils/sales_dashboard/report.py
"""
Report Facade

Single entry point for the dashboard:
- build_report(): raw rows -> Report (pure)
- load_report(): read the three sheets concurrently, then build_report()
- build_branch_view(): the same Report recomputed for one branch
- reporting_month(): which month counts as "current" for a selected year
"""

import logging
from datetime import date
from typing import Any, List, Optional, Sequence

from .constants import ALL_BRANCHES
from .exceptions import SourceUnavailable
from .ingest import ingest_branch_targets, ingest_sales, ingest_vendor_targets
from .metrics import aggregate_by_month, aggregate_by_vendor, filter_by_branch, total_amount
from .models import Report, SalesRecord

logger = logging.getLogger(__name__)

Rows = Sequence[Sequence[Any]]


def _compose(
    records: List[SalesRecord],
    targets_by_branch: dict,
    targets_by_vendor: dict,
    year: int
) -> Report:
    return Report(
        year=year,
        records=records,
        vendors=aggregate_by_vendor(records, targets_by_vendor.keys()),
        monthly_sales=aggregate_by_month(records),
        total_sales=len(records),
        total_amount=total_amount(records),
        targets_by_branch=targets_by_branch,
        targets_by_vendor=targets_by_vendor,
    )


def build_report(
    sales_rows: Optional[Rows],
    branch_target_rows: Optional[Rows],
    vendor_target_rows: Optional[Rows],
    filter_year: int
) -> Report:
    """
    Compose the full report from raw sheet rows.

    Args:
        sales_rows: ventas grid, header included
        branch_target_rows: Metas grid, header included
        vendor_target_rows: Colaboradores grid, header included
        filter_year: Year to report on

    Returns:
        Report with records, vendor and month summaries, totals and targets
    """
    records = ingest_sales(sales_rows, filter_year)
    report = _compose(
        records,
        ingest_branch_targets(branch_target_rows),
        ingest_vendor_targets(vendor_target_rows),
        filter_year,
    )

    logger.info(
        f"Report {filter_year}: {report.total_sales} sales, "
        f"{len(report.vendors)} vendors, {len(report.monthly_sales)} months, "
        f"total {report.total_amount:,.0f}"
    )
    return report


def build_branch_view(report: Report, branch: str) -> Report:
    """Report restricted to one branch; ALL_BRANCHES returns the report itself."""
    if not branch or branch == ALL_BRANCHES:
        return report
    return _compose(
        filter_by_branch(report.records, branch),
        report.targets_by_branch,
        report.targets_by_vendor,
        report.year,
    )


def load_report(filter_year: int, client=None) -> Report:
    """
    Read ventas, Metas and Colaboradores and build the report.

    The three reads run concurrently. Either all succeed and a complete
    Report is returned, or SourceUnavailable is raised.

    Args:
        filter_year: Year to report on
        client: SheetsClient (a default one is created when omitted)

    Raises:
        SourceUnavailable: Sheets unreachable, or ventas / Metas empty
    """
    from utils.config import config
    from utils.sheets import SheetsClient

    client = client or SheetsClient()
    sheets_config = config.get_sheets_config()
    sales_range = sheets_config.sales_range
    branch_range = sheets_config.branch_targets_range
    vendor_range = sheets_config.vendor_targets_range

    sales_rows, branch_rows, vendor_rows = client.get_many(
        [sales_range, branch_range, vendor_range]
    )

    if not sales_rows:
        logger.error(f"No rows found in {sales_range}")
        raise SourceUnavailable("No data found in sales sheet", sales_range)
    if not branch_rows:
        logger.error(f"No rows found in {branch_range}")
        raise SourceUnavailable("No data found in targets sheet", branch_range)
    if not vendor_rows:
        logger.warning(f"No rows found in {vendor_range}, continuing without vendor targets")

    return build_report(sales_rows, branch_rows, vendor_rows, filter_year)


def reporting_month(selected_year: int, today: date) -> int:
    """
    Month treated as "current" for a selected year.

    Current year -> today's month, past years -> December (12),
    future years -> 0 (nothing to show yet).
    """
    if selected_year == today.year:
        return today.month
    if selected_year < today.year:
        return 12
    return 0
