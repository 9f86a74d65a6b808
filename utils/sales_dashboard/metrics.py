# utils/sales_dashboard/metrics.py
"""
Aggregations for the Sales Dashboard

Handles all grouping over ingested SalesRecord lists:
- Filters by branch / vendor / month
- Vendor summaries (including vendors that only have a target)
- Month summaries in calendar order
- Complete January..N month series and running totals
- Monthly sales by acquisition source

Every function is pure. "Current month" is always an argument; nothing here
looks at the clock.
"""

import logging
from itertools import accumulate
from typing import Dict, Iterable, List, Optional, Sequence

from .constants import ALL_BRANCHES, ALL_VENDORS, MONTH_MAPPING, TRACKED_SOURCES
from .models import MonthSummary, SalesRecord, SourceMonthSummary, VendorSummary
from .normalizer import branches_match, month_name, month_number

logger = logging.getLogger(__name__)


# =============================================================================
# FILTERS
# =============================================================================

def filter_by_branch(records: Iterable[SalesRecord], branch: Optional[str]) -> List[SalesRecord]:
    """
    Records of one branch.

    ALL_BRANCHES (or no branch) keeps everything. Querétaro and Queretaro
    are treated as the same branch.
    """
    if not branch or branch == ALL_BRANCHES:
        return list(records)
    return [record for record in records if branches_match(record.branch, branch)]


def filter_by_vendor(records: Iterable[SalesRecord], vendor: Optional[str]) -> List[SalesRecord]:
    """Records of one vendor (exact match). Only ALL_VENDORS keeps everything."""
    if vendor == ALL_VENDORS:
        return list(records)
    return [record for record in records if record.vendor == vendor]


def filter_by_month(records: Iterable[SalesRecord], month) -> List[SalesRecord]:
    """Records of one month; "3", 3 and "Marzo" select the same records."""
    wanted = month_name(month)
    return [record for record in records if month_name(record.month) == wanted]


# =============================================================================
# BY VENDOR
# =============================================================================

def aggregate_by_vendor(
    records: Iterable[SalesRecord],
    known_vendor_names: Iterable[str] = ()
) -> List[VendorSummary]:
    """
    One summary per vendor, highest total first.

    Args:
        records: Sales records (vendor already normalized)
        known_vendor_names: Vendors that must appear even without sales,
            usually the keys of the vendor target map

    Returns:
        VendorSummary list sorted by total_amount descending. Ties keep
        encounter order. Records without a vendor are left out.
    """
    by_vendor: Dict[str, VendorSummary] = {}

    for record in records:
        if not record.vendor or not record.vendor.strip():
            continue
        summary = by_vendor.get(record.vendor)
        if summary is None:
            summary = by_vendor[record.vendor] = VendorSummary(vendor=record.vendor)
        summary.sales_count += 1
        summary.total_amount += record.amount

    for name in known_vendor_names:
        if name and name not in by_vendor:
            by_vendor[name] = VendorSummary(vendor=name)

    for summary in by_vendor.values():
        if summary.sales_count > 0:
            summary.average_amount = summary.total_amount / summary.sales_count

    # sorted() is stable, equal totals stay in encounter order
    return sorted(by_vendor.values(), key=lambda summary: -summary.total_amount)


def vendor_share(vendors: Sequence[VendorSummary]) -> Dict[str, float]:
    """Percentage of the overall amount contributed by each vendor."""
    total = sum(summary.total_amount for summary in vendors)
    if total <= 0:
        return {summary.vendor: 0.0 for summary in vendors}
    return {summary.vendor: summary.total_amount / total * 100 for summary in vendors}


# =============================================================================
# BY MONTH
# =============================================================================

def _calendar_key(summary) -> int:
    number = month_number(summary.month)
    # Unrecognized labels go after December, in encounter order
    return number if number is not None else 13


def aggregate_by_month(records: Iterable[SalesRecord]) -> List[MonthSummary]:
    """
    One summary per month present in records, January first.

    Numeric labels ("1".."12") and month names are merged under the Spanish
    month name. Labels that are neither stay as their own group.
    """
    by_month: Dict[str, MonthSummary] = {}

    for record in records:
        key = month_name(record.month)
        summary = by_month.get(key)
        if summary is None:
            summary = by_month[key] = MonthSummary(month=key)
        summary.total_amount += record.amount
        summary.sales_count += 1

    return sorted(by_month.values(), key=_calendar_key)


def generate_complete_month_series(
    month_summaries: Iterable[MonthSummary],
    up_to_month: int
) -> List[MonthSummary]:
    """
    January through up_to_month, zero-filled.

    Args:
        month_summaries: Output of aggregate_by_month (any order)
        up_to_month: Last month to include (1-12), supplied by the caller

    Returns:
        Exactly max(0, min(up_to_month, 12)) entries in calendar order
    """
    by_number: Dict[int, MonthSummary] = {}
    for summary in month_summaries:
        number = month_number(summary.month)
        if number is not None and number not in by_number:
            by_number[number] = summary

    last = max(0, min(int(up_to_month), 12))
    series = []
    for number in range(1, last + 1):
        found = by_number.get(number)
        series.append(
            MonthSummary(
                month=MONTH_MAPPING[number],
                total_amount=found.total_amount if found else 0.0,
                sales_count=found.sales_count if found else 0,
            )
        )
    return series


def running_totals(month_summaries: Sequence[MonthSummary]) -> List[float]:
    """Cumulative total_amount, one value per summary."""
    return list(accumulate(summary.total_amount for summary in month_summaries))


# =============================================================================
# BY MONTH AND SOURCE
# =============================================================================

def aggregate_by_month_and_source(
    records: Iterable[SalesRecord],
    sources: Sequence[str] = TRACKED_SOURCES,
    up_to_month: int = 12
) -> List[SourceMonthSummary]:
    """
    Monthly totals per acquisition source.

    Returns one entry for every (month, source) pair from January to
    up_to_month, in calendar then source order. Records with an empty or
    untracked source are ignored.
    """
    totals: Dict[tuple, SourceMonthSummary] = {}
    tracked = set(sources)

    for record in records:
        source = record.source.strip() if record.source else ""
        number = month_number(record.month)
        if not source or source not in tracked or number is None:
            continue
        key = (number, source)
        entry = totals.get(key)
        if entry is None:
            entry = totals[key] = SourceMonthSummary(month=MONTH_MAPPING[number], source=source)
        entry.total_amount += record.amount
        entry.sales_count += 1

    last = max(0, min(int(up_to_month), 12))
    return [
        totals.get((number, source)) or SourceMonthSummary(month=MONTH_MAPPING[number], source=source)
        for number in range(1, last + 1)
        for source in sources
    ]


# =============================================================================
# TOTALS
# =============================================================================

def total_amount(records: Iterable[SalesRecord]) -> float:
    return sum((record.amount for record in records), 0.0)
