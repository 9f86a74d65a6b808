# utils/sales_dashboard/__init__.py
"""
Sales Dashboard Module

Turns the ventas / Metas / Colaboradores sheets into the views shown on
the dashboard. Everything below report.py is pure and can be reused to
re-filter by branch, seller or month without reading the sheets again.

Components:
- normalizer: vendor names, month labels, branch accent variants
- ingest: raw sheet rows -> typed records and target maps
- metrics: grouping by vendor / month / source, filters
- progress: target resolution, progress %, axis steps
- report: build_report / load_report facade
- charts: Altair visualizations

Usage:
    from utils.sales_dashboard import build_report, annual_progress

    report = build_report(sales_rows, metas_rows, team_rows, 2025)
    progress = annual_progress(report.total_amount, 100_000)
"""

from .exceptions import SalesDashboardError, SourceUnavailable
from .models import (
    AxisSteps,
    MonthSummary,
    ProgressResult,
    Report,
    SalesRecord,
    SourceMonthSummary,
    VendorSummary,
)
from .normalizer import (
    branches_match,
    canonical_branch,
    month_name,
    month_number,
    normalize_vendor_name,
)
from .ingest import ingest_branch_targets, ingest_sales, ingest_vendor_targets
from .metrics import (
    aggregate_by_month,
    aggregate_by_month_and_source,
    aggregate_by_vendor,
    filter_by_branch,
    filter_by_month,
    filter_by_vendor,
    generate_complete_month_series,
    running_totals,
    total_amount,
    vendor_share,
)
from .progress import (
    annual_progress,
    compute_axis_steps,
    current_month_progress,
    resolve_branch_target,
    resolve_vendor_target,
)
from .report import build_branch_view, build_report, load_report, reporting_month

# Constants
from .constants import (
    ALL_BRANCHES,
    ALL_VENDORS,
    BRANCH_OPTIONS,
    COLORS,
    MONTH_ORDER,
    TRACKED_SOURCES,
)

__all__ = [
    # Errors
    'SalesDashboardError',
    'SourceUnavailable',

    # Models
    'AxisSteps',
    'MonthSummary',
    'ProgressResult',
    'Report',
    'SalesRecord',
    'SourceMonthSummary',
    'VendorSummary',

    # Normalizer
    'branches_match',
    'canonical_branch',
    'month_name',
    'month_number',
    'normalize_vendor_name',

    # Ingest
    'ingest_branch_targets',
    'ingest_sales',
    'ingest_vendor_targets',

    # Metrics
    'aggregate_by_month',
    'aggregate_by_month_and_source',
    'aggregate_by_vendor',
    'filter_by_branch',
    'filter_by_month',
    'filter_by_vendor',
    'generate_complete_month_series',
    'running_totals',
    'total_amount',
    'vendor_share',

    # Progress
    'annual_progress',
    'compute_axis_steps',
    'current_month_progress',
    'resolve_branch_target',
    'resolve_vendor_target',

    # Report
    'build_branch_view',
    'build_report',
    'load_report',
    'reporting_month',

    # Constants
    'ALL_BRANCHES',
    'ALL_VENDORS',
    'BRANCH_OPTIONS',
    'COLORS',
    'MONTH_ORDER',
    'TRACKED_SOURCES',
]

__version__ = '1.0.0'
