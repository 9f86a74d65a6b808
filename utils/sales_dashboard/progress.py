# utils/sales_dashboard/progress.py
"""
Targets, Progress and Axis Scaling

- Annual and current-month progress against the all-branches target
- Target resolution for a branch (or all branches) and for a vendor
- "Nice" axis steps for the sales charts
"""

import logging
import math
from typing import Dict, Optional

from .constants import (
    ALL_BRANCHES,
    ALL_VENDORS,
    AXIS_STEP_BANDS,
    DEFAULT_AXIS_STEP,
)
from .models import AxisSteps, MonthSummary, ProgressResult
from .normalizer import canonical_branch

logger = logging.getLogger(__name__)


# =============================================================================
# PROGRESS
# =============================================================================

def _progress(actual: float, target: float) -> ProgressResult:
    if not target or target <= 0:
        return ProgressResult(percentage=0.0, raw_percentage=0.0, target=0.0, actual=actual)
    raw = actual / target * 100
    return ProgressResult(
        percentage=min(100.0, raw),
        raw_percentage=raw,
        target=target,
        actual=actual,
    )


def annual_progress(
    total_amount_to_date: float,
    monthly_all_branches_target: Optional[float]
) -> ProgressResult:
    """
    Year-to-date sales against twelve times the monthly target.

    Returns:
        ProgressResult whose target is the annual target. percentage is
        capped at 100, raw_percentage is not. No target gives 0.
    """
    annual_target = (monthly_all_branches_target or 0) * 12
    return _progress(total_amount_to_date, annual_target)


def current_month_progress(
    current_month_summary: Optional[MonthSummary],
    monthly_all_branches_target: Optional[float]
) -> ProgressResult:
    """Sales of one month against the monthly target (same cap rule)."""
    actual = current_month_summary.total_amount if current_month_summary else 0.0
    return _progress(actual, monthly_all_branches_target or 0)


# =============================================================================
# TARGET RESOLUTION
# =============================================================================

def resolve_branch_target(
    targets_by_branch: Dict[str, float],
    selected_branch: str
) -> Optional[float]:
    """
    Monthly target for a branch, or for every branch.

    For ALL_BRANCHES the explicit aggregate entry wins when it is positive,
    otherwise the other entries are summed. For a single branch the
    unaccented spelling finds the accented entry and vice versa.

    Returns:
        Target, or None when there is nothing to show
    """
    if not targets_by_branch:
        return None

    if selected_branch == ALL_BRANCHES:
        explicit = targets_by_branch.get(ALL_BRANCHES)
        if explicit is not None and explicit > 0:
            return explicit
        return sum(
            value for key, value in targets_by_branch.items()
            if key != ALL_BRANCHES
        )

    if selected_branch in targets_by_branch:
        return targets_by_branch[selected_branch]

    wanted = canonical_branch(selected_branch)
    for branch, value in targets_by_branch.items():
        if canonical_branch(branch) == wanted:
            return value
    return None


def resolve_vendor_target(
    targets_by_vendor: Dict[str, float],
    vendor: str
) -> Optional[float]:
    """Monthly target of a vendor; ALL_VENDORS sums every vendor target."""
    if vendor == ALL_VENDORS:
        if not targets_by_vendor:
            return None
        return sum(targets_by_vendor.values())
    return targets_by_vendor.get(vendor)


# =============================================================================
# AXIS STEPS
# =============================================================================

def compute_axis_steps(max_value: float) -> AxisSteps:
    """
    Round step size for a value axis.

    Picks 2x / 5x / 10x of the base unit of the value's magnitude band
    (thousands up to ten-millions) so labels read 20,000 / 500,000 instead
    of 733. Non-positive input means "no scale".
    """
    if max_value is None or max_value <= 0:
        return AxisSteps(step_size=0, step_count=0, rounded_max=0)

    step_size = DEFAULT_AXIS_STEP
    for lower_bound, sub_steps, fallback in AXIS_STEP_BANDS:
        if max_value >= lower_bound:
            step_size = next(
                (step for upper, step in sub_steps if max_value <= upper),
                fallback
            )
            break

    step_count = math.ceil(max_value / step_size)
    return AxisSteps(
        step_size=step_size,
        step_count=step_count,
        rounded_max=step_count * step_size,
    )
