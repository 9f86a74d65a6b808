# utils/sales_dashboard/models.py
"""Data structures shared by the sales dashboard."""

from dataclasses import asdict, dataclass, field
from typing import Any, Dict, List, Optional

from .normalizer import month_name, month_number


@dataclass(frozen=True)
class SalesRecord:
    """One closed sale from the ventas sheet."""

    month: str
    client: str
    vendor: str
    branch: str
    amount: float
    source: str = ""

    @property
    def month_name(self) -> str:
        return month_name(self.month)

    @property
    def month_number(self) -> Optional[int]:
        return month_number(self.month)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass
class VendorSummary:
    vendor: str
    sales_count: int = 0
    total_amount: float = 0.0
    average_amount: float = 0.0


@dataclass
class MonthSummary:
    month: str
    total_amount: float = 0.0
    sales_count: int = 0


@dataclass
class SourceMonthSummary:
    """Sales of one acquisition channel within one month."""

    month: str
    source: str
    total_amount: float = 0.0
    sales_count: int = 0


@dataclass(frozen=True)
class ProgressResult:
    """
    Progress against a target.

    Attributes:
        percentage: Ratio capped at 100 for display
        raw_percentage: Uncapped ratio
        target: Target the ratio was computed against (0 when none)
        actual: Amount achieved
    """

    percentage: float
    raw_percentage: float
    target: float
    actual: float

    @property
    def has_target(self) -> bool:
        return self.target > 0


@dataclass(frozen=True)
class AxisSteps:
    step_size: int
    step_count: int
    rounded_max: int

    def ticks(self) -> List[int]:
        """Tick values from 0 to rounded_max inclusive."""
        if self.step_size <= 0:
            return []
        return [self.step_size * index for index in range(self.step_count + 1)]


@dataclass
class Report:
    """
    Everything the dashboard shows for one year.

    Recomputed from the raw sheet rows on every request.
    """

    year: int
    records: List[SalesRecord] = field(default_factory=list)
    vendors: List[VendorSummary] = field(default_factory=list)
    monthly_sales: List[MonthSummary] = field(default_factory=list)
    total_sales: int = 0
    total_amount: float = 0.0
    targets_by_branch: Dict[str, float] = field(default_factory=dict)
    targets_by_vendor: Dict[str, float] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)
