# utils/sales_dashboard/ingest.py
"""
Row Ingestion for the Sales Dashboard

Turns the raw value grids returned by the Sheets API into typed records:
- ventas        -> list[SalesRecord] (filtered to one year)
- Metas         -> branch -> monthly target
- Colaboradores -> vendor -> monthly target

Columns are positional and the first row is always a header. Cells can be
missing (the API trims trailing empty cells) or hold text where a number is
expected; those degrade to "" / 0.0 instead of rejecting the row.
"""

import logging
import math
from typing import Any, Dict, List, Optional, Sequence

from .constants import BRANCH_TARGET_COLUMNS, SALES_COLUMNS, VENDOR_TARGET_COLUMNS
from .models import SalesRecord
from .normalizer import normalize_vendor_name

logger = logging.getLogger(__name__)

Row = Sequence[Any]


# =============================================================================
# CELL HELPERS
# =============================================================================

def _cell(row: Row, index: int) -> Any:
    if row is None or index >= len(row):
        return None
    return row[index]


def _to_text(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, float):
        if math.isnan(value):
            return ""
        if value.is_integer():
            return str(int(value))
    return str(value).strip()


def _to_float(value: Any) -> float:
    """Parse a money cell; anything unreadable becomes 0.0."""
    if value is None or isinstance(value, bool):
        return 0.0

    if isinstance(value, (int, float)):
        number = float(value)
    else:
        cleaned = str(value).replace(",", "").replace("$", "").replace(" ", "").strip()
        if not cleaned:
            return 0.0
        try:
            number = float(cleaned)
        except ValueError:
            return 0.0

    if math.isnan(number) or math.isinf(number):
        return 0.0
    return number


def _to_year(value: Any) -> Optional[int]:
    """Integer year, or None when the cell is missing or not a whole number."""
    if value is None or isinstance(value, bool):
        return None

    if isinstance(value, int):
        return value

    if isinstance(value, float):
        return int(value) if value.is_integer() else None

    text = str(value).strip()
    if not text:
        return None
    try:
        return int(text)
    except ValueError:
        pass
    try:
        number = float(text)
    except ValueError:
        return None
    return int(number) if number.is_integer() else None


def _data_rows(raw_rows: Optional[Sequence[Row]]) -> Sequence[Row]:
    if not raw_rows:
        return []
    return raw_rows[1:]


# =============================================================================
# SALES
# =============================================================================

def ingest_sales(raw_rows: Optional[Sequence[Row]], filter_year: int) -> List[SalesRecord]:
    """
    Convert ventas rows to SalesRecord for one year.

    Args:
        raw_rows: Value grid including the header row
        filter_year: Only rows whose year column equals this are kept

    Returns:
        Records in sheet order
    """
    records: List[SalesRecord] = []
    skipped = 0

    for row in _data_rows(raw_rows):
        year = _to_year(_cell(row, SALES_COLUMNS["year"]))
        if year != filter_year:
            skipped += 1
            continue

        raw_vendor = _to_text(_cell(row, SALES_COLUMNS["vendor"]))
        vendor = normalize_vendor_name(raw_vendor)
        if raw_vendor != vendor:
            logger.debug(f"Normalized vendor: '{raw_vendor}' -> '{vendor}'")

        records.append(
            SalesRecord(
                month=_to_text(_cell(row, SALES_COLUMNS["month"])),
                client=_to_text(_cell(row, SALES_COLUMNS["client"])),
                vendor=vendor,
                branch=_to_text(_cell(row, SALES_COLUMNS["branch"])),
                amount=_to_float(_cell(row, SALES_COLUMNS["amount"])),
                source=_to_text(_cell(row, SALES_COLUMNS["source"])),
            )
        )

    logger.info(f"Ingested {len(records)} sales records for {filter_year} ({skipped} rows skipped)")
    return records


# =============================================================================
# TARGETS
# =============================================================================

def ingest_branch_targets(raw_rows: Optional[Sequence[Row]]) -> Dict[str, float]:
    """Metas rows -> {branch: monthly target}, positive targets only."""
    targets: Dict[str, float] = {}

    for row in _data_rows(raw_rows):
        branch = _to_text(_cell(row, BRANCH_TARGET_COLUMNS["branch"]))
        target = _to_float(_cell(row, BRANCH_TARGET_COLUMNS["monthly_target"]))
        if branch and target > 0:
            targets[branch] = target

    logger.info(f"Loaded {len(targets)} branch targets")
    return targets


def ingest_vendor_targets(raw_rows: Optional[Sequence[Row]]) -> Dict[str, float]:
    """Colaboradores rows -> {normalized vendor: monthly target}, positive targets only."""
    targets: Dict[str, float] = {}

    for row in _data_rows(raw_rows):
        vendor = normalize_vendor_name(_to_text(_cell(row, VENDOR_TARGET_COLUMNS["vendor"])))
        target = _to_float(_cell(row, VENDOR_TARGET_COLUMNS["monthly_target"]))
        if vendor and target > 0:
            targets[vendor] = target

    logger.info(f"Loaded {len(targets)} vendor targets")
    return targets
