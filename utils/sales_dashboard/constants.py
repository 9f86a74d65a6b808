# utils/sales_dashboard/constants.py
"""
Constants for Sales Dashboard Module

Centralized configuration for:
- Month names and ordering
- Sheet column layout
- Branch and vendor aliases
- Color schemes
- Chart settings
"""

# =====================================================================
# MONTHS
# =====================================================================

MONTH_ORDER = [
    "Enero", "Febrero", "Marzo", "Abril", "Mayo", "Junio",
    "Julio", "Agosto", "Septiembre", "Octubre", "Noviembre", "Diciembre"
]

MONTH_MAPPING = {index + 1: name for index, name in enumerate(MONTH_ORDER)}

# =====================================================================
# SELECTOR SENTINELS
# =====================================================================

# Branch selector value meaning "every branch"; also the explicit
# aggregate key in the Metas sheet
ALL_BRANCHES = "Todas"

# Seller selector value meaning "every seller"
ALL_VENDORS = "Todos"

# =====================================================================
# SHEET COLUMN LAYOUT (positional, header row always skipped)
# =====================================================================

SALES_COLUMNS = {
    "year": 0,
    "month": 1,
    "client": 2,
    "vendor": 3,
    "branch": 4,
    "amount": 5,
    "source": 6,
}

BRANCH_TARGET_COLUMNS = {
    "branch": 0,
    "monthly_target": 1,
}

VENDOR_TARGET_COLUMNS = {
    "vendor": 0,
    "monthly_target": 4,
}

# =====================================================================
# ALIASES
# =====================================================================

# Case-folded, accent-free vendor spelling -> canonical spelling
VENDOR_ALIASES = {
    "daniel ortiz": "Daniel Ortíz",
    "juan perez": "Juan Pérez",
}

# Unaccented branch spelling -> spelling used in the Metas sheet
BRANCH_ALIASES = {
    "Queretaro": "Querétaro",
}

BRANCH_OPTIONS = {
    ALL_BRANCHES: "Todas las Sucursales",
    "Guadalajara": "Guadalajara",
    "Puerto Vallarta": "Vallarta",
    "Querétaro": "Querétaro",
}

# Acquisition channels charted month by month
TRACKED_SOURCES = ("Facebook", "Google")

# =====================================================================
# AXIS STEP LADDER
# =====================================================================

# (band lower bound, [(upper limit, step), ...], fallback step)
AXIS_STEP_BANDS = [
    (10_000_000, [(20_000_000, 2_000_000), (50_000_000, 5_000_000)], 10_000_000),
    (1_000_000, [(2_000_000, 200_000), (5_000_000, 500_000)], 1_000_000),
    (100_000, [(200_000, 20_000), (500_000, 50_000)], 100_000),
    (10_000, [(20_000, 2_000), (50_000, 5_000)], 10_000),
]

DEFAULT_AXIS_STEP = 1_000

# =====================================================================
# COLOR SCHEME
# =====================================================================

COLORS = {
    "sales": "#f97316",               # Orange
    "target": "#dc2626",              # Red
    "cumulative": "#1f77b4",          # Blue
    "active": "#16a34a",              # Green
    "inactive": "#ef4444",            # Red
    "text_dark": "#333333",
    "text_light": "#666666",
    "grid": "#e0e0e0",
}

SOURCE_COLORS = [
    "#f97316", "#3b82f6", "#ef4444", "#10b981", "#8b5cf6", "#f59e0b",
    "#06b6d4", "#84cc16", "#ec4899", "#6366f1", "#14b8a6", "#f97176",
]

# =====================================================================
# CHART DIMENSIONS
# =====================================================================

CHART_WIDTH = 800
CHART_HEIGHT = 400
PIE_CHART_SIZE = 360

# =====================================================================
# EXCEL EXPORT
# =====================================================================

EXCEL_STYLES = {
    "header_fill_color": "f97316",
    "header_font_color": "FFFFFF",
    "currency_format": '"$"#,##0',
    "percent_format": '0.0"%"',
}

EXCEL_MIME = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"
