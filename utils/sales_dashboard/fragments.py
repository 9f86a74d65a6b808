# utils/sales_dashboard/fragments.py
"""
Streamlit Fragments for the Sales Dashboard

Uses @st.fragment so each chart's own selector (branch, seller, search)
reruns only that section, not the whole page or the sheet reads.
"""

from datetime import datetime

import streamlit as st

from .charts import SalesCharts, format_currency, to_frame
from .constants import (
    ALL_BRANCHES,
    ALL_VENDORS,
    BRANCH_OPTIONS,
    EXCEL_MIME,
    MONTH_MAPPING,
    TRACKED_SOURCES,
)
from .export import SalesExport
from .metrics import (
    aggregate_by_month,
    aggregate_by_month_and_source,
    aggregate_by_vendor,
    filter_by_month,
    filter_by_vendor,
    generate_complete_month_series,
)
from .models import Report
from .progress import resolve_branch_target, resolve_vendor_target
from .report import build_branch_view


# =============================================================================
# FRAGMENT: MONTHLY SALES BY BRANCH
# =============================================================================

@st.fragment
def monthly_sales_fragment(report: Report, up_to_month: int, fragment_key: str = "monthly"):
    """Monthly bars and cumulative line for the selected branch."""
    col_header, col_select = st.columns([3, 1])
    with col_select:
        branch = st.selectbox(
            "Sucursal",
            options=list(BRANCH_OPTIONS.keys()),
            format_func=lambda value: BRANCH_OPTIONS[value],
            key=f"{fragment_key}_branch"
        )
    with col_header:
        suffix = f" - {branch}" if branch != ALL_BRANCHES else ""
        st.subheader(f"📊 Ventas Mensuales {report.year}{suffix}")

    view = build_branch_view(report, branch)
    series = generate_complete_month_series(view.monthly_sales, up_to_month)
    target = resolve_branch_target(report.targets_by_branch, branch)

    if target:
        st.caption(f"Meta mensual: {format_currency(target)}")

    col1, col2 = st.columns(2)
    with col1:
        st.altair_chart(
            SalesCharts.build_monthly_sales_chart(series, target=target),
            use_container_width=True
        )
    with col2:
        st.altair_chart(
            SalesCharts.build_cumulative_chart(series, annual_target=(target or 0) * 12),
            use_container_width=True
        )


# =============================================================================
# FRAGMENT: MONTHLY SALES BY SELLER
# =============================================================================

@st.fragment
def seller_monthly_fragment(report: Report, up_to_month: int, fragment_key: str = "seller"):
    """Monthly bars for one seller against that seller's monthly target."""
    sellers = sorted({record.vendor for record in report.records if record.vendor})
    col_header, col_select = st.columns([3, 1])
    with col_select:
        seller = st.selectbox(
            "Vendedor",
            options=[ALL_VENDORS] + sellers,
            key=f"{fragment_key}_vendor"
        )
    with col_header:
        st.subheader(f"👤 Ventas Mensuales por Vendedor {report.year}")

    records = filter_by_vendor(report.records, seller)
    series = generate_complete_month_series(aggregate_by_month(records), up_to_month)
    # Seller targets only apply to one seller at a time
    target = resolve_vendor_target(report.targets_by_vendor, seller) if seller != ALL_VENDORS else None

    st.altair_chart(
        SalesCharts.build_monthly_sales_chart(series, target=target),
        use_container_width=True
    )


# =============================================================================
# FRAGMENT: SALES BY VENDOR (ANNUAL + CURRENT MONTH)
# =============================================================================

@st.fragment
def vendor_breakdown_fragment(report: Report, up_to_month: int, fragment_key: str = "vendors"):
    """Annual bar + donut, and the reporting month's sales per vendor."""
    st.subheader(f"🏆 Ventas Anuales por Vendedor {report.year}")

    col1, col2 = st.columns([3, 2])
    with col1:
        st.altair_chart(
            SalesCharts.build_vendor_bar_chart(report.vendors, report.targets_by_vendor),
            use_container_width=True
        )
    with col2:
        st.altair_chart(
            SalesCharts.build_vendor_share_chart(report.vendors),
            use_container_width=True
        )

    if up_to_month < 1:
        return

    month_label = MONTH_MAPPING[up_to_month]
    st.subheader(f"📅 Ventas de {month_label} por Vendedor")
    month_vendors = aggregate_by_vendor(
        filter_by_month(report.records, up_to_month),
        report.targets_by_vendor.keys()
    )
    inactive = sum(1 for summary in month_vendors if summary.total_amount <= 0)
    st.caption(f"{len(month_vendors)} vendedores · {inactive} sin ventas este mes")
    st.altair_chart(
        SalesCharts.build_vendor_bar_chart(month_vendors, report.targets_by_vendor),
        use_container_width=True
    )


# =============================================================================
# FRAGMENT: SALES BY SOURCE
# =============================================================================

@st.fragment
def source_trend_fragment(report: Report, up_to_month: int):
    st.subheader(f"📣 Ventas Mensuales por Fuente {report.year}")
    entries = aggregate_by_month_and_source(report.records, TRACKED_SOURCES, up_to_month)
    st.altair_chart(
        SalesCharts.build_source_trend_chart(entries, TRACKED_SOURCES),
        use_container_width=True
    )


# =============================================================================
# FRAGMENT: RECORD DETAIL
# =============================================================================

@st.fragment
def records_detail_fragment(report: Report, up_to_month: int, fragment_key: str = "detail"):
    """Searchable table of the year's records with an Excel download."""
    if not report.records:
        st.info("No hay ventas registradas para el año seleccionado")
        return

    search = st.text_input(
        "Buscar",
        placeholder="Cliente, vendedor, sucursal o fuente...",
        key=f"{fragment_key}_search"
    )

    df = to_frame(report.records)
    if search:
        needle = search.strip().lower()
        mask = df[['client', 'vendor', 'branch', 'source']].apply(
            lambda column: column.str.lower().str.contains(needle, regex=False)
        ).any(axis=1)
        df = df[mask]

    st.caption(f"{len(df):,} registros · {format_currency(df['amount'].sum())}")
    st.dataframe(
        df.rename(columns={
            'month': 'Mes',
            'client': 'Cliente',
            'vendor': 'Vendedor',
            'branch': 'Sucursal',
            'amount': 'Monto',
            'source': 'Fuente',
        }),
        column_config={
            'Monto': st.column_config.NumberColumn(format="$%d"),
        },
        hide_index=True,
        use_container_width=True
    )

    st.download_button(
        label="⬇️ Descargar Excel",
        data=SalesExport().create_report(report, up_to_month),
        file_name=f"ventas_{report.year}_{datetime.now().strftime('%Y%m%d_%H%M')}.xlsx",
        mime=EXCEL_MIME,
        use_container_width=True,
        key=f"{fragment_key}_export"
    )
