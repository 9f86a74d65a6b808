# app.py
"""
Sales Dashboard - Main Entry Point

Reads ventas / Metas / Colaboradores from Google Sheets on every run and
renders KPI cards, monthly charts, vendor breakdown and source trends.

Version: 1.0.0
"""

import logging
from datetime import date

import streamlit as st

from utils.config import config
from utils.sheets import check_sheets_connection, get_sheets_status
from utils.sales_dashboard import (
    ALL_BRANCHES,
    SourceUnavailable,
    annual_progress,
    current_month_progress,
    load_report,
    month_number,
    reporting_month,
    resolve_branch_target,
)
from utils.sales_dashboard.charts import SalesCharts
from utils.sales_dashboard.constants import MONTH_MAPPING
from utils.sales_dashboard.fragments import (
    monthly_sales_fragment,
    records_detail_fragment,
    seller_monthly_fragment,
    source_trend_fragment,
    vendor_breakdown_fragment,
)

# Configure logging
logging.basicConfig(
    level=logging.DEBUG if config.get_app_setting("ENABLE_DEBUG_MODE") else logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)

# ==================== PAGE CONFIGURATION ====================

APP_NAME = "Dashboard de Ventas"
APP_ICON = "📊"
APP_VERSION = "1.0.0"

st.set_page_config(
    page_title=APP_NAME,
    page_icon=APP_ICON,
    layout="wide",
    initial_sidebar_state="expanded"
)

# ==================== CUSTOM CSS ====================

st.markdown("""
<style>
    .main-header {
        font-size: 2.5rem;
        font-weight: bold;
        margin-bottom: 0.5rem;
        color: #1f77b4;
    }

    .sub-header {
        font-size: 1.1rem;
        color: #666;
        margin-bottom: 2rem;
    }

    .footer {
        text-align: center;
        color: #888;
        padding: 1rem;
        margin-top: 3rem;
        border-top: 1px solid #eee;
        font-size: 0.9rem;
    }
</style>
""", unsafe_allow_html=True)


# ==================== HELPER FUNCTIONS ====================

def render_sidebar() -> int:
    """Year selector, refresh button and source status. Returns the selected year."""
    today = date.today()
    first_year = config.get_app_setting("FIRST_REPORT_YEAR", today.year)
    default_year = config.get_app_setting("REPORT_YEAR", today.year)
    years = list(range(today.year, min(first_year, today.year) - 1, -1))

    with st.sidebar:
        st.markdown(f"### {APP_ICON} {APP_NAME}")

        selected_year = st.selectbox(
            "Año",
            options=years,
            index=years.index(default_year) if default_year in years else 0,
            key="report_year"
        )

        if st.button("🔄 Actualizar datos", use_container_width=True):
            logger.info("Manual refresh requested")
            st.rerun()

        st.markdown("---")
        status = get_sheets_status()
        if status['sheet_configured'] and status['credentials_configured']:
            st.success("🟢 Google Sheets configurado")
        else:
            st.warning("🟠 Falta configuración de Google Sheets")
        st.caption("Rangos: " + ", ".join(status['ranges']))

        if st.button("🔌 Probar conexión", use_container_width=True):
            ok, error = check_sheets_connection()
            if ok:
                st.success("✅ Conexión con Google Sheets correcta")
            else:
                st.error(f"⚠️ {error}")

    return selected_year


def render_error(error: SourceUnavailable):
    st.error(f"⚠️ No fue posible cargar los datos: {error}")
    st.info("Revisa la conexión o la configuración de la hoja de cálculo.")
    if st.button("🔁 Reintentar", type="primary"):
        st.rerun()


def show_dashboard(selected_year: int):
    """Load the report for the selected year and render every section."""
    st.markdown(f'<p class="main-header">{APP_ICON} {APP_NAME} {selected_year}</p>', unsafe_allow_html=True)
    st.markdown('<p class="sub-header">Ventas, metas y avance por sucursal y vendedor</p>', unsafe_allow_html=True)

    try:
        with st.spinner("Cargando datos de Google Sheets..."):
            report = load_report(selected_year)
    except SourceUnavailable as e:
        logger.error(f"Dashboard load failed: {e}")
        render_error(e)
        return

    up_to_month = reporting_month(selected_year, date.today())
    monthly_target = resolve_branch_target(report.targets_by_branch, ALL_BRANCHES)
    current_summary = next(
        (summary for summary in report.monthly_sales if month_number(summary.month) == up_to_month),
        None
    )
    month_label = MONTH_MAPPING.get(up_to_month, "Mes")

    SalesCharts.render_kpi_cards(
        vendor_count=len(report.vendors),
        total_sales=report.total_sales,
        total_amount=report.total_amount,
        annual=annual_progress(report.total_amount, monthly_target),
        monthly=current_month_progress(current_summary, monthly_target),
        month_label=month_label,
    )

    st.markdown("---")

    tab_overview, tab_vendors, tab_sources, tab_detail = st.tabs([
        "📈 Resumen", "👥 Vendedores", "📣 Fuentes", "📋 Detalle"
    ])

    with tab_overview:
        monthly_sales_fragment(report, up_to_month)

    with tab_vendors:
        vendor_breakdown_fragment(report, up_to_month)
        st.markdown("---")
        seller_monthly_fragment(report, up_to_month)

    with tab_sources:
        source_trend_fragment(report, up_to_month)

    with tab_detail:
        records_detail_fragment(report, up_to_month)

    # Footer
    st.markdown(f"""
    <div class="footer">
        <strong>{APP_NAME}</strong> v{APP_VERSION}
    </div>
    """, unsafe_allow_html=True)


# ==================== MAIN ====================

def main():
    """Main application entry point"""
    selected_year = render_sidebar()
    show_dashboard(selected_year)


if __name__ == "__main__":
    main()
