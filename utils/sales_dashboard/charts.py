# utils/sales_dashboard/charts.py
"""
Altair Chart Builders for the Sales Dashboard

All visualization components using Altair:
- KPI summary cards (using st.metric)
- Monthly sales bars with target rule
- Cumulative sales line
- Sales by vendor (bar + donut), active/inactive colouring
- Monthly sales by acquisition source
"""

import logging
from dataclasses import asdict
from typing import Dict, List, Optional, Sequence

import altair as alt
import pandas as pd
import streamlit as st

from .constants import (
    CHART_HEIGHT,
    CHART_WIDTH,
    COLORS,
    MONTH_ORDER,
    PIE_CHART_SIZE,
    SOURCE_COLORS,
)
from .metrics import running_totals, vendor_share
from .models import MonthSummary, ProgressResult, SourceMonthSummary, VendorSummary
from .progress import compute_axis_steps

logger = logging.getLogger(__name__)


# =============================================================================
# FORMATTING
# =============================================================================

def format_currency(amount: Optional[float]) -> str:
    """$1,234,567 style, no decimals (MXN)."""
    return f"${(amount or 0):,.0f}"


def format_number(value: Optional[float]) -> str:
    return f"{(value or 0):,.0f}"


def to_frame(items: Sequence, columns: Optional[List[str]] = None) -> pd.DataFrame:
    """DataFrame from a list of dataclass instances."""
    if not items:
        return pd.DataFrame(columns=columns or [])
    return pd.DataFrame([asdict(item) for item in items], columns=columns)


class SalesCharts:
    """
    Chart builders for the sales dashboard.

    All methods are static - can be called without instantiation.

    Usage:
        SalesCharts.render_kpi_cards(3, 120, 1_500_000, annual, monthly, "Marzo")
        chart = SalesCharts.build_monthly_sales_chart(series, target=150000)
        st.altair_chart(chart, use_container_width=True)
    """

    # =========================================================================
    # KPI CARDS (Using st.metric)
    # =========================================================================

    @staticmethod
    def render_kpi_cards(
        vendor_count: int,
        total_sales: int,
        total_amount: float,
        annual: ProgressResult,
        monthly: ProgressResult,
        month_label: str
    ):
        """
        Render summary cards.

        Row 1: Vendors, Sales, Amount
        Row 2: Annual progress, Current month progress
        """
        col1, col2, col3 = st.columns(3)
        with col1:
            st.metric(label="Total Vendedores", value=format_number(vendor_count))
        with col2:
            st.metric(label="Total Ventas", value=format_number(total_sales))
        with col3:
            st.metric(label="Monto Total", value=format_currency(total_amount))

        col4, col5 = st.columns(2)
        with col4:
            if annual.has_target:
                st.metric(
                    label="Avance Anual",
                    value=f"{annual.percentage:.1f}%",
                    delta=f"Meta anual {format_currency(annual.target)}",
                    delta_color="off",
                    help="Ventas acumuladas ÷ (meta mensual de todas las sucursales × 12)"
                )
                st.progress(max(0.0, annual.percentage) / 100)
            else:
                st.metric(label="Avance Anual", value="N/A", delta="Sin meta", delta_color="off")

        with col5:
            if monthly.has_target:
                st.metric(
                    label=f"Avance {month_label}",
                    value=f"{monthly.percentage:.1f}%",
                    delta=f"Meta mensual {format_currency(monthly.target)}",
                    delta_color="off",
                    help="Ventas del mes ÷ meta mensual de todas las sucursales"
                )
                st.progress(max(0.0, monthly.percentage) / 100)
            else:
                st.metric(label=f"Avance {month_label}", value="N/A", delta="Sin meta", delta_color="off")

    # =========================================================================
    # MONTHLY SALES
    # =========================================================================

    @staticmethod
    def build_monthly_sales_chart(
        month_summaries: Sequence[MonthSummary],
        target: Optional[float] = None,
        title: str = ""
    ) -> alt.Chart:
        """
        Monthly sales bars with an optional monthly target rule.

        The y axis uses round steps covering both the highest month and
        the target.
        """
        if not month_summaries:
            return SalesCharts._empty_chart("No hay datos disponibles")

        df = to_frame(month_summaries)
        max_value = max(df['total_amount'].max(), target or 0)
        steps = compute_axis_steps(max_value)

        y_scale = alt.Scale(domain=[0, steps.rounded_max]) if steps.rounded_max else alt.Undefined
        y_axis = alt.Axis(format='~s', values=steps.ticks()) if steps.step_size else alt.Axis(format='~s')

        bars = alt.Chart(df).mark_bar(color=COLORS['sales']).encode(
            x=alt.X('month:N', sort=MONTH_ORDER, title='Mes'),
            y=alt.Y('total_amount:Q', title='Ventas (MXN)', scale=y_scale, axis=y_axis),
            tooltip=[
                alt.Tooltip('month:N', title='Mes'),
                alt.Tooltip('total_amount:Q', title='Ventas', format=',.0f'),
                alt.Tooltip('sales_count:Q', title='Cantidad'),
            ]
        )

        text = alt.Chart(df).mark_text(
            align='center', baseline='bottom', dy=-5, fontSize=10
        ).encode(
            x=alt.X('month:N', sort=MONTH_ORDER),
            y=alt.Y('total_amount:Q'),
            text=alt.Text('total_amount:Q', format=',.0f'),
            color=alt.value(COLORS['text_dark'])
        )

        layers = [bars, text]

        # No rule when there is no resolved target
        if target and target > 0:
            rule_df = pd.DataFrame({'target': [target]})
            rule = alt.Chart(rule_df).mark_rule(
                color=COLORS['target'], strokeDash=[6, 4], strokeWidth=2
            ).encode(
                y='target:Q',
                tooltip=[alt.Tooltip('target:Q', title='Meta mensual', format=',.0f')]
            )
            layers.append(rule)

        return alt.layer(*layers).properties(
            width=CHART_WIDTH,
            height=CHART_HEIGHT,
            title=title
        )

    @staticmethod
    def build_cumulative_chart(
        month_summaries: Sequence[MonthSummary],
        annual_target: Optional[float] = None,
        title: str = ""
    ) -> alt.Chart:
        """Running total of monthly sales."""
        if not month_summaries:
            return SalesCharts._empty_chart("No hay datos disponibles")

        df = to_frame(month_summaries)
        df['cumulative_amount'] = running_totals(month_summaries)

        line = alt.Chart(df).mark_line(
            point=True, color=COLORS['cumulative'], strokeWidth=2
        ).encode(
            x=alt.X('month:N', sort=MONTH_ORDER, title='Mes'),
            y=alt.Y('cumulative_amount:Q', title='Acumulado (MXN)', axis=alt.Axis(format='~s')),
            tooltip=[
                alt.Tooltip('month:N', title='Mes'),
                alt.Tooltip('cumulative_amount:Q', title='Acumulado', format=',.0f'),
            ]
        )

        layers = [line]
        if annual_target and annual_target > 0:
            rule = alt.Chart(pd.DataFrame({'target': [annual_target]})).mark_rule(
                color=COLORS['target'], strokeDash=[6, 4]
            ).encode(y='target:Q')
            layers.append(rule)

        return alt.layer(*layers).properties(
            width=CHART_WIDTH,
            height=CHART_HEIGHT,
            title=title
        )

    # =========================================================================
    # BY VENDOR
    # =========================================================================

    @staticmethod
    def build_vendor_bar_chart(
        vendors: Sequence[VendorSummary],
        targets_by_vendor: Optional[Dict[str, float]] = None,
        title: str = ""
    ) -> alt.Chart:
        """
        Horizontal bars per vendor, green when the vendor sold, red otherwise.

        Vendors with a target but no sales are included with a zero bar.
        """
        if not vendors:
            return SalesCharts._empty_chart("No hay datos disponibles")

        df = to_frame(vendors)
        df['is_active'] = df['total_amount'] > 0
        targets = targets_by_vendor or {}
        df['target'] = df['vendor'].map(targets)

        bars = alt.Chart(df).mark_bar().encode(
            y=alt.Y('vendor:N', sort='-x', title=''),
            x=alt.X('total_amount:Q', title='Ventas (MXN)', axis=alt.Axis(format='~s')),
            color=alt.condition(
                alt.datum.is_active,
                alt.value(COLORS['active']),
                alt.value(COLORS['inactive'])
            ),
            tooltip=[
                alt.Tooltip('vendor:N', title='Vendedor'),
                alt.Tooltip('total_amount:Q', title='Ventas', format=',.0f'),
                alt.Tooltip('sales_count:Q', title='Cantidad'),
                alt.Tooltip('average_amount:Q', title='Promedio', format=',.0f'),
                alt.Tooltip('target:Q', title='Meta mensual', format=',.0f'),
            ]
        )

        text = alt.Chart(df).mark_text(align='left', dx=5, fontSize=11).encode(
            y=alt.Y('vendor:N', sort='-x'),
            x=alt.X('total_amount:Q'),
            text=alt.Text('total_amount:Q', format=',.0f'),
            color=alt.value(COLORS['text_dark'])
        )

        return alt.layer(bars, text).properties(
            width=CHART_WIDTH,
            height=max(300, len(df) * 30),
            title=title
        )

    @staticmethod
    def build_vendor_share_chart(
        vendors: Sequence[VendorSummary],
        title: str = ""
    ) -> alt.Chart:
        """Donut of each vendor's share of total sales (vendors with sales only)."""
        selling = [summary for summary in vendors if summary.total_amount > 0]
        if not selling:
            return SalesCharts._empty_chart("No hay ventas registradas")

        shares = vendor_share(selling)
        df = to_frame(selling)
        df['share'] = df['vendor'].map(shares)

        return alt.Chart(df).mark_arc(innerRadius=60).encode(
            theta=alt.Theta('total_amount:Q'),
            color=alt.Color('vendor:N', legend=alt.Legend(title='Vendedor', orient='right')),
            tooltip=[
                alt.Tooltip('vendor:N', title='Vendedor'),
                alt.Tooltip('total_amount:Q', title='Ventas', format=',.0f'),
                alt.Tooltip('share:Q', title='%', format='.1f'),
            ]
        ).properties(
            width=PIE_CHART_SIZE,
            height=PIE_CHART_SIZE,
            title=title
        )

    # =========================================================================
    # BY SOURCE
    # =========================================================================

    @staticmethod
    def build_source_trend_chart(
        entries: Sequence[SourceMonthSummary],
        sources: Sequence[str],
        title: str = ""
    ) -> alt.Chart:
        """One line per acquisition source across the months."""
        if not entries or not sources:
            return SalesCharts._empty_chart("No hay datos de fuentes")

        df = to_frame(entries)
        month_sort = [month for month in MONTH_ORDER if month in set(df['month'])]
        palette = SOURCE_COLORS[:len(sources)]

        lines = alt.Chart(df).mark_line(point=True, strokeWidth=2).encode(
            x=alt.X('month:N', sort=month_sort, title='Mes'),
            y=alt.Y('total_amount:Q', title='Ventas (MXN)', axis=alt.Axis(format='~s')),
            color=alt.Color(
                'source:N',
                scale=alt.Scale(domain=list(sources), range=palette),
                legend=alt.Legend(title='Fuente', orient='bottom')
            ),
            tooltip=[
                alt.Tooltip('month:N', title='Mes'),
                alt.Tooltip('source:N', title='Fuente'),
                alt.Tooltip('total_amount:Q', title='Ventas', format=',.0f'),
                alt.Tooltip('sales_count:Q', title='Cantidad'),
            ]
        )

        return lines.properties(
            width=CHART_WIDTH,
            height=CHART_HEIGHT,
            title=title
        )

    # =========================================================================
    # HELPER METHODS
    # =========================================================================

    @staticmethod
    def _empty_chart(message: str = "No hay datos disponibles") -> alt.Chart:
        """Create an empty chart with a message."""
        return alt.Chart(pd.DataFrame({'note': [message]})).mark_text(
            text=message,
            fontSize=16,
            color=COLORS['text_light']
        ).properties(
            width=CHART_WIDTH,
            height=200
        )
