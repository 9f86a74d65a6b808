# tests/test_charts.py
from utils.sales_dashboard.charts import SalesCharts, format_currency, format_number, to_frame
from utils.sales_dashboard.models import MonthSummary, SourceMonthSummary, VendorSummary


def test_format_currency():
    assert format_currency(1234567.4) == "$1,234,567"
    assert format_currency(None) == "$0"
    assert format_number(9876) == "9,876"


def test_to_frame():
    df = to_frame([VendorSummary("Ana", 2, 500.0, 250.0)])
    assert list(df.columns) == ["vendor", "sales_count", "total_amount", "average_amount"]
    assert to_frame([], columns=["vendor"]).empty


def test_monthly_chart_uses_axis_ladder_and_target_rule():
    series = [MonthSummary("Enero", 150_000.0, 3), MonthSummary("Febrero", 90_000.0, 2)]

    spec = SalesCharts.build_monthly_sales_chart(series, target=100_000).to_dict()

    assert len(spec["layer"]) == 3
    y = spec["layer"][0]["encoding"]["y"]
    assert y["scale"]["domain"] == [0, 160_000]
    assert y["axis"]["values"][-1] == 160_000


def test_monthly_chart_without_target_has_no_rule():
    spec = SalesCharts.build_monthly_sales_chart([MonthSummary("Enero", 100.0, 1)], target=None).to_dict()
    assert len(spec["layer"]) == 2


def test_empty_inputs_render_placeholder():
    for chart in (
        SalesCharts.build_monthly_sales_chart([]),
        SalesCharts.build_vendor_bar_chart([]),
        SalesCharts.build_vendor_share_chart([VendorSummary("Ana")]),
        SalesCharts.build_source_trend_chart([], ["Google"]),
    ):
        assert chart.to_dict()["mark"]["type"] == "text"


def test_source_chart_builds():
    entries = [SourceMonthSummary("Enero", "Google", 10.0, 1), SourceMonthSummary("Enero", "Facebook", 0.0, 0)]
    spec = SalesCharts.build_source_trend_chart(entries, ["Facebook", "Google"]).to_dict()
    assert spec["encoding"]["color"]["scale"]["domain"] == ["Facebook", "Google"]
