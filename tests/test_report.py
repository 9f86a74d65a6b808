# tests/test_report.py
from datetime import date

import pytest

from utils.config import config
from utils.sales_dashboard.exceptions import SourceUnavailable
from utils.sales_dashboard.metrics import generate_complete_month_series
from utils.sales_dashboard.models import Report
from utils.sales_dashboard.report import (
    build_branch_view,
    build_report,
    load_report,
    reporting_month,
)


class FakeClient:
    """Stands in for SheetsClient.get_many, keyed by range."""

    def __init__(self, tables):
        self.tables = tables
        self.requested = []

    def get_many(self, sheet_ranges):
        self.requested.append(list(sheet_ranges))
        return [self.tables.get(sheet_range, []) for sheet_range in sheet_ranges]


def _ranges():
    sheets_config = config.get_sheets_config()
    return (
        sheets_config.sales_range,
        sheets_config.branch_targets_range,
        sheets_config.vendor_targets_range,
    )


class TestBuildReport:

    def test_three_row_scenario(self, sales_rows):
        report = build_report(sales_rows, [], [], 2025)

        assert len(report.records) == 2
        assert report.total_sales == 2
        assert len(report.vendors) == 1
        assert report.vendors[0].vendor == "Juan Pérez"
        assert report.vendors[0].total_amount == 1500.0
        assert report.vendors[0].sales_count == 2
        assert len(report.monthly_sales) == 1
        assert report.monthly_sales[0].month == "Enero"
        assert report.monthly_sales[0].total_amount == 1500.0

    def test_targets_are_attached(self, sales_rows, branch_target_rows, vendor_target_rows):
        report = build_report(sales_rows, branch_target_rows, vendor_target_rows, 2025)

        assert report.targets_by_branch["Guadalajara"] == 60000.0
        assert report.targets_by_vendor == {"Juan Pérez": 30000.0, "Ana Lopez": 15000.0}
        # Target-only vendor is listed after the seller
        assert [summary.vendor for summary in report.vendors] == ["Juan Pérez", "Ana Lopez"]
        assert report.total_amount == 1500.0

    def test_empty_year(self, sales_rows):
        report = build_report(sales_rows, [], [], 2030)

        assert report == Report(year=2030)

    def test_to_dict(self, sales_rows):
        data = build_report(sales_rows, [], [], 2025).to_dict()
        assert data["year"] == 2025
        assert data["records"][0]["client"] == "Acme"


class TestBranchView:

    def test_restricts_records_and_reaggregates(self, records):
        report = Report(year=2025, records=records, targets_by_branch={"Querétaro": 1.0})

        view = build_branch_view(report, "Queretaro")

        assert [record.client for record in view.records] == ["C1", "C3"]
        assert view.total_amount == 500.0
        assert [summary.vendor for summary in view.vendors] == ["Ana López"]
        assert view.targets_by_branch == {"Querétaro": 1.0}

    def test_month_series_for_one_branch(self, records):
        report = Report(year=2025, records=records)

        view = build_branch_view(report, "Querétaro")
        series = generate_complete_month_series(view.monthly_sales, 3)

        assert [(s.month, s.total_amount) for s in series] == [
            ("Enero", 200.0),
            ("Febrero", 0.0),
            ("Marzo", 300.0),
        ]

    def test_all_branches_returns_same_report(self, records):
        report = Report(year=2025, records=records)
        assert build_branch_view(report, "Todas") is report


class TestLoadReport:

    def test_reads_all_three_ranges_in_one_call(self, sales_rows, branch_target_rows, vendor_target_rows):
        sales_range, branch_range, vendor_range = _ranges()
        client = FakeClient({
            sales_range: sales_rows,
            branch_range: branch_target_rows,
            vendor_range: vendor_target_rows,
        })

        report = load_report(2025, client=client)

        assert client.requested == [[sales_range, branch_range, vendor_range]]
        assert report.total_sales == 2
        assert report.targets_by_branch["Querétaro"] == 15000.0

    def test_empty_sales_table_fails(self, branch_target_rows):
        _, branch_range, _ = _ranges()
        client = FakeClient({branch_range: branch_target_rows})

        with pytest.raises(SourceUnavailable) as excinfo:
            load_report(2025, client=client)

        assert excinfo.value.sheet_range == config.get_sheets_config().sales_range

    def test_empty_branch_targets_fail(self, sales_rows):
        sales_range, branch_range, _ = _ranges()
        client = FakeClient({sales_range: sales_rows})

        with pytest.raises(SourceUnavailable) as excinfo:
            load_report(2025, client=client)

        assert excinfo.value.sheet_range == branch_range

    def test_empty_vendor_targets_are_allowed(self, sales_rows, branch_target_rows):
        sales_range, branch_range, _ = _ranges()
        client = FakeClient({sales_range: sales_rows, branch_range: branch_target_rows})

        report = load_report(2025, client=client)

        assert report.targets_by_vendor == {}

    def test_fetch_failure_propagates(self):
        class BrokenClient:
            def get_many(self, sheet_ranges):
                raise SourceUnavailable("Cannot reach Google Sheets")

        with pytest.raises(SourceUnavailable, match="Cannot reach"):
            load_report(2025, client=BrokenClient())


@pytest.mark.parametrize("year, today, expected", [
    (2025, date(2025, 3, 14), 3),
    (2024, date(2025, 3, 14), 12),
    (2026, date(2025, 3, 14), 0),
    (2025, date(2025, 12, 31), 12),
])
def test_reporting_month(year, today, expected):
    assert reporting_month(year, today) == expected
