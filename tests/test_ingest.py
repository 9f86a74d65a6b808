# tests/test_ingest.py
from utils.sales_dashboard.ingest import (
    ingest_branch_targets,
    ingest_sales,
    ingest_vendor_targets,
)

HEADER = ["Año", "Mes", "Cliente", "Vendedor", "Sucursal", "Monto", "Fuente"]


def _row(year, client, amount="100"):
    return [year, "1", client, "Ana", "Guadalajara", amount, "Google"]


class TestIngestSales:

    def test_year_filter_keeps_numeric_matches_only(self):
        rows = [
            HEADER,
            _row(2024, "int-2024"),
            _row(2025, "int-2025"),
            _row("2025", "str-2025"),
            _row(2025.0, "float-2025"),
            _row("abc", "text"),
            _row("2025.0", "str-float-2025"),
            _row(None, "missing"),
        ]

        records = ingest_sales(rows, 2025)

        assert [record.client for record in records] == [
            "int-2025", "str-2025", "float-2025", "str-float-2025"
        ]

    def test_header_row_is_skipped(self):
        rows = [[2025, "Mes", "Cliente", "Vendedor", "Sucursal", "Monto", "Fuente"]]
        assert ingest_sales(rows, 2025) == []

    def test_empty_and_missing_input(self):
        assert ingest_sales([], 2025) == []
        assert ingest_sales(None, 2025) == []
        assert ingest_sales([HEADER], 2025) == []

    def test_non_numeric_amount_becomes_zero(self):
        rows = [HEADER, _row(2025, "Acme", amount="pendiente")]

        records = ingest_sales(rows, 2025)

        assert len(records) == 1
        assert records[0].amount == 0

    def test_formatted_amounts_are_parsed(self):
        rows = [
            HEADER,
            _row(2025, "a", amount="$1,250.50"),
            _row(2025, "b", amount=3000),
            _row(2025, "c", amount=99.5),
            _row(2025, "d", amount=""),
        ]

        amounts = [record.amount for record in ingest_sales(rows, 2025)]

        assert amounts == [1250.5, 3000.0, 99.5, 0.0]

    def test_short_rows_fill_missing_cells(self):
        rows = [HEADER, [2025, "2", "Acme"]]

        record = ingest_sales(rows, 2025)[0]

        assert record.month == "2"
        assert record.client == "Acme"
        assert record.vendor == ""
        assert record.branch == ""
        assert record.amount == 0.0
        assert record.source == ""

    def test_vendor_is_normalized_and_text_is_trimmed(self):
        rows = [HEADER, [2025, 3, " Acme ", "  juan   perez ", "Querétaro ", "10", " Facebook"]]

        record = ingest_sales(rows, 2025)[0]

        assert record.vendor == "Juan Pérez"
        assert record.month == "3"
        assert record.client == "Acme"
        assert record.branch == "Querétaro"
        assert record.source == "Facebook"

    def test_sheet_order_is_kept(self, sales_rows):
        records = ingest_sales(sales_rows, 2025)
        assert [record.client for record in records] == ["Acme", "Beta"]


class TestIngestTargets:

    def test_branch_targets(self, branch_target_rows):
        assert ingest_branch_targets(branch_target_rows) == {
            "Guadalajara": 60000.0,
            "Puerto Vallarta": 25000.0,
            "Querétaro": 15000.0,
        }

    def test_branch_targets_drop_blank_and_non_positive(self):
        rows = [
            ["Sucursal", "Meta"],
            ["", 1000],
            ["Guadalajara", 0],
            ["Querétaro", "-5"],
            ["Todas", "100,000"],
            ["Vallarta"],
        ]
        assert ingest_branch_targets(rows) == {"Todas": 100000.0}

    def test_vendor_targets_normalize_names(self, vendor_target_rows):
        assert ingest_vendor_targets(vendor_target_rows) == {
            "Juan Pérez": 30000.0,
            "Ana Lopez": 15000.0,
        }

    def test_missing_tables(self):
        assert ingest_branch_targets(None) == {}
        assert ingest_vendor_targets([]) == {}
