# tests/conftest.py
"""Shared fixtures: raw value grids as returned by the Sheets API."""

import pytest

from utils.sales_dashboard.models import SalesRecord

SALES_HEADER = ["Año", "Mes", "Cliente", "Vendedor", "Sucursal", "Monto", "Fuente"]


@pytest.fixture
def sales_rows():
    return [
        SALES_HEADER,
        [2025, "1", "Acme", "Juan Pérez", "Guadalajara", "1000", "Google"],
        [2025, "1", "Beta", "Juan Perez", "Guadalajara", "500", ""],
        [2024, "1", "Gamma", "Ana", "Querétaro", "300", ""],
    ]


@pytest.fixture
def branch_target_rows():
    return [
        ["Sucursal", "Meta"],
        ["Guadalajara", 60000],
        ["Puerto Vallarta", 25000],
        ["Querétaro", 15000],
    ]


@pytest.fixture
def vendor_target_rows():
    return [
        ["Nombre", "Puesto", "Sucursal", "Correo", "Meta"],
        ["juan perez", "Asesor", "Guadalajara", "juan@example.com", 30000],
        ["ANA LOPEZ", "Asesor", "Querétaro", "ana@example.com", "15,000"],
        ["Sin Meta", "Asesor", "Guadalajara", "", ""],
    ]


@pytest.fixture
def records():
    return [
        SalesRecord(month="Marzo", client="C1", vendor="Ana López", branch="Querétaro", amount=300.0, source="Facebook"),
        SalesRecord(month="1", client="C2", vendor="Juan Pérez", branch="Guadalajara", amount=1000.0, source="Google"),
        SalesRecord(month="Enero", client="C3", vendor="Ana López", branch="Queretaro", amount=200.0, source="Google"),
        SalesRecord(month="2", client="C4", vendor="Luis Gómez", branch="Puerto Vallarta", amount=500.0, source=""),
    ]
