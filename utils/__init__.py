# utils/__init__.py
"""
Shared Utilities Package for the Sales Dashboard

This package contains the infrastructure used by the app:
- config: Configuration management (local + Streamlit Cloud)
- sheets: Google Sheets access with concurrent range reads
- sales_dashboard: ingestion, metrics, targets and charts

Usage:
    # Import specific modules
    from utils.config import config
    from utils.sheets import SheetsClient, check_sheets_connection

    # Or import commonly used items directly
    from utils import SheetsClient, config
"""

# Configuration
from .config import (
    config,
    Config,
    SheetsConfig,
)

# Google Sheets
from .sheets import (
    SheetsClient,
    get_credentials,
    reset_credentials,
    check_sheets_connection,
    get_sheets_status,
)

__all__ = [
    # Config
    'config',
    'Config',
    'SheetsConfig',

    # Google Sheets
    'SheetsClient',
    'get_credentials',
    'reset_credentials',
    'check_sheets_connection',
    'get_sheets_status',
]

__version__ = '1.0.0'
