# utils/config.py
"""
Centralized Configuration Management

Version: 1.0.0
Features:
- Support both local (.env) and Streamlit Cloud (secrets.toml)
- Singleton pattern for efficiency
- Type-safe getters with defaults
- Environment detection
"""

import os
import json
import logging
from datetime import date
from pathlib import Path
from dotenv import load_dotenv
from typing import Dict, Any, Optional
from dataclasses import dataclass

# Initialize logger
logger = logging.getLogger(__name__)


def is_running_on_streamlit_cloud() -> bool:
    """Detect if running on Streamlit Cloud"""
    try:
        import streamlit as st
        return hasattr(st, 'secrets') and len(st.secrets) > 0
    except Exception:
        return False


@dataclass
class SheetsConfig:
    """Google Sheets source configuration container"""
    sheet_id: str = ""
    sales_range: str = "ventas!A:G"
    branch_targets_range: str = "Metas!A:B"
    vendor_targets_range: str = "Colaboradores!A:E"
    timeout_seconds: int = 30

    def is_configured(self) -> bool:
        return bool(self.sheet_id)


def _service_account_from_parts(
    project_id: Optional[str],
    private_key: Optional[str],
    client_email: Optional[str]
) -> Dict[str, Any]:
    """Build service account info from individual env values"""
    if not (project_id and private_key and client_email):
        return {}
    return {
        "type": "service_account",
        "project_id": project_id,
        # Keys pasted into .env keep literal "\n" sequences
        "private_key": private_key.replace("\\n", "\n"),
        "client_email": client_email,
        "token_uri": "https://oauth2.googleapis.com/token",
    }


class Config:
    """
    Centralized configuration management

    Usage:
        from utils.config import config

        # Get Google Sheets config
        sheets_config = config.get_sheets_config()

        # Get service account info
        account = config.get_google_service_account()

        # Get app settings
        year = config.get_app_setting("REPORT_YEAR")
    """

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
            cls._instance._initialized = False
        return cls._instance

    def __init__(self):
        if self._initialized:
            return

        self.is_cloud = is_running_on_streamlit_cloud()
        self._load_config()
        self._initialized = True

    def _load_config(self):
        """Load configuration based on environment"""
        if self.is_cloud:
            self._load_cloud_config()
        else:
            self._load_local_config()

        self._load_app_config()
        self._log_config_status()

    def _load_cloud_config(self):
        """Load configuration from Streamlit Cloud secrets"""
        import streamlit as st

        sheets_secrets = st.secrets.get("SHEETS", {})
        self._sheets_config = SheetsConfig(
            sheet_id=sheets_secrets.get("SHEET_ID", st.secrets.get("SHEET_ID", "")),
            sales_range=sheets_secrets.get("SALES_RANGE", "ventas!A:G"),
            branch_targets_range=sheets_secrets.get("BRANCH_TARGETS_RANGE", "Metas!A:B"),
            vendor_targets_range=sheets_secrets.get("VENDOR_TARGETS_RANGE", "Colaboradores!A:E"),
            timeout_seconds=int(sheets_secrets.get("TIMEOUT_SECONDS", 30))
        )

        # Google Cloud
        self._google_service_account = dict(st.secrets.get("gcp_service_account", {}))

        logger.info("☁️ Running in STREAMLIT CLOUD")

    def _load_local_config(self):
        """Load configuration from local .env file"""
        # Find and load .env file
        env_paths = [
            Path.cwd() / ".env",
            Path(__file__).parent.parent / ".env",
        ]

        for env_path in env_paths:
            if env_path.exists():
                load_dotenv(env_path)
                logger.info(f"Loaded .env from: {env_path}")
                break

        self._sheets_config = SheetsConfig(
            sheet_id=os.getenv("SHEET_ID", ""),
            sales_range=os.getenv("SALES_RANGE", "ventas!A:G"),
            branch_targets_range=os.getenv("BRANCH_TARGETS_RANGE", "Metas!A:B"),
            vendor_targets_range=os.getenv("VENDOR_TARGETS_RANGE", "Colaboradores!A:E"),
            timeout_seconds=int(os.getenv("SHEETS_TIMEOUT_SECONDS", "30"))
        )

        # Google Cloud: credentials file first, then individual variables
        self._google_service_account = {}
        credentials_path = os.getenv("GOOGLE_CREDENTIALS_PATH", "credentials.json")
        if os.path.exists(credentials_path):
            try:
                with open(credentials_path, "r") as f:
                    self._google_service_account = json.load(f)
            except Exception as e:
                logger.warning(f"Could not load Google credentials: {e}")

        if not self._google_service_account:
            self._google_service_account = _service_account_from_parts(
                os.getenv("GOOGLE_SHEETS_PROJECT_ID"),
                os.getenv("GOOGLE_PRIVATE_KEY"),
                os.getenv("GOOGLE_SERVICE_ACCOUNT_EMAIL"),
            )

        logger.info("💻 Running in LOCAL environment")

    def _load_app_config(self):
        """Load application-specific settings"""
        self._app_config = {
            # Reporting
            "REPORT_YEAR": int(os.getenv("REPORT_YEAR", str(date.today().year))),
            "FIRST_REPORT_YEAR": int(os.getenv("FIRST_REPORT_YEAR", "2025")),

            # Feature flags
            "ENABLE_DEBUG_MODE": os.getenv("ENABLE_DEBUG_MODE", "false").lower() == "true",
        }

    def _log_config_status(self):
        """Log configuration status"""
        logger.info(f"✅ Sheet: {'Configured' if self._sheets_config.is_configured() else 'Missing SHEET_ID'}")
        logger.info(f"✅ Google: {'Loaded' if self._google_service_account else 'Not configured'}")

    # ==================== PUBLIC GETTERS ====================

    def get_sheets_config(self) -> SheetsConfig:
        """Get Google Sheets source configuration"""
        return self._sheets_config

    def get_google_service_account(self) -> Dict[str, Any]:
        """Get Google service account configuration"""
        return self._google_service_account.copy()

    def get_app_setting(self, key: str, default: Any = None) -> Any:
        """Get application setting with default"""
        return self._app_config.get(key, default)


# ==================== SINGLETON INSTANCE ====================

config = Config()

__all__ = [
    'config',
    'Config',
    'SheetsConfig',
]
