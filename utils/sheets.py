# utils/sheets.py
"""
Google Sheets Connection Management

Version: 1.0.0
Features:
- Service account credentials singleton with thread-safe double-checked locking
- One Sheets service object per read (the HTTP transport is not thread-safe)
- Concurrent range reads with a single timeout
- Health check utility
"""

import logging
import threading
from concurrent.futures import FIRST_EXCEPTION, ThreadPoolExecutor, wait
from typing import Any, Dict, List, Optional, Sequence, Tuple

import httplib2
from google.auth.exceptions import GoogleAuthError
from google.oauth2 import service_account
from googleapiclient.discovery import build
from googleapiclient.errors import Error as GoogleApiClientError
from googleapiclient.errors import HttpError

from .config import config
from .sales_dashboard.exceptions import SourceUnavailable

logger = logging.getLogger(__name__)

SCOPES = ["https://www.googleapis.com/auth/spreadsheets.readonly"]

# ==================== SINGLETON CREDENTIALS ====================

_credentials = None
_credentials_lock = threading.Lock()


def get_credentials():
    """
    Get service account credentials (singleton pattern)

    Raises:
        SourceUnavailable: when no service account is configured
    """
    global _credentials

    if _credentials is None:
        with _credentials_lock:
            if _credentials is None:
                _credentials = _create_credentials()

    return _credentials


def _create_credentials():
    account_info = config.get_google_service_account()
    if not account_info:
        logger.error("Missing Google service account configuration")
        raise SourceUnavailable("Missing Google service account configuration. Please check .env file.")

    try:
        credentials = service_account.Credentials.from_service_account_info(
            account_info, scopes=SCOPES
        )
    except (ValueError, KeyError) as e:
        logger.error(f"❌ Invalid Google service account: {e}")
        raise SourceUnavailable(f"Invalid Google service account: {e}") from e

    logger.info(f"🔑 Google credentials loaded for {account_info.get('client_email', 'unknown')}")
    return credentials


def reset_credentials():
    """Drop cached credentials (e.g. after rotating the service account key)."""
    global _credentials

    with _credentials_lock:
        _credentials = None
    logger.info("🔄 Google credentials reset")


# ==================== CLIENT ====================

class SheetsClient:
    """
    Read-only access to one spreadsheet.

    Usage:
        client = SheetsClient()
        rows = client.get_values("ventas!A:G")
        sales, metas, team = client.get_many(["ventas!A:G", "Metas!A:B", "Colaboradores!A:E"])
    """

    def __init__(
        self,
        sheet_id: Optional[str] = None,
        timeout_seconds: Optional[int] = None,
        service_factory=None
    ):
        """
        Args:
            sheet_id: Spreadsheet ID (defaults to SHEET_ID setting)
            timeout_seconds: Upper bound for get_many (defaults to setting)
            service_factory: Callable returning a Sheets service; used by tests
        """
        sheets_config = config.get_sheets_config()
        self.sheet_id = sheet_id or sheets_config.sheet_id
        self.timeout_seconds = timeout_seconds or sheets_config.timeout_seconds
        self._service_factory = service_factory or self._build_service

    @staticmethod
    def _build_service():
        return build("sheets", "v4", credentials=get_credentials(), cache_discovery=False)

    def get_values(self, sheet_range: str) -> List[List[Any]]:
        """
        Read one range as a list of rows.

        Raises:
            SourceUnavailable: on any API, auth or network failure
        """
        if not self.sheet_id:
            raise SourceUnavailable("Missing SHEET_ID configuration", sheet_range)

        try:
            logger.debug(f"Reading {sheet_range}")
            service = self._service_factory()
            result = service.spreadsheets().values().get(
                spreadsheetId=self.sheet_id,
                range=sheet_range,
                valueRenderOption="UNFORMATTED_VALUE",
            ).execute()
        except SourceUnavailable:
            raise
        except HttpError as e:
            logger.error(f"❌ Sheets API error reading {sheet_range}: {e}")
            raise SourceUnavailable(f"Sheets API error: {e.resp.status}", sheet_range) from e
        except (GoogleAuthError, OSError, httplib2.HttpLib2Error, GoogleApiClientError) as e:
            logger.error(f"❌ Cannot reach Google Sheets for {sheet_range}: {e}")
            raise SourceUnavailable("Cannot reach Google Sheets", sheet_range) from e

        values = result.get("values", [])
        logger.debug(f"{sheet_range} returned {len(values)} rows")
        return values

    def get_many(self, sheet_ranges: Sequence[str]) -> List[List[List[Any]]]:
        """
        Read several ranges concurrently.

        Returns the rows of each range in the given order, or raises the
        first failure. Nothing partial is returned.
        """
        if not sheet_ranges:
            return []

        executor = ThreadPoolExecutor(max_workers=len(sheet_ranges))
        futures = [executor.submit(self.get_values, sheet_range) for sheet_range in sheet_ranges]
        try:
            done, pending = wait(futures, timeout=self.timeout_seconds, return_when=FIRST_EXCEPTION)
            for future in futures:
                if future in done and future.exception() is not None:
                    raise future.exception()
            if pending:
                logger.error(f"❌ Google Sheets did not answer within {self.timeout_seconds}s")
                raise SourceUnavailable(
                    f"Google Sheets did not answer within {self.timeout_seconds} seconds"
                )
            return [future.result() for future in futures]
        finally:
            # Unfinished reads are abandoned, not awaited
            for future in futures:
                future.cancel()
            executor.shutdown(wait=False)


# ==================== HEALTH CHECK ====================

def check_sheets_connection(client: Optional[SheetsClient] = None) -> Tuple[bool, Optional[str]]:
    """
    Check if the spreadsheet can be read

    Returns:
        Tuple of (is_connected: bool, error_message: str or None)
    """
    client = client or SheetsClient()
    sales_range = config.get_sheets_config().sales_range
    header_range = f"{sales_range.split('!')[0]}!A1:A1"
    try:
        client.get_values(header_range)
        return True, None
    except SourceUnavailable as e:
        return False, str(e)


def get_sheets_status() -> Dict[str, Any]:
    """Configuration summary for the sidebar"""
    sheets_config = config.get_sheets_config()
    return {
        'sheet_configured': sheets_config.is_configured(),
        'credentials_configured': bool(config.get_google_service_account()),
        'ranges': [
            sheets_config.sales_range,
            sheets_config.branch_targets_range,
            sheets_config.vendor_targets_range,
        ],
    }
