# tests/test_sheets.py
import threading

import httplib2
import pytest
from googleapiclient.errors import Error as GoogleApiClientError
from googleapiclient.errors import HttpError

from utils.sales_dashboard.exceptions import SourceUnavailable
from utils import sheets
from utils.sheets import (
    SheetsClient,
    check_sheets_connection,
    get_credentials,
    get_sheets_status,
    reset_credentials,
)


class FakeRequest:
    def __init__(self, handler, kwargs):
        self._handler = handler
        self._kwargs = kwargs

    def execute(self):
        return self._handler(**self._kwargs)


class FakeService:
    """Mimics service.spreadsheets().values().get(...).execute()."""

    def __init__(self, handler):
        self._handler = handler
        self.calls = []
        self._lock = threading.Lock()

    def spreadsheets(self):
        return self

    def values(self):
        return self

    def get(self, **kwargs):
        with self._lock:
            self.calls.append(kwargs)
        return FakeRequest(self._handler, kwargs)


def _client(handler, timeout_seconds=5):
    service = FakeService(handler)
    client = SheetsClient(sheet_id="sheet-123", timeout_seconds=timeout_seconds, service_factory=lambda: service)
    return client, service


def _tables(**kwargs):
    return {"values": [["header"], [kwargs["range"]]]}


class TestGetValues:

    def test_returns_rows(self):
        client, service = _client(_tables)

        rows = client.get_values("ventas!A:G")

        assert rows == [["header"], ["ventas!A:G"]]
        assert service.calls == [{
            "spreadsheetId": "sheet-123",
            "range": "ventas!A:G",
            "valueRenderOption": "UNFORMATTED_VALUE",
        }]

    def test_missing_values_key_means_no_rows(self):
        client, _ = _client(lambda **kwargs: {"range": kwargs["range"]})
        assert client.get_values("Metas!A:B") == []

    def test_http_error_is_wrapped(self):
        def denied(**kwargs):
            raise HttpError(httplib2.Response({"status": 403}), b'{"error": {"message": "denied"}}')

        client, _ = _client(denied)

        with pytest.raises(SourceUnavailable) as excinfo:
            client.get_values("ventas!A:G")

        assert "403" in str(excinfo.value)
        assert excinfo.value.sheet_range == "ventas!A:G"

    def test_network_error_is_wrapped(self):
        def offline(**kwargs):
            raise ConnectionError("connection refused")

        client, _ = _client(offline)

        with pytest.raises(SourceUnavailable, match="Cannot reach Google Sheets"):
            client.get_values("ventas!A:G")

    def test_dns_failure_is_wrapped(self):
        def no_dns(**kwargs):
            raise httplib2.ServerNotFoundError("Unable to find the server at sheets.googleapis.com")

        client, _ = _client(no_dns)

        with pytest.raises(SourceUnavailable, match="Cannot reach Google Sheets") as excinfo:
            client.get_values("ventas!A:G")

        assert excinfo.value.sheet_range == "ventas!A:G"

    def test_dns_failure_fails_concurrent_reads(self):
        def no_dns(**kwargs):
            raise httplib2.ServerNotFoundError("Unable to find the server at sheets.googleapis.com")

        client, _ = _client(no_dns)

        with pytest.raises(SourceUnavailable, match="Cannot reach Google Sheets"):
            client.get_many(["ventas!A:G", "Metas!A:B", "Colaboradores!A:E"])

    def test_client_library_error_is_wrapped(self):
        def broken(**kwargs):
            raise GoogleApiClientError("invalid response")

        client, _ = _client(broken)

        with pytest.raises(SourceUnavailable):
            client.get_values("Metas!A:B")

    def test_missing_sheet_id(self):
        client = SheetsClient(sheet_id="", service_factory=lambda: FakeService(_tables))
        client.sheet_id = ""

        with pytest.raises(SourceUnavailable, match="SHEET_ID"):
            client.get_values("ventas!A:G")


class TestGetMany:

    def test_results_follow_request_order(self):
        client, _ = _client(_tables)

        sales, metas, team = client.get_many(["ventas!A:G", "Metas!A:B", "Colaboradores!A:E"])

        assert sales[1] == ["ventas!A:G"]
        assert metas[1] == ["Metas!A:B"]
        assert team[1] == ["Colaboradores!A:E"]

    def test_reads_run_concurrently(self):
        barrier = threading.Barrier(3, timeout=5)

        def together(**kwargs):
            barrier.wait()
            return _tables(**kwargs)

        client, _ = _client(together)

        assert len(client.get_many(["a!A1", "b!A1", "c!A1"])) == 3

    def test_one_failure_fails_everything(self):
        def flaky(**kwargs):
            if kwargs["range"].startswith("Metas"):
                raise OSError("reset by peer")
            return _tables(**kwargs)

        client, _ = _client(flaky)

        with pytest.raises(SourceUnavailable) as excinfo:
            client.get_many(["ventas!A:G", "Metas!A:B", "Colaboradores!A:E"])

        assert excinfo.value.sheet_range == "Metas!A:B"

    def test_timeout(self):
        release = threading.Event()

        def hang(**kwargs):
            release.wait(5)
            return _tables(**kwargs)

        client, _ = _client(hang, timeout_seconds=0.2)
        try:
            with pytest.raises(SourceUnavailable, match="did not answer"):
                client.get_many(["ventas!A:G"])
        finally:
            release.set()

    def test_no_ranges(self):
        client, _ = _client(_tables)
        assert client.get_many([]) == []


class TestHealthCheck:

    def test_ok(self):
        client, service = _client(_tables)

        ok, error = check_sheets_connection(client)

        assert ok is True
        assert error is None
        assert service.calls[0]["range"].endswith("!A1:A1")

    def test_failure_message(self):
        def offline(**kwargs):
            raise OSError("no route to host")

        client, _ = _client(offline)

        ok, error = check_sheets_connection(client)

        assert ok is False
        assert "Cannot reach Google Sheets" in error


class TestCredentials:

    def test_missing_service_account(self, monkeypatch):
        monkeypatch.setattr(sheets.config, "get_google_service_account", lambda: {})
        reset_credentials()

        with pytest.raises(SourceUnavailable, match="service account"):
            get_credentials()

    def test_credentials_are_cached_until_reset(self, monkeypatch):
        created = []

        def fake_create():
            created.append(object())
            return created[-1]

        monkeypatch.setattr(sheets, "_create_credentials", fake_create)
        reset_credentials()

        first = get_credentials()
        assert get_credentials() is first

        reset_credentials()
        assert get_credentials() is not first
        assert len(created) == 2

        reset_credentials()

    def test_status_reports_configuration(self):
        status = get_sheets_status()
        assert set(status) == {"sheet_configured", "credentials_configured", "ranges"}
        assert len(status["ranges"]) == 3
