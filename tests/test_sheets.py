import http.client
import json
from unittest.mock import MagicMock, patch

import httplib2
import pytest
from googleapiclient.errors import HttpError, UnknownApiNameOrVersion

from core.errors import InitializationFailure, SourceUnavailable
from core.sheets import SheetsSource, init_sheets, load_credentials
from services.refresh import RefreshLoop
from services.rows import team_series_loader
from services.snapshot import SnapshotStore


def _service(execute):
    service = MagicMock()
    service.spreadsheets.return_value.values.return_value.get.return_value.execute = execute
    return service


def test_fetch_rows_reads_team_range():
    service = _service(MagicMock(return_value={"values": [["2023-01-01", "2", "5"]]}))
    source = SheetsSource(service, "sheet-id", cell_start="B5", cell_stop="G")

    rows = source.fetch_rows("DevOps")

    assert rows == [["2023-01-01", "2", "5"]]
    service.spreadsheets.return_value.values.return_value.get.assert_called_once_with(
        spreadsheetId="sheet-id", range="DevOps!B5:G"
    )


def test_fetch_rows_empty_range():
    source = SheetsSource(_service(MagicMock(return_value={})), "sheet-id")
    assert source.fetch_rows("DevOps") == []


def test_http_error_becomes_source_unavailable():
    resp = httplib2.Response({"status": "404"})
    error = HttpError(resp, b'{"error": {"message": "Unable to parse range"}}')
    source = SheetsSource(_service(MagicMock(side_effect=error)), "sheet-id")

    with pytest.raises(SourceUnavailable) as exc_info:
        source.fetch_rows("VSS")
    assert exc_info.value.team == "VSS"


def test_timeout_becomes_source_unavailable():
    source = SheetsSource(_service(MagicMock(side_effect=TimeoutError("timed out"))), "sheet-id")
    with pytest.raises(SourceUnavailable):
        source.fetch_rows("VSS")


@pytest.mark.parametrize(
    "error",
    [
        http.client.IncompleteRead(b""),
        http.client.BadStatusLine("garbage"),
        UnknownApiNameOrVersion("sheets v4"),
    ],
)
def test_transport_errors_become_source_unavailable(error):
    source = SheetsSource(_service(MagicMock(side_effect=error)), "sheet-id")
    with pytest.raises(SourceUnavailable) as exc_info:
        source.fetch_rows("VSS")
    assert exc_info.value.team == "VSS"


def test_truncated_response_skips_only_that_team():
    def get(spreadsheetId, range):
        request = MagicMock()
        if range.startswith("VSS!"):
            request.execute.side_effect = http.client.IncompleteRead(b"")
        else:
            request.execute.return_value = {"values": [["2023-01-01", "2", "5"]]}
        return request

    service = MagicMock()
    service.spreadsheets.return_value.values.return_value.get.side_effect = get
    source = SheetsSource(service, "sheet-id")
    store = SnapshotStore()

    RefreshLoop(store, team_series_loader(source.fetch_rows), ["DevOps", "VSS"]).refresh_once()

    assert [c.title for c in store.current().charts] == ["DevOps"]


def test_init_requires_sheet_id(tmp_path):
    with pytest.raises(InitializationFailure):
        init_sheets(spreadsheet_id="", credentials_file=str(tmp_path / "c.json"), token_file=str(tmp_path / "t.json"))


def test_missing_client_secret_is_fatal(tmp_path):
    with pytest.raises(InitializationFailure):
        load_credentials(str(tmp_path / "missing.json"), str(tmp_path / "token.json"))


def test_valid_cached_token_is_used(tmp_path):
    token_file = tmp_path / "token.json"
    token_file.write_text(json.dumps({"token": "t"}))
    creds = MagicMock(valid=True)
    with patch("core.sheets.Credentials.from_authorized_user_file", return_value=creds) as load, \
            patch("core.sheets.InstalledAppFlow") as flow:
        assert load_credentials(str(tmp_path / "c.json"), str(token_file)) is creds
    load.assert_called_once()
    flow.from_client_secrets_file.assert_not_called()


def test_new_token_is_cached(tmp_path):
    token_file = tmp_path / "token.json"
    creds = MagicMock()
    creds.to_json.return_value = '{"token": "fresh"}'
    with patch("core.sheets.InstalledAppFlow") as flow:
        flow.from_client_secrets_file.return_value.run_local_server.return_value = creds
        assert load_credentials(str(tmp_path / "c.json"), str(token_file)) is creds
    assert json.loads(token_file.read_text()) == {"token": "fresh"}
    assert token_file.stat().st_mode & 0o777 == 0o600


def test_failed_consent_is_fatal(tmp_path):
    with patch("core.sheets.InstalledAppFlow") as flow:
        flow.from_client_secrets_file.return_value.run_local_server.side_effect = OSError(
            "Address already in use"
        )
        with pytest.raises(InitializationFailure):
            load_credentials(str(tmp_path / "c.json"), str(tmp_path / "token.json"))


def test_token_without_expiry_is_refreshed(tmp_path):
    token_file = tmp_path / "token.json"
    token_file.write_text(json.dumps({"token": "t", "refresh_token": "r"}))
    creds = MagicMock(valid=False, expired=False, refresh_token="r")
    creds.to_json.return_value = '{"token": "refreshed"}'
    with patch("core.sheets.Credentials.from_authorized_user_file", return_value=creds), \
            patch("core.sheets.Request"), \
            patch("core.sheets.InstalledAppFlow") as flow:
        assert load_credentials(str(tmp_path / "c.json"), str(token_file)) is creds
    creds.refresh.assert_called_once()
    flow.from_client_secrets_file.assert_not_called()
    assert json.loads(token_file.read_text()) == {"token": "refreshed"}
