"""
Google Sheets retrieval boundary.
Owns the one-time OAuth bootstrap (cached token file) and the per-team range read.
Everything returned from here is still raw cell text; parsing lives in services.rows.
"""
import http.client
import logging
import os

import httplib2
from google.auth.exceptions import GoogleAuthError
from google.auth.transport.requests import Request
from google.oauth2.credentials import Credentials
from google_auth_httplib2 import AuthorizedHttp
from google_auth_oauthlib.flow import InstalledAppFlow
from googleapiclient.discovery import build
from googleapiclient.errors import Error as ApiClientError
from googleapiclient.errors import HttpError
from oauthlib.oauth2.rfc6749.errors import OAuth2Error

from core import config
from core.errors import InitializationFailure, SourceUnavailable

logger = logging.getLogger(__name__)

# If modifying these scopes, delete the cached token file.
SCOPES = ["https://www.googleapis.com/auth/spreadsheets.readonly"]


def _token_from_file(token_file: str) -> Credentials | None:
    if not os.path.exists(token_file):
        return None
    try:
        return Credentials.from_authorized_user_file(token_file, SCOPES)
    except (OSError, ValueError) as exc:
        logger.warning("Ignoring unreadable token file %s: %s", token_file, exc)
        return None


def _save_token(token_file: str, creds: Credentials) -> None:
    logger.info("Saving credential file to: %s", token_file)
    fd = os.open(token_file, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, 0o600)
    with os.fdopen(fd, "w") as f:
        f.write(creds.to_json())


def _token_from_web(credentials_file: str) -> Credentials:
    """Run the installed-app consent flow; blocks until the user authorizes."""
    try:
        flow = InstalledAppFlow.from_client_secrets_file(credentials_file, SCOPES)
    except (OSError, ValueError) as exc:
        raise InitializationFailure(f"unable to read client secret file: {exc}") from exc
    try:
        return flow.run_local_server(port=0, open_browser=False)
    except (OSError, ValueError, Warning, OAuth2Error, GoogleAuthError) as exc:
        raise InitializationFailure(f"unable to obtain oauth consent: {exc}") from exc


def load_credentials(credentials_file: str, token_file: str) -> Credentials:
    """
    Return usable credentials: cached token, refreshed token, or a fresh consent.
    Any newly obtained token is written back to token_file.
    """
    creds = _token_from_file(token_file)
    if creds is not None and creds.valid:
        return creds

    # a token without expiry is neither valid nor expired; refresh it whenever possible
    if creds is not None and creds.refresh_token:
        try:
            creds.refresh(Request())
        except GoogleAuthError as exc:
            logger.warning("Token refresh failed, requesting a new one: %s", exc)
            creds = _token_from_web(credentials_file)
    else:
        creds = _token_from_web(credentials_file)

    try:
        _save_token(token_file, creds)
    except OSError as exc:
        raise InitializationFailure(f"unable to cache oauth token: {exc}") from exc
    return creds


class SheetsSource:
    """Reads one sheet (tab) per team from a single spreadsheet."""

    def __init__(
        self,
        service,
        spreadsheet_id: str,
        cell_start: str = "B5",
        cell_stop: str = "G",
    ):
        self._service = service
        self.spreadsheet_id = spreadsheet_id
        self.cell_start = cell_start
        self.cell_stop = cell_stop

    def read_range(self, team: str) -> str:
        return f"{team}!{self.cell_start}:{self.cell_stop}"

    def fetch_rows(self, team: str) -> list[list]:
        """Return the raw value rows for team, or raise SourceUnavailable."""
        request = (
            self._service.spreadsheets()
            .values()
            .get(spreadsheetId=self.spreadsheet_id, range=self.read_range(team))
        )
        try:
            resp = request.execute()
        except HttpError as exc:
            raise SourceUnavailable(team, f"unable to retrieve data from sheet: {exc}") from exc
        except (
            ApiClientError,
            GoogleAuthError,
            httplib2.HttpLib2Error,
            http.client.HTTPException,
            OSError,
        ) as exc:
            raise SourceUnavailable(team, f"sheet request failed: {exc}") from exc
        return resp.get("values", [])


def init_sheets(
    spreadsheet_id: str = config.SHEET_ID,
    credentials_file: str = config.CREDENTIALS_FILE,
    token_file: str = config.TOKEN_FILE,
    timeout: float = config.FETCH_TIMEOUT_SECONDS,
) -> SheetsSource:
    """Build a SheetsSource from configuration. Raises InitializationFailure."""
    if not spreadsheet_id:
        raise InitializationFailure("SHEET_ID is not set")
    creds = load_credentials(credentials_file, token_file)
    authed_http = AuthorizedHttp(creds, http=httplib2.Http(timeout=timeout))
    try:
        service = build("sheets", "v4", http=authed_http, cache_discovery=False)
    except (ApiClientError, httplib2.HttpLib2Error, OSError) as exc:
        raise InitializationFailure(f"unable to retrieve Sheets client: {exc}") from exc
    return SheetsSource(
        service,
        spreadsheet_id,
        cell_start=config.CELL_START,
        cell_stop=config.CELL_STOP,
    )
