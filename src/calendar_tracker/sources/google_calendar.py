import logging
from pathlib import Path
from typing import Any, Dict, List, Optional

from google.auth.transport.requests import Request
from google.oauth2.credentials import Credentials
from google_auth_oauthlib.flow import InstalledAppFlow
from googleapiclient.discovery import build
from googleapiclient.errors import HttpError

from calendar_tracker.config.settings import CREDENTIALS_FILE, TOKEN_FILE
from calendar_tracker.sources.base import EventSource, EventSourceError, TimeWindow

logger = logging.getLogger(__name__)

SCOPES = ["https://www.googleapis.com/auth/calendar.readonly"]


class GoogleCalendarSource(EventSource):
    """
    Reads events from a Google Calendar.

    Recurring events are expanded into single instances and returned
    ordered by start time.

    Example:
        source = GoogleCalendarSource("primary")
        events = source.fetch_events(weeks_back_window(1))
    """

    def __init__(
        self,
        calendar_id: str = "primary",
        credentials_file: Path = CREDENTIALS_FILE,
        token_file: Path = TOKEN_FILE,
        service: Optional[Any] = None,
    ):
        """
        Args:
            calendar_id: Calendar to read ('primary' or a calendar address)
            credentials_file: OAuth desktop client secrets
            token_file: Where the authorized token is cached
            service: Prebuilt API client, mostly for tests
        """
        self.calendar_id = calendar_id
        self.credentials_file = Path(credentials_file)
        self.token_file = Path(token_file)
        self._service = service

    @property
    def service(self) -> Any:
        """Lazy-build the authenticated API client"""
        if self._service is None:
            self._service = build("calendar", "v3", credentials=self._authorize())
        return self._service

    def _authorize(self) -> Credentials:
        creds = None
        if self.token_file.exists():
            creds = Credentials.from_authorized_user_file(str(self.token_file), SCOPES)

        if creds and creds.valid:
            return creds

        if creds and creds.expired and creds.refresh_token:
            logger.info("Refreshing expired Google Calendar token")
            creds.refresh(Request())
        else:
            if not self.credentials_file.exists():
                raise EventSourceError(
                    f"Missing OAuth client file '{self.credentials_file}'. "
                    f"Download a desktop client JSON from the Google Cloud console."
                )
            flow = InstalledAppFlow.from_client_secrets_file(str(self.credentials_file), SCOPES)
            creds = flow.run_local_server(port=0)

        self.token_file.parent.mkdir(parents=True, exist_ok=True)
        self.token_file.write_text(creds.to_json(), encoding="utf-8")
        return creds

    def fetch_items(self, window: TimeWindow) -> List[Dict[str, Any]]:
        """
        Retrieve all event instances starting within the window.

        Raises:
            EventSourceError: If the API call fails
        """
        items: List[Dict[str, Any]] = []
        page_token = None

        try:
            while True:
                response = self.service.events().list(
                    calendarId=self.calendar_id,
                    timeMin=window.start.isoformat(),
                    timeMax=window.end.isoformat(),
                    singleEvents=True,
                    orderBy="startTime",
                    pageToken=page_token,
                ).execute()

                items.extend(response.get("items", []))
                page_token = response.get("nextPageToken")
                if not page_token:
                    break
        except HttpError as e:
            raise EventSourceError(f"Unable to retrieve events from '{self.calendar_id}': {e}") from e

        logger.info(f"Fetched {len(items)} events from '{self.calendar_id}'")
        return items

    def __repr__(self) -> str:
        return f"GoogleCalendarSource('{self.calendar_id}')"
