import time
import pytest
from datetime import datetime, timedelta, timezone
from zoneinfo import ZoneInfo

from googleapiclient.errors import HttpError

from calendar_tracker.sources.base import EventSourceError, TimeWindow, weeks_back_window
from calendar_tracker.sources.google_calendar import GoogleCalendarSource


@pytest.fixture
def berlin_local_time(monkeypatch):
    """Run with the process local timezone set to Europe/Berlin"""
    if not hasattr(time, "tzset"):
        pytest.skip("time.tzset is not available on this platform")
    monkeypatch.setenv("TZ", "Europe/Berlin")
    time.tzset()
    yield
    monkeypatch.undo()
    time.tzset()


@pytest.mark.unit
class TestWeeksBackWindow:

    def test_current_week_only(self, now):
        window = weeks_back_window(0, now)

        assert window.start == datetime(2024, 1, 8, tzinfo=timezone.utc)
        assert window.end == datetime(2024, 1, 15, tzinfo=timezone.utc)

    def test_weeks_before_current(self, now):
        window = weeks_back_window(2, now)

        assert window.start == datetime(2023, 12, 25, tzinfo=timezone.utc)
        assert window.end == datetime(2024, 1, 15, tzinfo=timezone.utc)

    def test_monday_midnight_starts_its_own_week(self):
        monday = datetime(2024, 1, 8, 0, 0, tzinfo=timezone.utc)

        window = weeks_back_window(0, monday)

        assert window.start == monday

    def test_keeps_timezone_of_now(self):
        tz = timezone(timedelta(hours=9))
        now = datetime(2024, 1, 10, 1, 0, tzinfo=tz)

        window = weeks_back_window(0, now)

        assert window.start == datetime(2024, 1, 8, tzinfo=tz)

    def test_defaults_to_local_now(self):
        window = weeks_back_window(0)

        assert window.start.tzinfo is not None
        assert (window.start.hour, window.start.minute) == (0, 0)
        assert window.start.weekday() == 0
        assert window.end.date() - window.start.date() == timedelta(weeks=1)

    def test_local_midnight_across_dst_start(self, berlin_local_time):
        # Arrange: Sunday 2024-03-31, clocks went forward at 02:00
        now = datetime(2024, 3, 31, 15).astimezone()

        # Act
        window = weeks_back_window(0, now)

        # Assert
        assert window.start == datetime(2024, 3, 25, tzinfo=timezone(timedelta(hours=1)))
        assert window.start.hour == 0
        assert window.end == datetime(2024, 4, 1, tzinfo=timezone(timedelta(hours=2)))
        assert window.end - window.start == timedelta(weeks=1, hours=-1)

    def test_weeks_back_across_dst_start(self, berlin_local_time):
        now = datetime(2024, 4, 3, 12).astimezone()

        window = weeks_back_window(1, now)

        assert window.start == datetime(2024, 3, 25, tzinfo=timezone(timedelta(hours=1)))
        assert window.start.hour == 0
        assert window.end == datetime(2024, 4, 8, tzinfo=timezone(timedelta(hours=2)))

    def test_local_midnight_across_dst_end(self, berlin_local_time):
        # Sunday 2024-10-27, clocks went back at 03:00
        now = datetime(2024, 10, 30, 9).astimezone()

        window = weeks_back_window(1, now)

        assert window.start == datetime(2024, 10, 21, tzinfo=timezone(timedelta(hours=2)))
        assert window.end == datetime(2024, 11, 4, tzinfo=timezone(timedelta(hours=1)))

    def test_zone_aware_now(self):
        berlin = ZoneInfo("Europe/Berlin")
        now = datetime(2024, 4, 3, 12, tzinfo=berlin)

        window = weeks_back_window(1, now)

        assert window.start == datetime(2024, 3, 25, tzinfo=berlin)
        assert window.start.utcoffset() == timedelta(hours=1)
        assert window.end.utcoffset() == timedelta(hours=2)

    def test_negative_weeks(self, now):
        with pytest.raises(ValueError, match="must not be negative"):
            weeks_back_window(-1, now)

    def test_window_end_before_start(self, now):
        with pytest.raises(ValueError):
            TimeWindow(start=now, end=now - timedelta(seconds=1))


@pytest.fixture
def window(now) -> TimeWindow:
    return weeks_back_window(0, now)


@pytest.fixture
def api_service(mocker):
    """Mock of the discovery-built Calendar API client"""
    return mocker.Mock()


@pytest.mark.unit
class TestGoogleCalendarSource:

    def test_fetch_single_page(self, api_service, window):
        # Arrange
        items = [{"id": "1", "summary": "Standup",
                  "start": {"dateTime": "2024-01-08T09:00:00Z"},
                  "end": {"dateTime": "2024-01-08T09:15:00Z"}}]
        api_service.events.return_value.list.return_value.execute.return_value = {"items": items}
        source = GoogleCalendarSource("team@example.com", service=api_service)

        # Act
        events = source.fetch_events(window)

        # Assert
        assert [e.id for e in events] == ["1"]
        api_service.events.return_value.list.assert_called_once_with(
            calendarId="team@example.com",
            timeMin=window.start.isoformat(),
            timeMax=window.end.isoformat(),
            singleEvents=True,
            orderBy="startTime",
            pageToken=None,
        )

    def test_follows_page_tokens(self, api_service, window):
        # Arrange
        api_service.events.return_value.list.return_value.execute.side_effect = [
            {"items": [{"id": "1"}], "nextPageToken": "next"},
            {"items": [{"id": "2"}]},
        ]
        source = GoogleCalendarSource(service=api_service)

        # Act
        items = source.fetch_items(window)

        # Assert
        assert [i["id"] for i in items] == ["1", "2"]
        list_calls = api_service.events.return_value.list.call_args_list
        assert [c.kwargs["pageToken"] for c in list_calls] == [None, "next"]

    def test_http_error_is_wrapped(self, api_service, window, mocker):
        # Arrange
        response = mocker.Mock(status=404, reason="Not Found")
        api_service.events.return_value.list.return_value.execute.side_effect = HttpError(response, b"{}")
        source = GoogleCalendarSource("missing", service=api_service)

        # Act & Assert
        with pytest.raises(EventSourceError, match="missing"):
            source.fetch_items(window)

    def test_missing_client_secrets(self, tmp_path, window):
        source = GoogleCalendarSource(
            credentials_file=tmp_path / "credentials.json",
            token_file=tmp_path / "token.json",
        )

        with pytest.raises(EventSourceError, match="Missing OAuth client file"):
            source.fetch_items(window)

    def test_uses_valid_cached_token(self, tmp_path, mocker):
        # Arrange
        token_file = tmp_path / "token.json"
        token_file.write_text("{}")
        creds = mocker.Mock(valid=True)
        mocker.patch(
            'calendar_tracker.sources.google_calendar.Credentials.from_authorized_user_file',
            return_value=creds,
        )
        build = mocker.patch('calendar_tracker.sources.google_calendar.build')
        source = GoogleCalendarSource(credentials_file=tmp_path / "none.json", token_file=token_file)

        # Act
        service = source.service

        # Assert
        assert service is build.return_value
        build.assert_called_once_with("calendar", "v3", credentials=creds)
