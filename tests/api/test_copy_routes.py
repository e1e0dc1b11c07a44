"""Integration tests for the /copy endpoints."""

from tests.api.helpers import event_request, series_request


class TestCopyEventRoute:
    """Tests for POST /copy/event."""

    def test_copy_event(self, client_with_manager):
        """Test that a single event is copied without zone conversion."""
        client, manager = client_with_manager
        client.post("/events", json=event_request())

        response = client.post(
            "/copy/event",
            json={
                "subject": "Meeting",
                "source_start": "2025-05-05T10:00:00",
                "target_calendar": "Personal",
                "target_start": "2025-05-07T18:00:00",
            },
        )

        assert response.status_code == 201
        data = response.json()
        assert data["calendar"] == "Personal"
        assert data["events"][0]["start"] == "2025-05-07T18:00:00"
        assert data["events"][0]["end"] == "2025-05-07T19:00:00"
        assert manager.get_calendar("Personal").event_count == 1

    def test_copy_to_missing_calendar(self, client_with_manager):
        """Test that an unknown target calendar returns 404."""
        client, _ = client_with_manager
        client.post("/events", json=event_request())

        response = client.post(
            "/copy/event",
            json={
                "subject": "Meeting",
                "source_start": "2025-05-05T10:00:00",
                "target_calendar": "Travel",
                "target_start": "2025-05-07T18:00:00",
            },
        )

        assert response.status_code == 404


class TestCopyDateRoute:
    """Tests for POST /copy/date."""

    def test_copy_date_converts_zone(self, client_with_manager):
        """Test that copies land on the target date in the target zone."""
        client, _ = client_with_manager
        client.post("/events/series", json=series_request())

        response = client.post(
            "/copy/date",
            json={
                "source_date": "2025-05-12",
                "target_calendar": "Personal",
                "target_date": "2025-05-20",
            },
        )

        assert response.status_code == 201
        [event] = response.json()["events"]
        assert event["start"] == "2025-05-20T14:00:00"
        assert event["end"] == "2025-05-20T14:30:00"
        assert event["series_id"] == "SID_1"

    def test_copy_date_duplicate(self, client_with_manager):
        """Test that copying a date onto itself returns 409 and adds nothing."""
        client, manager = client_with_manager
        client.post("/events", json=event_request())

        response = client.post(
            "/copy/date",
            json={
                "source_date": "2025-05-05",
                "target_calendar": "Work",
                "target_date": "2025-05-05",
            },
        )

        assert response.status_code == 409
        assert manager.get_calendar("Work").event_count == 1


class TestCopyRangeRoute:
    """Tests for POST /copy/range."""

    def test_copy_range_preserves_weekdays(self, client_with_manager):
        """Test that a Tuesday in the source week lands on the target Tuesday."""
        client, _ = client_with_manager
        client.post(
            "/events",
            json={"subject": "Review", "start": "2025-05-06T10:00:00", "end": "2025-05-06T11:00:00"},
        )

        response = client.post(
            "/copy/range",
            json={
                "start_date": "2025-05-05",
                "end_date": "2025-05-11",
                "target_calendar": "Personal",
                "target_start_date": "2025-05-19",
            },
        )

        assert response.status_code == 201
        [event] = response.json()["events"]
        assert event["start"] == "2025-05-20T15:00:00"

    def test_copy_range_inverted(self, client_with_manager):
        """Test that an inverted source range returns 400."""
        client, _ = client_with_manager

        response = client.post(
            "/copy/range",
            json={
                "start_date": "2025-05-11",
                "end_date": "2025-05-05",
                "target_calendar": "Personal",
                "target_start_date": "2025-05-19",
            },
        )

        assert response.status_code == 400
