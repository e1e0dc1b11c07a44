"""Integration tests for the /calendars endpoints."""

from datetime import date


class TestListAndCreate:
    """Tests for GET /calendars and POST /calendars."""

    def test_list_calendars(self, client_with_manager):
        """Test that GET /calendars lists calendars and the active one."""
        client, _ = client_with_manager

        response = client.get("/calendars")

        assert response.status_code == 200
        data = response.json()
        assert data["active_calendar"] == "Work"
        assert [c["name"] for c in data["calendars"]] == ["Work", "Personal"]
        assert data["calendars"][0] == {
            "name": "Work",
            "timezone": "America/New_York",
            "event_count": 0,
        }

    def test_create_calendar(self, client_with_manager):
        """Test that POST /calendars registers a new calendar."""
        client, manager = client_with_manager

        response = client.post("/calendars", json={"name": "Travel", "timezone": "Asia/Tokyo"})

        assert response.status_code == 201
        assert response.json() == {"name": "Travel", "timezone": "Asia/Tokyo", "event_count": 0}
        assert manager.get_calendar("Travel").timezone == "Asia/Tokyo"
        assert manager.active_calendar.name == "Work"

    def test_create_duplicate_calendar(self, client_with_manager):
        """Test that a taken name returns 409."""
        client, _ = client_with_manager

        response = client.post("/calendars", json={"name": "Work"})

        assert response.status_code == 409
        data = response.json()
        assert data["error"] == "Duplicate Calendar"
        assert data["type"] == "DuplicateCalendarError"

    def test_create_with_unknown_zone(self, client_with_manager):
        """Test that an unknown zone returns 400."""
        client, _ = client_with_manager

        response = client.post("/calendars", json={"name": "Moon", "timezone": "Moon/Base"})

        assert response.status_code == 400
        assert response.json()["type"] == "InvalidArgumentError"

    def test_missing_name_is_422(self, client_with_manager):
        """Test that request validation errors return 422."""
        client, _ = client_with_manager

        response = client.post("/calendars", json={"timezone": "UTC"})

        assert response.status_code == 422


class TestActiveCalendar:
    """Tests for GET /calendars/active and POST /calendars/use."""

    def test_get_active(self, client_with_manager):
        """Test that the active calendar snapshot includes its events."""
        client, manager = client_with_manager
        manager.get_calendar("Work").create_all_day_event_series(
            "Gym", date(2025, 5, 5), [0], 2
        )

        response = client.get("/calendars/active")

        assert response.status_code == 200
        data = response.json()
        assert data["name"] == "Work"
        assert data["event_count"] == 2
        assert data["events"][0]["start"] == "2025-05-05T08:00:00"
        assert data["events"][0]["all_day"] is True

    def test_use_calendar(self, client_with_manager):
        """Test that POST /calendars/use switches the active calendar."""
        client, manager = client_with_manager

        response = client.post("/calendars/use", json={"name": "Personal"})

        assert response.status_code == 200
        assert response.json()["name"] == "Personal"
        assert manager.active_calendar.name == "Personal"

    def test_use_missing_calendar(self, client_with_manager):
        """Test that an unknown calendar returns 404 with the known names."""
        client, _ = client_with_manager

        response = client.post("/calendars/use", json={"name": "Travel"})

        assert response.status_code == 404
        data = response.json()
        assert data["error"] == "Calendar Not Found"
        assert data["requested_calendar"] == "Travel"
        assert data["available_calendars"] == ["Work", "Personal"]


class TestGetAndEditCalendar:
    """Tests for GET /calendars/{name} and PATCH /calendars/{name}."""

    def test_get_calendar(self, client_with_manager):
        """Test that a calendar can be fetched by name."""
        client, _ = client_with_manager

        response = client.get("/calendars/Personal")

        assert response.status_code == 200
        assert response.json()["timezone"] == "Europe/London"
        assert response.json()["events"] == []

    def test_get_missing_calendar(self, client_with_manager):
        """Test that an unknown calendar returns 404."""
        client, _ = client_with_manager

        assert client.get("/calendars/Travel").status_code == 404

    def test_rename(self, client_with_manager):
        """Test that PATCH renames and keeps the calendar active."""
        client, manager = client_with_manager

        response = client.patch("/calendars/Work", json={"property": "name", "value": "Office"})

        assert response.status_code == 200
        assert response.json()["name"] == "Office"
        assert manager.list_calendars() == ["Office", "Personal"]
        assert manager.active_calendar.name == "Office"

    def test_change_timezone(self, client_with_manager):
        """Test that PATCH timezone converts existing events."""
        client, manager = client_with_manager
        client.post(
            "/events",
            json={"subject": "Call", "start": "2025-05-05T10:00:00", "end": "2025-05-05T11:00:00"},
        )

        response = client.patch(
            "/calendars/Work", json={"property": "timezone", "value": "Europe/London"}
        )

        assert response.status_code == 200
        assert response.json()["timezone"] == "Europe/London"
        events = client.get("/events").json()["events"]
        assert events[0]["start"] == "2025-05-05T15:00:00"

    def test_unknown_property(self, client_with_manager):
        """Test that only name and timezone are editable."""
        client, _ = client_with_manager

        response = client.patch("/calendars/Work", json={"property": "color", "value": "red"})

        assert response.status_code == 400
