"""
Tests for Workbench API ViewSets (workbench.api.views).

Verifies DRF endpoints for work items (suggestions, capacity, schedule,
release) and the unified calendar.
"""

import pytest

pytestmark = pytest.mark.urls("workbench.tests.test_api_urls")
from datetime import date, timedelta
from decimal import Decimal

from django.contrib.auth import get_user_model

from rest_framework.test import APIClient

from workbench.models import CalendarEntry, Employee, WorkItem, WorkItemStatus
from workbench.workdays import next_working_day

User = get_user_model()


# ═══════════════════════════════════════════════════════════════════
# Fixtures
# ═══════════════════════════════════════════════════════════════════


@pytest.fixture
def api_client(db):
    user = User.objects.create_user(username="api_user", password="test123")
    client = APIClient()
    client.force_authenticate(user=user)
    return client


@pytest.fixture
def roster(db):
    for name in ("Ana", "Bruno", "Carla"):
        Employee.objects.create(name=name, role="operator", weekly_hours=Decimal("40"))


@pytest.fixture
def waiting_item(db):
    return WorkItem.objects.create(
        reference="Q-2024-060",
        client_name="Sara Vidal",
        vehicle_model="Mercedes Sprinter",
        total_hours=Decimal("40"),
        total_days=5,
    )


@pytest.fixture
def monday():
    today = date.today()
    return next_working_day(today + timedelta(days=7 - today.weekday()))


@pytest.fixture
def entry(db):
    return CalendarEntry.objects.create(
        title="Vehicle reception",
        date=date(2024, 3, 5),
        category="client_vehicle",
        event_type="reception",
        visible_roles=["admin", "manager"],
    )


# ═══════════════════════════════════════════════════════════════════
# WorkItemViewSet
# ═══════════════════════════════════════════════════════════════════


class TestWorkItemAPI:
    def test_requires_authentication(self, db):
        response = APIClient().get("/api/workbench/work-items/")

        assert response.status_code in (401, 403)

    def test_create_and_list(self, api_client):
        response = api_client.post(
            "/api/workbench/work-items/",
            {"reference": "Q-1", "client_name": "Ana", "total_hours": "24.00"},
            format="json",
        )

        assert response.status_code == 201
        assert response.data["status"] == "waiting"
        assert response.data["duration_days"] == 3

        response = api_client.get("/api/workbench/work-items/?status=waiting")
        assert len(response.data) == 1

    def test_suggestions(self, api_client, roster, waiting_item):
        response = api_client.get(f"/api/workbench/work-items/{waiting_item.uuid}/suggestions/")

        assert response.status_code == 200
        assert response.data["manual_entry_required"] is False
        suggestions = response.data["suggestions"]
        assert len(suggestions) == 4
        scores = [s["score"] for s in suggestions]
        assert scores == sorted(scores, reverse=True)
        assert suggestions[0]["capacity"]["daily_capacity"] == 24

    def test_suggestions_without_duration(self, api_client):
        item = WorkItem.objects.create(reference="Q-2")

        response = api_client.get(f"/api/workbench/work-items/{item.uuid}/suggestions/")

        assert response.status_code == 200
        assert response.data == {"suggestions": [], "manual_entry_required": True}

    def test_capacity(self, api_client, roster, waiting_item, monday):
        WorkItem.objects.create(
            reference="busy",
            total_hours=Decimal("60"),
            status=WorkItemStatus.SCHEDULED,
            start_date=monday,
            end_date=monday + timedelta(days=4),
        )

        response = api_client.get(
            f"/api/workbench/work-items/{waiting_item.uuid}/capacity/?start={monday.isoformat()}"
        )

        assert response.status_code == 200
        assert response.data["start_date"] == monday.isoformat()
        assert response.data["working_days"] == 5
        assert response.data["days"][0]["committed_hours"] == 12.0
        assert response.data["fallback"] is False

    def test_capacity_without_duration(self, api_client):
        item = WorkItem.objects.create(reference="Q-3")

        response = api_client.get(f"/api/workbench/work-items/{item.uuid}/capacity/")

        assert response.status_code == 400
        assert response.data["code"] == "MISSING_DURATION"

    def test_capacity_bad_start(self, api_client, waiting_item):
        response = api_client.get(
            f"/api/workbench/work-items/{waiting_item.uuid}/capacity/?start=soon"
        )

        assert response.status_code == 400
        assert "start" in response.data

    def test_schedule(self, api_client, waiting_item, monday):
        response = api_client.post(
            f"/api/workbench/work-items/{waiting_item.uuid}/schedule/",
            {
                "start_date": monday.isoformat(),
                "end_date": (monday + timedelta(days=4)).isoformat(),
            },
            format="json",
        )

        assert response.status_code == 200
        assert response.data["status"] == "scheduled"
        waiting_item.refresh_from_db()
        assert waiting_item.start_date == monday

    def test_schedule_on_weekend_is_rejected(self, api_client, waiting_item, monday):
        response = api_client.post(
            f"/api/workbench/work-items/{waiting_item.uuid}/schedule/",
            {
                "start_date": monday.isoformat(),
                "end_date": (monday + timedelta(days=5)).isoformat(),
            },
            format="json",
        )

        assert response.status_code == 400
        assert response.data["code"] == "INVALID_DATES"

    def test_schedule_missing_dates(self, api_client, waiting_item):
        response = api_client.post(
            f"/api/workbench/work-items/{waiting_item.uuid}/schedule/", {}, format="json"
        )

        assert response.status_code == 400
        assert "start_date" in response.data

    def test_release(self, api_client, waiting_item, monday):
        waiting_item.schedule(monday, monday + timedelta(days=4))

        response = api_client.post(
            f"/api/workbench/work-items/{waiting_item.uuid}/release/",
            {"reason": "Parts delayed"},
            format="json",
        )

        assert response.status_code == 200
        assert response.data["status"] == "waiting"
        assert response.data["start_date"] is None

    def test_release_waiting_item(self, api_client, waiting_item):
        response = api_client.post(f"/api/workbench/work-items/{waiting_item.uuid}/release/")

        assert response.status_code == 400
        assert response.data["code"] == "INVALID_STATUS"


# ═══════════════════════════════════════════════════════════════════
# CalendarViewSet
# ═══════════════════════════════════════════════════════════════════


class TestCalendarAPI:
    def test_list(self, api_client, entry):
        response = api_client.get("/api/workbench/calendar/")

        assert response.status_code == 200
        assert [e["id"] for e in response.data["events"]] == [f"manual-{entry.pk}"]
        assert response.data["counts"]["client_vehicle"] == 1
        assert response.data["counts"]["total"] == 1

    def test_role_filter(self, api_client, entry):
        response = api_client.get("/api/workbench/calendar/?role=operator")

        assert response.data["events"] == []

    def test_category_filter_keeps_counts(self, api_client, entry):
        response = api_client.get("/api/workbench/calendar/?category=production,quoting")

        assert response.data["events"] == []
        assert response.data["counts"]["client_vehicle"] == 1

    def test_repeated_category_param(self, api_client, entry):
        response = api_client.get(
            "/api/workbench/calendar/?category=production&category=client_vehicle"
        )

        assert len(response.data["events"]) == 1

    def test_day_filter(self, api_client, entry):
        assert len(api_client.get("/api/workbench/calendar/?day=2024-03-05").data["events"]) == 1
        assert api_client.get("/api/workbench/calendar/?day=2024-03-06").data["events"] == []

    def test_range_filter(self, api_client, entry):
        response = api_client.get("/api/workbench/calendar/?start=2024-03-01&end=2024-03-31")

        assert len(response.data["events"]) == 1

    def test_reversed_range(self, api_client, entry):
        response = api_client.get("/api/workbench/calendar/?start=2024-03-31&end=2024-03-01")

        assert response.status_code == 400

    def test_create(self, api_client):
        response = api_client.post(
            "/api/workbench/calendar/",
            {"title": "Supplier visit", "date": "2024-03-07", "category": "purchasing"},
            format="json",
        )

        assert response.status_code == 201
        event = response.data["events"][0]
        assert event["title"] == "Supplier visit"
        assert event["visible_roles"] == ["admin", "manager", "purchasing"]
        assert event["created_by"] == "api_user"

    def test_create_with_empty_roles(self, api_client):
        response = api_client.post(
            "/api/workbench/calendar/",
            {"title": "Hidden", "date": "2024-03-07", "visible_roles": []},
            format="json",
        )

        assert response.status_code == 400
        assert "visible_roles" in response.data
        assert not CalendarEntry.objects.exists()

    def test_create_with_roles_as_string(self, api_client):
        response = api_client.post(
            "/api/workbench/calendar/",
            {"title": "x", "date": "2024-03-04", "visible_roles": "admin"},
            format="json",
        )

        assert response.status_code == 400
        assert "visible_roles" in response.data
        assert not CalendarEntry.objects.exists()

    def test_create_with_event_type_outside_category(self, api_client):
        response = api_client.post(
            "/api/workbench/calendar/",
            {
                "title": "x",
                "date": "2024-03-04",
                "category": "quoting",
                "event_type": "reception",
            },
            format="json",
        )

        assert response.status_code == 400
        assert "event_type" in response.data

    def test_create_without_title(self, api_client):
        response = api_client.post(
            "/api/workbench/calendar/", {"date": "2024-03-07"}, format="json"
        )

        assert response.status_code == 400
        assert "title" in response.data

    def test_partial_update(self, api_client, entry):
        response = api_client.patch(
            f"/api/workbench/calendar/{entry.pk}/", {"title": "Reception at 10"}, format="json"
        )

        assert response.status_code == 200
        assert response.data["events"][0]["title"] == "Reception at 10"

    def test_update_end_before_stored_date(self, api_client, entry):
        response = api_client.patch(
            f"/api/workbench/calendar/{entry.pk}/", {"end_date": "2024-03-01"}, format="json"
        )

        assert response.status_code == 400
        assert "end_date" in response.data

    def test_update_unknown(self, api_client):
        response = api_client.patch(
            "/api/workbench/calendar/999/", {"title": "Nope"}, format="json"
        )

        assert response.status_code == 404

    def test_delete(self, api_client, entry):
        response = api_client.delete(f"/api/workbench/calendar/{entry.pk}/")

        assert response.status_code == 200
        assert response.data["events"] == []
        assert not CalendarEntry.objects.exists()
