"""Integration tests for the trips, templates and insights routes."""

from collections.abc import Iterator

import pytest
from fastapi.testclient import TestClient

from backend.app.main import create_app
from backend.app.store.trip_store import TripStore


@pytest.fixture
def client(seeded_store: TripStore) -> Iterator[TestClient]:
    """Test client whose startup loads the sample trips into the store."""
    with TestClient(create_app(seeded_store)) as test_client:
        yield test_client


def create_trip(client: TestClient, **fields: object) -> dict:
    payload = {"title": "Offsite", "start_date": "2025-06-10", "end_date": "2025-06-14", **fields}
    response = client.post("/trips", json=payload)
    assert response.status_code == 201, response.text
    return response.json()


class TestTripCollection:
    """Test collection-level routes."""

    def test_startup_loads_trips(self, client: TestClient) -> None:
        response = client.get("/trips")

        assert response.status_code == 200
        assert len(response.json()) == 4

    def test_upcoming_and_active(self, client: TestClient) -> None:
        upcoming = client.get("/trips/upcoming").json()
        active = client.get("/trips/active").json()

        assert [trip["id"] for trip in upcoming] == ["trip-tokyo"]
        assert [trip["id"] for trip in active] == ["trip-london"]

    def test_date_range(self, client: TestClient) -> None:
        response = client.get("/trips/range", params={"start": "2025-06-10", "end": "2025-06-20"})

        assert response.status_code == 200
        assert [trip["id"] for trip in response.json()] == ["trip-tokyo"]

    def test_date_range_rejects_reversed_window(self, client: TestClient) -> None:
        response = client.get("/trips/range", params={"start": "2025-06-20", "end": "2025-06-10"})
        assert response.status_code == 422

    def test_search(self, client: TestClient) -> None:
        response = client.post("/trips/search", json={"query": "paris"})

        assert response.status_code == 200
        assert [trip["id"] for trip in response.json()] == ["trip-paris"]

    def test_refresh_reports_state(self, client: TestClient) -> None:
        response = client.post("/trips/refresh")

        assert response.status_code == 200
        assert response.json() == {"is_loading": False, "error": None, "trip_count": 4}


class TestTripLifecycle:
    """Test create/update/delete routes."""

    def test_create_trip(self, client: TestClient) -> None:
        trip = create_trip(client, start_date="2025-06-01", end_date="2025-06-05")

        assert trip["duration"] == 4
        assert trip["status"] == "planning"
        assert trip["checklist"] == []

    def test_create_with_default_checklist(self, client: TestClient) -> None:
        response = client.post(
            "/trips",
            params={"seed_checklist": "true"},
            json={"title": "Seeded", "start_date": "2025-06-10", "end_date": "2025-06-12"},
        )

        assert response.status_code == 201
        assert len(response.json()["checklist"]) == 5

    def test_create_rejects_reversed_dates(self, client: TestClient) -> None:
        response = client.post(
            "/trips",
            json={"title": "Backwards", "start_date": "2025-06-05", "end_date": "2025-06-01"},
        )

        assert response.status_code == 422
        assert response.json()["detail"] == "End date must be after start date"

    def test_get_unknown_trip(self, client: TestClient) -> None:
        assert client.get("/trips/missing").status_code == 404

    def test_patch_trip(self, client: TestClient) -> None:
        response = client.patch("/trips/trip-tokyo", json={"title": "Tokyo review"})

        assert response.status_code == 200
        assert response.json()["title"] == "Tokyo review"
        assert client.get("/trips/trip-tokyo").json()["title"] == "Tokyo review"

    def test_patch_unknown_trip(self, client: TestClient) -> None:
        response = client.patch("/trips/missing", json={"title": "x"})

        assert response.status_code == 404
        assert response.json()["detail"] == "Trip not found: missing"

    def test_delete_clears_selection(self, client: TestClient) -> None:
        client.put("/trips/selection", json={"trip_id": "trip-tokyo"})
        assert client.get("/trips/selection").json()["trip"]["id"] == "trip-tokyo"

        assert client.delete("/trips/trip-tokyo").status_code == 204
        assert client.get("/trips/selection").json() == {"trip": None}
        assert client.delete("/trips/trip-tokyo").status_code == 404

    def test_selection_reflects_updates(self, client: TestClient) -> None:
        client.put("/trips/selection", json={"trip_id": "trip-paris"})
        client.patch("/trips/trip-paris", json={"title": "Paris again"})

        assert client.get("/trips/selection").json()["trip"]["title"] == "Paris again"

    def test_select_unknown_trip(self, client: TestClient) -> None:
        assert client.put("/trips/selection", json={"trip_id": "missing"}).status_code == 404

    def test_status_change_and_archive(self, client: TestClient) -> None:
        completed = client.put("/trips/trip-tokyo/status", json={"status": "completed"}).json()
        assert all(item["completed"] for item in completed["checklist"])

        archived = client.post("/trips/trip-tokyo/archive").json()
        assert archived["is_archived"] is True
        assert len(client.get("/trips").json()) == 3
        assert len(client.get("/trips", params={"include_archived": "true"}).json()) == 4


class TestChecklistRoutes:
    """Test checklist routes."""

    def test_overdue_toggle_progress(self, client: TestClient) -> None:
        trip = create_trip(client, start_date="2025-06-01", end_date="2025-06-05")
        item = client.post(
            f"/trips/{trip['id']}/checklist",
            json={"title": "Renew passport", "category": "documents", "priority": "high",
                  "due_date": "2025-05-20"},
        ).json()

        view = client.get(f"/trips/{trip['id']}/checklist").json()
        assert [entry["id"] for entry in view["overdue"]] == [item["id"]]
        assert view["progress"] == 0.0

        toggled = client.post(f"/trips/{trip['id']}/checklist/{item['id']}/toggle")
        assert toggled.json()["completed"] is True

        view = client.get(f"/trips/{trip['id']}/checklist").json()
        assert view["overdue"] == []
        assert view["progress"] == 100.0

    def test_view_query_parameters(self, client: TestClient) -> None:
        response = client.get(
            "/trips/trip-tokyo/checklist",
            params={"category": "documents", "completion": "pending", "sort_by": "title"},
        )

        assert response.status_code == 200
        view = response.json()
        assert [item["id"] for item in view["items"]] == ["trip-tokyo-checklist-1"]
        assert list(view["groups"]) == ["documents"]
        assert [item["id"] for item in view["due_soon"]] == ["trip-tokyo-checklist-2"]

    def test_seed_update_remove(self, client: TestClient) -> None:
        trip = create_trip(client)
        seeded = client.post(f"/trips/{trip['id']}/checklist/default").json()
        assert len(seeded) == 5

        item_id = seeded[0]["id"]
        updated = client.patch(
            f"/trips/{trip['id']}/checklist/{item_id}", json={"notes": "Expires in March"}
        )
        assert updated.json()["notes"] == "Expires in March"

        assert client.delete(f"/trips/{trip['id']}/checklist/{item_id}").status_code == 204
        assert len(client.get(f"/trips/{trip['id']}").json()["checklist"]) == 4

    def test_unknown_item(self, client: TestClient) -> None:
        response = client.patch("/trips/trip-tokyo/checklist/nope", json={"completed": True})
        assert response.status_code == 404


class TestRelatedRoutes:
    """Test linking, destinations, expenses and violations."""

    def test_link_meeting_and_contact(self, client: TestClient) -> None:
        client.post("/trips/trip-london/meetings", json={"id": "meeting-9"})
        trip = client.post("/trips/trip-london/contacts", json={"id": "contact-3"}).json()

        assert trip["related_meetings"] == ["meeting-9"]
        assert trip["related_contacts"] == ["contact-3"]

    def test_expense_and_violations(self, client: TestClient) -> None:
        expense = client.post(
            "/trips/trip-london/expenses",
            json={"category": "meals", "amount": 2000.0, "description": "Team dinner",
                  "date": "2025-06-01"},
        )
        assert expense.status_code == 201

        violations = client.get("/trips/trip-london/violations").json()
        assert [v["code"] for v in violations] == ["OVER_BUDGET"]
        assert violations[0]["severity"] == "advisory"

    def test_add_destination(self, client: TestClient) -> None:
        response = client.post(
            "/trips/trip-tokyo/destinations",
            json={"city": "Osaka", "country": "Japan",
                  "arrival_date": "2025-06-18", "departure_date": "2025-06-20"},
        )

        assert response.status_code == 201
        assert response.json()["id"]


class TestTemplatesAndInsights:
    """Test template and insights routes."""

    def test_template_round_trip(self, client: TestClient) -> None:
        template = client.post(
            "/templates",
            json={"name": "Conference", "purpose": "conference", "default_duration": 3,
                  "checklist_template": [{"title": "Register", "category": "booking"}]},
        ).json()
        assert client.get("/templates").json()[0]["id"] == template["id"]

        trip = client.post(
            f"/templates/{template['id']}/trips",
            json={"title": "DevConf", "start_date": "2025-09-01", "end_date": "2025-09-04"},
        )
        assert trip.status_code == 201
        assert [item["title"] for item in trip.json()["checklist"]] == ["Register"]

    def test_unknown_template(self, client: TestClient) -> None:
        response = client.post(
            "/templates/missing/trips",
            json={"title": "x", "start_date": "2025-09-01", "end_date": "2025-09-04"},
        )
        assert response.status_code == 404

    def test_insights(self, client: TestClient) -> None:
        insights = client.get("/insights").json()

        assert insights["total_trips"] == 4
        assert insights["total_days"] == 20
        assert insights["total_spent"] == 3600.0
        assert len(insights["favorite_destinations"]) == 4


class TestOwnedEntityRoutes:
    """Test destination, traveler, expense and task routes."""

    def test_update_and_remove_destination(self, client: TestClient) -> None:
        created = client.post(
            "/trips/trip-tokyo/destinations",
            json={"city": "Osaka", "country": "Japan",
                  "arrival_date": "2025-06-18", "departure_date": "2025-06-20"},
        ).json()

        updated = client.patch(
            f"/trips/trip-tokyo/destinations/{created['id']}", json={"notes": "Near station"}
        )
        assert updated.status_code == 200
        assert updated.json()["notes"] == "Near station"

        path = f"/trips/trip-tokyo/destinations/{created['id']}"
        assert client.delete(path).status_code == 204
        assert client.delete(path).status_code == 404

    def test_add_and_remove_traveler(self, client: TestClient) -> None:
        traveler = client.post(
            "/trips/trip-tokyo/travelers", json={"name": "Kim", "role": "colleague"}
        )
        assert traveler.status_code == 201
        traveler_id = traveler.json()["id"]

        path = f"/trips/trip-tokyo/travelers/{traveler_id}"
        assert client.delete(path).status_code == 204
        assert client.delete(path).status_code == 404

    def test_update_expense(self, client: TestClient) -> None:
        expense = client.post(
            "/trips/trip-london/expenses",
            json={"category": "meals", "amount": 50.0, "description": "Lunch",
                  "date": "2025-06-01"},
        ).json()

        response = client.patch(
            f"/trips/trip-london/expenses/{expense['id']}", json={"approval_status": "approved"}
        )

        assert response.status_code == 200
        assert response.json()["approval_status"] == "approved"
        assert response.json()["amount"] == 50.0
        assert client.patch("/trips/trip-london/expenses/nope", json={}).status_code == 404

    def test_link_task(self, client: TestClient) -> None:
        response = client.post("/trips/trip-london/tasks", json={"id": "task-7"})

        assert response.status_code == 200
        assert response.json()["related_tasks"] == ["task-7"]


class TestBookingAndOptimizationRoutes:
    """Test transportation, accommodation and optimization routes."""

    def test_transportation_add_update(self, client: TestClient) -> None:
        leg = client.post(
            "/trips/trip-tokyo/transportation",
            json={"type": "train", "provider": "JR", "departure_location": "Tokyo",
                  "arrival_location": "Osaka", "departure_time": "2025-06-18T09:00:00Z",
                  "arrival_time": "2025-06-18T11:30:00Z"},
        )
        assert leg.status_code == 201
        assert leg.json()["duration"] == 150

        updated = client.patch(
            f"/trips/trip-tokyo/transportation/{leg.json()['id']}",
            json={"seat_number": "12A"},
        )
        assert updated.status_code == 200
        assert updated.json()["seat_number"] == "12A"

        missing = client.patch("/trips/trip-tokyo/transportation/nope", json={})
        assert missing.status_code == 404

    def test_transportation_rejects_reversed_times(self, client: TestClient) -> None:
        response = client.post(
            "/trips/trip-tokyo/transportation",
            json={"type": "car", "provider": "Rental", "departure_location": "A",
                  "arrival_location": "B", "departure_time": "2025-06-18T11:00:00Z",
                  "arrival_time": "2025-06-18T09:00:00Z"},
        )

        assert response.status_code == 422
        assert response.json()["detail"] == "Arrival time must be after departure time"

    def test_add_accommodation(self, client: TestClient) -> None:
        response = client.post(
            "/trips/trip-tokyo/accommodation",
            json={"type": "hotel", "name": "Park Hotel", "address": "Shiodome",
                  "check_in_date": "2025-06-15", "check_out_date": "2025-06-18"},
        )

        assert response.status_code == 201
        assert response.json()["nights"] == 3

    def test_optimizations(self, client: TestClient) -> None:
        response = client.get("/trips/trip-tokyo/optimizations")

        assert response.status_code == 200
        body = response.json()
        assert body["trip_id"] == "trip-tokyo"
        assert "cost" in [s["type"] for s in body["suggestions"]]
        assert body["estimated_savings"]["cost"] == sum(
            (s["savings"] or {}).get("cost") or 0 for s in body["suggestions"]
        )
        assert client.get("/trips/missing/optimizations").status_code == 404
