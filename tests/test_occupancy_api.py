from __future__ import annotations

from dataclasses import replace

from fastapi import FastAPI
from fastapi.testclient import TestClient

from app import create_app
from backend.controllers.occupancy_controller import router as occupancy_router
from backend.controllers.selection_controller import router as selection_router
from backend.utils.config import get_settings


def _build_test_settings(**overrides):
    get_settings.cache_clear()
    return replace(get_settings(), **overrides)


def _build_client(**overrides) -> TestClient:
    return TestClient(create_app(_build_test_settings(**overrides)))


def test_policy_endpoint_reports_defaults():
    client = _build_client()

    response = client.get("/policy")

    assert response.status_code == 200
    assert response.json() == {
        "max_adults_per_room": 2,
        "max_guests_per_room": 3,
        "family_exception_adults": 1,
    }


def test_check_occupancy_flags_crowded_room():
    client = _build_client()

    response = client.post(
        "/check_occupancy",
        json={"rooms": [{"adultCount": 2, "childCount": 2, "childAges": [3, 6]}]},
    )

    assert response.status_code == 200
    assert response.json() == {
        "exceeds_policy": True,
        "total_adults": 2,
        "total_children": 2,
        "room_count": 1,
    }


def test_check_occupancy_without_rooms():
    client = _build_client()

    response = client.post("/check_occupancy", json={})

    assert response.status_code == 200
    assert response.json()["exceeds_policy"] is False
    assert response.json()["room_count"] == 0


def test_check_occupancy_treats_negative_counts_as_zero():
    client = _build_client()

    response = client.post(
        "/check_occupancy",
        json={"rooms": [{"adult_count": -2, "child_count": 3}]},
    )

    assert response.status_code == 200
    assert response.json()["total_adults"] == 0
    assert response.json()["exceeds_policy"] is False


def test_check_occupancy_treats_unparseable_counts_as_zero():
    client = _build_client()

    response = client.post(
        "/check_occupancy",
        json={"rooms": [{"adultCount": "abc", "childCount": 1}]},
    )

    assert response.status_code == 200
    assert response.json()["total_adults"] == 0
    assert response.json()["total_children"] == 1
    assert response.json()["exceeds_policy"] is False


def test_redistribute_sanitizes_irregular_payloads():
    client = _build_client()

    response = client.post(
        "/redistribute",
        json={
            "rooms": [
                {"adultCount": "abc", "childCount": 1},
                {"adultCount": 2.5, "childCount": 1},
                {"adultCount": 2, "childCount": 2, "childAges": [3, None]},
            ]
        },
    )

    assert response.status_code == 200
    rooms = response.json()["produced_rooms"]
    assert [r["original_room_index"] for r in rooms] == [1, 2, 2]
    assert [(r["adult_count"], r["child_count"]) for r in rooms] == [(2, 1), (1, 1), (1, 1)]
    assert [r["child_ages"] for r in rooms] == [[], [3], []]


def test_redistribute_splits_rooms():
    client = _build_client()

    response = client.post(
        "/redistribute",
        json={
            "rooms": [
                {
                    "adultCount": 3,
                    "childCount": 5,
                    "childAges": [1, 2, 3, 4, 5],
                    "roomTypeCode": "FAM",
                    "roomVariant": "garden",
                    "roomName": "Family Room",
                    "roomIndex": 0,
                }
            ]
        },
    )

    assert response.status_code == 200
    payload = response.json()
    assert payload["total_rooms"] == 3
    assert payload["partial_placement"] is False
    assert payload["overflow_children"] == 0
    rooms = payload["produced_rooms"]
    assert [(r["adult_count"], r["child_count"]) for r in rooms] == [(1, 2), (1, 2), (1, 1)]
    assert [r["child_ages"] for r in rooms] == [[1, 2], [3, 4], [5]]
    assert [r["split_room_number"] for r in rooms] == [1, 2, 3]
    assert all(r["room_type_code"] == "FAM" for r in rooms)
    assert all(r["guest_details"] == [] for r in rooms)


def test_redistribute_empty_selection():
    client = _build_client()

    response = client.post("/redistribute", json={"rooms": []})

    assert response.status_code == 200
    assert response.json() == {
        "total_rooms": 0,
        "produced_rooms": [],
        "partial_placement": False,
        "overflow_children": 0,
    }


def test_selection_submit_then_split():
    client = _build_client()

    submit_response = client.post(
        "/selection/submit",
        json={"rooms": [{"adultCount": 2, "childCount": 2, "roomName": "Twin"}]},
    )
    assert submit_response.status_code == 200
    submitted = submit_response.json()
    assert submitted["decision"] == "split_choice_required"
    assert submitted["state"]["phase"] == "reviewing_split_choice"

    split_response = client.post("/selection/split", json={"state": submitted["state"]})
    assert split_response.status_code == 200
    split = split_response.json()
    assert split["decision"] == "committed"
    assert split["state"]["phase"] == "idle"
    assert split["redistribution"]["total_rooms"] == 2
    assert [room["adult_count"] for room in split["rooms"]] == [1, 1]
    assert all(room["room_name"] == "Twin" for room in split["rooms"])


def test_selection_proceed_anyway_sets_bypass():
    client = _build_client()
    submitted = client.post(
        "/selection/submit",
        json={"rooms": [{"adult_count": 3}]},
    ).json()

    response = client.post("/selection/proceed", json={"state": submitted["state"]})

    assert response.status_code == 200
    assert response.json()["state"]["policy_bypassed"] is True
    assert response.json()["rooms"][0]["adult_count"] == 3


def test_selection_split_without_pending_review_conflicts():
    client = _build_client()

    response = client.post("/selection/split", json={})

    assert response.status_code == 409


def test_selection_dismiss_returns_idle_state():
    client = _build_client()

    response = client.post(
        "/selection/dismiss",
        json={"state": {"phase": "idle", "policy_bypassed": True}},
    )

    assert response.status_code == 200
    assert response.json() == {"phase": "idle", "pending_rooms": [], "policy_bypassed": False}


def _build_bare_app() -> FastAPI:
    app = FastAPI()
    app.include_router(occupancy_router)
    app.include_router(selection_router)
    return app


def test_selection_services_are_created_on_demand():
    get_settings.cache_clear()
    client = TestClient(_build_bare_app())

    response = client.post(
        "/selection/submit",
        json={"rooms": [{"adult_count": 2, "child_count": 2}]},
    )

    assert response.status_code == 200
    assert response.json()["decision"] == "split_choice_required"


class _FailingSelectionService:
    def proceed_anyway(self, state):
        raise RuntimeError("boom")

    def dismiss(self, state):
        raise RuntimeError("boom")


def test_unexpected_selection_failures_map_to_500():
    app = _build_bare_app()
    app.state.selection_service = _FailingSelectionService()
    client = TestClient(app)

    proceed_response = client.post("/selection/proceed", json={})
    dismiss_response = client.post("/selection/dismiss", json={})

    assert proceed_response.status_code == 500
    assert proceed_response.json()["detail"] == "Failed to proceed with selection"
    assert dismiss_response.status_code == 500
    assert dismiss_response.json()["detail"] == "Failed to dismiss selection"
