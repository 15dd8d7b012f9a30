"""
Tests for admin endpoints: dashboard, venue/event management and dataset import.
"""

import json

import pytest
from httpx import AsyncClient

from cultural_spa.core.config import get_settings


@pytest.mark.asyncio
async def test_dashboard_after_seed(client: AsyncClient, seeded):
    """The seeded admin logs in and sees the dataset counts."""
    login = await client.post("/api/users/login", json={"username": "admin", "password": "admin123"})
    assert login.status_code == 200
    headers = {"Authorization": f"Bearer {login.json()['accessToken']}"}

    response = await client.get("/api/admin/dashboard", headers=headers)
    assert response.status_code == 200
    assert response.json() == {"venueCount": 10, "eventCount": len(seeded["events"])}


@pytest.mark.asyncio
async def test_seeded_member_cannot_open_dashboard(client: AsyncClient, seeded):
    login = await client.post("/api/users/login", json={"username": "user1", "password": "user123"})
    headers = {"Authorization": f"Bearer {login.json()['accessToken']}"}
    response = await client.get("/api/admin/dashboard", headers=headers)
    assert response.status_code == 403


@pytest.mark.asyncio
async def test_venue_crud(client: AsyncClient, admin_headers):
    payload = {"id": "v9", "name": "Studio", "latitude": 22.28, "longitude": 114.15}
    created = await client.post("/api/admin/venues", json=payload, headers=admin_headers)
    assert created.status_code == 201
    assert created.json() == payload

    duplicate = await client.post("/api/admin/venues", json=payload, headers=admin_headers)
    assert duplicate.status_code == 409

    updated = await client.patch("/api/admin/venues/v9", json={"name": "Black Box"}, headers=admin_headers)
    assert updated.status_code == 200
    assert updated.json()["name"] == "Black Box"
    assert updated.json()["latitude"] == 22.28

    deleted = await client.delete("/api/admin/venues/v9", headers=admin_headers)
    assert deleted.status_code == 204

    missing = await client.delete("/api/admin/venues/v9", headers=admin_headers)
    assert missing.status_code == 404


@pytest.mark.asyncio
async def test_venue_coordinates_validated(client: AsyncClient, admin_headers):
    payload = {"id": "v9", "name": "Nowhere", "latitude": 123, "longitude": 114.15}
    response = await client.post("/api/admin/venues", json=payload, headers=admin_headers)
    assert response.status_code == 400
    assert "latitude" in response.json()["error"]["fieldErrors"]


@pytest.mark.asyncio
async def test_event_crud(client: AsyncClient, venue, admin_headers):
    payload = {"id": "e1", "title": "Gala", "venueId": "v1", "date": "2025-12-31", "presenter": "LCSD"}
    created = await client.post("/api/admin/events", json=payload, headers=admin_headers)
    assert created.status_code == 201
    assert created.json()["description"] == ""

    duplicate = await client.post("/api/admin/events", json=payload, headers=admin_headers)
    assert duplicate.status_code == 409

    updated = await client.patch("/api/admin/events/e1", json={"title": "New Year Gala"}, headers=admin_headers)
    assert updated.json()["title"] == "New Year Gala"

    moved = await client.patch("/api/admin/events/e1", json={"venueId": "ghost"}, headers=admin_headers)
    assert moved.status_code == 404

    deleted = await client.delete("/api/admin/events/e1", headers=admin_headers)
    assert deleted.status_code == 204


@pytest.mark.asyncio
async def test_event_requires_existing_venue(client: AsyncClient, admin_headers):
    payload = {"id": "e1", "title": "Gala", "venueId": "ghost", "date": "2025-12-31"}
    response = await client.post("/api/admin/events", json=payload, headers=admin_headers)
    assert response.status_code == 404
    assert response.json() == {"error": "Venue not found"}


@pytest.mark.asyncio
async def test_deleting_venue_leaves_events_orphaned(client: AsyncClient, seeded, admin_headers):
    """Venue deletion does not cascade; events stay and lose their venue name."""
    venue_id = seeded["venues"][0]["id"]
    event_ids = {e["eventId"] for e in seeded["events"] if e["venueId"] == venue_id}

    response = await client.delete(f"/api/admin/venues/{venue_id}", headers=admin_headers)
    assert response.status_code == 204

    dashboard = (await client.get("/api/admin/dashboard", headers=admin_headers)).json()
    assert dashboard == {"venueCount": 9, "eventCount": len(seeded["events"])}

    listing = await client.get("/api/events", params={"venueid": venue_id}, headers=admin_headers)
    items = listing.json()["items"]
    assert {item["id"] for item in items} == event_ids
    assert all(item["venueName"] is None for item in items)

    detail = await client.get(f"/api/events/{next(iter(event_ids))}", headers=admin_headers)
    assert detail.status_code == 200
    assert detail.json()["venue"] is None


@pytest.mark.asyncio
async def test_import_disabled_by_default(client: AsyncClient, admin_headers):
    response = await client.post("/api/admin/import", headers=admin_headers)
    assert response.status_code == 403
    assert response.json() == {"error": "Dataset import is disabled"}


@pytest.mark.asyncio
async def test_import_reloads_dataset(client: AsyncClient, seeded, admin_headers, monkeypatch):
    monkeypatch.setattr(get_settings(), "ALLOW_IMPORT", True)
    await client.delete(f"/api/admin/venues/{seeded['venues'][0]['id']}", headers=admin_headers)

    response = await client.post("/api/admin/import", headers=admin_headers)
    assert response.status_code == 200
    data = response.json()
    assert data["venueCount"] == 10
    assert data["eventCount"] == len(seeded["events"])
    assert data["lastUpdated"]


@pytest.mark.asyncio
async def test_import_rejects_invalid_dataset(client: AsyncClient, seeded, admin_headers, monkeypatch, tmp_path):
    """A failed validation leaves the current data untouched."""
    (tmp_path / "venues.json").write_text(json.dumps(seeded["venues"][:3]), encoding="utf-8")
    (tmp_path / "events.json").write_text(json.dumps(seeded["events"]), encoding="utf-8")
    settings = get_settings()
    monkeypatch.setattr(settings, "ALLOW_IMPORT", True)
    monkeypatch.setattr(settings, "DATASET_DIR", tmp_path)

    response = await client.post("/api/admin/import", headers=admin_headers)
    assert response.status_code == 400
    assert response.json() == {"error": "Expected 10 venues, got 3"}

    dashboard = (await client.get("/api/admin/dashboard", headers=admin_headers)).json()
    assert dashboard["venueCount"] == 10
