"""
Tests for event listing, filtering, pagination, random picks and detail.
"""

import pytest
from httpx import AsyncClient

from cultural_spa.models import Event


@pytest.mark.asyncio
async def test_list_events_defaults(client: AsyncClient, seeded, member_headers):
    response = await client.get("/api/events", headers=member_headers)
    assert response.status_code == 200
    data = response.json()
    assert data["total"] == len(seeded["events"])
    assert data["limit"] == 50
    assert data["offset"] == 0
    assert len(data["items"]) == len(seeded["events"])


@pytest.mark.asyncio
async def test_sort_by_title_desc_with_limit(client: AsyncClient, seeded, member_headers):
    """sort=title&order=desc&limit=5 returns the last five titles."""
    response = await client.get(
        "/api/events",
        params={"sort": "title", "order": "desc", "limit": 5},
        headers=member_headers,
    )
    assert response.status_code == 200
    titles = [item["title"] for item in response.json()["items"]]
    expected = sorted((event["title"] for event in seeded["events"]), reverse=True)[:5]
    assert titles == expected


@pytest.mark.asyncio
async def test_pagination_is_stable(client: AsyncClient, seeded, member_headers):
    """Consecutive pages do not overlap and together cover every event."""
    seen = []
    for offset in range(0, len(seeded["events"]), 10):
        response = await client.get(
            "/api/events",
            params={"sort": "date", "limit": 10, "offset": offset},
            headers=member_headers,
        )
        seen.extend(item["id"] for item in response.json()["items"])
    assert len(seen) == len(set(seen)) == len(seeded["events"])


@pytest.mark.asyncio
async def test_filter_by_venue(client: AsyncClient, seeded, member_headers):
    venue_id = seeded["venues"][1]["id"]
    response = await client.get("/api/events", params={"venueid": venue_id}, headers=member_headers)
    data = response.json()
    expected = [event for event in seeded["events"] if event["venueId"] == venue_id]
    assert data["total"] == len(expected)
    assert {item["venueId"] for item in data["items"]} == {venue_id}


@pytest.mark.asyncio
async def test_title_search_is_case_insensitive(client: AsyncClient, seeded, member_headers):
    response = await client.get("/api/events", params={"q": "OPERA"}, headers=member_headers)
    data = response.json()
    expected = [event for event in seeded["events"] if "opera" in event["title"].lower()]
    assert expected
    assert data["total"] == len(expected)
    assert all("opera" in item["title"].lower() for item in data["items"])


@pytest.mark.asyncio
async def test_title_search_treats_wildcards_literally(client: AsyncClient, seeded, member_headers):
    response = await client.get("/api/events", params={"q": "%"}, headers=member_headers)
    assert response.json()["total"] == 0


@pytest.mark.asyncio
async def test_filter_by_date_range(client: AsyncClient, venue, db_session, member_headers):
    db_session.add_all([
        Event(id="e1", title="Early", venue_id="v1", date="2025-01-10", description="", presenter="A"),
        Event(id="e2", title="Middle", venue_id="v1", date="2025-06-10", description="", presenter="A"),
        Event(id="e3", title="Late", venue_id="v1", date="2025-12-10", description="", presenter="B"),
    ])
    await db_session.commit()

    response = await client.get(
        "/api/events",
        params={"dateFrom": "2025-02-01", "dateTo": "2025-12-01"},
        headers=member_headers,
    )
    assert [item["id"] for item in response.json()["items"]] == ["e2"]

    response = await client.get("/api/events", params={"presenter": "b"}, headers=member_headers)
    assert [item["id"] for item in response.json()["items"]] == ["e3"]


@pytest.mark.asyncio
async def test_list_items_carry_venue_name(client: AsyncClient, venue, db_session, member_headers):
    db_session.add_all([
        Event(id="e1", title="Hosted", venue_id="v1", date="2025-01-10", description="", presenter=""),
        Event(id="e2", title="Orphan", venue_id="gone", date="2025-01-11", description="", presenter=""),
    ])
    await db_session.commit()

    response = await client.get("/api/events", params={"sort": "id"}, headers=member_headers)
    items = response.json()["items"]
    assert [(item["id"], item["venueName"]) for item in items] == [("e1", "Test Hall"), ("e2", None)]


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "params",
    [{"limit": 0}, {"limit": 101}, {"offset": -1}, {"sort": "venue"}, {"order": "up"}],
)
async def test_invalid_query_params(client: AsyncClient, member_headers, params):
    response = await client.get("/api/events", params=params, headers=member_headers)
    assert response.status_code == 400
    assert "fieldErrors" in response.json()["error"]


@pytest.mark.asyncio
async def test_random_events(client: AsyncClient, seeded, member_headers):
    response = await client.get("/api/events/random", headers=member_headers)
    assert response.status_code == 200
    items = response.json()["items"]
    assert len(items) == 3
    assert len({item["id"] for item in items}) == 3


@pytest.mark.asyncio
async def test_random_events_for_venue(client: AsyncClient, seeded, member_headers):
    venue_id = seeded["venues"][0]["id"]
    response = await client.get("/api/events/random", params={"venueid": venue_id}, headers=member_headers)
    items = response.json()["items"]
    assert 0 < len(items) <= 3
    assert {item["venueId"] for item in items} == {venue_id}


@pytest.mark.asyncio
async def test_random_events_empty(client: AsyncClient, member_headers):
    response = await client.get("/api/events/random", headers=member_headers)
    assert response.json() == {"items": []}


@pytest.mark.asyncio
async def test_get_event_with_venue(client: AsyncClient, seeded, member_headers):
    event = seeded["events"][0]
    response = await client.get(f"/api/events/{event['eventId']}", headers=member_headers)
    assert response.status_code == 200
    data = response.json()
    assert data["event"]["id"] == event["eventId"]
    assert data["event"]["title"] == event["title"]
    assert data["venue"]["id"] == event["venueId"]


@pytest.mark.asyncio
async def test_get_missing_event(client: AsyncClient, member_headers):
    response = await client.get("/api/events/404404", headers=member_headers)
    assert response.status_code == 404
    assert response.json() == {"error": "Event not found"}
