"""
Seeding of default accounts and of the venue/event dataset.

DATASET FORMAT
==============

``venues.json``: list of ``{"id", "name", "latitude", "longitude"}``.
``events.json``: list of events as produced by the preprocessing step:
``{"eventId", "title", "venueId", "dates": [...], "description", "presenter"}``.
``id``/``venueid``/``venue.id`` and a plain ``date`` string are accepted too.

Validation rules (all must hold or nothing is written):
  - exactly 10 venues, each with id, name and finite coordinates
  - every event has id, title, a date and a venue among those 10
  - every venue has at least 3 events
"""

import html
import json
import math
import re
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path

from sqlalchemy import delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from cultural_spa.core.logging import get_logger
from cultural_spa.core.metrics import dataset_imports
from cultural_spa.core.security import hash_password
from cultural_spa.models.event import Event
from cultural_spa.models.meta import DATASET_META_NAME, DatasetMeta
from cultural_spa.models.user import ROLE_ADMIN, ROLE_USER, User
from cultural_spa.models.venue import Venue

logger = get_logger(__name__)

EXPECTED_VENUES = 10
MIN_EVENTS_PER_VENUE = 3

DEFAULT_USERS = (
    ("admin", "admin123", ROLE_ADMIN),
    ("user1", "user123", ROLE_USER),
)

_WHITESPACE = re.compile(r"\s+")


class DatasetError(ValueError):
    """The dataset files are missing, malformed or fail validation."""


@dataclass
class Dataset:
    venues: list[dict]
    events: list[dict]


def clean_text(value) -> str:
    if value is None:
        return ""
    return _WHITESPACE.sub(" ", html.unescape(str(value))).strip()


def _read_list(path: Path) -> list:
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except FileNotFoundError as exc:
        raise DatasetError(f"{path.name} not found in {path.parent}") from exc
    except json.JSONDecodeError as exc:
        raise DatasetError(f"{path.name} is not valid JSON: {exc}") from exc
    if not isinstance(data, list):
        raise DatasetError(f"{path.name} must contain a JSON array")
    return data


def _to_float(value) -> float:
    try:
        return float(value)
    except (TypeError, ValueError):
        return math.nan


def _venue_row(raw: dict) -> dict:
    return {
        "id": clean_text(raw.get("id")),
        "name": clean_text(raw.get("name")),
        "latitude": _to_float(raw.get("latitude")),
        "longitude": _to_float(raw.get("longitude")),
    }


def _event_row(raw: dict) -> dict:
    venue = raw.get("venue") if isinstance(raw.get("venue"), dict) else {}
    venue_id = raw.get("venueId", raw.get("venueid", venue.get("id")))
    dates = raw.get("dates")
    if isinstance(dates, list):
        date = "; ".join(clean_text(d) for d in dates if clean_text(d))
    else:
        date = clean_text(raw.get("date"))
    return {
        "id": clean_text(raw.get("eventId", raw.get("id"))),
        "title": clean_text(raw.get("title")),
        "venue_id": clean_text(venue_id),
        "date": date,
        "description": clean_text(raw.get("description")),
        "presenter": clean_text(raw.get("presenter")),
    }


def validate_dataset(venues: list[dict], events: list[dict]) -> None:
    if len(venues) != EXPECTED_VENUES:
        raise DatasetError(f"Expected {EXPECTED_VENUES} venues, got {len(venues)}")

    for venue in venues:
        if not venue["id"]:
            raise DatasetError("Venue missing id")
        if not venue["name"]:
            raise DatasetError(f"Venue {venue['id']} missing name")
        if not math.isfinite(venue["latitude"]) or not math.isfinite(venue["longitude"]):
            raise DatasetError(f"Venue {venue['id']} has invalid coordinates")

    venue_ids = {venue["id"] for venue in venues}
    counts = dict.fromkeys(venue_ids, 0)
    for event in events:
        if not event["id"]:
            raise DatasetError("Event missing id")
        if not event["title"]:
            raise DatasetError(f"Event {event['id']} missing title")
        if event["venue_id"] not in venue_ids:
            raise DatasetError(f"Event {event['id']} references unknown venue {event['venue_id']!r}")
        if not event["date"]:
            raise DatasetError(f"Event {event['id']} missing date")
        counts[event["venue_id"]] += 1

    for venue_id, count in sorted(counts.items()):
        if count < MIN_EVENTS_PER_VENUE:
            raise DatasetError(f"Venue {venue_id} has only {count} events (< {MIN_EVENTS_PER_VENUE})")


def load_dataset(dataset_dir: Path) -> Dataset:
    dataset_dir = Path(dataset_dir)
    venues = [_venue_row(v) for v in _read_list(dataset_dir / "venues.json")]
    events = [_event_row(e) for e in _read_list(dataset_dir / "events.json")]
    validate_dataset(venues, events)
    return Dataset(venues=venues, events=events)


async def seed_users_if_needed(db: AsyncSession) -> bool:
    """Create the default admin and user accounts unless an admin already exists."""
    admin = await db.execute(select(User.id).where(User.role == ROLE_ADMIN).limit(1))
    if admin.scalar_one_or_none() is not None:
        logger.info("user_seed_skipped", reason="admin_exists")
        return False

    for username, password, role in DEFAULT_USERS:
        existing = await db.execute(select(User.id).where(User.username == username))
        if existing.scalar_one_or_none() is not None:
            continue
        db.add(User(username=username, password_hash=hash_password(password), role=role))
    await db.commit()

    logger.info("users_seeded", usernames=[u for u, _, _ in DEFAULT_USERS])
    return True


async def get_dataset_updated_at(db: AsyncSession) -> datetime | None:
    meta = await db.get(DatasetMeta, DATASET_META_NAME)
    return meta.last_updated if meta else None


async def seed_dataset_if_needed(db: AsyncSession, dataset_dir: Path, force: bool = False) -> bool:
    """
    Replace venues and events with the dataset files when the venue table is
    empty (or when forced), then stamp the dataset meta record.
    """
    venue_count = (await db.execute(select(func.count()).select_from(Venue))).scalar_one()
    if venue_count and not force:
        dataset_imports.labels(result="skipped").inc()
        logger.info("dataset_seed_skipped", venue_count=venue_count)
        return False

    try:
        dataset = load_dataset(dataset_dir)
    except DatasetError as exc:
        dataset_imports.labels(result="failed").inc()
        logger.error("dataset_validation_failed", error=str(exc), dataset_dir=str(dataset_dir))
        raise

    await db.execute(delete(Event))
    await db.execute(delete(Venue))
    db.add_all(Venue(**row) for row in dataset.venues)
    db.add_all(Event(**row) for row in dataset.events)

    now = datetime.now(timezone.utc)
    meta = await db.get(DatasetMeta, DATASET_META_NAME)
    if meta:
        meta.last_updated = now
    else:
        db.add(DatasetMeta(name=DATASET_META_NAME, last_updated=now))
    await db.commit()

    dataset_imports.labels(result="seeded").inc()
    logger.info(
        "dataset_seeded",
        venues=len(dataset.venues),
        events=len(dataset.events),
        last_updated=now.isoformat(),
    )
    return True
