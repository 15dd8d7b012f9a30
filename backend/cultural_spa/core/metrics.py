"""
Prometheus counters for authentication, authorization and content writes.
Exposed at /metrics.
"""

from fastapi import Response
from prometheus_client import CONTENT_TYPE_LATEST, Counter, generate_latest

auth_attempts = Counter(
    "auth_attempts_total",
    "Authentication flow outcomes",
    ["action", "result"],  # login/register/refresh/change_password; success/failure/conflict
)

authorization_denials = Counter(
    "authorization_denials_total",
    "Requests rejected by the auth dependencies",
    ["reason"],  # missing_token, invalid_token, forbidden
)

comments_created = Counter(
    "comments_created_total",
    "Comments posted on venues",
)

favorites_changed = Counter(
    "favorites_changed_total",
    "Favorite bookmarks added or removed",
    ["operation"],
)

dataset_imports = Counter(
    "dataset_imports_total",
    "Venue/event dataset imports",
    ["result"],  # seeded, skipped, failed
)


def metrics_endpoint() -> Response:
    return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)


def record_auth_attempt(action: str, result: str):
    auth_attempts.labels(action=action, result=result).inc()


def record_denial(reason: str):
    authorization_denials.labels(reason=reason).inc()
