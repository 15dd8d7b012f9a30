from cultural_spa.schemas.common import APIModel, MessageResponse, ErrorResponse
from cultural_spa.schemas.user import (
    Credentials, LoginCredentials, UserPublic, UserProfile, AuthResponse, PasswordChange, UserCreate, UserUpdate,
)
from cultural_spa.schemas.venue import VenueResponse, VenueSummary, VenueCreate, VenueUpdate
from cultural_spa.schemas.event import (
    EventResponse, EventListItem, EventListResponse, RandomEventsResponse,
    EventDetailResponse, EventCreate, EventUpdate, VenueDetail,
)
from cultural_spa.schemas.comment import CommentCreate, CommentResponse
from cultural_spa.schemas.favorite import FavoriteCreate, FavoriteResponse
from cultural_spa.schemas.admin import DashboardResponse, ImportResponse

__all__ = [
    "APIModel", "MessageResponse", "ErrorResponse",
    "Credentials", "LoginCredentials", "UserPublic", "UserProfile", "AuthResponse", "PasswordChange", "UserCreate", "UserUpdate",
    "VenueResponse", "VenueSummary", "VenueDetail", "VenueCreate", "VenueUpdate",
    "EventResponse", "EventListItem", "EventListResponse", "RandomEventsResponse",
    "EventDetailResponse", "EventCreate", "EventUpdate",
    "CommentCreate", "CommentResponse",
    "FavoriteCreate", "FavoriteResponse",
    "DashboardResponse", "ImportResponse",
]
