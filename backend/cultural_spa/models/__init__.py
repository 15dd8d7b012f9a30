from cultural_spa.models.user import User
from cultural_spa.models.venue import Venue
from cultural_spa.models.event import Event
from cultural_spa.models.comment import Comment
from cultural_spa.models.favorite import Favorite
from cultural_spa.models.meta import DatasetMeta

__all__ = ["User", "Venue", "Event", "Comment", "Favorite", "DatasetMeta"]
