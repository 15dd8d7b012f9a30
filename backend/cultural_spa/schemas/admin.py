from datetime import datetime

from cultural_spa.schemas.common import APIModel


class DashboardResponse(APIModel):
    venue_count: int
    event_count: int


class ImportResponse(DashboardResponse):
    last_updated: datetime
