"""
shotgun-api - activity feed and entity access for a Shotgun site.

Fetches an entity's activity stream, keeps the Note and Version updates,
and turns them into uniform ``ActivityItem`` records ready for display.

Quick start:
    from shotgun_api import ShotgunClient

    with ShotgunClient() as client:
        page = client.fetch_activity("Shot", 1234)
        for item in page:
            print(item.created_at, item.title)
"""

__version__ = "0.1.0"

from shotgun_api.activity import ActivityFeedPage, ActivityItem, fetch_activity
from shotgun_api.client import ShotgunClient
from shotgun_api.core.errors import ShotgunError
from shotgun_api.core.settings import ShotgunSettings

__all__ = [
    "__version__",
    "ActivityFeedPage",
    "ActivityItem",
    "ShotgunClient",
    "ShotgunError",
    "ShotgunSettings",
    "fetch_activity",
]
