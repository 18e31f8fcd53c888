"""
Activity feed ingestion and normalization.

    fetcher  ──>  dispatch  ──>  normalizers  ──>  ActivityFeedPage
                                     │
                                attachments (Note links)
"""

from shotgun_api.activity.models import (
    ActivityFeedPage,
    ActivityItem,
    ActivityType,
    Actor,
    LinkField,
    NotePayload,
    RawUpdateEntry,
    VersionPayload,
)
from shotgun_api.activity.attachments import AttachmentResolver
from shotgun_api.activity.normalizers import (
    normalize_note,
    normalize_version,
    register_normalizer,
)
from shotgun_api.activity.dispatch import dispatch_updates, normalize_update
from shotgun_api.activity.fetcher import ActivityFeedFetcher, fetch_activity

__all__ = [
    "ActivityFeedPage",
    "ActivityItem",
    "ActivityType",
    "Actor",
    "LinkField",
    "NotePayload",
    "RawUpdateEntry",
    "VersionPayload",
    "AttachmentResolver",
    "normalize_note",
    "normalize_version",
    "register_normalizer",
    "dispatch_updates",
    "normalize_update",
    "ActivityFeedFetcher",
    "fetch_activity",
]
