"""
Flat per-entity accessors built on the Query Gateway.
"""

from shotgun_api.entities.attachments import AttachmentData, get_attachment
from shotgun_api.entities.events import EventData, get_new_events, new_event
from shotgun_api.entities.notes import NoteData, get_notes_for_task
from shotgun_api.entities.versions import (
    VersionData,
    find_one_version,
    get_version,
    get_versions_for_task,
    set_version_field,
)

__all__ = [
    "AttachmentData",
    "get_attachment",
    "EventData",
    "get_new_events",
    "new_event",
    "NoteData",
    "get_notes_for_task",
    "VersionData",
    "find_one_version",
    "get_version",
    "get_versions_for_task",
    "set_version_field",
]
