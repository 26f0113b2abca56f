"""
Catalog entities exposed to the host application.

Exports:
- ShowKind, ShowStatus, FeedCategory: enumerations of the catalog model
- ShowEntry: Minimal listing record (search, archive)
- Show: Full detail record
- Season: Derived episode-index grouping
- Episode: Single episode of a show
- VideoAsset: Playable URL with its request headers
- FeedCollection: Named, ordered list of ShowEntry
"""

from hachi.core.entities.catalog import (
    Episode,
    FeedCategory,
    FeedCollection,
    Season,
    Show,
    ShowEntry,
    ShowKind,
    ShowStatus,
    VideoAsset,
)

__all__ = [
    "Episode",
    "FeedCategory",
    "FeedCollection",
    "Season",
    "Show",
    "ShowEntry",
    "ShowKind",
    "ShowStatus",
    "VideoAsset",
]
