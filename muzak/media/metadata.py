"""Track metadata as read from media files."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

_COUNT_FIELDS = ("bpm", "track_current", "track_max", "disc_current", "disc_max")


@dataclass
class Metadata:
    """Tags describing a track; every field is optional."""

    name: str | None = None
    artist: str | None = None
    album_artist: str | None = None
    artist_sort: str | None = None
    original_artist: str | None = None
    composer: str | None = None
    album: str | None = None
    sort_album: str | None = None
    genre: str | None = None
    grouping: str | None = None
    bpm: int | None = None
    compilation: bool = False
    date: datetime | None = None

    track_current: int | None = None
    track_max: int | None = None
    disc_current: int | None = None
    disc_max: int | None = None

    label: str | None = None
    catalog: str | None = None
    isrc: str | None = None

    def __post_init__(self) -> None:
        for field_name in _COUNT_FIELDS:
            value = getattr(self, field_name)
            if value is None:
                continue
            if isinstance(value, bool) or not isinstance(value, int):
                raise TypeError(f"{field_name} must be an integer")
            if value < 0:
                raise ValueError(f"{field_name} cannot be negative: {value}")