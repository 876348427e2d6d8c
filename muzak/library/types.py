"""Library records (artists, albums, tracks) and how albums appear in a table."""

from __future__ import annotations

import dataclasses
import enum
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import ClassVar


class AlbumSortMethod(enum.Enum):
    """Orderings in which albums can be listed."""

    TITLE_ASC = enum.auto()
    TITLE_DESC = enum.auto()
    ARTIST_ASC = enum.auto()
    ARTIST_DESC = enum.auto()
    RELEASE_ASC = enum.auto()
    RELEASE_DESC = enum.auto()
    LABEL_ASC = enum.auto()
    LABEL_DESC = enum.auto()
    CATALOG_ASC = enum.auto()
    CATALOG_DESC = enum.auto()


class AlbumMethod(enum.Enum):
    """Which album artwork to keep when loading an album."""

    FULL_QUALITY = enum.auto()
    THUMBNAIL = enum.auto()


_SORTS = {
    ("Title", True): AlbumSortMethod.TITLE_ASC,
    ("Title", False): AlbumSortMethod.TITLE_DESC,
    ("Artist", True): AlbumSortMethod.ARTIST_ASC,
    ("Artist", False): AlbumSortMethod.ARTIST_DESC,
    ("Date", True): AlbumSortMethod.RELEASE_ASC,
    ("Date", False): AlbumSortMethod.RELEASE_DESC,
    ("Label", True): AlbumSortMethod.LABEL_ASC,
    ("Label", False): AlbumSortMethod.LABEL_DESC,
    ("Catalog Number", True): AlbumSortMethod.CATALOG_ASC,
    ("Catalog Number", False): AlbumSortMethod.CATALOG_DESC,
}


def album_sort_method(column: str | None, ascending: bool = True) -> AlbumSortMethod:
    """The album ordering for a table column; unknown or no column sorts by artist."""
    return _SORTS.get((column, bool(ascending)), AlbumSortMethod.ARTIST_ASC)


@dataclass(frozen=True, kw_only=True)
class Artist:
    """An artist in the library."""

    id: int
    created_at: datetime
    name: str | None = None
    name_sortable: str | None = None
    bio: str | None = None
    image: bytes | None = None
    image_mime: str | None = None
    tags: list[str] | None = None


@dataclass(frozen=True, kw_only=True)
class Album:
    """An album in the library, with optional full-size artwork and thumbnail."""

    TABLE_NAME: ClassVar[str] = "Albums"
    COLUMN_NAMES: ClassVar[tuple[str, ...]] = (
        "Title",
        "Artist",
        "Date",
        "Label",
        "Catalog Number",
    )
    DEFAULT_COLUMN_WIDTHS: ClassVar[tuple[float, ...]] = (300.0, 200.0, 100.0, 150.0, 200.0)
    COLUMN_MONOSPACE: ClassVar[tuple[bool, ...]] = (False, False, True, False, False)
    HAS_IMAGES: ClassVar[bool] = True

    id: int
    title: str
    title_sortable: str
    artist_id: int
    created_at: datetime
    release_date: datetime | None = None
    image: bytes | None = None
    thumb: bytes | None = None
    image_mime: str | None = None
    tags: list[str] | None = None
    label: str | None = None
    catalog_number: str | None = None
    isrc: str | None = None

    def with_method(self, method: AlbumMethod) -> Album:
        """A copy keeping only the artwork the method asks for."""
        if method is AlbumMethod.FULL_QUALITY:
            return dataclasses.replace(self, thumb=None)
        if method is AlbumMethod.THUMBNAIL:
            return dataclasses.replace(self, image=None)
        raise ValueError(f"unknown album method: {method!r}")

    def column(self, column: str, artist_name: str | None = None) -> str | None:
        """The text shown in a table column; the artist's name is supplied by the caller."""
        if column == "Title":
            return self.title
        if column == "Artist":
            return artist_name
        if column == "Date":
            return None if self.release_date is None else self.release_date.strftime("%m/%d/%y")
        if column == "Label":
            return self.label
        if column == "Catalog Number":
            return self.catalog_number
        return None

    def table_id(self) -> tuple[int, str]:
        """The row identifier: the id as an unsigned 32-bit value and the title."""
        return (self.id & 0xFFFF_FFFF, self.title)


@dataclass(frozen=True, kw_only=True)
class Track:
    """A track in the library and where its file lives."""

    id: int
    title: str
    title_sortable: str
    duration: int
    created_at: datetime
    location: Path
    album_id: int | None = None
    track_number: int | None = None
    disc_number: int | None = None
    genres: list[str] | None = None
    tags: list[str] | None = None

    def __post_init__(self) -> None:
        if not isinstance(self.location, Path):
            object.__setattr__(self, "location", Path(self.location))