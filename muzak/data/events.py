"""Commands sent to the background data worker."""

from __future__ import annotations

import enum
import os
from dataclasses import dataclass
from pathlib import Path

_I64_MIN = -(2**63)
_I64_MAX = 2**63 - 1
_U64_MAX = 2**64 - 1


class ImageKind(enum.Enum):
    """What an image being decoded is for."""

    CURRENT_ALBUM_ART = enum.auto()
    CACHED_IMAGE = enum.auto()
    ALBUM_ART = enum.auto()
    ARTIST_PORTRAIT = enum.auto()


_ID_RANGES = {
    ImageKind.CACHED_IMAGE: (0, _U64_MAX),
    ImageKind.ALBUM_ART: (_I64_MIN, _I64_MAX),
    ImageKind.ARTIST_PORTRAIT: (_I64_MIN, _I64_MAX),
}


@dataclass(frozen=True)
class ImageType:
    """Identifies an image: its kind and, except for the current album art, an id."""

    kind: ImageKind
    id: int | None = None

    def __post_init__(self) -> None:
        bounds = _ID_RANGES.get(self.kind)
        if bounds is None:
            if self.id is not None:
                raise ValueError(f"{self.kind.name} images carry no id")
            return
        if isinstance(self.id, bool) or not isinstance(self.id, int):
            raise TypeError(f"{self.kind.name} images need an integer id")
        low, high = bounds
        if not low <= self.id <= high:
            raise ValueError(f"id out of range for {self.kind.name}: {self.id}")


class ImageLayout(enum.Enum):
    """Channel order wanted for a decoded image."""

    BGR = enum.auto()
    RGB = enum.auto()


@dataclass(frozen=True)
class DecodeImage:
    """Decode encoded image data, optionally as a thumbnail."""

    data: bytes
    image_type: ImageType
    layout: ImageLayout
    thumb: bool = False

    def __post_init__(self) -> None:
        if isinstance(self.data, str) or not isinstance(self.data, (bytes, bytearray, memoryview)):
            raise TypeError("image data must be bytes")
        object.__setattr__(self, "data", bytes(self.data))


@dataclass(frozen=True)
class EvictQueueCache:
    """Drop cached images that nothing uses any more."""


@dataclass(frozen=True)
class ReadMetadata:
    """Open a file and read its metadata."""

    path: Path

    def __post_init__(self) -> None:
        if not isinstance(self.path, Path):
            object.__setattr__(self, "path", Path(os.fspath(self.path)))


DataCommand = DecodeImage | EvictQueueCache | ReadMetadata