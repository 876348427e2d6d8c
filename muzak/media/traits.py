"""Interfaces implemented by media providers and media plugins."""

from __future__ import annotations

import abc
from typing import Any, BinaryIO, ClassVar

from muzak.devices.format import ChannelSpec
from muzak.media.metadata import Metadata
from muzak.media.playback import PlaybackFrame


class MediaProvider(abc.ABC):
    """Opens media files and reads samples, metadata and artwork from them.

    The playback pipeline is: open, start playback, read metadata, read samples
    repeatedly, then open the next file. During library indexing a provider is asked
    to open, start and read metadata many times in quick succession.
    """

    @abc.abstractmethod
    def open(self, file: BinaryIO, ext: str | None) -> None:
        """Open a file, using the extension as a hint when given; raises ``OpenError``."""

    @abc.abstractmethod
    def close(self) -> None:
        """Release the open file; raises ``CloseError``."""

    @abc.abstractmethod
    def start_playback(self) -> None:
        """Prepare to decode the open file; raises ``PlaybackStartError``."""

    @abc.abstractmethod
    def stop_playback(self) -> None:
        """Finish decoding; raises ``PlaybackStopError``."""

    @abc.abstractmethod
    def seek(self, time: float) -> None:
        """Seek to ``time`` seconds; raises ``SeekError``."""

    @abc.abstractmethod
    def read_samples(self) -> PlaybackFrame:
        """Decode the next frame; raises ``PlaybackReadError``."""

    @abc.abstractmethod
    def frame_duration(self) -> int:
        """Usual number of samples per frame; raises ``FrameDurationError``."""

    @abc.abstractmethod
    def read_metadata(self) -> Metadata:
        """Metadata of the open file; raises ``MetadataError``."""

    @abc.abstractmethod
    def metadata_updated(self) -> bool:
        """Whether metadata changed since the last ``read_metadata`` call."""

    @abc.abstractmethod
    def read_image(self) -> bytes | None:
        """Encoded artwork of the open file, if any; raises ``MetadataError``."""

    @abc.abstractmethod
    def duration_secs(self) -> int:
        """Length of the open file in seconds; raises ``TrackDurationError``."""

    @abc.abstractmethod
    def position_secs(self) -> int:
        """Current playback position in seconds; raises ``TrackDurationError``."""

    @abc.abstractmethod
    def channels(self) -> ChannelSpec:
        """Channels of the track being decoded; raises ``ChannelRetrievalError``."""


_STRING_CONSTANTS = ("NAME", "VERSION")
_SEQUENCE_CONSTANTS = ("SUPPORTED_MIMETYPES", "SUPPORTED_EXTENSIONS")
_FLAG_CONSTANTS = (
    "PROVIDES_METADATA",
    "PROVIDES_DECODING",
    "ALWAYS_CHECK_METADATA",
    "INDEXING_SUPPORTED",
)


def _check_plugin_constants(cls: type) -> None:
    missing = [
        name
        for name in (*_STRING_CONSTANTS, *_SEQUENCE_CONSTANTS, *_FLAG_CONSTANTS)
        if not hasattr(cls, name)
    ]
    if missing:
        raise TypeError(f"{cls.__name__} does not define {', '.join(missing)}")
    for name in _STRING_CONSTANTS:
        if not isinstance(getattr(cls, name), str):
            raise TypeError(f"{cls.__name__}.{name} must be a string")
    for name in _SEQUENCE_CONSTANTS:
        value = getattr(cls, name)
        if isinstance(value, (str, bytes)) or not isinstance(value, (tuple, list, frozenset)):
            raise TypeError(f"{cls.__name__}.{name} must be a collection of strings")
        if not all(isinstance(item, str) for item in value):
            raise TypeError(f"{cls.__name__}.{name} must hold only strings")
    for name in _FLAG_CONSTANTS:
        if not isinstance(getattr(cls, name), bool):
            raise TypeError(f"{cls.__name__}.{name} must be a bool")


class MediaPlugin(MediaProvider):
    """A media provider that describes its name, version and capabilities.

    Mime-types list what the plugin decodes; extensions list what it indexes. A
    metadata-only plugin must set ``ALWAYS_CHECK_METADATA``.
    """

    NAME: ClassVar[str]
    VERSION: ClassVar[str]
    SUPPORTED_MIMETYPES: ClassVar[tuple[str, ...]]
    PROVIDES_METADATA: ClassVar[bool]
    PROVIDES_DECODING: ClassVar[bool]
    ALWAYS_CHECK_METADATA: ClassVar[bool]
    SUPPORTED_EXTENSIONS: ClassVar[tuple[str, ...]]
    INDEXING_SUPPORTED: ClassVar[bool]

    def __new__(cls, *args: Any, **kwargs: Any) -> MediaPlugin:
        _check_plugin_constants(cls)
        return super().__new__(cls)