"""Errors raised by media providers while opening, decoding and inspecting files."""

from __future__ import annotations

import enum
from typing import ClassVar


class MediaErrorReason(enum.Enum):
    """Why a media operation failed."""

    UNKNOWN = enum.auto()
    FILE_CORRUPT = enum.auto()
    UNSUPPORTED_FORMAT = enum.auto()
    NOTHING_OPEN = enum.auto()
    NOTHING_TO_PLAY = enum.auto()
    UNDECODABLE = enum.auto()
    BROKEN_CONTAINER = enum.auto()
    CONTAINER_SUPPORTED_BUT_NOT_CODEC = enum.auto()
    NEVER_STARTED = enum.auto()
    EOF = enum.auto()
    DECODE_FATAL = enum.auto()
    OPERATION_UNSUPPORTED = enum.auto()
    NEVER_DECODED = enum.auto()
    OUT_OF_BOUNDS = enum.auto()


_MESSAGES = {
    MediaErrorReason.UNKNOWN: "Unknown media provider error: `{}`",
    MediaErrorReason.DECODE_FATAL: "Decode error: `{}`",
    MediaErrorReason.FILE_CORRUPT: "File is corrupt",
    MediaErrorReason.UNSUPPORTED_FORMAT: "Format not supported by decoder",
    MediaErrorReason.NOTHING_OPEN: "No media is open",
    MediaErrorReason.NOTHING_TO_PLAY: "Media is open but has no audio",
    MediaErrorReason.UNDECODABLE: "Media is undecodable",
    MediaErrorReason.BROKEN_CONTAINER: "Media container is broken",
    MediaErrorReason.CONTAINER_SUPPORTED_BUT_NOT_CODEC: "Container is supported but not codec",
    MediaErrorReason.NEVER_STARTED: "Media is open but was never started",
    MediaErrorReason.EOF: "End of file reached",
    MediaErrorReason.OPERATION_UNSUPPORTED: "The selected MediaProvider does not support metadata",
    MediaErrorReason.NEVER_DECODED: "Frame length requested before decoding",
    MediaErrorReason.OUT_OF_BOUNDS: "Seek position out of bounds",
}

_WITH_DETAIL = frozenset({MediaErrorReason.UNKNOWN, MediaErrorReason.DECODE_FATAL})


class MediaError(Exception):
    """Base class for media errors; each subclass accepts its own set of reasons."""

    reasons: ClassVar[frozenset[MediaErrorReason]] = frozenset(MediaErrorReason)

    def __init__(self, reason: MediaErrorReason, detail: str | None = None) -> None:
        if reason not in self.reasons:
            raise ValueError(f"{type(self).__name__} cannot carry reason {reason.name}")
        if reason in _WITH_DETAIL:
            detail = "" if detail is None else str(detail)
        elif detail is not None:
            raise ValueError(f"reason {reason.name} carries no detail")
        super().__init__(reason, detail)
        self.reason = reason
        self.detail = detail

    def __str__(self) -> str:
        message = _MESSAGES[self.reason]
        if self.reason in _WITH_DETAIL:
            return message.format(self.detail)
        return message

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, MediaError):
            return NotImplemented
        return (
            type(self) is type(other)
            and self.reason is other.reason
            and self.detail == other.detail
        )

    def __hash__(self) -> int:
        return hash((type(self), self.reason, self.detail))


def _reasons(*names: MediaErrorReason) -> frozenset[MediaErrorReason]:
    return frozenset({MediaErrorReason.UNKNOWN, *names})


class OpenError(MediaError):
    reasons = _reasons(MediaErrorReason.FILE_CORRUPT, MediaErrorReason.UNSUPPORTED_FORMAT)


class CloseError(MediaError):
    reasons = _reasons()


class PlaybackStartError(MediaError):
    reasons = _reasons(
        MediaErrorReason.NOTHING_OPEN,
        MediaErrorReason.NOTHING_TO_PLAY,
        MediaErrorReason.UNDECODABLE,
        MediaErrorReason.BROKEN_CONTAINER,
        MediaErrorReason.CONTAINER_SUPPORTED_BUT_NOT_CODEC,
    )


class PlaybackStopError(MediaError):
    reasons = _reasons(MediaErrorReason.NOTHING_OPEN)


class PlaybackReadError(MediaError):
    reasons = _reasons(
        MediaErrorReason.NOTHING_OPEN,
        MediaErrorReason.NEVER_STARTED,
        MediaErrorReason.EOF,
        MediaErrorReason.DECODE_FATAL,
    )


class MetadataError(MediaError):
    reasons = _reasons(MediaErrorReason.NOTHING_OPEN, MediaErrorReason.OPERATION_UNSUPPORTED)


class FrameDurationError(MediaError):
    reasons = _reasons(MediaErrorReason.NOTHING_OPEN, MediaErrorReason.NEVER_DECODED)


class TrackDurationError(MediaError):
    reasons = _reasons(MediaErrorReason.NOTHING_OPEN, MediaErrorReason.NEVER_STARTED)


class SeekError(MediaError):
    reasons = _reasons(MediaErrorReason.NOTHING_OPEN, MediaErrorReason.OUT_OF_BOUNDS)


class ChannelRetrievalError(MediaError):
    reasons = _reasons(MediaErrorReason.NOTHING_OPEN, MediaErrorReason.NOTHING_TO_PLAY)