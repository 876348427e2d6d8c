"""Decoded audio samples and the frames that carry them to output devices."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any

from muzak.devices.format import SampleFormat


class SampleFormatError(ValueError):
    """Samples were requested or stored in a format that does not fit."""


_STORABLE = frozenset(
    {
        SampleFormat.FLOAT64,
        SampleFormat.FLOAT32,
        SampleFormat.SIGNED32,
        SampleFormat.UNSIGNED32,
        SampleFormat.SIGNED24,
        SampleFormat.UNSIGNED24,
        SampleFormat.SIGNED16,
        SampleFormat.UNSIGNED16,
        SampleFormat.SIGNED8,
        SampleFormat.UNSIGNED8,
        SampleFormat.DSD,
    }
)

_MUTED = {
    SampleFormat.FLOAT64: 0.0,
    SampleFormat.FLOAT32: 0.0,
    SampleFormat.UNSIGNED32: 2147483647,
    SampleFormat.UNSIGNED24: 8388607,
    SampleFormat.UNSIGNED16: 32767,
    SampleFormat.UNSIGNED8: 127,
    SampleFormat.SIGNED32: 0,
    SampleFormat.SIGNED24: 0,
    SampleFormat.SIGNED16: 0,
    SampleFormat.SIGNED8: 0,
}


def muted(format: SampleFormat) -> int | float:
    """The silent sample value for a format."""
    try:
        return _MUTED[format]
    except KeyError:
        raise SampleFormatError(f"no silent value for {format.name}") from None


@dataclass
class Samples:
    """Per-channel sample lists in one sample format."""

    sample_format: SampleFormat
    data: Sequence[Sequence[Any]]

    def __post_init__(self) -> None:
        if self.sample_format not in _STORABLE:
            raise SampleFormatError(f"samples cannot be stored as {self.sample_format.name}")

    def is_format(self, format: SampleFormat) -> bool:
        return self.sample_format is format

    def unwrap(self, format: SampleFormat) -> Sequence[Sequence[Any]]:
        """Return the channel data, checking that it is in the expected format."""
        if not self.is_format(format):
            raise SampleFormatError(
                f"invalid sample format during unwrap: have {self.sample_format.name}, "
                f"wanted {format.name}"
            )
        return self.data


@dataclass
class PlaybackFrame:
    """A block of samples with its sample rate.

    The rate is always the stereo rate: a mono frame carries double its per-channel rate.
    """

    samples: Samples
    rate: int

    def __post_init__(self) -> None:
        if isinstance(self.rate, bool) or not isinstance(self.rate, int):
            raise TypeError("rate must be an integer")
        if not 0 <= self.rate <= 0xFFFF_FFFF:
            raise ValueError(f"rate out of range: {self.rate}")