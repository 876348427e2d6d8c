"""Helpers for preparing sample data for output devices."""

from __future__ import annotations

import math
import struct
import sys
from collections.abc import Sequence
from typing import Any

from muzak.devices.format import SampleFormat
from muzak.devices.resample import sample_from, sample_into
from muzak.media.playback import SampleFormatError

_STRUCT_CODES = {
    SampleFormat.UNSIGNED16: "H",
    SampleFormat.UNSIGNED32: "I",
    SampleFormat.SIGNED16: "h",
    SampleFormat.SIGNED32: "i",
    SampleFormat.SIGNED8: "b",
    SampleFormat.FLOAT32: "f",
    SampleFormat.FLOAT64: "d",
}

_TWENTY_FOUR_BIT = {SampleFormat.SIGNED24: True, SampleFormat.UNSIGNED24: False}


def interleave(samples: Sequence[Sequence[Any]]) -> list[Any]:
    """Turn per-channel sample lists into one frame-ordered list.

    The first channel sets the frame count; extra samples in other channels are ignored.
    """
    if not samples:
        return []
    frames = len(samples[0])
    if any(len(channel) < frames for channel in samples):
        raise ValueError("every channel must hold at least as many samples as the first")
    return [sample for frame in zip(*samples) for sample in frame]


def pack(samples: Sequence[Any], format: SampleFormat) -> bytes:
    """Encode samples as native-endian bytes of the given format."""
    if format is SampleFormat.UNSIGNED8:
        return bytes(samples)
    if format in _TWENTY_FOUR_BIT:
        signed = _TWENTY_FOUR_BIT[format]
        try:
            return b"".join(
                int(value).to_bytes(3, sys.byteorder, signed=signed) for value in samples
            )
        except OverflowError as error:
            raise ValueError(f"sample out of {format.name} range") from error
    code = _STRUCT_CODES.get(format)
    if code is None:
        raise SampleFormatError(f"samples cannot be packed as {format.name}")
    try:
        return struct.pack(f"={len(samples)}{code}", *samples)
    except struct.error as error:
        raise ValueError(f"sample out of {format.name} range") from error


def _clamp(value: float) -> float:
    if math.isnan(value):
        return value
    return max(-1.0, min(1.0, value))


def scale(
    samples: Sequence[Sequence[Any]], factor: float, format: SampleFormat
) -> list[list[int | float]]:
    """Multiply every sample by ``factor``, clamping to the format's full range."""
    return [
        [sample_from(_clamp(sample_into(value, format) * factor), format) for value in channel]
        for channel in samples
    ]