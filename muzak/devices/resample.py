"""Sample format conversion, bit-depth matching and sample-rate conversion."""

from __future__ import annotations

import logging
import math
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any

import numpy as np
from scipy.signal import resample_poly

from muzak.devices.format import FormatInfo, SampleFormat
from muzak.media.playback import PlaybackFrame, SampleFormatError, Samples

logger = logging.getLogger(__name__)

_I8_MAX = 127
_I16_MAX = 32767
_I24_MAX = 8388607
_I32_MAX = 2147483647


@dataclass(frozen=True)
class _IntScale:
    """How an integer sample format maps onto the range -1.0..1.0."""

    max_value: int
    offset: float
    cast_low: int
    cast_high: int
    bounds: tuple[int, int] | None = None


_INT_SCALES = {
    SampleFormat.UNSIGNED32: _IntScale(_I32_MAX, -1.0, 0, 0xFFFF_FFFF),
    SampleFormat.UNSIGNED16: _IntScale(_I16_MAX, -1.0, 0, 0xFFFF),
    SampleFormat.UNSIGNED8: _IntScale(_I8_MAX, -1.0, 0, 0xFF),
    SampleFormat.SIGNED32: _IntScale(_I32_MAX, 0.0, -(2**31), 2**31 - 1),
    SampleFormat.SIGNED16: _IntScale(_I16_MAX, 0.0, -(2**15), 2**15 - 1),
    SampleFormat.SIGNED8: _IntScale(_I8_MAX, 0.0, -(2**7), 2**7 - 1),
    SampleFormat.UNSIGNED24: _IntScale(_I24_MAX, -1.0, 0, 0xFFFF_FFFF, (0, 0xFF_FFFF)),
    SampleFormat.SIGNED24: _IntScale(_I24_MAX, 0.0, -(2**31), 2**31 - 1, (-(2**23), 2**23 - 1)),
}

_FLOATS = frozenset({SampleFormat.FLOAT64, SampleFormat.FLOAT32})

_PACKED_STORAGE = {
    SampleFormat.SIGNED24_PACKED: SampleFormat.SIGNED24,
    SampleFormat.UNSIGNED24_PACKED: SampleFormat.UNSIGNED24,
}


def _saturating_cast(value: float, low: int, high: int) -> int:
    """Truncate a float towards zero, saturating at the bounds; NaN becomes zero."""
    if math.isnan(value):
        return 0
    if value <= low:
        return low
    if value >= high:
        return high
    return math.trunc(value)


def _int_scale(format: SampleFormat) -> _IntScale:
    try:
        return _INT_SCALES[format]
    except KeyError:
        raise SampleFormatError(f"samples cannot be converted as {format.name}") from None


def sample_into(value: Any, format: SampleFormat) -> float:
    """Convert one sample of the given format to a float in about -1.0..1.0."""
    if format in _FLOATS:
        return float(value)
    spec = _int_scale(format)
    return value / spec.max_value + spec.offset


def sample_from(value: float, format: SampleFormat) -> int | float:
    """Convert a float sample in about -1.0..1.0 to the given format.

    Integer formats truncate and saturate; the 24-bit formats raise ``ValueError`` when
    the result does not fit in 24 bits.
    """
    if format is SampleFormat.FLOAT64:
        return float(value)
    if format is SampleFormat.FLOAT32:
        with np.errstate(over="ignore"):
            return float(np.float32(value))
    spec = _int_scale(format)
    raw = _saturating_cast((value - spec.offset) * spec.max_value, spec.cast_low, spec.cast_high)
    if spec.bounds is not None:
        low, high = spec.bounds
        if not low <= raw <= high:
            raise ValueError(f"out of {format.name} bounds: {raw}")
    return raw


def convert_samples(samples: Samples, format: SampleFormat) -> list[list[int | float]]:
    """Convert every sample of ``samples`` into ``format``, channel by channel."""
    if format not in _FLOATS and format not in _INT_SCALES:
        raise SampleFormatError(f"samples cannot be converted to {format.name}")
    source = samples.sample_format
    if source is SampleFormat.DSD:
        raise SampleFormatError("DSD samples cannot be converted")
    return [
        [sample_from(sample_into(value, source), format) for value in channel]
        for channel in samples.data
    ]


def match_bit_depth(frame: PlaybackFrame, target_format: SampleFormat) -> PlaybackFrame:
    """Return the frame with its samples in ``target_format``.

    Packed 24-bit targets are stored as their unpacked counterparts.
    """
    if frame.samples.is_format(target_format):
        return frame
    if target_format is SampleFormat.DSD:
        raise SampleFormatError("conversion to DSD is not supported")
    if target_format is SampleFormat.UNSUPPORTED:
        raise SampleFormatError("target depth is unsupported")
    stored = _PACKED_STORAGE.get(target_format, target_format)
    return PlaybackFrame(Samples(stored, convert_samples(frame.samples, stored)), frame.rate)


class Resampler:
    """Converts fixed-size blocks of audio from one sample rate to another.

    Blocks shorter than ``duration`` frames are padded with silence; longer blocks are
    cut to ``duration`` frames.
    """

    def __init__(self, orig_rate: int, target_rate: int, duration: int, channels: int) -> None:
        for name, value in (
            ("orig_rate", orig_rate),
            ("target_rate", target_rate),
            ("duration", duration),
            ("channels", channels),
        ):
            if isinstance(value, bool) or not isinstance(value, int):
                raise TypeError(f"{name} must be an integer")
            if value <= 0:
                raise ValueError(f"{name} must be positive: {value}")

        if orig_rate != target_rate:
            logger.info("Resampling required, resampling from %d to %d", orig_rate, target_rate)

        divisor = math.gcd(orig_rate, target_rate)
        self.orig_rate = orig_rate
        self.target_rate = target_rate
        self.duration = duration
        self.channels = channels
        self._up = target_rate // divisor
        self._down = orig_rate // divisor

    @property
    def output_frames(self) -> int:
        """Number of frames produced for one block."""
        return -(-self.duration * self._up // self._down)

    def _process(self, source: Sequence[Sequence[float]]) -> list[list[float]]:
        if len(source) != self.channels:
            raise ValueError(
                f"resampler error: expected {self.channels} channels, got {len(source)}"
            )
        block = np.zeros((self.channels, self.duration), dtype=np.float64)
        for row, channel in zip(block, source):
            data = np.asarray(channel[: self.duration], dtype=np.float64)
            row[: len(data)] = data
        resampled = resample_poly(block, self._up, self._down, axis=1)
        return [row.astype(np.float32).tolist() for row in resampled]

    def convert_formats(self, frame: PlaybackFrame, target_format: FormatInfo) -> PlaybackFrame:
        """Bring a frame to the sample rate and sample type of ``target_format``."""
        if target_format.sample_rate == frame.rate:
            return match_bit_depth(frame, target_format.sample_type)

        source = convert_samples(frame.samples, SampleFormat.FLOAT32)
        resampled = self._process(source)
        return match_bit_depth(
            PlaybackFrame(Samples(SampleFormat.FLOAT32, resampled), target_format.sample_rate),
            target_format.sample_type,
        )