"""Sample formats, channel layouts and stream format descriptions for output devices."""

from __future__ import annotations

import enum
from dataclasses import dataclass

_U16_MAX = 0xFFFF
_U32_MAX = 0xFFFF_FFFF


class SampleFormat(enum.Enum):
    """The encoding of individual audio samples."""

    FLOAT64 = enum.auto()
    FLOAT32 = enum.auto()
    SIGNED32 = enum.auto()
    UNSIGNED32 = enum.auto()
    SIGNED24 = enum.auto()
    UNSIGNED24 = enum.auto()
    SIGNED24_PACKED = enum.auto()
    UNSIGNED24_PACKED = enum.auto()
    SIGNED16 = enum.auto()
    UNSIGNED16 = enum.auto()
    SIGNED8 = enum.auto()
    UNSIGNED8 = enum.auto()
    DSD = enum.auto()
    UNSUPPORTED = enum.auto()


class Channels(enum.IntFlag):
    """Speaker positions, combinable as a bitmask."""

    FRONT_LEFT = 0x1
    FRONT_RIGHT = 0x2
    FRONT_CENTER = 0x4
    LOW_FREQUENCY = 0x8
    BACK_LEFT = 0x10
    BACK_RIGHT = 0x20
    FRONT_LEFT_OF_CENTER = 0x40
    FRONT_RIGHT_OF_CENTER = 0x80
    BACK_CENTER = 0x100
    SIDE_LEFT = 0x200
    SIDE_RIGHT = 0x400
    TOP_CENTER = 0x800
    TOP_FRONT_LEFT = 0x1000
    TOP_FRONT_CENTER = 0x2000
    TOP_FRONT_RIGHT = 0x4000
    TOP_BACK_LEFT = 0x8000
    TOP_BACK_CENTER = 0x10000
    TOP_BACK_RIGHT = 0x20000

    def count(self) -> int:
        """Number of speaker positions set in the mask."""
        return int(self).bit_count()


@dataclass(frozen=True, eq=False)
class ChannelSpec:
    """Channels described either as a speaker bitmask or as a plain count."""

    value: Channels | int

    def __post_init__(self) -> None:
        if isinstance(self.value, bool) or not isinstance(self.value, int):
            raise TypeError("channel spec must be a Channels mask or an integer count")
        if not isinstance(self.value, Channels) and not 0 <= self.value <= _U16_MAX:
            raise ValueError(f"channel count out of range: {self.value}")

    @property
    def is_bitmask(self) -> bool:
        return isinstance(self.value, Channels)

    def count(self) -> int:
        """Number of channels the spec describes."""
        if isinstance(self.value, Channels):
            return self.value.count()
        return int(self.value)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ChannelSpec):
            return NotImplemented
        return self.is_bitmask == other.is_bitmask and int(self.value) == int(other.value)

    def __hash__(self) -> int:
        return hash((self.is_bitmask, int(self.value)))


def _check_u32(name: str, value: int) -> None:
    if isinstance(value, bool) or not isinstance(value, int):
        raise TypeError(f"{name} must be an integer")
    if not 0 <= value <= _U32_MAX:
        raise ValueError(f"{name} out of range: {value}")


@dataclass(frozen=True)
class BufferSize:
    """A device buffer size: a range of sizes, one fixed size, or unknown."""

    sizes: range | None = None
    fixed_size: int | None = None

    def __post_init__(self) -> None:
        if self.sizes is not None and self.fixed_size is not None:
            raise ValueError("a buffer size is either a range or fixed, not both")

    @classmethod
    def fixed(cls, size: int) -> BufferSize:
        _check_u32("buffer size", size)
        return cls(fixed_size=size)

    @classmethod
    def range(cls, start: int, end: int) -> BufferSize:
        _check_u32("buffer size start", start)
        _check_u32("buffer size end", end)
        return cls(sizes=range(start, end))

    @classmethod
    def unknown(cls) -> BufferSize:
        return cls()

    @property
    def is_unknown(self) -> bool:
        return self.sizes is None and self.fixed_size is None


@dataclass(frozen=True)
class FormatInfo:
    """The format of an open or prospective output stream.

    ``rate_channel_ratio`` is the number of channels the sample rate refers to; on some
    providers the rate is the device's fixed rate, on others the current stream's.
    """

    originating_provider: str
    sample_type: SampleFormat
    sample_rate: int
    buffer_size: BufferSize
    channels: ChannelSpec
    rate_channel_ratio: int
    rate_channel_ratio_fixed: bool


@dataclass(frozen=True)
class SupportedFormat:
    """A format family a device can play."""

    originating_provider: str
    sample_type: SampleFormat
    sample_rates: range
    buffer_size: BufferSize
    channels: ChannelSpec


class Layout(enum.Enum):
    """Common speaker layouts."""

    MONO = enum.auto()
    STEREO = enum.auto()
    TWO_ONE = enum.auto()
    FIVE_ONE = enum.auto()
    SEVEN_ONE = enum.auto()

    def channels(self) -> Channels:
        """The speaker mask for this layout."""
        return _LAYOUT_CHANNELS[self]


_LAYOUT_CHANNELS = {
    Layout.MONO: Channels.FRONT_LEFT,
    Layout.STEREO: Channels.FRONT_LEFT | Channels.FRONT_RIGHT,
    Layout.TWO_ONE: Channels.FRONT_LEFT | Channels.FRONT_RIGHT | Channels.LOW_FREQUENCY,
    Layout.FIVE_ONE: (
        Channels.FRONT_LEFT
        | Channels.FRONT_RIGHT
        | Channels.BACK_LEFT
        | Channels.BACK_RIGHT
        | Channels.LOW_FREQUENCY
    ),
    Layout.SEVEN_ONE: (
        Channels.FRONT_LEFT
        | Channels.FRONT_RIGHT
        | Channels.SIDE_LEFT
        | Channels.SIDE_RIGHT
        | Channels.BACK_LEFT
        | Channels.BACK_RIGHT
        | Channels.LOW_FREQUENCY
    ),
}