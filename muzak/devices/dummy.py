"""A device provider that plays nothing, for testing the playback pipeline.

Streams from this provider never block when frames are submitted. The dummy device
is configured from environment variables:

- ``MUZAK_DUMMY_SAMPLE_RATE``: sample rate, default 44100.
- ``MUZAK_DUMMY_BIT_FORMAT``: sample format name such as ``S16`` or ``F32``, default ``S16``.
- ``MUZAK_DUMMY_CHANNELS``: channel count, default 2.
- ``MUZAK_DUMMY_BUFFER_SIZE``: reported buffer size, default 4096. No buffer is used.
"""

from __future__ import annotations

import logging
import os
import re
from collections.abc import Mapping
from dataclasses import dataclass, field

from muzak.devices.errors import DeviceErrorReason, FindError
from muzak.devices.format import (
    BufferSize,
    ChannelSpec,
    FormatInfo,
    SampleFormat,
    SupportedFormat,
)
from muzak.devices.traits import Device, DeviceProvider, OutputStream
from muzak.media.playback import PlaybackFrame

logger = logging.getLogger(__name__)

_PROVIDER_NAME = "dummy"
_DEVICE_NAME = "Muzak Dummy Audio Device"

_U16_MAX = 0xFFFF
_U32_MAX = 0xFFFF_FFFF

_UNSIGNED = re.compile(r"\+?[0-9]+", re.ASCII)

_BIT_FORMATS = {
    "F64": SampleFormat.FLOAT64,
    "F32": SampleFormat.FLOAT32,
    "S32": SampleFormat.SIGNED32,
    "U32": SampleFormat.UNSIGNED32,
    "S24": SampleFormat.SIGNED24,
    "U24": SampleFormat.UNSIGNED24,
    "S16": SampleFormat.SIGNED16,
    "U16": SampleFormat.UNSIGNED16,
    "S8": SampleFormat.SIGNED8,
    "U8": SampleFormat.UNSIGNED8,
    "DSD": SampleFormat.DSD,
}


def _environment(environ: Mapping[str, str] | None) -> Mapping[str, str]:
    return os.environ if environ is None else environ


def _unsigned_setting(
    environ: Mapping[str, str] | None, key: str, default: int, maximum: int
) -> int:
    raw = _environment(environ).get(key)
    if raw is None or not _UNSIGNED.fullmatch(raw):
        return default
    value = int(raw)
    return value if value <= maximum else default


def dummy_sample_rate(environ: Mapping[str, str] | None = None) -> int:
    """Sample rate of the dummy device."""
    return _unsigned_setting(environ, "MUZAK_DUMMY_SAMPLE_RATE", 44100, _U32_MAX)


def dummy_bit_format(environ: Mapping[str, str] | None = None) -> SampleFormat:
    """Sample format of the dummy device; unknown names give ``UNSUPPORTED``."""
    name = _environment(environ).get("MUZAK_DUMMY_BIT_FORMAT", "S16")
    return _BIT_FORMATS.get(name, SampleFormat.UNSUPPORTED)


def dummy_channels(environ: Mapping[str, str] | None = None) -> int:
    """Channel count of the dummy device."""
    return _unsigned_setting(environ, "MUZAK_DUMMY_CHANNELS", 2, _U16_MAX)


def dummy_buffer_size(environ: Mapping[str, str] | None = None) -> int:
    """Reported buffer size of the dummy device."""
    return _unsigned_setting(environ, "MUZAK_DUMMY_BUFFER_SIZE", 4096, _U32_MAX)


@dataclass
class DummyStream(OutputStream):
    """A stream that accepts every frame and plays none of them.

    It keeps track of its state (playing, closed, volume and the number of
    frames submitted since the last reset) so that callers can inspect it.
    """

    format: FormatInfo
    playing: bool = field(default=False, compare=False)
    closed: bool = field(default=False, compare=False)
    volume: float = field(default=1.0, compare=False)
    pending_frames: int = field(default=0, compare=False)

    def submit_frame(self, frame: PlaybackFrame) -> None:
        logger.debug("Frame received! Sample rate: %d", frame.rate)
        self.pending_frames += 1

    def close_stream(self) -> None:
        self.playing = False
        self.closed = True
        logger.debug("Stream closed.")

    def needs_input(self) -> bool:
        return True

    def current_format(self) -> FormatInfo:
        return self.format

    def play(self) -> None:
        self.playing = True
        logger.debug("Stream resumed.")

    def pause(self) -> None:
        self.playing = False
        logger.debug("Stream paused.")

    def reset(self) -> None:
        self.pending_frames = 0
        logger.debug("Stream reset.")

    def set_volume(self, volume: float) -> None:
        self.volume = volume
        logger.debug("Volume set to %s.", volume)


@dataclass
class DummyDevice(Device):
    """The single dummy device; its format comes from the environment."""

    environ: Mapping[str, str] | None = None

    def open_device(self, format: FormatInfo) -> DummyStream:
        return DummyStream(format)

    def get_supported_formats(self) -> list[SupportedFormat]:
        rate = dummy_sample_rate(self.environ)
        return [
            SupportedFormat(
                originating_provider=_PROVIDER_NAME,
                sample_type=dummy_bit_format(self.environ),
                sample_rates=range(rate, rate),
                buffer_size=BufferSize.fixed(dummy_buffer_size(self.environ)),
                channels=ChannelSpec(dummy_channels(self.environ)),
            )
        ]

    def get_default_format(self) -> FormatInfo:
        return FormatInfo(
            originating_provider=_PROVIDER_NAME,
            sample_type=dummy_bit_format(self.environ),
            sample_rate=dummy_sample_rate(self.environ),
            buffer_size=BufferSize.fixed(dummy_buffer_size(self.environ)),
            channels=ChannelSpec(dummy_channels(self.environ)),
            rate_channel_ratio=2,
            rate_channel_ratio_fixed=True,
        )

    def name(self) -> str:
        return _DEVICE_NAME

    def uid(self) -> str:
        return _PROVIDER_NAME

    def requires_matching_format(self) -> bool:
        return True


@dataclass
class DummyDeviceProvider(DeviceProvider):
    """Hands out a fresh dummy device as the default; lists no devices."""

    environ: Mapping[str, str] | None = None
    initialized: bool = field(default=False, compare=False)

    def initialize(self) -> None:
        self.initialized = True
        logger.info("DummyDeviceProvider initialized")
        logger.warning("This device provider WILL not play any actual audio.")

    def get_devices(self) -> list[Device]:
        logger.debug("Listing dummy devices")
        return []

    def get_default_device(self) -> DummyDevice:
        logger.debug("Creating new dummy device")
        return DummyDevice(self.environ)

    def get_device_by_uid(self, uid: str) -> Device:
        raise FindError(DeviceErrorReason.DEVICE_DOES_NOT_EXIST)