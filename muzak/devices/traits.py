"""Interfaces implemented by audio output device providers, devices and streams."""

from __future__ import annotations

import abc

from muzak.devices.format import FormatInfo, SupportedFormat
from muzak.media.playback import PlaybackFrame


class DeviceProvider(abc.ABC):
    """Lists the devices available to the system and hands them out."""

    @abc.abstractmethod
    def initialize(self) -> None:
        """Prepare the provider for use; raises ``InitializationError``."""

    @abc.abstractmethod
    def get_devices(self) -> list[Device]:
        """Every device the provider offers; raises ``ListError``."""

    @abc.abstractmethod
    def get_default_device(self) -> Device:
        """The provider's default device; raises ``FindError``."""

    @abc.abstractmethod
    def get_device_by_uid(self, uid: str) -> Device:
        """The device with the given UID; raises ``FindError``."""


class Device(abc.ABC):
    """An output device that streams can be opened on."""

    @abc.abstractmethod
    def open_device(self, format: FormatInfo) -> OutputStream:
        """Open a stream in the given format; raises ``OpenError``."""

    @abc.abstractmethod
    def get_supported_formats(self) -> list[SupportedFormat]:
        """Formats the device can play; raises ``InfoError``."""

    @abc.abstractmethod
    def get_default_format(self) -> FormatInfo:
        """The device's default format; raises ``InfoError``."""

    @abc.abstractmethod
    def name(self) -> str:
        """Human-readable device name; raises ``InfoError``."""

    @abc.abstractmethod
    def uid(self) -> str:
        """Stable identifier of the device, or its name if it has none; raises ``InfoError``."""

    @abc.abstractmethod
    def requires_matching_format(self) -> bool:
        """Whether submitted frames must match the stream's rate and sample format."""


class OutputStream(abc.ABC):
    """An open stream that plays submitted frames."""

    @abc.abstractmethod
    def submit_frame(self, frame: PlaybackFrame) -> None:
        """Queue a frame for playback; raises ``SubmissionError``.

        If the device requires a matching format, the frame must be in the stream's
        current format.
        """

    @abc.abstractmethod
    def close_stream(self) -> None:
        """Close the stream and release its resources; raises ``CloseError``."""

    @abc.abstractmethod
    def needs_input(self) -> bool:
        """Whether the stream wants more frames."""

    @abc.abstractmethod
    def current_format(self) -> FormatInfo:
        """The stream's format; raises ``InfoError``."""

    @abc.abstractmethod
    def play(self) -> None:
        """Start or resume playback; raises ``StateError``."""

    @abc.abstractmethod
    def pause(self) -> None:
        """Pause playback without dropping queued audio; raises ``StateError``."""

    @abc.abstractmethod
    def reset(self) -> None:
        """Discard buffered audio; raises ``ResetError``."""

    @abc.abstractmethod
    def set_volume(self, volume: float) -> None:
        """Set the volume between 0.0 and 1.0; raises ``StateError``."""