"""Errors raised by output device providers, devices and streams."""

from __future__ import annotations

import enum
from typing import ClassVar


class DeviceErrorReason(enum.Enum):
    """Why a device operation failed."""

    UNKNOWN = enum.auto()
    DEVICE_DOES_NOT_EXIST = enum.auto()
    REQUIRES_OPEN_DEVICE = enum.auto()
    DEVICE_IS_DEFAULT_ALWAYS = enum.auto()
    NOT_AVAILABLE = enum.auto()
    INVALID_CONFIG_PROVIDER = enum.auto()
    INVALID_SAMPLE_FORMAT = enum.auto()


_MESSAGES = {
    DeviceErrorReason.DEVICE_DOES_NOT_EXIST: "Requested device does not exist",
    DeviceErrorReason.REQUIRES_OPEN_DEVICE: (
        "The requested device information is not available until the device is opened"
    ),
    DeviceErrorReason.DEVICE_IS_DEFAULT_ALWAYS: (
        "The selected device is always the default device and therefore is not consistent"
    ),
    DeviceErrorReason.NOT_AVAILABLE: "The requested device information is not available",
    DeviceErrorReason.INVALID_CONFIG_PROVIDER: (
        "The supplied sample format is from a different device provider than the requested device"
    ),
    DeviceErrorReason.INVALID_SAMPLE_FORMAT: (
        "The supplied sample format is not supported by the device"
    ),
}

_PROVIDER_UNKNOWN = "Unknown device provider error: `{}`"
_STREAM_UNKNOWN = "Unknown stream error: `{}`"
_DEVICE_UNKNOWN = "Unknown device error: `{}`"


class DeviceError(Exception):
    """Base class for device errors; each subclass accepts its own set of reasons."""

    reasons: ClassVar[frozenset[DeviceErrorReason]] = frozenset(DeviceErrorReason)
    unknown_template: ClassVar[str] = _DEVICE_UNKNOWN

    def __init__(self, reason: DeviceErrorReason, detail: str | None = None) -> None:
        if reason not in self.reasons:
            raise ValueError(f"{type(self).__name__} cannot carry reason {reason.name}")
        if reason is DeviceErrorReason.UNKNOWN:
            detail = "" if detail is None else str(detail)
        elif detail is not None:
            raise ValueError(f"reason {reason.name} carries no detail")
        super().__init__(reason, detail)
        self.reason = reason
        self.detail = detail

    def __str__(self) -> str:
        if self.reason is DeviceErrorReason.UNKNOWN:
            return self.unknown_template.format(self.detail)
        return _MESSAGES[self.reason]

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, DeviceError):
            return NotImplemented
        return (
            type(self) is type(other)
            and self.reason is other.reason
            and self.detail == other.detail
        )

    def __hash__(self) -> int:
        return hash((type(self), self.reason, self.detail))


_ONLY_UNKNOWN = frozenset({DeviceErrorReason.UNKNOWN})


class InitializationError(DeviceError):
    reasons = _ONLY_UNKNOWN
    unknown_template = _PROVIDER_UNKNOWN


class SubmissionError(DeviceError):
    reasons = _ONLY_UNKNOWN
    unknown_template = _STREAM_UNKNOWN


class ListError(DeviceError):
    reasons = _ONLY_UNKNOWN
    unknown_template = _PROVIDER_UNKNOWN


class FindError(DeviceError):
    reasons = frozenset({DeviceErrorReason.DEVICE_DOES_NOT_EXIST, DeviceErrorReason.UNKNOWN})
    unknown_template = _PROVIDER_UNKNOWN


class InfoError(DeviceError):
    reasons = frozenset(
        {
            DeviceErrorReason.REQUIRES_OPEN_DEVICE,
            DeviceErrorReason.DEVICE_IS_DEFAULT_ALWAYS,
            DeviceErrorReason.NOT_AVAILABLE,
            DeviceErrorReason.UNKNOWN,
        }
    )
    unknown_template = _DEVICE_UNKNOWN


class OpenError(DeviceError):
    reasons = frozenset(
        {
            DeviceErrorReason.INVALID_CONFIG_PROVIDER,
            DeviceErrorReason.INVALID_SAMPLE_FORMAT,
            DeviceErrorReason.UNKNOWN,
        }
    )
    unknown_template = _DEVICE_UNKNOWN


class CloseError(DeviceError):
    reasons = _ONLY_UNKNOWN
    unknown_template = _STREAM_UNKNOWN


class StateError(DeviceError):
    reasons = _ONLY_UNKNOWN
    unknown_template = _STREAM_UNKNOWN


class ResetError(DeviceError):
    reasons = _ONLY_UNKNOWN
    unknown_template = _STREAM_UNKNOWN