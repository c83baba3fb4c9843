"""
Structured errors raised by devices.

Every error carries the id and kind of the device that raised it so that
callers can branch on attributes instead of matching message strings.
"""

from __future__ import annotations

from typing import Optional


class DeviceError(Exception):
    """Base class for all errors raised by a device."""

    def __init__(self, message: str, device_id: Optional[str] = None, device_kind: Optional[str] = None) -> None:
        super().__init__(message)
        self.device_id = device_id
        self.device_kind = device_kind


class CapacityExceeded(DeviceError):
    """A stream was connected to a device whose slots are already full."""

    INPUT_LIMIT = "input-limit"
    OUTPUT_LIMIT = "output-limit"

    def __init__(self, kind: str, capacity: int, device_id: Optional[str] = None, device_kind: Optional[str] = None) -> None:
        direction = "input" if kind == self.INPUT_LIMIT else "output"
        super().__init__(
            f"{device_kind or 'device'} '{device_id}' accepts at most {capacity} {direction} stream(s)",
            device_id=device_id,
            device_kind=device_kind,
        )
        self.kind = kind
        self.capacity = capacity


class PreconditionViolation(DeviceError):
    """update_outputs was called before the required slots were connected."""

    def __init__(self, reason: str, device_id: Optional[str] = None, device_kind: Optional[str] = None) -> None:
        super().__init__(
            f"{device_kind or 'device'} '{device_id}': {reason}",
            device_id=device_id,
            device_kind=device_kind,
        )
        self.reason = reason


class IndexOutOfRange(DeviceError, IndexError):
    """A positional accessor was given an index with no connected stream."""

    def __init__(
        self,
        direction: str,
        index: int,
        length: int,
        device_id: Optional[str] = None,
        device_kind: Optional[str] = None,
    ) -> None:
        super().__init__(
            f"{device_kind or 'device'} '{device_id}' has no {direction} at index {index} "
            f"({length} connected)",
            device_id=device_id,
            device_kind=device_kind,
        )
        self.direction = direction
        self.index = index
        self.length = length
