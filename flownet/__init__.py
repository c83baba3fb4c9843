"""Mass-balance models for small chemical-process flow networks."""

from loguru import logger

from .devices import DEVICE_REGISTRY, Device, Divider, Mixer, Reactor
from .errors import CapacityExceeded, DeviceError, IndexOutOfRange, PreconditionViolation
from .network import FlowNetwork
from .streams import Stream, StreamCounter

logger.disable("flownet")

__all__ = [
    "DEVICE_REGISTRY",
    "CapacityExceeded",
    "Device",
    "DeviceError",
    "Divider",
    "FlowNetwork",
    "IndexOutOfRange",
    "Mixer",
    "PreconditionViolation",
    "Reactor",
    "Stream",
    "StreamCounter",
]
