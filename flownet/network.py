"""
Declarative flow network.

Builds a static set of devices and streams from a NetworkPayload and runs
a single update pass over the devices in the order they were declared.
There is no topological sort and no recycle handling: a device declared
before the device that feeds it sees the feed's previous value, which
shows up as a mass-balance warning after the pass.
"""

from __future__ import annotations

from typing import Dict, List, Optional

from loguru import logger

from . import schemas
from .config import Settings
from .devices import DEVICE_REGISTRY, Device
from .errors import DeviceError
from .streams import Stream


class FlowNetwork:
    """Single-pass mass-balance network over a fixed set of devices."""

    def __init__(self, name: str = "flow-network", settings: Optional[Settings] = None) -> None:
        self.name = name
        self.settings = settings or Settings.from_env()
        self.devices: Dict[str, Device] = {}
        self.streams: Dict[str, Stream] = {}
        self._device_types: Dict[str, str] = {}
        self._stream_ids: Dict[int, str] = {}
        self._build_warnings: List[str] = []

    # ------------------------------------------------------------------
    # Build
    # ------------------------------------------------------------------

    def add_device(
        self,
        device_id: str,
        device_type: str,
        params: Optional[Dict] = None,
        name: Optional[str] = None,
    ) -> Device:
        if device_id in self.devices:
            raise ValueError(f"Duplicate device id '{device_id}'")
        cls = DEVICE_REGISTRY.get(device_type)
        if cls is None:
            raise ValueError(
                f"Unknown device type '{device_type}' "
                f"(expected one of: {', '.join(sorted(DEVICE_REGISTRY))})"
            )
        device = cls.from_params(device_id, dict(params or {}), name=name)
        self.devices[device_id] = device
        self._device_types[device_id] = device_type
        return device

    def add_stream(
        self,
        stream_id: str,
        name: Optional[str] = None,
        source: Optional[str] = None,
        target: Optional[str] = None,
        mass_flow: Optional[float] = None,
    ) -> Stream:
        if stream_id in self.streams:
            raise ValueError(f"Duplicate stream id '{stream_id}'")
        for ref in (source, target):
            if ref is not None and ref not in self.devices:
                raise ValueError(f"Stream '{stream_id}' references unknown device '{ref}'")

        stream = Stream(name or stream_id)
        if mass_flow is not None:
            stream.set_mass_flow(mass_flow)

        # Both ends are checked before either is connected
        if source is not None:
            self.devices[source].check_output_room()
        if target is not None:
            self.devices[target].check_input_room()

        if source is not None:
            self.devices[source].add_output(stream)
        if target is not None:
            self.devices[target].add_input(stream)

        if source is None and target is None:
            self._warn(f"Stream '{stream_id}' is not connected to any device")
        elif source is None and mass_flow is None:
            self._warn(f"Feed stream '{stream_id}' has no mass flow, using 0.0")

        self.streams[stream_id] = stream
        self._stream_ids[id(stream)] = stream_id
        return stream

    def build_from_payload(self, payload: schemas.NetworkPayload) -> None:
        """Create devices, then streams and their connections, in payload order."""
        self.name = payload.name
        for spec in payload.devices:
            self.add_device(spec.id, spec.type, spec.parameters, name=spec.name)
        for spec in payload.streams:
            self.add_stream(
                spec.id,
                name=spec.name,
                source=spec.source,
                target=spec.target,
                mass_flow=spec.mass_flow,
            )
        logger.info(
            "Built network '{}': {} device(s), {} stream(s)",
            self.name, len(self.devices), len(self.streams),
        )

    def _warn(self, message: str) -> None:
        logger.warning(message)
        self._build_warnings.append(message)

    # ------------------------------------------------------------------
    # Run
    # ------------------------------------------------------------------

    def run(self) -> schemas.NetworkResult:
        """Update every device once, in declaration order, and report balances."""
        warnings: List[str] = list(self._build_warnings)

        for device_id, device in self.devices.items():
            try:
                device.update_outputs()
            except DeviceError as exc:
                logger.error("Update failed for {} '{}': {}", device.kind, device_id, exc)
                raise

        status = "ok"
        device_results: List[schemas.DeviceResult] = []
        for device_id, device in self.devices.items():
            error = device.mass_balance_error()
            if error > self.settings.balance_tolerance:
                status = "unbalanced"
                warnings.append(
                    f"[{device_id}] Mass balance error {error:.4g} exceeds "
                    f"tolerance {self.settings.balance_tolerance:g}"
                )
            device_results.append(
                schemas.DeviceResult(
                    id=device_id,
                    name=device.name,
                    type=self._device_types[device_id],
                    inputs=[self._stream_ids[id(s)] for s in device.inputs],
                    outputs=[self._stream_ids[id(s)] for s in device.outputs],
                    balance_error=error,
                )
            )

        stream_results = [
            schemas.StreamResult(id=sid, name=s.get_name(), mass_flow=s.get_mass_flow())
            for sid, s in self.streams.items()
        ]
        logger.info("Network '{}' finished with status '{}'", self.name, status)
        return schemas.NetworkResult(
            name=self.name,
            status=status,
            streams=stream_results,
            devices=device_results,
            warnings=warnings,
        )
