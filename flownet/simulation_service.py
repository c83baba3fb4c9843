from __future__ import annotations

from typing import Optional

from . import schemas
from .config import Settings
from .network import FlowNetwork


class SimulationService:
    def __init__(self, settings: Optional[Settings] = None) -> None:
        self._settings = settings or Settings.from_env()

    def simulate(self, payload: schemas.NetworkPayload) -> schemas.NetworkResult:
        network = FlowNetwork(payload.name, settings=self._settings)
        network.build_from_payload(payload)
        return network.run()
