from __future__ import annotations

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field


class DeviceSpec(BaseModel):
    id: str
    type: str
    name: Optional[str] = None
    parameters: Dict[str, Any] = Field(default_factory=dict)


class StreamSpec(BaseModel):
    id: str
    name: Optional[str] = None
    source: Optional[str] = None
    target: Optional[str] = None
    mass_flow: Optional[float] = None


class NetworkPayload(BaseModel):
    name: str = Field(default="flow-network")
    devices: List[DeviceSpec] = Field(default_factory=list)
    streams: List[StreamSpec] = Field(default_factory=list)


class StreamResult(BaseModel):
    id: str
    name: str
    mass_flow: float


class DeviceResult(BaseModel):
    id: str
    name: str
    type: str
    inputs: List[str] = Field(default_factory=list)
    outputs: List[str] = Field(default_factory=list)
    balance_error: float = 0.0


class NetworkResult(BaseModel):
    name: str
    status: str
    streams: List[StreamResult]
    devices: List[DeviceResult]
    warnings: List[str] = Field(default_factory=list)
