"""
Mass-balance device models.

Each device owns a fixed number of input and output slots. Streams are
connected in order with add_input / add_output, and update_outputs
overwrites the mass flow of every output stream from the current input
mass flows. update_outputs validates before it writes, so a failed call
leaves every output untouched.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Dict, List, Optional, Tuple

from loguru import logger

from .errors import CapacityExceeded, IndexOutOfRange, PreconditionViolation
from .streams import Stream

MIXER_OUTPUTS = 1

_TRUE_STRINGS = {"true", "yes", "1"}
_FALSE_STRINGS = {"false", "no", "0"}


def _count_param(params: Dict, key: str, default: int) -> int:
    """Read a slot count from a parameter dict; non-integral values are rejected."""
    raw = params.get(key, default)
    if isinstance(raw, bool):
        raise ValueError(f"'{key}' must be an integer, got {raw!r}")
    if isinstance(raw, int):
        return raw
    if isinstance(raw, float) and raw.is_integer():
        return int(raw)
    if isinstance(raw, str):
        try:
            return int(raw.strip())
        except ValueError as exc:
            raise ValueError(f"'{key}' must be an integer, got {raw!r}") from exc
    raise ValueError(f"'{key}' must be an integer, got {raw!r}")


def _bool_param(params: Dict, key: str, default: bool) -> bool:
    raw = params.get(key, default)
    if isinstance(raw, bool):
        return raw
    if isinstance(raw, str):
        value = raw.strip().lower()
        if value in _TRUE_STRINGS:
            return True
        if value in _FALSE_STRINGS:
            return False
    raise ValueError(f"'{key}' must be a boolean, got {raw!r}")


# ---------------------------------------------------------------------------
# Base class
# ---------------------------------------------------------------------------


class Device(ABC):
    """Abstract base for all devices."""

    kind: str = "device"

    def __init__(
        self,
        input_amount: int,
        output_amount: int,
        id: Optional[str] = None,
        name: Optional[str] = None,
    ) -> None:
        if input_amount < 0 or output_amount < 0:
            raise ValueError(
                f"{self.kind} capacities must be non-negative "
                f"(got inputs={input_amount}, outputs={output_amount})"
            )
        self.id = id or self.kind
        self.name = name or self.id
        self._input_amount = input_amount
        self._output_amount = output_amount
        self._inputs: List[Stream] = []
        self._outputs: List[Stream] = []

    @classmethod
    @abstractmethod
    def from_params(cls, id: str, params: Dict, name: Optional[str] = None) -> "Device":
        """Build a device from a parameter dict (see DEVICE_REGISTRY)."""

    @abstractmethod
    def update_outputs(self) -> None:
        """Recompute every output mass flow from the input mass flows."""

    # -- capacities -----------------------------------------------------

    @property
    def input_amount(self) -> int:
        return self._input_amount

    @property
    def output_amount(self) -> int:
        return self._output_amount

    @property
    def inputs(self) -> Tuple[Stream, ...]:
        return tuple(self._inputs)

    @property
    def outputs(self) -> Tuple[Stream, ...]:
        return tuple(self._outputs)

    def input_count(self) -> int:
        return len(self._inputs)

    def output_count(self) -> int:
        return len(self._outputs)

    # -- connection -----------------------------------------------------

    def check_input_room(self) -> None:
        """Raise CapacityExceeded if no input slot is free."""
        if len(self._inputs) >= self._input_amount:
            raise CapacityExceeded(
                CapacityExceeded.INPUT_LIMIT, self._input_amount,
                device_id=self.id, device_kind=self.kind,
            )

    def check_output_room(self) -> None:
        """Raise CapacityExceeded if no output slot is free."""
        if len(self._outputs) >= self._output_amount:
            raise CapacityExceeded(
                CapacityExceeded.OUTPUT_LIMIT, self._output_amount,
                device_id=self.id, device_kind=self.kind,
            )

    def add_input(self, stream: Stream) -> None:
        self.check_input_room()
        self._inputs.append(stream)

    def add_output(self, stream: Stream) -> None:
        self.check_output_room()
        self._outputs.append(stream)

    def get_input(self, index: int) -> Stream:
        return self._at(self._inputs, index, "input")

    def get_output(self, index: int) -> Stream:
        return self._at(self._outputs, index, "output")

    def _at(self, streams: List[Stream], index: int, direction: str) -> Stream:
        # Negative indices are rejected rather than wrapped
        if not 0 <= index < len(streams):
            raise IndexOutOfRange(
                direction, index, len(streams),
                device_id=self.id, device_kind=self.kind,
            )
        return streams[index]

    # -- helpers --------------------------------------------------------

    def _require(self, condition: bool, reason: str) -> None:
        if not condition:
            raise PreconditionViolation(reason, device_id=self.id, device_kind=self.kind)

    def _write_outputs(self, streams: List[Stream], value: float) -> None:
        for stream in streams:
            stream.set_mass_flow(value)
        logger.debug(
            "{} '{}' set {} output(s) to {:.6g}", self.kind, self.id, len(streams), value
        )

    def mass_balance_error(self) -> float:
        """Absolute difference between total inlet and total outlet mass flow."""
        total_in = sum(s.get_mass_flow() for s in self._inputs)
        total_out = sum(s.get_mass_flow() for s in self._outputs)
        return abs(total_in - total_out)

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(id={self.id!r}, "
            f"inputs={len(self._inputs)}/{self._input_amount}, "
            f"outputs={len(self._outputs)}/{self._output_amount})"
        )


# ---------------------------------------------------------------------------
# Mixer
# ---------------------------------------------------------------------------


class Mixer(Device):
    """
    Combines n inputs into one output.

    Output mass flow = sum of inputs / number of outputs actually
    connected. With no inputs connected the output is zero.
    """

    kind = "mixer"

    def __init__(self, inputs_count: int, id: Optional[str] = None, name: Optional[str] = None) -> None:
        super().__init__(inputs_count, MIXER_OUTPUTS, id=id, name=name)

    @classmethod
    def from_params(cls, id: str, params: Dict, name: Optional[str] = None) -> "Mixer":
        return cls(_count_param(params, "inputs_count", 2), id=id, name=name)

    def update_outputs(self) -> None:
        self._require(bool(self._outputs), "outputs must be connected before update")

        total = sum(s.get_mass_flow() for s in self._inputs)
        self._write_outputs(self._outputs, total / len(self._outputs))


# ---------------------------------------------------------------------------
# Divider
# ---------------------------------------------------------------------------


class Divider(Device):
    """Splits its single input evenly across the connected outputs."""

    kind = "divider"

    def __init__(self, outputs_count: int, id: Optional[str] = None, name: Optional[str] = None) -> None:
        super().__init__(1, outputs_count, id=id, name=name)

    @classmethod
    def from_params(cls, id: str, params: Dict, name: Optional[str] = None) -> "Divider":
        return cls(_count_param(params, "outputs_count", 2), id=id, name=name)

    def update_outputs(self) -> None:
        self._require(bool(self._inputs), "an input must be connected before update")
        self._require(bool(self._outputs), "outputs must be connected before update")

        inlet = self._inputs[0].get_mass_flow()
        self._write_outputs(self._outputs, inlet / len(self._outputs))


# ---------------------------------------------------------------------------
# Reactor
# ---------------------------------------------------------------------------


class Reactor(Device):
    """
    Passes one input through to one or two outputs.

    The split uses the declared output capacity, not the connected count:
    every declared output slot must be connected, otherwise update_outputs
    raises IndexOutOfRange.
    """

    kind = "reactor"

    def __init__(self, is_double: bool = False, id: Optional[str] = None, name: Optional[str] = None) -> None:
        super().__init__(1, 2 if is_double else 1, id=id, name=name)
        self.is_double = is_double

    @classmethod
    def from_params(cls, id: str, params: Dict, name: Optional[str] = None) -> "Reactor":
        return cls(_bool_param(params, "is_double", False), id=id, name=name)

    def update_outputs(self) -> None:
        inlet = self.get_input(0).get_mass_flow()
        # Resolve every slot before writing any
        targets = [self.get_output(i) for i in range(self._output_amount)]
        self._write_outputs(targets, inlet * (1.0 / self._output_amount))


# ---------------------------------------------------------------------------
# Registry
# ---------------------------------------------------------------------------

DEVICE_REGISTRY: Dict[str, type] = {
    "mixer": Mixer,
    "divider": Divider,
    "splitter": Divider,
    "reactor": Reactor,
}
