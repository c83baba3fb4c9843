"""
Material streams.

A Stream is a named carrier of one scalar mass flow. Devices hold plain
references to streams; a stream knows nothing about the devices it is
connected to. Only the caller (for feeds) and the device that produces a
stream are expected to write its mass flow.
"""

from __future__ import annotations


class Stream:
    """Named container for a single mass-flow value."""

    def __init__(self, name: str, mass_flow: float = 0.0) -> None:
        self.name = name
        # 0.0 until set: reading an unset stream yields zero
        self.mass_flow = mass_flow

    @classmethod
    def numbered(cls, number: int) -> "Stream":
        """Build a stream named ``s<number>``."""
        return cls(f"s{number}")

    def set_name(self, value: str) -> None:
        self.name = value

    def get_name(self) -> str:
        return self.name

    def set_mass_flow(self, value: float) -> None:
        self.mass_flow = value

    def get_mass_flow(self) -> float:
        return self.mass_flow

    def describe(self) -> str:
        return f"Stream {self.name} flow = {self.mass_flow:g}"

    def __repr__(self) -> str:
        return f"Stream(name={self.name!r}, mass_flow={self.mass_flow!r})"


class StreamCounter:
    """
    Sequence generator for stream names.

    Each counter is independent, so tests and callers that need
    reproducible names create their own instead of sharing global state.
    """

    def __init__(self, start: int = 0, prefix: str = "s") -> None:
        self._start = start
        self._value = start
        self.prefix = prefix

    @property
    def value(self) -> int:
        return self._value

    def next_name(self) -> str:
        self._value += 1
        return f"{self.prefix}{self._value}"

    def new_stream(self, mass_flow: float = 0.0) -> Stream:
        return Stream(self.next_name(), mass_flow)

    def reset(self) -> None:
        self._value = self._start
