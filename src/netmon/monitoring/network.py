from __future__ import annotations

from dataclasses import dataclass
from typing import Mapping


@dataclass(frozen=True)
class InterfaceCounters:
    """Cumulative byte counters of one interface, as read from the OS."""

    received: int
    transmitted: int


@dataclass(frozen=True)
class InterfaceDelta:
    received: int
    transmitted: int


CounterSample = Mapping[str, InterfaceCounters]


class CounterStore:
    """
    Last-seen cumulative counters per interface name.

    Deltas saturate at zero: a counter that went backwards (interface
    re-created, driver reset) reports 0 for that interval, never a negative
    or wrapped value. Interfaces missing from a sample keep their stale entry.
    """

    def __init__(self) -> None:
        self._received: dict[str, int] = {}
        self._transmitted: dict[str, int] = {}

    def __len__(self) -> int:
        return len(self._received)

    def __contains__(self, name: object) -> bool:
        return name in self._received

    def initialize(self, sample: CounterSample) -> None:
        self._received.clear()
        self._transmitted.clear()
        for name, counters in sample.items():
            self._received[name] = counters.received
            self._transmitted[name] = counters.transmitted

    def compute_delta_and_update(self, sample: CounterSample) -> dict[str, InterfaceDelta]:
        deltas: dict[str, InterfaceDelta] = {}
        for name, counters in sample.items():
            prev_rx = self._received.get(name, 0)
            prev_tx = self._transmitted.get(name, 0)
            deltas[name] = InterfaceDelta(
                received=max(counters.received - prev_rx, 0),
                transmitted=max(counters.transmitted - prev_tx, 0),
            )
            self._received[name] = counters.received
            self._transmitted[name] = counters.transmitted
        return deltas

    def previous(self, name: str) -> InterfaceCounters | None:
        if name not in self._received:
            return None
        return InterfaceCounters(received=self._received[name], transmitted=self._transmitted[name])
