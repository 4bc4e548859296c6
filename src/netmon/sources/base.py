from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass

from netmon.monitoring.network import InterfaceCounters


@dataclass(frozen=True)
class AddressBinding:
    interface: str
    address: str


class CounterSource(ABC):
    @abstractmethod
    def counters(self) -> dict[str, InterfaceCounters]:
        """Cumulative (received, transmitted) bytes per interface. Raises CounterSourceError."""
        raise NotImplementedError


class AddressSource(ABC):
    @abstractmethod
    def addresses(self) -> list[AddressBinding]:
        """Currently bound IP addresses, in OS order. Raises AddressSourceError."""
        raise NotImplementedError
