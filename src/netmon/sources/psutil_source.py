from __future__ import annotations

import logging
import socket

import psutil

from netmon.core.exceptions import AddressSourceError, CounterSourceError
from netmon.monitoring.network import InterfaceCounters
from netmon.sources.base import AddressBinding, AddressSource, CounterSource

_IP_FAMILIES = (socket.AF_INET, socket.AF_INET6)


def _strip_zone(address: str) -> str:
    # psutil reports link-local IPv6 as "fe80::1%eth0"
    return address.split("%", 1)[0]


class PsutilCounterSource(CounterSource):
    def __init__(self) -> None:
        self._log = logging.getLogger("netmon.sources")

    def counters(self) -> dict[str, InterfaceCounters]:
        try:
            raw = psutil.net_io_counters(pernic=True)
        except (OSError, RuntimeError, psutil.Error) as exc:
            raise CounterSourceError(f"cannot enumerate interface counters: {exc}") from exc
        out = {
            name: InterfaceCounters(received=int(io.bytes_recv), transmitted=int(io.bytes_sent))
            for name, io in raw.items()
        }
        self._log.debug("counter sample", extra={"interfaces": len(out)})
        return out


class PsutilAddressSource(AddressSource):
    def addresses(self) -> list[AddressBinding]:
        try:
            raw = psutil.net_if_addrs()
        except (OSError, RuntimeError, psutil.Error) as exc:
            raise AddressSourceError(str(exc)) from exc
        out: list[AddressBinding] = []
        for name, addrs in raw.items():
            for addr in addrs:
                if addr.family not in _IP_FAMILIES or not addr.address:
                    continue
                out.append(AddressBinding(interface=name, address=_strip_zone(addr.address)))
        return out
