from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Callable

from netmon.core.config import DEFAULT_INTERVAL_SECONDS
from netmon.core.exceptions import AddressSourceError
from netmon.engine.state import StopToken
from netmon.monitoring.network import CounterStore, InterfaceDelta
from netmon.sources.base import AddressBinding, AddressSource, CounterSource
from netmon.ui.report import ReportSink, render_report


@dataclass(frozen=True)
class CycleReport:
    updated_at: datetime
    # raw byte deltas over one interval, not per-second rates
    deltas: dict[str, InterfaceDelta]
    bindings: list[AddressBinding] | None


class SamplingCycle:
    """
    Sample, diff, render, wait; until the stop token is set.

    Waits go through `stop.wait()` so a shutdown request ends the wait
    within one poll slice instead of after the full interval.
    """

    def __init__(
        self,
        *,
        counters: CounterSource,
        addresses: AddressSource,
        sink: ReportSink,
        stop: StopToken,
        interval_seconds: float = DEFAULT_INTERVAL_SECONDS,
        clock: Callable[[], datetime] = datetime.now,
        store: CounterStore | None = None,
    ) -> None:
        self._log = logging.getLogger("netmon.cycle")
        self._counters = counters
        self._addresses = addresses
        self._sink = sink
        self._stop = stop
        self._interval = float(interval_seconds)
        self._clock = clock
        self.store = store if store is not None else CounterStore()
        self.cycles = 0

    def startup(self) -> None:
        sample = self._counters.counters()
        self.store.initialize(sample)
        self._log.info("baseline taken", extra={"interfaces": len(sample)})
        self._stop.wait(self._interval)

    def run(self) -> None:
        self._log.info("monitor running", extra={"interval_seconds": self._interval})
        while not self._stop.is_set():
            self.run_once()
            self._stop.wait(self._interval)
        self._log.info("monitor stopped", extra={"cycles": self.cycles})

    def run_once(self) -> CycleReport:
        self._sink.clear()
        deltas = self.store.compute_delta_and_update(self._counters.counters())

        bindings: list[AddressBinding] | None
        try:
            bindings = self._addresses.addresses()
        except AddressSourceError as exc:
            self._log.error("Error getting interface details: %s", exc)
            bindings = None

        report = CycleReport(updated_at=self._clock(), deltas=deltas, bindings=bindings)
        self._sink.emit(
            render_report(
                updated_at=report.updated_at,
                deltas=deltas,
                bindings=bindings,
                interval_seconds=self._interval,
            )
        )
        self._sink.flush()
        self.cycles += 1
        self._log.debug("cycle rendered", extra={"cycle": self.cycles, "interfaces": len(deltas)})
        return report
