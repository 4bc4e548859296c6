from __future__ import annotations

import io
from typing import Callable

import pytest
from rich.console import Console

from netmon.core.exceptions import AddressSourceError, CounterSourceError
from netmon.monitoring.network import InterfaceCounters
from netmon.sources.base import AddressBinding, AddressSource, CounterSource
from netmon.ui.report import ReportSink


class FakeCounterSource(CounterSource):
    """Replays prepared samples; `on_call` runs before each sample is returned."""

    def __init__(self, samples: list[dict[str, tuple[int, int]]], on_call: Callable[[int], None] | None = None) -> None:
        self._samples = list(samples)
        self._on_call = on_call
        self.calls = 0

    def counters(self) -> dict[str, InterfaceCounters]:
        self.calls += 1
        if self._on_call is not None:
            self._on_call(self.calls)
        if not self._samples:
            raise CounterSourceError("no more samples")
        sample = self._samples.pop(0)
        return {name: InterfaceCounters(rx, tx) for name, (rx, tx) in sample.items()}


class FakeAddressSource(AddressSource):
    def __init__(self, pairs: list[tuple[str, str]] | None = None, fail: bool = False) -> None:
        self._pairs = pairs or []
        self.fail = fail

    def addresses(self) -> list[AddressBinding]:
        if self.fail:
            raise AddressSourceError("permission denied")
        return [AddressBinding(interface=i, address=a) for i, a in self._pairs]


@pytest.fixture
def sink() -> ReportSink:
    return ReportSink(Console(file=io.StringIO(), width=120, no_color=True, highlight=False))


def sink_output(sink: ReportSink) -> str:
    return sink.console.file.getvalue()  # type: ignore[attr-defined]
