from __future__ import annotations

import argparse
import sys
import time

from netmon.core.config import load_config
from netmon.core.exceptions import AddressSourceError, ConfigError, CounterSourceError
from netmon.monitoring.network import CounterStore
from netmon.sources.psutil_source import PsutilAddressSource, PsutilCounterSource
from netmon.ui.widgets import format_rate


def _parse_args(argv: list[str]) -> argparse.Namespace:
    p = argparse.ArgumentParser(prog="doctor")
    p.add_argument("--config", type=str, default=None)
    return p.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    args = _parse_args(sys.argv[1:] if argv is None else argv)

    try:
        cfg = load_config(args.config)
    except ConfigError as exc:
        print(f"[FAIL] Config: {exc}")
        return 2
    print(f"[OK] Config loaded, interval={cfg.monitor.interval_seconds}s")

    counters = PsutilCounterSource()
    try:
        first = counters.counters()
    except CounterSourceError as exc:
        print(f"[FAIL] {exc}")
        return 2
    if not first:
        print("[FAIL] No interfaces reported by the OS")
        return 2
    print(f"[OK] Counter enumeration: {len(first)} interfaces")

    store = CounterStore()
    store.initialize(first)
    time.sleep(cfg.monitor.interval_seconds)
    try:
        deltas = store.compute_delta_and_update(counters.counters())
    except CounterSourceError as exc:
        print(f"[FAIL] Second sample: {exc}")
        return 2
    for name in sorted(deltas):
        d = deltas[name]
        print(f"  - {name}: rx {format_rate(d.received)}, tx {format_rate(d.transmitted)}")

    try:
        bindings = PsutilAddressSource().addresses()
    except AddressSourceError as exc:
        print(f"[WARN] Address enumeration failed (monitor will run without details): {exc}")
        return 0
    print(f"[OK] Address enumeration: {len(bindings)} addresses")
    for b in bindings:
        print(f"  - {b.interface}: {b.address}")

    return 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
