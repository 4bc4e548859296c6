from __future__ import annotations

import argparse
import logging
import signal
import sys
from typing import Callable

from netmon.core.config import AppConfig, load_config
from netmon.core.exceptions import ConfigError, NetmonError, SignalSetupError
from netmon.core.utils import platform_summary, setup_logging
from netmon.engine.cycle import SamplingCycle
from netmon.engine.state import StopToken
from netmon.sources.psutil_source import PsutilAddressSource, PsutilCounterSource
from netmon.ui.report import ReportSink


def _parse_args(argv: list[str]) -> argparse.Namespace:
    p = argparse.ArgumentParser(prog="netmon", description="Live per-interface network throughput")
    p.add_argument("--config", type=str, default=None, help="Optional path to a YAML config file")
    p.add_argument("--interval", type=float, default=None, help="Seconds between refreshes (default 1)")
    p.add_argument("--log-level", type=str, default=None)
    p.add_argument("--log-dir", type=str, default=None, help="Also write rotating log files here")
    p.add_argument("--no-color", action="store_true", help="Plain, uncoloured output")
    return p.parse_args(argv)


def _apply_cli(config: AppConfig, args: argparse.Namespace) -> AppConfig:
    update: dict = {}
    if args.interval is not None:
        update["monitor"] = {"interval_seconds": args.interval}
    if args.log_level is not None:
        update.setdefault("logging", {})["level"] = args.log_level
    if args.log_dir is not None:
        update.setdefault("logging", {})["dir"] = args.log_dir
    if args.no_color:
        update["display"] = {"color": False}
    if not update:
        return config
    # Re-validate so CLI values get the same checks as file values.
    merged = config.model_dump()
    for section, values in update.items():
        merged[section].update(values)
    try:
        return AppConfig.model_validate(merged)
    except ValueError as exc:
        raise ConfigError(str(exc)) from exc


def install_signal_handlers(stop: StopToken, on_force_exit: Callable[[], None]) -> None:
    """
    First SIGINT/SIGTERM asks the loop to stop after the current frame.
    A second one while stopping exits on the spot.
    """
    log = logging.getLogger("netmon")

    def _handle_sig(signum: int, _frame: object) -> None:
        if stop.is_set():
            on_force_exit()
            raise SystemExit(0)
        stop.set()
        log.warning("shutdown requested", extra={"signal": signum})

    try:
        signal.signal(signal.SIGINT, _handle_sig)
        signal.signal(signal.SIGTERM, _handle_sig)
    except (ValueError, OSError) as exc:
        raise SignalSetupError(f"cannot install signal handlers: {exc}") from exc


def main(argv: list[str] | None = None) -> int:
    args = _parse_args(sys.argv[1:] if argv is None else argv)
    try:
        config = _apply_cli(load_config(args.config), args)
    except ConfigError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    setup_logging(config.logging.dir, level=config.logging.level)
    log = logging.getLogger("netmon")
    log.info("starting", extra={"platform": dict(platform_summary())})

    sink = ReportSink.for_terminal(color=config.display.color)
    stop = StopToken()
    cycle = SamplingCycle(
        counters=PsutilCounterSource(),
        addresses=PsutilAddressSource(),
        sink=sink,
        stop=stop,
        interval_seconds=config.monitor.interval_seconds,
    )

    try:
        cycle.startup()
        install_signal_handlers(stop, sink.farewell)
        cycle.run()
    except KeyboardInterrupt:
        pass
    except NetmonError as exc:
        # critical so the message survives any configured log level
        log.critical("Error: %s", exc)
        return 1

    sink.farewell()
    log.info("stopped")
    return 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
