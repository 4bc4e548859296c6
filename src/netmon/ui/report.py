from __future__ import annotations

from datetime import datetime
from typing import Mapping, Sequence

from rich.console import Console
from rich.text import Text

from netmon.core.exceptions import OutputError
from netmon.monitoring.network import InterfaceDelta
from netmon.sources.base import AddressBinding
from netmon.ui.widgets import format_rate

STYLE_TITLE = "bold green"
STYLE_TIME = "blue"
STYLE_INTERFACE = "cyan"
STYLE_VALUE = "yellow"

FAREWELL = "Exiting network monitor..."


def _field(label: str, value: str) -> Text:
    return Text.assemble(label, (value, STYLE_VALUE))


def per_second(delta_bytes: int, interval_seconds: float) -> int:
    if interval_seconds <= 0:
        return delta_bytes
    return int(delta_bytes / interval_seconds)


def render_report(
    *,
    updated_at: datetime,
    deltas: Mapping[str, InterfaceDelta],
    bindings: Sequence[AddressBinding] | None,
    interval_seconds: float = 1.0,
) -> Text:
    """
    One dashboard frame. `deltas` cover one interval and are shown per
    second. `bindings=None` means addresses could not be read this cycle and
    the details section is left out entirely.
    """
    lines: list[Text] = [
        Text("=== Network Interfaces ===", style=STYLE_TITLE),
        Text(f"Updated at: {updated_at:%H:%M:%S}", style=STYLE_TIME),
    ]
    for name in sorted(deltas):
        delta = deltas[name]
        lines.append(Text())
        lines.append(Text(f"Interface: {name}", style=STYLE_INTERFACE))
        lines.append(_field("  Received:  ", format_rate(per_second(delta.received, interval_seconds))))
        lines.append(_field("  Transmitted: ", format_rate(per_second(delta.transmitted, interval_seconds))))

    if bindings is not None:
        lines.append(Text())
        lines.append(Text("=== Interface Details ===", style=STYLE_TITLE))
        for binding in bindings:
            lines.append(Text())
            lines.append(Text(f"Interface: {binding.interface}", style=STYLE_INTERFACE))
            lines.append(_field("  IP Address: ", binding.address))

    return Text("\n").join(lines)


class ReportSink:
    """
    Terminal output for the dashboard; write failures surface as OutputError.

    `clear()` goes through rich, which only writes the clear-screen and home
    control codes when the console is a terminal. Piped or redirected output
    gets plain frames with no escape sequences.
    """

    def __init__(self, console: Console) -> None:
        self.console = console

    @classmethod
    def for_terminal(cls, *, color: bool = True) -> "ReportSink":
        return cls(Console(no_color=not color, highlight=False))

    def clear(self) -> None:
        self.console.clear()

    def emit(self, report: Text) -> None:
        try:
            self.console.print(report, soft_wrap=True)
        except (OSError, ValueError) as exc:
            raise OutputError(f"cannot write report: {exc}") from exc

    def flush(self) -> None:
        try:
            self.console.file.flush()
        except (OSError, ValueError) as exc:
            raise OutputError(f"cannot flush output: {exc}") from exc

    def farewell(self) -> None:
        self.console.print()
        self.console.print(FAREWELL, style=STYLE_VALUE)
        self.console.file.flush()
