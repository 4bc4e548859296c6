from __future__ import annotations

KB = 1024
MB = KB * 1024
GB = MB * 1024


def format_bytes(n: int) -> str:
    # 1024-based thresholds with KB/MB/GB labels, kept as the display has always been.
    if n >= GB:
        return f"{n / GB:.2f} GB"
    if n >= MB:
        return f"{n / MB:.2f} MB"
    if n >= KB:
        return f"{n / KB:.2f} KB"
    return f"{int(n)} B"


def format_rate(n: int) -> str:
    return f"{format_bytes(n)}/s"
