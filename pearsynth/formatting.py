from __future__ import annotations


def format_value(value: float, step: float = 1.0, unit: str = "") -> str:
    decimals = 0 if step >= 1 else 2
    return f"{value:.{decimals}f}{unit}"


def format_time(ms: float) -> str:
    if ms >= 1000:
        return f"{ms / 1000:.1f}s"
    return f"{ms:g}ms"


def format_frequency(hz: float) -> str:
    if hz >= 1000:
        return f"{hz / 1000:.1f}kHz"
    return f"{hz:g}Hz"


def format_frequency_label(hz: float) -> str:
    """Axis label: plain Hz below 1 kHz, ``k`` suffix from 1 kHz up."""
    if hz >= 1000:
        return f"{hz / 1000:g}k"
    return f"{hz:g}"
