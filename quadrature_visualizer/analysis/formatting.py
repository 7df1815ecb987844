from __future__ import annotations

from typing import Optional

from quadrature_visualizer.models.waveforms import Direction, EdgeKind

MICRO = "μs"

_DIRECTION_LABELS = {
    Direction.FORWARD: "→ Forward",
    Direction.REVERSE: "← Reverse",
    Direction.STOPPED: "⊗ Stopped",
}


def to_microseconds(seconds: float) -> float:
    return float(seconds) * 1e6


def format_time_delta(seconds: Optional[float]) -> str:
    """Format a delta in seconds as microseconds with two decimals.

    ``None`` (first edge of a sequence) formats as ``"N/A"``. A zero delta is a
    real value and formats as ``"0.00 μs"``.

    >>> format_time_delta(0.0001)
    '100.00 μs'
    >>> format_time_delta(None)
    'N/A'
    """
    if seconds is None:
        return "N/A"
    return f"{to_microseconds(seconds):.2f} {MICRO}"


def format_edge_time(seconds: float) -> str:
    """Absolute edge time, same unit and precision as deltas."""
    return f"{to_microseconds(seconds):.2f} {MICRO}"


def format_edge_kind(kind: EdgeKind) -> str:
    return "↑ Rising" if EdgeKind(kind) is EdgeKind.RISING else "↓ Falling"


def direction_label(direction: Optional[Direction]) -> str:
    if direction is None:
        return "—"
    return _DIRECTION_LABELS[Direction(direction)]
