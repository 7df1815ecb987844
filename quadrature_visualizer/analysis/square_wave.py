"""Single-channel square-wave synthesis and edge detection.

Functions
---------
generate_square_wave
    Sample one channel's square wave over a fixed window and list its edges.
flat_waveform
    Degenerate flat-zero waveform used for a stopped motor.
detect_edges
    Adjacent-pair transition detector shared by the generator and by callers
    that want to re-derive edges from samples.
"""

from __future__ import annotations

import math
from typing import Tuple

import numpy as np

from quadrature_visualizer.models.waveforms import ChannelWaveform, Edge, EdgeKind

# Upper bound on samples per channel; larger windows are rejected before allocation.
MAX_TOTAL_SAMPLES = 1_000_000


def _frozen(x: np.ndarray) -> np.ndarray:
    x.setflags(write=False)
    return x


def _check_samples_per_period(samples_per_period) -> int:
    if isinstance(samples_per_period, bool):
        raise ValueError(f"samples_per_period must be a positive integer, got {samples_per_period!r}")
    try:
        n = int(samples_per_period)
    except (TypeError, ValueError):
        raise ValueError(f"samples_per_period must be a positive integer, got {samples_per_period!r}") from None
    if n != samples_per_period or n <= 0:
        raise ValueError(f"samples_per_period must be a positive integer, got {samples_per_period!r}")
    return n


def phase_levels(
    t: np.ndarray,
    frequency: float,
    duty_cycle: float,
    phase_offset_deg: float,
) -> np.ndarray:
    """Signal level (int8, 0/1) at times ``t``.

    The instantaneous phase fraction is ``((t*f*360 + offset) mod 360) / 360``,
    wrapped into ``[0, 1)``; the signal is high while the fraction is below the
    duty cycle.
    """
    t = np.asarray(t, dtype=float)
    frac = np.mod(t * frequency * 360.0 + phase_offset_deg, 360.0) / 360.0
    # Tiny negative arguments round up to exactly 360 under floor modulo.
    frac = np.where(frac >= 1.0, 0.0, frac)
    return (frac < duty_cycle).astype(np.int8)


def detect_edges(time: np.ndarray, level: np.ndarray) -> Tuple[Edge, ...]:
    """Return the transitions implied by adjacent samples.

    Parameters
    ----------
    time:
        Sample times, shape ``(n,)``.
    level:
        Sample levels (0/1), shape ``(n,)``.

    Returns
    -------
    tuple of Edge
        One edge per index ``i >= 1`` where ``level[i] != level[i-1]``, stamped
        with ``time[i]``.
    """
    t = np.asarray(time, dtype=float)
    lv = np.asarray(level)
    if t.ndim != 1 or lv.ndim != 1:
        raise ValueError(f"time and level must be 1D, got shapes {t.shape} and {lv.shape}")
    if t.shape != lv.shape:
        raise ValueError(f"time and level must have the same length, got {t.size} and {lv.size}")

    idx = np.flatnonzero(np.diff(lv.astype(np.int16)) != 0) + 1
    edges = []
    for i in idx:
        new_level = int(lv[i])
        kind = EdgeKind.RISING if new_level == 1 else EdgeKind.FALLING
        edges.append(Edge(time=float(t[i]), kind=kind, level=new_level))
    return tuple(edges)


def flat_waveform(duration: float) -> ChannelWaveform:
    """Two-point flat-zero waveform spanning ``[0, duration]`` with no edges."""
    t = np.array([0.0, float(duration)], dtype=float)
    lv = np.zeros(2, dtype=np.int8)
    return ChannelWaveform(time=_frozen(t), level=_frozen(lv), edges=())


def generate_square_wave(
    duration: float,
    frequency: float,
    duty_cycle: float = 0.45,
    phase_offset_deg: float = 0.0,
    samples_per_period: int = 20,
) -> ChannelWaveform:
    """Sample a square wave and detect its edges.

    Parameters
    ----------
    duration:
        Window length in seconds, > 0.
    frequency:
        Frequency in Hz, >= 0. Zero models a stopped motor and returns
        :func:`flat_waveform`.
    duty_cycle:
        High fraction of each period, in ``(0, 1)``.
    phase_offset_deg:
        Phase offset in degrees; any finite value, taken modulo 360.
    samples_per_period:
        Number of samples per period (positive integer).

    Returns
    -------
    ChannelWaveform
        ``floor(duration*frequency) * samples_per_period + 1`` samples on the
        uniform grid ``t_i = i * duration / total``, and the edges found on it.

    Notes
    -----
    When the window holds less than one full period the sample count is zero
    and the grid step is undefined. The result is then a single flat sample at
    ``t = 0`` with no edges.

    Raises ``ValueError`` when the grid would exceed :data:`MAX_TOTAL_SAMPLES`.
    """
    duration = float(duration)
    frequency = float(frequency)
    duty_cycle = float(duty_cycle)
    phase_offset_deg = float(phase_offset_deg)
    spp = _check_samples_per_period(samples_per_period)

    if not math.isfinite(duration) or duration <= 0:
        raise ValueError(f"duration must be finite and > 0, got {duration}")
    if not math.isfinite(frequency) or frequency < 0:
        raise ValueError(f"frequency must be finite and >= 0, got {frequency}")
    if not (0.0 < duty_cycle < 1.0):
        raise ValueError(f"duty_cycle must be in (0, 1), got {duty_cycle}")
    if not math.isfinite(phase_offset_deg):
        raise ValueError(f"phase_offset_deg must be finite, got {phase_offset_deg}")

    if frequency == 0:
        return flat_waveform(duration)

    period = 1.0 / frequency
    total_samples = math.floor(duration / period) * spp
    if total_samples > MAX_TOTAL_SAMPLES:
        raise ValueError(
            f"{frequency} Hz over {duration} s would need {total_samples} samples "
            f"(limit {MAX_TOTAL_SAMPLES}); lower the frequency, duration or samples_per_period"
        )

    if total_samples == 0:
        t = np.zeros(1, dtype=float)
        lv = phase_levels(t, frequency, duty_cycle, phase_offset_deg)
        return ChannelWaveform(time=_frozen(t), level=_frozen(lv), edges=())

    dt = duration / total_samples
    t = np.arange(total_samples + 1, dtype=float) * dt
    lv = phase_levels(t, frequency, duty_cycle, phase_offset_deg)

    return ChannelWaveform(
        time=_frozen(t),
        level=_frozen(lv),
        edges=detect_edges(t, lv),
    )
