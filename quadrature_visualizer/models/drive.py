"""Drive modes -- the control value behind one synthesis.

A synthesis is driven either by a fixed phase difference between the channels
or by a signed motor speed. Both resolve to the same
``(phase_a, phase_b, frequency, direction)`` tuple before the channels are
generated, so the merge and delta logic exists only once.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Optional, Union

if TYPE_CHECKING:
    from .waveforms import Direction


@dataclass(frozen=True)
class PhaseOffset:
    """Channel B lags channel A by ``degrees`` at the reference frequency."""

    degrees: float


@dataclass(frozen=True)
class Speed:
    """Signed motor speed; positive is forward."""

    rotations_per_second: float


DriveMode = Union[PhaseOffset, Speed]


@dataclass(frozen=True)
class DriveResolution:
    """Channel phases, pulse frequency and direction implied by a drive mode."""

    phase_a_deg: float
    phase_b_deg: float
    frequency_hz: float
    direction: Optional["Direction"] = None
