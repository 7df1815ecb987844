"""Synthesis profile -- bundles every constant that shapes the engine output.

A SynthesisProfile groups the fixed parameters of the simulated encoder into
one frozen dataclass. It can be:

- Used as-is (defaults model an NXT-style motor encoder)
- Overridden field-by-field via ``dataclasses.replace()``
- Serialized to/from a dict for provenance
"""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any, Dict


@dataclass(frozen=True)
class SynthesisProfile:
    """Frozen configuration for waveform synthesis.

    Fields
    ------
    duration_s : float
        Length of the simulated window in seconds.
    duty_cycle : float
        Fraction of each period during which a channel is high.
    samples_per_period : int
        Number of samples generated per waveform period.
    reference_frequency_hz : float
        Pulse frequency used when the drive is a fixed phase difference
        (180 pulses per rotation at 10 rotations per second).
    pulses_per_rotation : int
        Scale from speed (rotations/s) to pulse frequency.
    quadrature_offset_deg : float
        Phase lead of the leading channel for speed-driven synthesis.
    """

    duration_s: float = 0.1
    duty_cycle: float = 0.45
    samples_per_period: int = 20
    reference_frequency_hz: float = 1800.0
    pulses_per_rotation: int = 180
    quadrature_offset_deg: float = 90.0

    def period_s(self, frequency_hz: float) -> float:
        """Waveform period for ``frequency_hz``; infinite when stopped."""
        f = float(frequency_hz)
        if f == 0:
            return float("inf")
        return 1.0 / abs(f)

    def frequency_for_speed(self, rotations_per_second: float) -> float:
        return abs(float(rotations_per_second)) * float(self.pulses_per_rotation)

    # ------------------------------------------------------------------
    # Serialization
    # ------------------------------------------------------------------

    def to_dict(self) -> Dict[str, Any]:
        """Return a JSON-friendly dict."""
        return asdict(self)

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> SynthesisProfile:
        """Reconstruct from a dict, ignoring unknown keys."""
        known = cls.__dataclass_fields__
        return cls(**{k: v for k, v in dict(d).items() if k in known})


DEFAULT_PROFILE = SynthesisProfile()
