"""Two-channel quadrature synthesis with a globally merged edge sequence.

Both drive modes (fixed phase difference, signed speed) resolve to the same
``(phase_a, phase_b, frequency, direction)`` tuple and share one generate,
merge and delta pipeline.
"""

from __future__ import annotations

import math
from typing import Optional, Tuple

from quadrature_visualizer.models.drive import DriveMode, DriveResolution, PhaseOffset, Speed
from quadrature_visualizer.models.profile import DEFAULT_PROFILE, SynthesisProfile
from quadrature_visualizer.models.waveforms import (
    Channel,
    ChannelWaveform,
    Direction,
    EncoderOutput,
    TaggedEdge,
)

from .square_wave import flat_waveform, generate_square_wave


def direction_from_speed(speed_rps: float) -> Direction:
    s = float(speed_rps)
    if s > 0:
        return Direction.FORWARD
    if s < 0:
        return Direction.REVERSE
    return Direction.STOPPED


def resolve_drive(drive: DriveMode, profile: Optional[SynthesisProfile] = None) -> DriveResolution:
    """Map a drive mode to channel phases, frequency and direction.

    - ``PhaseOffset(d)``: A at 0, B at ``d``, reference frequency, no direction.
    - ``Speed(s)``: frequency ``|s| * pulses_per_rotation``. The leading channel
      sits at 0 and the lagging one at the quadrature offset: B lags when
      moving forward, A lags in reverse.
    """
    p = profile or DEFAULT_PROFILE

    if isinstance(drive, PhaseOffset):
        deg = float(drive.degrees)
        if not math.isfinite(deg):
            raise ValueError(f"phase difference must be finite, got {deg}")
        return DriveResolution(
            phase_a_deg=0.0,
            phase_b_deg=deg,
            frequency_hz=float(p.reference_frequency_hz),
            direction=None,
        )

    if isinstance(drive, Speed):
        s = float(drive.rotations_per_second)
        if not math.isfinite(s):
            raise ValueError(f"speed must be finite, got {s}")
        direction = direction_from_speed(s)
        q = float(p.quadrature_offset_deg)
        if direction is Direction.FORWARD:
            phase_a, phase_b = 0.0, q
        elif direction is Direction.REVERSE:
            phase_a, phase_b = q, 0.0
        else:
            phase_a, phase_b = 0.0, 0.0
        return DriveResolution(
            phase_a_deg=phase_a,
            phase_b_deg=phase_b,
            frequency_hz=p.frequency_for_speed(s),
            direction=direction,
        )

    raise TypeError(f"Unsupported drive mode: {type(drive).__name__}")


def merge_edges(channel_a: ChannelWaveform, channel_b: ChannelWaveform) -> Tuple[TaggedEdge, ...]:
    """Merge both channels' edges into one time-ordered sequence with deltas.

    Edges at exactly the same time keep channel A before channel B (stable sort
    over the A-then-B concatenation). ``delta`` is measured against the
    preceding edge of the merged sequence.
    """
    tagged = [(e, Channel.A) for e in channel_a.edges] + [(e, Channel.B) for e in channel_b.edges]
    tagged.sort(key=lambda pair: pair[0].time)

    out = []
    prev_time: Optional[float] = None
    for edge, ch in tagged:
        delta = None if prev_time is None else edge.time - prev_time
        out.append(TaggedEdge(time=edge.time, kind=edge.kind, level=edge.level, channel=ch, delta=delta))
        prev_time = edge.time
    return tuple(out)


def synthesize(drive: DriveMode, profile: Optional[SynthesisProfile] = None) -> EncoderOutput:
    """Generate both encoder channels for ``drive`` and merge their edges.

    Parameters
    ----------
    drive:
        :class:`PhaseOffset` or :class:`Speed`. Values outside the nominal
        control ranges are accepted and produce whatever phase/frequency they
        imply.
    profile:
        Synthesis constants; defaults to :data:`DEFAULT_PROFILE`.

    Returns
    -------
    EncoderOutput
        Immutable result. For a stopped motor both channels are flat and
        ``merged_edges`` is empty.
    """
    p = profile or DEFAULT_PROFILE
    res = resolve_drive(drive, p)
    duration = float(p.duration_s)

    if res.frequency_hz == 0:
        return EncoderOutput(
            channel_a=flat_waveform(duration),
            channel_b=flat_waveform(duration),
            merged_edges=(),
            frequency=0.0,
            duration=duration,
            drive=drive,
            phase_a_deg=res.phase_a_deg,
            phase_b_deg=res.phase_b_deg,
            direction=res.direction,
            profile=p,
        )

    common = dict(
        duration=duration,
        frequency=res.frequency_hz,
        duty_cycle=p.duty_cycle,
        samples_per_period=p.samples_per_period,
    )
    ch_a = generate_square_wave(phase_offset_deg=res.phase_a_deg, **common)
    ch_b = generate_square_wave(phase_offset_deg=res.phase_b_deg, **common)

    return EncoderOutput(
        channel_a=ch_a,
        channel_b=ch_b,
        merged_edges=merge_edges(ch_a, ch_b),
        frequency=float(res.frequency_hz),
        duration=duration,
        drive=drive,
        phase_a_deg=res.phase_a_deg,
        phase_b_deg=res.phase_b_deg,
        direction=res.direction,
        profile=p,
    )


def synthesize_phase(phase_difference_deg: float, profile: Optional[SynthesisProfile] = None) -> EncoderOutput:
    """Phase-driven synthesis (channel B lags A by ``phase_difference_deg``)."""
    return synthesize(PhaseOffset(degrees=float(phase_difference_deg)), profile)


def synthesize_speed(speed_rps: float, profile: Optional[SynthesisProfile] = None) -> EncoderOutput:
    """Speed-driven synthesis; the sign of ``speed_rps`` selects the direction."""
    return synthesize(Speed(rotations_per_second=float(speed_rps)), profile)
