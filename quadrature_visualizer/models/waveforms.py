from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple

import numpy as np

from .drive import DriveMode
from .profile import DEFAULT_PROFILE, SynthesisProfile


class EdgeKind(str, Enum):
    """Direction of a level transition."""

    RISING = "rising"
    FALLING = "falling"


class Channel(str, Enum):
    A = "A"
    B = "B"


class Direction(str, Enum):
    """Rotation direction derived from the sign of the speed."""

    FORWARD = "forward"
    REVERSE = "reverse"
    STOPPED = "stopped"


@dataclass(frozen=True)
class Edge:
    """A transition detected in one channel.

    ``level`` is the post-transition value (1 for rising, 0 for falling). It is
    redundant with ``kind`` but kept so renderers can use it directly.
    """

    time: float
    kind: EdgeKind
    level: int


@dataclass(frozen=True)
class TaggedEdge:
    """An :class:`Edge` placed in the merged A/B sequence.

    ``delta`` is the time elapsed since the preceding edge of the merged,
    time-ordered sequence (not the preceding edge of the same channel). It is
    ``None`` for the first edge.
    """

    time: float
    kind: EdgeKind
    level: int
    channel: Channel
    delta: Optional[float] = None

    @property
    def previous_time(self) -> Optional[float]:
        """Time of the preceding merged edge, reconstructed from ``delta``."""
        if self.delta is None:
            return None
        return self.time - self.delta


@dataclass(frozen=True, eq=False)
class ChannelWaveform:
    """One channel's sampled signal.

    Attributes
    ----------
    time:
        Sample times in seconds, shape ``(n,)``, strictly increasing, ``time[0] == 0``.
    level:
        Signal level per sample (0 or 1), shape ``(n,)``.
    edges:
        Transitions implied by adjacent samples, in time order.

    Both arrays are read-only. Equality and hashing go by array contents.
    """

    time: np.ndarray
    level: np.ndarray
    edges: Tuple[Edge, ...] = ()

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ChannelWaveform):
            return NotImplemented
        return (
            np.array_equal(self.time, other.time)
            and np.array_equal(self.level, other.level)
            and self.edges == other.edges
        )

    def __hash__(self) -> int:
        return hash((self.time.tobytes(), self.level.tobytes(), self.edges))

    @property
    def n_samples(self) -> int:
        return int(self.time.size)

    @property
    def samples(self) -> Tuple[Tuple[float, int], ...]:
        """Samples as ``(time, level)`` pairs."""
        return tuple(zip(self.time.tolist(), self.level.tolist()))


@dataclass(frozen=True)
class EncoderOutput:
    """Result of one synthesis: both channels plus the merged edge sequence.

    ``direction`` is only set for speed-driven synthesis; it is ``None`` when the
    output was produced from a fixed phase difference. ``profile`` is the
    configuration the output was synthesized with.
    """

    channel_a: ChannelWaveform
    channel_b: ChannelWaveform
    merged_edges: Tuple[TaggedEdge, ...]
    frequency: float
    duration: float
    drive: DriveMode
    phase_a_deg: float = 0.0
    phase_b_deg: float = 0.0
    direction: Optional[Direction] = None
    profile: SynthesisProfile = DEFAULT_PROFILE

    @property
    def is_stopped(self) -> bool:
        return self.frequency == 0

    @property
    def period(self) -> float:
        """Waveform period in seconds; infinite when stopped."""
        return self.profile.period_s(self.frequency)

    @property
    def deltas(self) -> np.ndarray:
        """Non-null deltas of the merged sequence, in seconds."""
        return np.array([e.delta for e in self.merged_edges if e.delta is not None], dtype=float)

    def channel(self, channel: Channel) -> ChannelWaveform:
        return self.channel_a if Channel(channel) is Channel.A else self.channel_b

    def edges_for(self, channel: Channel) -> Tuple[TaggedEdge, ...]:
        ch = Channel(channel)
        return tuple(e for e in self.merged_edges if e.channel is ch)
