from .drive import DriveMode, DriveResolution, PhaseOffset, Speed
from .profile import DEFAULT_PROFILE, SynthesisProfile
from .waveforms import (
    Channel,
    ChannelWaveform,
    Direction,
    Edge,
    EdgeKind,
    EncoderOutput,
    TaggedEdge,
)

__all__ = [
    "DriveMode",
    "DriveResolution",
    "PhaseOffset",
    "Speed",
    "DEFAULT_PROFILE",
    "SynthesisProfile",
    "Channel",
    "ChannelWaveform",
    "Direction",
    "Edge",
    "EdgeKind",
    "EncoderOutput",
    "TaggedEdge",
]
