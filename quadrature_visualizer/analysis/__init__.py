"""Waveform synthesis and edge-delta analysis.

Design principle:
  - The engine is a pure function of one control value (phase or speed) and a
    frozen :class:`~quadrature_visualizer.models.profile.SynthesisProfile`.
  - Presentation code consumes :class:`~quadrature_visualizer.models.waveforms.EncoderOutput`
    and never re-derives edge adjacency: every merged edge carries its delta.
"""

from .square_wave import detect_edges, flat_waveform, generate_square_wave
from .synthesizer import merge_edges, resolve_drive, synthesize, synthesize_phase, synthesize_speed
from .formatting import format_time_delta
from .tables import edge_table, edges_to_dataframe, summarize_output

__all__ = [
    "detect_edges",
    "flat_waveform",
    "generate_square_wave",
    "merge_edges",
    "resolve_drive",
    "synthesize",
    "synthesize_phase",
    "synthesize_speed",
    "format_time_delta",
    "edge_table",
    "edges_to_dataframe",
    "summarize_output",
]
