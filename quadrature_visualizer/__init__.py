"""Quadrature Encoder Visualizer -- simulate the two-channel output of a motor's optical encoder.

Models an NXT-style DC motor encoder (180 pulses per rotation, ~45% duty cycle).

This package provides tools for:
- Synthesizing time-sampled square waves for encoder channels A and B
- Driving the pair from a fixed phase difference or from a signed motor speed
- Detecting rising/falling edges and merging both channels into one time-ordered sequence
- Computing the time delta between consecutive merged edges
- Rendering waveforms, delta charts and edge tables (matplotlib, pandas, ipywidgets)

Key principles:
- Pure computation: every output is rebuilt from scratch for each control value
- Deterministic: identical inputs give identical outputs
- Deltas live on the edges: renderers never re-derive adjacency

Main subpackages:
- analysis: Square-wave generator, synthesizer, formatting and tables
- gui: Interactive ipywidgets panels and matplotlib renderers
- models: Data models (ChannelWaveform, EncoderOutput, DriveMode, SynthesisProfile)
- scripts: Command-line edge report
"""

__all__ = []
