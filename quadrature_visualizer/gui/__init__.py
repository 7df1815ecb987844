"""GUI package - interactive ipywidgets interface.

Two tabs share one synthesis engine:
1. Phase Offset: channel B phase difference slider (0..180 degrees)
2. Motor Speed: signed speed slider (-7..7 rotations/second)

Entry point:
    from quadrature_visualizer.gui.app import build_gui
    gui = build_gui()

Each panel recomputes the full EncoderOutput on a slider change and renders
the waveform chart, the delta chart and an edge table from it.
"""
