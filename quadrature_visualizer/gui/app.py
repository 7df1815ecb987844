from __future__ import annotations

import html
from dataclasses import dataclass
from typing import Callable, Optional

import ipywidgets as w
import matplotlib.pyplot as plt

from quadrature_visualizer.analysis.formatting import direction_label
from quadrature_visualizer.analysis.synthesizer import synthesize
from quadrature_visualizer.analysis.tables import edge_table
from quadrature_visualizer.models.drive import DriveMode, PhaseOffset, Speed
from quadrature_visualizer.models.profile import DEFAULT_PROFILE, SynthesisProfile
from quadrature_visualizer.models.waveforms import EncoderOutput

from .log_view import HtmlLog
from .plots import COLOR_A, COLOR_B, render_encoder_figure


PHASE_RANGE_DEG = (0, 180)
SPEED_RANGE_RPS = (-7.0, 7.0)
DEFAULT_PHASE_DEG = 90
DEFAULT_SPEED_RPS = 3.0
EDGE_TABLE_ROWS = 10

# Keep a single active GUI instance per kernel to avoid duplicated callbacks / stacked widgets.
_ACTIVE_GUI: Optional[w.Widget] = None


@dataclass
class EncoderViewState:
    """Last drive value and the output computed for it.

    Synthesis is deterministic, so returning the cached output for an
    unchanged drive is only a shortcut.
    """

    drive: Optional[DriveMode] = None
    output: Optional[EncoderOutput] = None
    n_computed: int = 0

    def output_for(self, drive: DriveMode, profile: Optional[SynthesisProfile] = None) -> EncoderOutput:
        p = profile or DEFAULT_PROFILE
        if self.output is not None and self.drive == drive and self.output.profile == p:
            return self.output
        self.output = synthesize(drive, p)
        self.drive = drive
        self.n_computed += 1
        return self.output


def _info_html(output: EncoderOutput) -> str:
    profile = output.profile
    items = []
    if output.direction is not None:
        items.append(("Direction", direction_label(output.direction)))
    items += [
        ("Frequency", f"{output.frequency:.0f} Hz"),
        ("Pulses/Rotation", str(profile.pulses_per_rotation)),
        ("Duty Cycle", f"~{profile.duty_cycle * 100:.0f}%"),
    ]
    cells = "".join(
        f"<span style='margin-right:24px;'><span style='color:#999;'>{html.escape(k)}:</span> "
        f"<b style='color:{COLOR_A};'>{html.escape(v)}</b></span>"
        for k, v in items
    )
    return f"<div style='padding:6px; background:#111;'>{cells}</div>"


def _table_html(output: EncoderOutput, n_rows: int = EDGE_TABLE_ROWS) -> str:
    df = edge_table(output, n_rows=n_rows)
    title = f"<h4>Edge Transitions (First {n_rows})</h4>"
    if df.empty:
        return title + "<div style='color:#999;'>No edges (motor stopped).</div>"
    # Channel colours are applied per cell after escaping.
    body = df.to_html(index=False, escape=True, border=0)
    body = body.replace("<td>A</td>", f"<td style='color:{COLOR_A}; font-weight:bold;'>A</td>")
    body = body.replace("<td>B</td>", f"<td style='color:{COLOR_B}; font-weight:bold;'>B</td>")
    return title + f"<div style='font-family:monospace;'>{body}</div>"


def _make_control(mode: str) -> tuple[w.Widget, Callable[[float], DriveMode]]:
    if mode == "phase":
        slider = w.IntSlider(
            value=DEFAULT_PHASE_DEG,
            min=PHASE_RANGE_DEG[0],
            max=PHASE_RANGE_DEG[1],
            step=1,
            description="Phase [°]",
            continuous_update=False,
            layout=w.Layout(width="600px"),
        )
        return slider, lambda v: PhaseOffset(degrees=float(v))
    if mode == "speed":
        slider = w.FloatSlider(
            value=DEFAULT_SPEED_RPS,
            min=SPEED_RANGE_RPS[0],
            max=SPEED_RANGE_RPS[1],
            step=0.1,
            readout_format=".1f",
            description="Speed [rot/s]",
            continuous_update=False,
            style={"description_width": "initial"},
            layout=w.Layout(width="600px"),
        )
        return slider, lambda v: Speed(rotations_per_second=round(float(v), 1))
    raise ValueError(f"mode must be 'phase' or 'speed', got {mode!r}")


def build_encoder_panel(mode: str = "phase", profile: Optional[SynthesisProfile] = None) -> w.Widget:
    """
    One drive-mode panel: slider, info line, charts, edge table and log.

    mode:
      "phase" -> channel B phase difference in [0, 180] degrees at the reference frequency
      "speed" -> signed motor speed in [-7, 7] rotations/second
    """
    p = profile or DEFAULT_PROFILE
    slider, drive_for = _make_control(mode)
    state = EncoderViewState()

    info = w.HTML()
    table = w.HTML()
    out_plot = w.Output(layout=w.Layout(border="1px solid #333", padding="6px"))
    log = HtmlLog(title="Log")

    def _refresh(value) -> None:
        try:
            drive = drive_for(value)
            output = state.output_for(drive, p)
            info.value = _info_html(output)
            table.value = _table_html(output)

            out_plot.clear_output(wait=True)
            with out_plot:
                plt.close("all")
                fig = plt.figure(figsize=(11.0, 8.0))
                render_encoder_figure(output, fig=fig)
                plt.show()

            log.info(f"{drive}: f={output.frequency:.0f} Hz, {len(output.merged_edges)} edges")
            if output.is_stopped:
                log.warning("Motor stopped: no edges to show.")
        except Exception as exc:
            log.exception(exc)

    slider.observe(lambda change: _refresh(change["new"]), names="value")
    _refresh(slider.value)

    if mode == "phase":
        blurb = (
            "Adjust the phase offset between Channel A and Channel B. "
            "The ideal quadrature value is 90°."
        )
    else:
        blurb = "Positive speed: A leads B (forward). Negative speed: B leads A (reverse)."
    header = w.HTML(
        "<h3>Quadrature Encoder Visualizer</h3>"
        f"<div style='color:#666;'>180 pulses per rotation, ~45% duty cycle. {html.escape(blurb)}</div>"
    )

    return w.VBox([header, slider, info, out_plot, table, log.panel])


def build_gui(profile: Optional[SynthesisProfile] = None) -> w.Tab:
    """
    Tabbed GUI with the phase-driven and the speed-driven panel.

    Entry point:
        from quadrature_visualizer.gui.app import build_gui
        build_gui()
    """
    global _ACTIVE_GUI

    if _ACTIVE_GUI is not None:
        _ACTIVE_GUI.close()
        _ACTIVE_GUI = None

    tab = w.Tab(children=[build_encoder_panel("phase", profile), build_encoder_panel("speed", profile)])
    tab.set_title(0, "Phase Offset")
    tab.set_title(1, "Motor Speed")

    _ACTIVE_GUI = tab
    return tab
