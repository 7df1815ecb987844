"""
Matplotlib renderers for encoder outputs.

Design goals:
- Read-only with respect to the engine: every coordinate comes from the
  EncoderOutput (sample arrays, edge times, per-edge deltas).
- Delta arrows start at ``edge.time - edge.delta``; neighbours are never looked
  up by list position.
- Renderers draw onto a caller-supplied Axes so they work with pyplot figures
  in a notebook and with a bare ``Figure`` (no display) in scripts and tests.
"""

from __future__ import annotations

from typing import Optional

import numpy as np
from matplotlib.figure import Figure
from matplotlib.ticker import MultipleLocator

from quadrature_visualizer.analysis.formatting import format_time_delta
from quadrature_visualizer.models.waveforms import Channel, EncoderOutput


# --------------------------------------------------------------------------------------
# Theme
# --------------------------------------------------------------------------------------

COLOR_A = "#00ff00"
COLOR_B = "#ffa500"
PLOT_BG = "#1a1a1a"
PAPER_BG = "#0d0d0d"
GRID_COLOR = "#444444"
TEXT_COLOR = "#ffffff"

CHANNEL_A_OFFSET = 2.0
Y_RANGE = (-1.0, 4.0)

DEFAULT_VISIBLE_CYCLES = 5
MAX_DELTA_ANNOTATIONS = 40
MAX_DELTA_BARS = 50

NO_EDGES_MESSAGE = "No edge transitions detected. Increase motor speed to see delta chart."


def channel_color(channel: Channel) -> str:
    return COLOR_A if Channel(channel) is Channel.A else COLOR_B


def visible_window_s(output: EncoderOutput, n_cycles: int = DEFAULT_VISIBLE_CYCLES) -> float:
    """Initial x-range: ``n_cycles`` periods, or the whole window when stopped."""
    if output.is_stopped:
        return float(output.duration)
    return min(float(n_cycles) * output.period, float(output.duration))


def _style_axes(ax, *, title: str, xlabel: str, ylabel: str) -> None:
    ax.figure.set_facecolor(PAPER_BG)
    ax.set_facecolor(PLOT_BG)
    ax.set_title(title, color=TEXT_COLOR)
    ax.set_xlabel(xlabel, color=TEXT_COLOR)
    ax.set_ylabel(ylabel, color=TEXT_COLOR)
    ax.tick_params(colors=TEXT_COLOR)
    for spine in ax.spines.values():
        spine.set_color(GRID_COLOR)
    ax.grid(True, color=GRID_COLOR, linewidth=0.6)


def _legend(ax) -> None:
    leg = ax.legend(loc="upper left", facecolor="black", edgecolor=TEXT_COLOR, framealpha=0.5)
    for txt in leg.get_texts():
        txt.set_color(TEXT_COLOR)


# --------------------------------------------------------------------------------------
# Public API
# --------------------------------------------------------------------------------------

def plot_waveforms(
    ax,
    output: EncoderOutput,
    *,
    n_cycles: int = DEFAULT_VISIBLE_CYCLES,
    max_annotations: int = MAX_DELTA_ANNOTATIONS,
) -> int:
    """Draw both channels, edge markers and delta annotations onto ``ax``.

    Channel A is drawn offset by +2 so the two traces do not overlap. Edge
    markers cover twice the visible window so panning a little stays
    annotated; at most ``max_annotations`` delta arrows are drawn.

    Returns
    -------
    int
        Number of delta annotations drawn.
    """
    window = visible_window_s(output, n_cycles)
    edge_limit = 2.0 * window

    a = output.channel_a
    b = output.channel_b
    ax.step(a.time, a.level + CHANNEL_A_OFFSET, where="post", color=COLOR_A, linewidth=2, label="Channel A")
    ax.step(b.time, b.level, where="post", color=COLOR_B, linewidth=2, label="Channel B")

    shown = [e for e in output.merged_edges if e.time <= edge_limit]
    for ch in (Channel.A, Channel.B):
        xs = [e.time for e in shown if e.channel is ch]
        if xs:
            ax.vlines(xs, Y_RANGE[0], Y_RANGE[1], colors=channel_color(ch), alpha=0.3, linewidth=1, linestyles="dotted")

    n_drawn = 0
    for e in [e for e in shown if e.delta is not None][: max(0, int(max_annotations))]:
        color = channel_color(e.channel)
        y_arrow = 3.3 if e.channel is Channel.A else -0.3
        y_text = 3.6 if e.channel is Channel.A else -0.6
        t0 = e.previous_time
        ax.annotate(
            "",
            xy=(e.time, y_arrow),
            xytext=(t0, y_arrow),
            arrowprops=dict(arrowstyle="->", color=color, linewidth=2),
        )
        ax.text(
            0.5 * (t0 + e.time),
            y_text,
            format_time_delta(e.delta),
            ha="center",
            va="center",
            fontsize=7,
            family="monospace",
            color=TEXT_COLOR,
            bbox=dict(facecolor="black", alpha=0.8, edgecolor="none", pad=2),
            clip_on=True,
        )
        n_drawn += 1

    _style_axes(ax, title="Quadrature Encoder Signals", xlabel="Time (seconds)", ylabel="Signal Level")
    ax.set_xlim(0.0, window)
    ax.set_ylim(*Y_RANGE)
    ax.set_yticks([0.5, 2.5])
    ax.set_yticklabels(["Channel B", "Channel A"])
    _legend(ax)
    return n_drawn


def plot_deltas(ax, output: EncoderOutput, *, max_edges: int = MAX_DELTA_BARS) -> bool:
    """Bar chart of inter-edge deltas (μs) against merged edge number.

    Bars are coloured by the channel of the edge that closes the interval.
    Returns False (and writes a notice on the axes) when there is nothing to
    plot, e.g. for a stopped motor.
    """
    with_delta = [e for e in output.merged_edges if e.delta is not None][: max(0, int(max_edges))]
    if not with_delta:
        ax.set_facecolor(PLOT_BG)
        ax.text(0.5, 0.5, NO_EDGES_MESSAGE, transform=ax.transAxes, ha="center", va="center", color="#999999")
        ax.set_xticks([])
        ax.set_yticks([])
        return False

    idx = np.arange(1, len(with_delta) + 1)
    us = np.array([e.delta for e in with_delta], dtype=float) * 1e6
    is_a = np.array([e.channel is Channel.A for e in with_delta], dtype=bool)

    ax.bar(idx[is_a], us[is_a], width=0.9, color=COLOR_A, edgecolor=COLOR_A, label="Channel A")
    ax.bar(idx[~is_a], us[~is_a], width=0.9, color=COLOR_B, edgecolor=COLOR_B, label="Channel B")

    _style_axes(ax, title="Time Delta Between Consecutive Edges", xlabel="Edge Number", ylabel="Delta Time (μs)")
    ax.axhline(0.0, color="#666666", linewidth=0.8)
    ax.xaxis.set_major_locator(MultipleLocator(5))
    _legend(ax)
    return True


def render_encoder_figure(output: EncoderOutput, fig: Optional[Figure] = None, **kwargs) -> Figure:
    """Waveform chart above delta chart on one figure.

    ``fig`` may be a pyplot figure (notebook) or omitted, in which case a bare
    :class:`~matplotlib.figure.Figure` is created; it can be saved with
    ``fig.savefig`` without a display. Extra keyword arguments go to
    :func:`plot_waveforms`.
    """
    if fig is None:
        fig = Figure(figsize=(11.0, 8.0))
    ax_wave, ax_delta = fig.subplots(2, 1, gridspec_kw={"height_ratios": [3, 2]})
    plot_waveforms(ax_wave, output, **kwargs)
    plot_deltas(ax_delta, output)
    fig.subplots_adjust(hspace=0.35)
    return fig
