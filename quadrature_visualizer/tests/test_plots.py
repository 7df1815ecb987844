"""Headless tests for the matplotlib renderers (bare Figure, no display)."""

from __future__ import annotations

import dataclasses

import numpy as np
import pytest
from matplotlib.figure import Figure

from quadrature_visualizer.analysis.synthesizer import synthesize_phase, synthesize_speed
from quadrature_visualizer.gui.plots import (
    COLOR_A,
    NO_EDGES_MESSAGE,
    plot_deltas,
    plot_waveforms,
    render_encoder_figure,
    visible_window_s,
)
from quadrature_visualizer.models.profile import DEFAULT_PROFILE


def _ax():
    return Figure().add_subplot(1, 1, 1)


def test_visible_window() -> None:
    assert visible_window_s(synthesize_phase(90.0)) == pytest.approx(5.0 / 1800.0)
    assert visible_window_s(synthesize_speed(0.0)) == pytest.approx(0.1)

    # 1 rot/s at 360 pulses per rotation: period is 1/360 s.
    p = dataclasses.replace(DEFAULT_PROFILE, pulses_per_rotation=360)
    assert visible_window_s(synthesize_speed(1.0, p), n_cycles=3) == pytest.approx(3.0 / 360.0)
    assert visible_window_s(synthesize_speed(1.0, p), n_cycles=1000) == pytest.approx(0.1)


def test_plot_waveforms_traces_and_limits() -> None:
    out = synthesize_phase(90.0)
    ax = _ax()
    n = plot_waveforms(ax, out)

    lines = ax.get_lines()
    assert len(lines) == 2
    ya = lines[0].get_ydata()
    yb = lines[1].get_ydata()
    assert np.array_equal(ya, out.channel_a.level + 2.0)
    assert np.array_equal(yb, out.channel_b.level)
    assert lines[0].get_label() == "Channel A"

    assert ax.get_xlim() == pytest.approx((0.0, 5.0 / 1800.0))
    assert ax.get_ylim() == pytest.approx((-1.0, 4.0))
    assert [t.get_text() for t in ax.get_yticklabels()] == ["Channel B", "Channel A"]

    # Edges inside twice the visible window: 10 periods, 4 edges each, minus
    # the first edge which has no delta; capped at 40.
    assert 0 < n <= 40
    # Arrows are empty-text annotations; labels carry the formatted delta.
    texts = [t.get_text() for t in ax.texts if t.get_text()]
    assert len(texts) == n
    assert all(t.endswith(" μs") for t in texts)


def test_plot_waveforms_annotation_cap() -> None:
    out = synthesize_phase(90.0)
    assert plot_waveforms(_ax(), out, max_annotations=3) == 3
    assert plot_waveforms(_ax(), out, max_annotations=0) == 0


def test_plot_waveforms_stopped_motor() -> None:
    ax = _ax()
    n = plot_waveforms(ax, synthesize_speed(0.0))
    assert n == 0
    assert ax.get_xlim() == pytest.approx((0.0, 0.1))


def test_plot_deltas_bars_by_channel() -> None:
    out = synthesize_speed(3.0)
    ax = _ax()
    assert plot_deltas(ax, out, max_edges=50) is True

    bars = ax.patches
    assert len(bars) == 50
    heights = sorted(b.get_height() for b in bars)
    expected = sorted(e.delta * 1e6 for e in out.merged_edges[1:51])
    assert np.allclose(heights, expected)
    labels = [t.get_text() for t in ax.get_legend().get_texts()]
    assert labels == ["Channel A", "Channel B"]


def test_plot_deltas_without_edges() -> None:
    ax = _ax()
    assert plot_deltas(ax, synthesize_speed(0.0)) is False
    assert [t.get_text() for t in ax.texts] == [NO_EDGES_MESSAGE]


def test_render_encoder_figure_saves_png(tmp_path) -> None:
    fig = render_encoder_figure(synthesize_speed(-2.5))
    assert len(fig.axes) == 2
    path = tmp_path / "encoder.png"
    fig.savefig(path)
    assert path.exists() and path.stat().st_size > 0


def test_render_into_existing_figure() -> None:
    fig = Figure()
    out = render_encoder_figure(synthesize_phase(45.0), fig=fig, n_cycles=2)
    assert out is fig
    assert fig.axes[0].get_xlim() == pytest.approx((0.0, 2.0 / 1800.0))
    assert fig.axes[0].get_lines()[0].get_color() == COLOR_A
