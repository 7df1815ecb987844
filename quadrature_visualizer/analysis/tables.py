"""Tabular views of an :class:`~quadrature_visualizer.models.waveforms.EncoderOutput`.

Functions
---------
edges_to_dataframe
    Numeric per-edge table (one row per merged edge).
edge_table
    Display table of the first N edges, formatted for humans.
summarize_output
    Flat dict of headline figures (frequency, direction, edge counts, ...).
"""

from __future__ import annotations

from typing import Any, Dict, Optional

import numpy as np
import pandas as pd

from quadrature_visualizer.models.waveforms import Channel, EncoderOutput

from .formatting import direction_label, format_edge_kind, format_edge_time, format_time_delta

EDGE_COLUMNS = ("time_s", "channel", "kind", "level", "delta_s")
DISPLAY_COLUMNS = ("#", "Time", "Channel", "Type", "Delta from Previous")


def edges_to_dataframe(output: EncoderOutput) -> pd.DataFrame:
    """One row per merged edge, in merged order.

    Columns are ``time_s`` (float), ``channel`` ("A"/"B"), ``kind``
    ("rising"/"falling"), ``level`` (int) and ``delta_s`` (float, NaN for the
    first edge).
    """
    edges = output.merged_edges
    df = pd.DataFrame(
        {
            "time_s": np.array([e.time for e in edges], dtype=float),
            "channel": [e.channel.value for e in edges],
            "kind": [e.kind.value for e in edges],
            "level": np.array([e.level for e in edges], dtype=int),
            "delta_s": np.array([np.nan if e.delta is None else e.delta for e in edges], dtype=float),
        },
        columns=list(EDGE_COLUMNS),
    )
    return df


def edge_table(output: EncoderOutput, n_rows: Optional[int] = 10) -> pd.DataFrame:
    """Human-readable table of the first ``n_rows`` edges (all if None)."""
    edges = output.merged_edges if n_rows is None else output.merged_edges[: max(0, int(n_rows))]
    rows = [
        {
            "#": i + 1,
            "Time": format_edge_time(e.time),
            "Channel": e.channel.value,
            "Type": format_edge_kind(e.kind),
            "Delta from Previous": format_time_delta(e.delta),
        }
        for i, e in enumerate(edges)
    ]
    return pd.DataFrame(rows, columns=list(DISPLAY_COLUMNS))


def summarize_output(output: EncoderOutput) -> Dict[str, Any]:
    """Headline figures for an info panel or a report.

    Profile figures come from the profile recorded on ``output``.
    """
    p = output.profile
    deltas = output.deltas
    return {
        "frequency_hz": float(output.frequency),
        "direction": direction_label(output.direction),
        "pulses_per_rotation": int(p.pulses_per_rotation),
        "duty_cycle": float(p.duty_cycle),
        "duration_s": float(output.duration),
        "phase_a_deg": float(output.phase_a_deg),
        "phase_b_deg": float(output.phase_b_deg),
        "n_edges": len(output.merged_edges),
        "n_edges_a": len(output.edges_for(Channel.A)),
        "n_edges_b": len(output.edges_for(Channel.B)),
        "mean_delta_s": float(np.mean(deltas)) if deltas.size else None,
    }
