"""
Command-line edge report for one drive value.

Prints the headline figures (frequency, direction, edge counts) and the first
edges of the merged sequence. Optionally renders the waveform and delta charts
to an image file.

Examples
--------
    python -m quadrature_visualizer.scripts.edge_report --phase 90
    python -m quadrature_visualizer.scripts.edge_report --speed -2.5 --rows 20 --plot reverse.png
"""

from __future__ import annotations

import dataclasses
from pathlib import Path
from typing import Optional, Sequence

import pandas as pd

from quadrature_visualizer.analysis.formatting import format_time_delta
from quadrature_visualizer.analysis.synthesizer import synthesize
from quadrature_visualizer.analysis.tables import edge_table, summarize_output
from quadrature_visualizer.models.drive import PhaseOffset, Speed
from quadrature_visualizer.models.profile import DEFAULT_PROFILE


def _build_parser():
    import argparse
    import textwrap

    p = argparse.ArgumentParser(
        prog="python -m quadrature_visualizer.scripts.edge_report",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        description=textwrap.dedent(
            """\
            Synthesize a two-channel quadrature encoder signal and report its edges.

            Exactly one drive is required: a phase difference between channel A and B
            (at the 1800 Hz reference frequency) or a signed motor speed.
            """
        ),
    )
    drive = p.add_mutually_exclusive_group(required=True)
    drive.add_argument("--phase", type=float, help="Channel B phase difference in degrees (nominal 0..180)")
    drive.add_argument("--speed", type=float, help="Motor speed in rotations/second (nominal -7..7, sign = direction)")

    p.add_argument("--rows", type=int, default=10, help="Number of edges to list (default: 10)")
    p.add_argument("--duty-cycle", type=float, default=DEFAULT_PROFILE.duty_cycle, help="Duty cycle in (0, 1)")
    p.add_argument(
        "--samples-per-period",
        type=int,
        default=DEFAULT_PROFILE.samples_per_period,
        help="Samples generated per waveform period",
    )
    p.add_argument("--plot", default=None, help="Write waveform + delta charts to this image file (png/svg/pdf)")
    return p


def main(argv: Optional[Sequence[str]] = None) -> int:
    ns = _build_parser().parse_args(list(argv) if argv is not None else None)

    profile = dataclasses.replace(
        DEFAULT_PROFILE,
        duty_cycle=float(ns.duty_cycle),
        samples_per_period=int(ns.samples_per_period),
    )
    drive = PhaseOffset(degrees=ns.phase) if ns.phase is not None else Speed(rotations_per_second=ns.speed)

    try:
        output = synthesize(drive, profile)
    except ValueError as exc:
        print(f"[error] {exc}")
        return 2

    s = summarize_output(output)
    print(f"[info] drive: {drive}")
    print(f"[info] frequency: {s['frequency_hz']:.0f} Hz, direction: {s['direction']}")
    print(f"[info] edges: {s['n_edges']} (A={s['n_edges_a']}, B={s['n_edges_b']}), "
          f"mean delta: {format_time_delta(s['mean_delta_s'])}")
    if output.is_stopped:
        print("[warn] motor stopped: no edge transitions")

    df = edge_table(output, n_rows=ns.rows)
    if not df.empty:
        with pd.option_context("display.max_rows", None, "display.width", 120):
            print(df.to_string(index=False))

    if ns.plot:
        from quadrature_visualizer.gui.plots import render_encoder_figure

        path = Path(ns.plot).expanduser()
        fig = render_encoder_figure(output)
        try:
            fig.savefig(path)
        except OSError as exc:
            print(f"[error] could not write {path}: {exc}")
            return 2
        print(f"[info] wrote: {path}")

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
