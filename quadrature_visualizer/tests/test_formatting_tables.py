import dataclasses
import unittest

import numpy as np
import pandas as pd

from quadrature_visualizer.analysis.formatting import (
    direction_label,
    format_edge_kind,
    format_edge_time,
    format_time_delta,
)
from quadrature_visualizer.analysis.synthesizer import synthesize_phase, synthesize_speed
from quadrature_visualizer.analysis.tables import (
    DISPLAY_COLUMNS,
    EDGE_COLUMNS,
    edge_table,
    edges_to_dataframe,
    summarize_output,
)
from quadrature_visualizer.models.profile import DEFAULT_PROFILE
from quadrature_visualizer.models.waveforms import Direction, EdgeKind


class TestFormatting(unittest.TestCase):
    def test_format_time_delta(self):
        self.assertEqual(format_time_delta(None), "N/A")
        self.assertEqual(format_time_delta(0.0001), "100.00 μs")
        self.assertEqual(format_time_delta(1.3888e-4), "138.88 μs")
        # Zero is a real delta (equal-time edges), not a missing one.
        self.assertEqual(format_time_delta(0.0), "0.00 μs")

    def test_format_edge_time_and_kind(self):
        self.assertEqual(format_edge_time(0.00025), "250.00 μs")
        self.assertEqual(format_edge_kind(EdgeKind.RISING), "↑ Rising")
        self.assertEqual(format_edge_kind(EdgeKind.FALLING), "↓ Falling")

    def test_direction_label(self):
        self.assertEqual(direction_label(Direction.FORWARD), "→ Forward")
        self.assertEqual(direction_label(Direction.REVERSE), "← Reverse")
        self.assertEqual(direction_label(Direction.STOPPED), "⊗ Stopped")
        self.assertEqual(direction_label(None), "—")


class TestTables(unittest.TestCase):
    def test_edges_to_dataframe_matches_merged_edges(self):
        out = synthesize_phase(90.0)
        df = edges_to_dataframe(out)

        self.assertEqual(tuple(df.columns), EDGE_COLUMNS)
        self.assertEqual(len(df), len(out.merged_edges))
        self.assertTrue(np.isnan(df["delta_s"].iloc[0]))
        self.assertTrue(np.allclose(df["delta_s"].iloc[1:].to_numpy(), np.diff(df["time_s"].to_numpy())))
        self.assertEqual(set(df["channel"]), {"A", "B"})
        self.assertEqual(set(df["kind"]), {"rising", "falling"})

    def test_edges_to_dataframe_empty_when_stopped(self):
        df = edges_to_dataframe(synthesize_speed(0.0))
        self.assertTrue(df.empty)
        self.assertEqual(tuple(df.columns), EDGE_COLUMNS)

    def test_edge_table_first_rows(self):
        out = synthesize_speed(3.0)
        df = edge_table(out, n_rows=10)

        self.assertIsInstance(df, pd.DataFrame)
        self.assertEqual(tuple(df.columns), DISPLAY_COLUMNS)
        self.assertEqual(df["#"].tolist(), list(range(1, 11)))
        self.assertEqual(df["Delta from Previous"].iloc[0], "N/A")
        first = out.merged_edges[1]
        self.assertEqual(df["Delta from Previous"].iloc[1], format_time_delta(first.delta))
        self.assertTrue(all(s.endswith(" μs") for s in df["Time"]))

    def test_edge_table_short_and_unbounded(self):
        out = synthesize_phase(45.0)
        self.assertEqual(len(edge_table(out, n_rows=None)), len(out.merged_edges))
        self.assertEqual(len(edge_table(out, n_rows=0)), 0)
        self.assertTrue(edge_table(synthesize_speed(0.0)).empty)

    def test_summarize_output(self):
        s = summarize_output(synthesize_speed(-2.5))
        self.assertEqual(s["direction"], "← Reverse")
        self.assertAlmostEqual(s["frequency_hz"], 450.0)
        self.assertEqual(s["pulses_per_rotation"], 180)
        self.assertEqual(s["n_edges"], s["n_edges_a"] + s["n_edges_b"])
        self.assertGreater(s["mean_delta_s"], 0.0)

        stopped = summarize_output(synthesize_speed(0.0))
        self.assertEqual(stopped["n_edges"], 0)
        self.assertIsNone(stopped["mean_delta_s"])

    def test_summarize_output_uses_recorded_profile(self):
        p = dataclasses.replace(DEFAULT_PROFILE, duty_cycle=0.3, pulses_per_rotation=360)
        s = summarize_output(synthesize_speed(1.5, p))
        self.assertEqual(s["pulses_per_rotation"], 360)
        self.assertAlmostEqual(s["duty_cycle"], 0.3)
        self.assertAlmostEqual(s["frequency_hz"], 540.0)


if __name__ == "__main__":
    unittest.main()
