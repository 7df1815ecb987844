"""Tests for the command-line edge report."""

from __future__ import annotations

import pytest

from quadrature_visualizer.scripts.edge_report import main


def test_phase_report(capsys) -> None:
    assert main(["--phase", "90", "--rows", "5"]) == 0
    out = capsys.readouterr().out

    assert "frequency: 1800 Hz" in out
    assert "direction: —" in out
    assert "Delta from Previous" in out
    assert "N/A" in out
    # Header line plus five rows.
    table_lines = out.strip().splitlines()[-6:]
    assert table_lines[0].split()[0] == "#"


def test_speed_report_reverse(capsys) -> None:
    assert main(["--speed", "-2.5"]) == 0
    out = capsys.readouterr().out
    assert "frequency: 450 Hz" in out
    assert "← Reverse" in out


def test_stopped_report(capsys) -> None:
    assert main(["--speed", "0"]) == 0
    out = capsys.readouterr().out
    assert "⊗ Stopped" in out
    assert "[warn] motor stopped" in out
    assert "mean delta: N/A" in out


def test_invalid_duty_cycle_returns_error(capsys) -> None:
    assert main(["--phase", "90", "--duty-cycle", "1.5"]) == 2
    assert "[error]" in capsys.readouterr().out


def test_drive_is_required_and_exclusive() -> None:
    with pytest.raises(SystemExit):
        main([])
    with pytest.raises(SystemExit):
        main(["--phase", "90", "--speed", "1"])


def test_plot_option_writes_file(tmp_path, capsys) -> None:
    path = tmp_path / "report.png"
    assert main(["--speed", "3", "--plot", str(path)]) == 0
    assert path.exists() and path.stat().st_size > 0
    assert "wrote:" in capsys.readouterr().out


def test_plot_to_unwritable_path_returns_error(tmp_path, capsys) -> None:
    path = tmp_path / "missing" / "report.png"
    assert main(["--speed", "3", "--plot", str(path)]) == 2
    out = capsys.readouterr().out
    assert "[error] could not write" in out
    assert not path.exists()


def test_excessive_speed_returns_error(capsys) -> None:
    assert main(["--speed", "1e6"]) == 2
    assert "[error]" in capsys.readouterr().out
