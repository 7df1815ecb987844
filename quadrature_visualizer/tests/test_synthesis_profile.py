"""Tests for SynthesisProfile."""

from __future__ import annotations

import dataclasses
import json

import pytest

from quadrature_visualizer.models.profile import DEFAULT_PROFILE, SynthesisProfile


def test_profile_defaults() -> None:
    p = SynthesisProfile()
    assert p.duration_s == 0.1
    assert p.duty_cycle == 0.45
    assert p.samples_per_period == 20
    assert p.reference_frequency_hz == 1800.0
    assert p.pulses_per_rotation == 180
    assert p.quadrature_offset_deg == 90.0
    assert p == DEFAULT_PROFILE


def test_profile_frozen() -> None:
    p = SynthesisProfile()
    with pytest.raises(dataclasses.FrozenInstanceError):
        p.duty_cycle = 0.5  # type: ignore[misc]


def test_profile_replace() -> None:
    p2 = dataclasses.replace(DEFAULT_PROFILE, duty_cycle=0.5)
    assert p2.duty_cycle == 0.5
    assert p2.samples_per_period == 20  # unchanged
    assert DEFAULT_PROFILE.duty_cycle == 0.45


def test_profile_dict_round_trip_through_json() -> None:
    p = SynthesisProfile(duration_s=0.2, samples_per_period=40)
    d = json.loads(json.dumps(p.to_dict()))
    assert SynthesisProfile.from_dict(d) == p


def test_profile_from_dict_ignores_unknown_keys() -> None:
    p = SynthesisProfile.from_dict({"duty_cycle": 0.4, "schema": "v1"})
    assert p.duty_cycle == 0.4
    assert p.duration_s == 0.1


def test_period_and_speed_frequency() -> None:
    p = SynthesisProfile()
    assert p.period_s(0.0) == float("inf")
    assert p.period_s(1800.0) == pytest.approx(1.0 / 1800.0)
    assert p.frequency_for_speed(-7.0) == pytest.approx(1260.0)
