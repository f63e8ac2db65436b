"""Tests for least-squares curve selection."""

from __future__ import annotations

import math

import pytest

from complexity_probe import estimator
from complexity_probe.errors import DegenerateInput
from complexity_probe.estimator import CANDIDATES, estimate, fit_all, least_squares
from complexity_probe.models import CandidateCurve, FitResult, Measurement

LENS = [10, 20, 40, 80, 160, 320]


def _measurements(times_for):
    return [
        Measurement(len=n, min=times_for(n), max=times_for(n), avg=times_for(n)) for n in LENS
    ]


def test_exact_linear_data_selects_linear():
    fit = estimate(_measurements(lambda n: 3.0 * n))
    assert fit.curve is CandidateCurve.LINEAR
    assert fit.coefficient == pytest.approx(3.0)
    assert fit.normalized_rms == pytest.approx(0.0, abs=1e-12)


def test_quadratic_data_beats_every_other_candidate():
    data = _measurements(lambda n: 2.0 * n**2)
    fit = estimate(data)
    assert fit.curve is CandidateCurve.QUADRATIC
    assert fit.coefficient == pytest.approx(2.0)
    others = [f for f in fit_all(data) if f.curve is not CandidateCurve.QUADRATIC]
    assert all(fit.normalized_rms < f.normalized_rms for f in others)


@pytest.mark.parametrize(
    "curve,times_for",
    [
        (CandidateCurve.LOG, lambda n: 0.5 * math.log2(n)),
        (CandidateCurve.LINEAR_LOG, lambda n: 1e-3 * n * math.log2(n)),
        (CandidateCurve.CUBIC, lambda n: 4e-6 * n**3),
    ],
)
def test_other_curves_are_recognised(curve, times_for):
    assert estimate(_measurements(times_for)).curve is curve


def test_flat_times_keep_constant_curve():
    fit = estimate(_measurements(lambda n: 0.25))
    assert fit.curve is CandidateCurve.CONSTANT
    assert fit.coefficient == pytest.approx(0.25)
    assert fit.normalized_rms == pytest.approx(0.0, abs=1e-12)


def test_fit_uses_minimum_time_not_average():
    data = [Measurement(len=n, min=1e-3 * n, max=50.0, avg=1e-3 * n**3) for n in LENS]
    assert estimate(data).curve is CandidateCurve.LINEAR


def test_fit_all_follows_evaluation_order():
    fits = fit_all(_measurements(lambda n: 1e-4 * n))
    assert [f.curve for f in fits] == list(CANDIDATES)
    assert CandidateCurve.UNKNOWN not in CANDIDATES


def test_normalized_rms_matches_closed_form():
    data = [
        Measurement(len=1, min=1.0, max=1.0, avg=1.0),
        Measurement(len=2, min=3.0, max=3.0, avg=3.0),
    ]
    fit = least_squares(data, CandidateCurve.LINEAR)
    # coef = (1*1 + 3*2) / (1 + 4) = 1.4 ; residuals -0.4, 0.2
    assert fit.coefficient == pytest.approx(1.4)
    rms = math.sqrt((0.4**2 + 0.2**2) / 2)
    assert fit.normalized_rms == pytest.approx(rms / 2.0)


@pytest.mark.parametrize(
    "data",
    [
        [],
        [Measurement(len=10, min=1.0, max=1.0, avg=1.0)],
        [Measurement(len=10, min=t, max=t, avg=t) for t in (1.0, 2.0, 3.0)],
        [
            Measurement(len=0, min=1.0, max=1.0, avg=1.0),
            Measurement(len=5, min=2.0, max=2.0, avg=2.0),
        ],
    ],
)
def test_degenerate_inputs_raise(data):
    with pytest.raises(DegenerateInput):
        estimate(data)


def test_zero_times_raise_instead_of_nan():
    data = [Measurement(len=n, min=0.0, max=0.0, avg=0.0) for n in LENS]
    with pytest.raises(DegenerateInput):
        estimate(data)


def test_all_zero_curve_is_degenerate():
    data = [Measurement(len=1, min=2.0, max=2.0, avg=2.0)]
    with pytest.raises(DegenerateInput):
        least_squares(data, CandidateCurve.LOG)


def test_ties_keep_the_earlier_curve(monkeypatch):
    scores = {CandidateCurve.CONSTANT: 0.1, CandidateCurve.LINEAR: 0.1}

    def fake_least_squares(measurements, curve):
        return FitResult(coefficient=1.0, curve=curve, normalized_rms=scores.get(curve, 0.5))

    monkeypatch.setattr(estimator, "least_squares", fake_least_squares)
    data = _measurements(lambda n: 1e-3 * n)
    assert estimate(data).curve is CandidateCurve.CONSTANT


def test_constant_curve_is_the_initial_best(monkeypatch):
    def fake_least_squares(measurements, curve):
        return FitResult(coefficient=1.0, curve=curve, normalized_rms=0.3)

    monkeypatch.setattr(estimator, "least_squares", fake_least_squares)
    assert CANDIDATES[0] is CandidateCurve.CONSTANT
    assert estimate(_measurements(lambda n: 2.0)).curve is CandidateCurve.CONSTANT
