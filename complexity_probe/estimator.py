"""Least-squares selection of the asymptotic growth curve.

Each candidate ``g`` is scaled to the per-generation minimum times with the
closed-form coefficient ``sum(t * g(n)) / sum(g(n)^2)``. The residual RMS is
divided by the mean time so curves with very different coefficients compare
on one scale. The constant curve is the initial best and a later candidate
only replaces it on strict improvement, so ties go to the simpler curve.
"""

from __future__ import annotations

import logging
import math
from typing import List, Sequence

from complexity_probe.errors import DegenerateInput
from complexity_probe.models import CandidateCurve, FitResult, Measurement

logger = logging.getLogger("complexity_probe.estimator")

CANDIDATES = (
    CandidateCurve.CONSTANT,
    CandidateCurve.LOG,
    CandidateCurve.LINEAR,
    CandidateCurve.LINEAR_LOG,
    CandidateCurve.QUADRATIC,
    CandidateCurve.CUBIC,
)


def _check_measurements(measurements: Sequence[Measurement]) -> None:
    if not measurements:
        raise DegenerateInput("No measurements to fit")
    if any(m.len < 1 for m in measurements):
        raise DegenerateInput("Argument length must be >= 1 for every measurement")
    if len({m.len for m in measurements}) < 2:
        raise DegenerateInput("At least two distinct argument lengths are required")


def least_squares(measurements: Sequence[Measurement], curve: CandidateCurve) -> FitResult:
    """Fit ``curve`` to the minimum times of ``measurements``.

    Raises:
        DegenerateInput: The curve is zero at every length, or the mean
            minimum time is zero.
    """
    sq_points = 0.0
    times = 0.0
    time_points = 0.0
    for m in measurements:
        point = curve(m.len)
        sq_points += point * point
        times += m.min
        time_points += m.min * point

    if sq_points == 0.0:
        raise DegenerateInput(f"Curve {curve} is zero for every observed length")
    count = len(measurements)
    mean = times / count
    if mean == 0.0:
        raise DegenerateInput("Mean of the observed minimum times is zero")

    coefficient = time_points / sq_points
    residual = 0.0
    for m in measurements:
        residual += (m.min - coefficient * curve(m.len)) ** 2
    rms = math.sqrt(residual / count)
    return FitResult(coefficient=coefficient, curve=curve, normalized_rms=rms / mean)


def fit_all(measurements: Sequence[Measurement]) -> List[FitResult]:
    """Fit every candidate, in evaluation order."""
    _check_measurements(measurements)
    return [least_squares(measurements, curve) for curve in CANDIDATES]


def estimate(measurements: Sequence[Measurement]) -> FitResult:
    """Return the candidate with the lowest normalized RMS.

    Raises:
        DegenerateInput: Empty input, fewer than two distinct lengths, or a
            length below 1.
    """
    fits = fit_all(measurements)
    for fit in fits:
        logger.debug("%s coef=%g nrms=%.4f", fit.curve, fit.coefficient, fit.normalized_rms)
    best = fits[0]
    for fit in fits[1:]:
        if fit.normalized_rms < best.normalized_rms:
            best = fit
    logger.info(
        "Best fit %s coef=%g rms=%.2f%%", best.curve, best.coefficient, best.normalized_rms * 100.0
    )
    return best
