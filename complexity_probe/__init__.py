"""Empirical time-complexity estimation of external programs.

Exports the pipeline entry points: argument generators, the execution
harness and the curve estimator.
"""

from complexity_probe.estimator import estimate, fit_all  # noqa: F401
from complexity_probe.generators import (  # noqa: F401
    ArrayGenerator,
    MatrixGenerator,
    NumberGenerator,
    RangeGenerator,
)
from complexity_probe.harness import BenchmarkRunner, run  # noqa: F401
from complexity_probe.models import (  # noqa: F401
    BoolDomain,
    CandidateCurve,
    CharDomain,
    FitResult,
    FloatDomain,
    IntDomain,
    Measurement,
    SizeRange,
    SteppedSize,
    StepPolicy,
)

__all__ = [
    "ArrayGenerator",
    "BenchmarkRunner",
    "BoolDomain",
    "CandidateCurve",
    "CharDomain",
    "FitResult",
    "FloatDomain",
    "IntDomain",
    "MatrixGenerator",
    "Measurement",
    "NumberGenerator",
    "RangeGenerator",
    "SizeRange",
    "SteppedSize",
    "StepPolicy",
    "estimate",
    "fit_all",
    "run",
]
