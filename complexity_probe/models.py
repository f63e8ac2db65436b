"""Core data structures of the measurement pipeline.

This module defines:
    IntDomain / FloatDomain / CharDomain / BoolDomain -- value spaces sampled
        when rendering arguments (``ValueDomain`` is their union).
    SizeRange    -- multiplicative size parameter clamped at ``end``.
    StepPolicy   -- none / fixed / multiply growth rule.
    SteppedSize  -- size parameter driven by a ``StepPolicy`` inside
        ``[min_len, max_len]``.
    Measurement  -- timing summary of one generation.
    GenerationStats -- running accumulator that produces a ``Measurement``.
    CandidateCurve / FitResult -- estimator output.
"""

from __future__ import annotations

import enum
import math
import random
import string
import sys
from dataclasses import asdict, dataclass
from typing import Callable, Union

from complexity_probe.errors import ConfigError

ALPHANUMERIC = string.ascii_letters + string.digits

INT64_MIN = -(2**63)
INT64_MAX = 2**63 - 1


@dataclass(frozen=True)
class IntDomain:
    """Uniform integers in ``[min, max]`` (inclusive)."""

    min: int = INT64_MIN
    max: int = INT64_MAX

    kind = "int"

    def __post_init__(self) -> None:
        if self.min > self.max:
            raise ConfigError(f"Int domain: min ({self.min}) > max ({self.max})")

    def sample(self, rng: random.Random) -> int:
        return rng.randint(self.min, self.max)


@dataclass(frozen=True)
class FloatDomain:
    """Uniform floats in ``[min, max]``."""

    min: float = -1e9
    max: float = 1e9

    kind = "float"

    def __post_init__(self) -> None:
        if not (math.isfinite(self.min) and math.isfinite(self.max)):
            raise ConfigError("Float domain bounds must be finite")
        if self.min > self.max:
            raise ConfigError(f"Float domain: min ({self.min}) > max ({self.max})")
        if not math.isfinite(self.max - self.min):
            raise ConfigError(
                f"Float domain: span between {self.min} and {self.max} is not a finite float"
            )

    def sample(self, rng: random.Random) -> float:
        return rng.uniform(self.min, self.max)


@dataclass(frozen=True)
class CharDomain:
    """Single characters from ``a-z``, ``A-Z``, ``0-9``."""

    kind = "char"

    def sample(self, rng: random.Random) -> str:
        return rng.choice(ALPHANUMERIC)


@dataclass(frozen=True)
class BoolDomain:
    """Booleans rendered as ``0`` / ``1``."""

    kind = "bool"

    def sample(self, rng: random.Random) -> int:
        return rng.randint(0, 1)


ValueDomain = Union[IntDomain, FloatDomain, CharDomain, BoolDomain]


@dataclass
class SizeRange:
    """Size parameter that grows by repeated multiplication.

    ``advance`` sets ``start = min(start * multiplier, end)``; once ``start``
    reaches ``end`` every further call returns the same value.
    """

    start: int = 10
    end: int = sys.maxsize
    multiplier: int = 2

    def __post_init__(self) -> None:
        if self.start < 1:
            raise ConfigError(f"Size range: start must be >= 1, got {self.start}")
        if self.multiplier < 2:
            raise ConfigError(f"Size range: multiplier must be >= 2, got {self.multiplier}")
        if self.end < self.start:
            raise ConfigError(f"Size range: end ({self.end}) < start ({self.start})")

    @property
    def current(self) -> int:
        return self.start

    def advance(self) -> int:
        self.start = min(self.start * self.multiplier, self.end)
        return self.start


STEP_KINDS = ("none", "fixed", "multiply")


@dataclass(frozen=True)
class StepPolicy:
    """Growth rule applied by ``SteppedSize``.

    Fields:
        kind: ``none`` (size fixed), ``fixed`` (add ``amount``) or
            ``multiply`` (multiply by ``amount``).
        amount: Step operand, ignored for ``none``.
    """

    kind: str = "none"
    amount: int = 0

    def __post_init__(self) -> None:
        if self.kind not in STEP_KINDS:
            raise ConfigError(f"Unknown step type '{self.kind}', expected one of {STEP_KINDS}")
        if self.kind != "none" and self.amount < 1:
            raise ConfigError(f"Step '{self.kind}' needs amount >= 1, got {self.amount}")

    def apply(self, size: int) -> int:
        if self.kind == "fixed":
            return size + self.amount
        if self.kind == "multiply":
            return size * self.amount
        return size


@dataclass
class SteppedSize:
    """Size parameter in ``[min_len, max_len]`` advanced by a ``StepPolicy``."""

    min_len: int
    max_len: int
    step: StepPolicy
    cur_len: int = -1

    def __post_init__(self) -> None:
        if self.min_len < 0:
            raise ConfigError(f"min_len must be >= 0, got {self.min_len}")
        if self.max_len < self.min_len:
            raise ConfigError(f"max_len ({self.max_len}) < min_len ({self.min_len})")
        if self.cur_len < 0:
            self.cur_len = self.min_len

    @property
    def current(self) -> int:
        return self.cur_len

    def advance(self) -> int:
        next_len = self.step.apply(self.cur_len)
        self.cur_len = max(self.min_len, min(next_len, self.max_len))
        return self.cur_len


GrowthPolicy = Union[SizeRange, SteppedSize]


@dataclass(frozen=True)
class Measurement:
    """Timing summary of one generation (durations in seconds).

    Fields:
        len: Sum of current element counts over all arguments.
        min: Fastest iteration.
        max: Slowest iteration.
        avg: Mean over all iterations.
    """

    len: int
    min: float
    max: float
    avg: float

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass
class GenerationStats:
    len: int
    min: float = math.inf
    max: float = -math.inf
    total: float = 0.0

    def update(self, duration: float) -> None:
        self.min = min(self.min, duration)
        self.max = max(self.max, duration)
        self.total += duration

    def finish(self, iterations: int) -> Measurement:
        return Measurement(len=self.len, min=self.min, max=self.max, avg=self.total / iterations)


class CandidateCurve(enum.Enum):
    """Growth curves tested by the estimator, in evaluation order."""

    CONSTANT = ("O(1)", lambda n: 1.0)
    LOG = ("O(logN)", math.log2)
    LINEAR = ("O(N)", lambda n: float(n))
    LINEAR_LOG = ("O(NlogN)", lambda n: n * math.log2(n))
    QUADRATIC = ("O(N^2)", lambda n: float(n) ** 2)
    CUBIC = ("O(N^3)", lambda n: float(n) ** 3)
    UNKNOWN = ("Unknown", lambda n: 1.0)

    def __init__(self, label: str, function: Callable[[int], float]):
        self.label = label
        self.function = function

    def __call__(self, n: int) -> float:
        return self.function(n)

    def __str__(self) -> str:
        return self.label


@dataclass(frozen=True)
class FitResult:
    """Least-squares fit of one candidate curve.

    Fields:
        coefficient: Scale applied to the curve.
        curve: Candidate that was fitted.
        normalized_rms: RMS residual divided by the mean observed time,
            as a fraction (0.05 == 5%).
    """

    coefficient: float
    curve: CandidateCurve
    normalized_rms: float

    def to_dict(self) -> dict:
        return {
            "coefficient": self.coefficient,
            "curve": self.curve.label,
            "normalized_rms": self.normalized_rms,
        }
