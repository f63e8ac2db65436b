"""Helpers shared by all argument generators."""

from __future__ import annotations

import random
from decimal import Decimal
from typing import List

from complexity_probe.errors import DomainMismatch
from complexity_probe.models import ValueDomain

VALUE_SEPARATOR = " "


def check_element(domain: ValueDomain, element: str | None) -> None:
    """Reject a domain whose kind differs from the declared element kind.

    Raises:
        DomainMismatch: ``element`` is set and is not ``domain.kind``.
    """
    if element is not None and element != domain.kind:
        raise DomainMismatch(expected=element, actual=domain.kind)


def format_value(value: object) -> str:
    """Render a sampled value as text.

    Floats use the shortest round-tripping digits in plain decimal notation,
    never an exponent: ``1e-05`` is written as ``0.00001``.
    """
    if isinstance(value, float):
        return format(Decimal(repr(value)), "f")
    return str(value)


def sample_values(domain: ValueDomain, count: int, rng: random.Random) -> List[str]:
    """Draw ``count`` independent values from ``domain`` as text."""
    return [format_value(domain.sample(rng)) for _ in range(count)]


def join_fields(prefix: List[int], values: List[str]) -> str:
    return VALUE_SEPARATOR.join([str(p) for p in prefix] + values)
