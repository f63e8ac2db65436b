"""Scalar argument: one value sampled from the domain."""

from __future__ import annotations

import random

from complexity_probe.generators.common import check_element, format_value
from complexity_probe.models import ValueDomain


class NumberGenerator:
    """Single scalar. Its length is always 1 and never grows."""

    def __init__(self, domain: ValueDomain, element: str | None = None):
        check_element(domain, element)
        self.domain = domain

    def current_length(self) -> int:
        return 1

    def advance(self) -> int:
        return self.current_length()

    def render(self, rng: random.Random) -> str:
        return format_value(self.domain.sample(rng))

    def __repr__(self) -> str:
        return f"NumberGenerator(domain={self.domain!r})"
