"""Array argument: length prefix followed by sampled values."""

from __future__ import annotations

import random

from complexity_probe.generators.common import check_element, join_fields, sample_values
from complexity_probe.models import GrowthPolicy, ValueDomain


class ArrayGenerator:
    """One-dimensional array whose length follows ``size``.

    Rendered as ``"<len> v1 v2 ... v<len>"``.
    """

    def __init__(self, domain: ValueDomain, size: GrowthPolicy, element: str | None = None):
        check_element(domain, element)
        self.domain = domain
        self.size = size

    def current_length(self) -> int:
        return self.size.current

    def advance(self) -> int:
        self.size.advance()
        return self.current_length()

    def render(self, rng: random.Random) -> str:
        length = self.current_length()
        return join_fields([length], sample_values(self.domain, length, rng))

    def __repr__(self) -> str:
        return f"ArrayGenerator(domain={self.domain!r}, size={self.size!r})"
