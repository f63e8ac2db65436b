"""Bare range argument: renders only the current size N."""

from __future__ import annotations

import random

from complexity_probe.models import GrowthPolicy


class RangeGenerator:
    def __init__(self, size: GrowthPolicy):
        self.size = size

    def current_length(self) -> int:
        return self.size.current

    def advance(self) -> int:
        self.size.advance()
        return self.current_length()

    def render(self, rng: random.Random) -> str:
        return str(self.size.current)

    def __repr__(self) -> str:
        return f"RangeGenerator(size={self.size!r})"
