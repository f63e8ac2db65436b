"""Matrix argument: row and column counts followed by row-major values."""

from __future__ import annotations

import random

from complexity_probe.generators.common import check_element, join_fields, sample_values
from complexity_probe.models import GrowthPolicy, ValueDomain


class MatrixGenerator:
    """Matrix with independently growing rows and columns.

    Each axis advances on its own policy, so a row count that has hit its
    ceiling does not stop the column count from growing.
    """

    def __init__(
        self,
        domain: ValueDomain,
        rows: GrowthPolicy,
        columns: GrowthPolicy,
        element: str | None = None,
    ):
        check_element(domain, element)
        self.domain = domain
        self.rows = rows
        self.columns = columns

    def current_length(self) -> int:
        return self.rows.current * self.columns.current

    def advance(self) -> int:
        self.rows.advance()
        self.columns.advance()
        return self.current_length()

    def render(self, rng: random.Random) -> str:
        rows, columns = self.rows.current, self.columns.current
        return join_fields([rows, columns], sample_values(self.domain, rows * columns, rng))

    def __repr__(self) -> str:
        return (
            f"MatrixGenerator(domain={self.domain!r}, rows={self.rows!r}, "
            f"columns={self.columns!r})"
        )
