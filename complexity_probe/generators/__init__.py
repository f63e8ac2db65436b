"""Argument generators fed to the target program.

Structure:
- common.py: sampling and payload joining shared by all kinds
- number.py: single scalar value
- array.py: length-prefixed array
- matrix.py: rows/columns-prefixed matrix, axes grow independently
- bare_range.py: bare size N

Every generator exposes ``current_length()``, ``advance()`` and
``render(rng)``. Only ``advance`` mutates size state.
"""

from typing import Union

from complexity_probe.generators.array import ArrayGenerator
from complexity_probe.generators.common import VALUE_SEPARATOR, check_element, format_value
from complexity_probe.generators.matrix import MatrixGenerator
from complexity_probe.generators.number import NumberGenerator
from complexity_probe.generators.bare_range import RangeGenerator

ArgumentSpec = Union[NumberGenerator, ArrayGenerator, MatrixGenerator, RangeGenerator]

__all__ = [
    "ArgumentSpec",
    "ArrayGenerator",
    "MatrixGenerator",
    "NumberGenerator",
    "RangeGenerator",
    "VALUE_SEPARATOR",
    "check_element",
    "format_value",
]
