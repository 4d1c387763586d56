"""Bit pattern metrics and randomness sources."""

from .bit_patterns import (
    align_samples,
    leading_redundant_bits,
    range_width,
    trailing_one_run,
    trailing_zero_run,
)
from .randomizer import Randomizer, GenuineRandomizer

__all__ = [
    "align_samples",
    "leading_redundant_bits",
    "range_width",
    "trailing_one_run",
    "trailing_zero_run",
    "Randomizer",
    "GenuineRandomizer",
]
