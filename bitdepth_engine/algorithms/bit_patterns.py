"""
Bit Pattern Metrics

Scalar and numpy-vectorized helpers that measure how many bits of a
W-bit two's complement sample are actually in use.  The scalar and array
versions must agree element for element.
"""

import numpy as np


def _mask(width: int) -> int:
    return (1 << width) - 1


def leading_redundant_bits(sample: int, width: int) -> int:
    """
    Count leading bits beyond the sign bit that merely repeat it.

    For a non-negative sample this is leading_zeros - 1, for a negative
    sample leading_ones - 1, both taken over the W-bit pattern.

    Args:
        sample: Signed sample, right-aligned to ``width`` bits
        width: Logical sample width in bits

    Returns:
        int: Redundant leading bit count in [0, width - 1]
    """
    magnitude = ~sample if sample < 0 else sample
    return max(width - magnitude.bit_length() - 1, 0)


def trailing_zero_run(sample: int, width: int) -> int:
    """Number of trailing 0 bits in the W-bit pattern (``width`` for zero)."""
    pattern = sample & _mask(width)
    if pattern == 0:
        return width
    return (pattern & -pattern).bit_length() - 1


def trailing_one_run(sample: int, width: int) -> int:
    """Number of trailing 1 bits in the W-bit pattern (``width`` for all-ones)."""
    return trailing_zero_run(~sample, width)


def range_width(min_value: int, max_value: int) -> int:
    """
    Minimum bit width able to hold every value in [min_value, max_value].

    A sign bit is only counted when the range reaches below zero, so a
    stream of 0 and 1 needs one bit while 0 and -1 also needs one.
    """
    width = max_value.bit_length() if max_value > 0 else 0
    if min_value < 0:
        width = max(width, (~min_value).bit_length()) + 1
    return width


def bit_lengths(values: np.ndarray) -> np.ndarray:
    """
    Vectorized int.bit_length() for non-negative integers below 2**53.

    frexp returns the exponent e with v = m * 2**e and 0.5 <= m < 1, which
    is the bit length for v > 0 and 0 for v == 0.
    """
    _, exponents = np.frexp(np.asarray(values, dtype=np.float64))
    return exponents.astype(np.int64)


def leading_redundant_bits_array(samples: np.ndarray, width: int) -> np.ndarray:
    """Element-wise leading_redundant_bits()."""
    samples = np.asarray(samples, dtype=np.int64)
    magnitude = np.where(samples < 0, ~samples, samples)
    return np.maximum(width - bit_lengths(magnitude) - 1, 0)


def trailing_zero_run_array(samples: np.ndarray, width: int) -> np.ndarray:
    """Element-wise trailing_zero_run()."""
    pattern = np.asarray(samples, dtype=np.int64) & _mask(width)
    lowest_set = pattern & -pattern
    return np.where(pattern == 0, width, bit_lengths(lowest_set) - 1)


def trailing_one_run_array(samples: np.ndarray, width: int) -> np.ndarray:
    """Element-wise trailing_one_run()."""
    return trailing_zero_run_array(~np.asarray(samples, dtype=np.int64), width)


def align_samples(raw: np.ndarray, container_bits: int, bits_per_sample: int) -> np.ndarray:
    """
    Right-justify left-aligned decoder output.

    Decoders that deliver every format in a fixed container (e.g. int32)
    put the significant bits at the top; an arithmetic right shift by the
    difference restores the sample's true magnitude and keeps its sign.

    Args:
        raw: Integer samples as delivered by the decoder
        container_bits: Width of the decoder's container type
        bits_per_sample: Nominal bits per sample of the stream

    Returns:
        np.ndarray: Samples right-aligned to ``bits_per_sample`` bits
    """
    shift = container_bits - bits_per_sample
    if shift < 0:
        raise ValueError(
            f"{bits_per_sample}-bit samples do not fit a {container_bits}-bit container"
        )
    if shift == 0:
        return raw
    return np.right_shift(raw, shift)

