"""
SignificanceAnalyzer - True Bit Depth Statistics

Streaming accumulator that determines how many bits of the nominal
bits-per-sample a recording actually uses, and whether its low bits carry
padding left over from an earlier truncation.
"""

import logging
from dataclasses import dataclass, asdict
from typing import Any, Dict, Optional, Set, Tuple

import numpy as np

from .consumer import SampleConsumer
from .track_info import TrackInfo
from ..algorithms.bit_patterns import (
    leading_redundant_bits,
    leading_redundant_bits_array,
    range_width,
    trailing_one_run,
    trailing_one_run_array,
    trailing_zero_run,
    trailing_zero_run_array,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SignificanceReport:
    """Final statistics of one analyzed stream."""

    channels: int
    stored_bits: int
    significant_bits: int
    signed_significant_bits: int
    actual_bits: int
    trailing_zero_run: int
    trailing_one_run: int
    expected_sample_count: Optional[int]
    observed_sample_count: int
    distinct_count: Optional[int]
    possible_range: Tuple[int, int]
    observed_range: Tuple[int, int]

    @property
    def sample_count_mismatch(self) -> bool:
        """True when the container's nominal count disagrees with what was decoded."""
        return (
            self.expected_sample_count is not None
            and self.expected_sample_count != self.observed_sample_count
        )

    def to_dict(self) -> Dict[str, Any]:
        """Plain dict form, ranges as [min, max] lists."""
        report = asdict(self)
        report["possible_range"] = list(self.possible_range)
        report["observed_range"] = list(self.observed_range)
        return report


class SignificanceAnalyzer(SampleConsumer):
    """
    Single-pass significant bit analyzer.

    Features:
    - Minimum redundant leading bits (sign extension) across all samples
    - Minimum trailing zero and trailing one runs (truncation padding)
    - Observed value range
    - Distinct value count (deep mode only, memory grows with the stream)
    - Expected vs. observed sample count cross-check
    """

    def __init__(self, track: TrackInfo, deep: bool = False):
        """
        Initialize the analyzer.

        Args:
            track: Metadata of the stream to analyze
            deep: Track distinct sample values (costly for long streams)
        """
        self.track = track
        self.deep = deep
        width = track.bits_per_sample

        self.min_leading_redundant_bits = width
        self.min_trailing_zero_run = width
        self.min_trailing_one_run = width
        # Both start at zero so a silent stream reports the degenerate range [0, 0].
        self.max_value = 0
        self.min_value = 0
        self.distinct_values: Optional[Set[int]] = set() if deep else None
        self.samples_seen = 0
        self._finalized = False

        logger.debug(
            f"SignificanceAnalyzer initialized - {track.channels} ch, "
            f"{width}-bit, deep: {deep}"
        )

    def observe(self, sample: int) -> None:
        """
        Fold one sample into the running statistics.

        Args:
            sample: Signed sample, right-aligned to bits_per_sample bits
        """
        self._check_open()
        sample = int(sample)
        width = self.track.bits_per_sample

        self.min_leading_redundant_bits = min(
            self.min_leading_redundant_bits, leading_redundant_bits(sample, width)
        )
        self.min_trailing_zero_run = min(
            self.min_trailing_zero_run, trailing_zero_run(sample, width)
        )
        self.min_trailing_one_run = min(
            self.min_trailing_one_run, trailing_one_run(sample, width)
        )
        self.max_value = max(self.max_value, sample)
        self.min_value = min(self.min_value, sample)
        if self.distinct_values is not None:
            self.distinct_values.add(sample)
        self.samples_seen += 1

    def observe_batch(self, samples: np.ndarray) -> None:
        """
        Vectorized observe() over every element of ``samples``.

        Args:
            samples: Integer array of any shape, typically [frames, channels]
        """
        self._check_open()
        values = np.asarray(samples, dtype=np.int64).reshape(-1)
        if values.size == 0:
            return
        width = self.track.bits_per_sample

        self.min_leading_redundant_bits = min(
            self.min_leading_redundant_bits,
            int(leading_redundant_bits_array(values, width).min()),
        )
        self.min_trailing_zero_run = min(
            self.min_trailing_zero_run,
            int(trailing_zero_run_array(values, width).min()),
        )
        self.min_trailing_one_run = min(
            self.min_trailing_one_run,
            int(trailing_one_run_array(values, width).min()),
        )
        self.max_value = max(self.max_value, int(values.max()))
        self.min_value = min(self.min_value, int(values.min()))
        if self.distinct_values is not None:
            self.distinct_values.update(np.unique(values).tolist())
        self.samples_seen += int(values.size)

    def finalize(self) -> SignificanceReport:
        """
        Derive the final statistics.

        May be called exactly once; the analyzer accepts no samples afterwards.

        Returns:
            SignificanceReport: Statistics of the whole stream
        """
        self._check_open()
        self._finalized = True
        width = self.track.bits_per_sample

        if self.samples_seen:
            significant = range_width(self.min_value, self.max_value)
            signed_significant = width - self.min_leading_redundant_bits
        else:
            significant = 0
            signed_significant = 0
        padding = max(self.min_trailing_zero_run, self.min_trailing_one_run)

        report = SignificanceReport(
            channels=self.track.channels,
            stored_bits=width,
            significant_bits=significant,
            signed_significant_bits=signed_significant,
            actual_bits=max(significant - padding, 0),
            trailing_zero_run=self.min_trailing_zero_run,
            trailing_one_run=self.min_trailing_one_run,
            expected_sample_count=self.track.expected_samples,
            observed_sample_count=self.samples_seen,
            distinct_count=(
                len(self.distinct_values) if self.distinct_values is not None else None
            ),
            possible_range=self.track.possible_range,
            observed_range=(self.min_value, self.max_value),
        )

        if report.sample_count_mismatch:
            logger.warning(
                f"Sample count mismatch - expected {report.expected_sample_count}, "
                f"streamed {report.observed_sample_count}"
            )
        logger.debug(f"Analysis finished: {report.significant_bits} significant bits")
        return report

    def _check_open(self) -> None:
        if self._finalized:
            raise RuntimeError("SignificanceAnalyzer has already been finalized")
