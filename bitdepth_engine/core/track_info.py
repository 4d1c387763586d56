"""
TrackInfo - Per-Stream Metadata

Immutable description of one decoded audio track, created once when the
stream is opened and handed to whichever consumer processes it.
"""

from dataclasses import dataclass
from typing import Optional, Tuple

from .errors import ConfigurationError

MAX_BITS_PER_SAMPLE = 32


@dataclass(frozen=True)
class TrackInfo:
    """Channel layout and sample format of a decoded stream."""

    channels: int
    bits_per_sample: int
    sample_rate: int
    total_frames: Optional[int] = None

    def __post_init__(self):
        self.validate()

    def validate(self) -> None:
        """
        Check every field, raising ConfigurationError on the first bad one.

        total_frames is nominal only, so it may be absent, but never negative.
        """
        if not isinstance(self.channels, int) or self.channels < 1:
            raise ConfigurationError(f"Invalid channel count: {self.channels!r}")
        if (not isinstance(self.bits_per_sample, int)
                or not 1 <= self.bits_per_sample <= MAX_BITS_PER_SAMPLE):
            raise ConfigurationError(
                f"Unsupported bits per sample: {self.bits_per_sample!r} "
                f"(expected 1..{MAX_BITS_PER_SAMPLE})"
            )
        if not isinstance(self.sample_rate, int) or self.sample_rate < 1:
            raise ConfigurationError(f"Invalid sample rate: {self.sample_rate!r}")
        if self.total_frames is not None and (
                not isinstance(self.total_frames, int) or self.total_frames < 0):
            raise ConfigurationError(f"Invalid total frame count: {self.total_frames!r}")

    @property
    def possible_range(self) -> Tuple[int, int]:
        """Smallest and largest value representable in bits_per_sample bits."""
        half = 1 << (self.bits_per_sample - 1)
        return -half, half - 1

    @property
    def expected_samples(self) -> Optional[int]:
        """Nominal sample count across all channels, if the frame count is known."""
        if self.total_frames is None:
            return None
        return self.total_frames * self.channels
