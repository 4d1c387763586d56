"""
SoundFileSource - Decoded Integer Sample Batches

Opens any format libsndfile understands (FLAC, WAV, AIFF, ...) and yields
right-aligned fixed-point samples in [frames, channels] batches.
"""

import logging
from pathlib import Path
from typing import Iterator, Optional, Union

import numpy as np
import soundfile as sf

from ..algorithms.bit_patterns import align_samples
from ..core.errors import ConfigurationError, StreamError
from ..core.track_info import TrackInfo

logger = logging.getLogger(__name__)

CONTAINER_BITS = 32

# Integer subtypes only; float files have no fixed bit depth to analyze.
SUBTYPE_BITS = {
    'PCM_S8': 8,
    'PCM_U8': 8,
    'PCM_16': 16,
    'PCM_24': 24,
    'PCM_32': 32,
    'DPCM_8': 8,
    'DPCM_16': 16,
    'DWVW_12': 12,
    'DWVW_16': 16,
    'DWVW_24': 24,
    'ALAC_16': 16,
    'ALAC_20': 20,
    'ALAC_24': 24,
    'ALAC_32': 32,
}


class SoundFileSource:
    """
    Single-pass decoder for one audio file.

    Use as a context manager; iterating yields int32 arrays of shape
    [frames, channels] whose values fit in track.bits_per_sample bits.
    """

    def __init__(self, path: Union[str, Path], batch_frames: int = 65536):
        """
        Open the file and derive its TrackInfo.

        Args:
            path: Audio file to decode
            batch_frames: Frames per yielded batch

        Raises:
            StreamError: The file cannot be opened
            ConfigurationError: The file's sample format is not fixed-point
        """
        self.path = Path(path)
        self.batch_frames = batch_frames
        try:
            self._file: Optional[sf.SoundFile] = sf.SoundFile(str(self.path))
        except (RuntimeError, OSError) as e:
            raise StreamError(f"Cannot open {self.path}: {e}") from e

        bits = SUBTYPE_BITS.get(self._file.subtype)
        if bits is None:
            subtype = self._file.subtype
            self.close()
            raise ConfigurationError(
                f"{self.path}: unsupported sample format {subtype!r}"
            )

        try:
            self.track = TrackInfo(
                channels=self._file.channels,
                bits_per_sample=bits,
                sample_rate=self._file.samplerate,
                total_frames=self._file.frames if self._file.frames >= 0 else None,
            )
        except ConfigurationError:
            self.close()
            raise

        logger.info(
            f"Opened {self.path.name} - {self._file.format}/{self._file.subtype}, "
            f"{self.track.channels} ch, {self.track.sample_rate}Hz"
        )

    def __iter__(self) -> Iterator[np.ndarray]:
        if self._file is None:
            raise StreamError(f"{self.path} is closed")
        try:
            for block in self._file.blocks(
                    blocksize=self.batch_frames, dtype='int32', always_2d=True):
                yield align_samples(block, CONTAINER_BITS, self.track.bits_per_sample)
        except (RuntimeError, OSError) as e:
            raise StreamError(f"Decode failure in {self.path}: {e}") from e

    def close(self) -> None:
        if self._file is not None:
            self._file.close()
            self._file = None

    def __enter__(self) -> "SoundFileSource":
        return self

    def __exit__(self, exc_type, exc_value, traceback) -> None:
        self.close()
