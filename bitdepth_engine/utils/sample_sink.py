"""
SoundFileSink - Noise Variant Export

Writes interleaved integer samples to one audio file per noise width, with
FLAC variants tagged so the files remain identifiable in a listening test.
"""

import logging
from pathlib import Path
from typing import List, Optional, Sequence, Tuple, Union

import numpy as np
import soundfile as sf
from mutagen import MutagenError
from mutagen.flac import FLAC

from ..core.errors import SinkError
from ..core.track_info import TrackInfo

logger = logging.getLogger(__name__)

CONTAINER_BITS = 32


def output_format(bits_per_sample: int) -> Tuple[str, str]:
    """
    Pick the smallest lossless container holding ``bits_per_sample`` bits.

    FLAC stops at 24-bit, so wider streams go to WAV.

    Returns:
        Tuple[str, str]: soundfile (format, subtype)
    """
    if bits_per_sample <= 8:
        return 'FLAC', 'PCM_S8'
    if bits_per_sample <= 16:
        return 'FLAC', 'PCM_16'
    if bits_per_sample <= 24:
        return 'FLAC', 'PCM_24'
    return 'WAV', 'PCM_32'


class SoundFileSink:
    """
    Buffered writer for one output sub-stream.

    Samples arrive interleaved and possibly one at a time; only whole
    frames are handed to libsndfile.
    """

    def __init__(self,
                 path: Union[str, Path],
                 track: TrackInfo,
                 tags: Optional[dict] = None,
                 buffer_frames: int = 65536):
        """
        Open the output file.

        Args:
            path: Destination file
            track: Metadata of the stream being written
            tags: Vorbis comments to embed (FLAC only)
            buffer_frames: Frames accumulated before each write
        """
        self.path = Path(path)
        self.track = track
        self.tags = tags or {}
        self.buffer_frames = buffer_frames
        self.format, self.subtype = output_format(track.bits_per_sample)
        self._shift = CONTAINER_BITS - track.bits_per_sample
        self._pending: List[np.ndarray] = []
        self._pending_count = 0
        self._closed = False

        try:
            self._file = sf.SoundFile(
                str(self.path), 'w',
                samplerate=track.sample_rate,
                channels=track.channels,
                subtype=self.subtype,
                format=self.format
            )
        except (RuntimeError, OSError) as e:
            raise SinkError(f"Cannot create {self.path}: {e}") from e

    def write(self, samples: Union[Sequence[int], np.ndarray]) -> None:
        """Queue interleaved samples; full buffers are written immediately."""
        if self._closed:
            raise SinkError(f"{self.path} is already closed")
        values = np.asarray(samples, dtype=np.int64).reshape(-1)
        self._pending.append(values)
        self._pending_count += values.size
        if self._pending_count >= self.buffer_frames * self.track.channels:
            self._flush()

    def close(self) -> None:
        """Write remaining frames, close the file and tag it."""
        if self._closed:
            return
        self._closed = True
        try:
            self._flush(final=True)
        finally:
            self._file.close()
        if self.format == 'FLAC' and self.tags:
            self._write_tags()
        logger.debug(f"Closed {self.path}")

    def discard(self) -> None:
        """Drop pending samples, close the file untagged and delete it."""
        if self._closed:
            return
        self._closed = True
        self._pending = []
        self._pending_count = 0
        try:
            self._file.close()
            if self.path.exists():
                self.path.unlink()
        except (RuntimeError, OSError) as e:
            raise SinkError(f"Could not discard {self.path}: {e}") from e
        logger.info(f"Discarded incomplete {self.path}")

    def _flush(self, final: bool = False) -> None:
        if not self._pending:
            return
        channels = self.track.channels
        data = np.concatenate(self._pending)
        complete = (data.size // channels) * channels
        if final and complete != data.size:
            raise SinkError(
                f"{self.path}: {data.size - complete} samples do not form a whole frame"
            )

        frames = data[:complete].reshape(-1, channels)
        remainder = data[complete:]
        self._pending = [remainder] if remainder.size else []
        self._pending_count = remainder.size

        if frames.size == 0:
            return
        try:
            # Left-justify into int32 so libsndfile keeps the top bits.
            self._file.write((frames << self._shift).astype(np.int32))
        except (RuntimeError, OSError) as e:
            raise SinkError(f"Write failure in {self.path}: {e}") from e

    def _write_tags(self) -> None:
        try:
            audio_file = FLAC(str(self.path))
            for key, value in self.tags.items():
                audio_file[key] = str(value)
            audio_file.save()
        except MutagenError as e:
            raise SinkError(f"Could not tag {self.path}: {e}") from e


class SoundFileSinkFactory:
    """Opens ``<stem>.noiseNN.<ext>`` in ``output_dir`` for each noise width."""

    def __init__(self, output_dir: Union[str, Path], stem: str, track: TrackInfo):
        self.output_dir = Path(output_dir)
        self.stem = stem
        self.track = track
        self.paths: List[Path] = []
        try:
            self.output_dir.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise SinkError(f"Cannot create output directory {self.output_dir}: {e}") from e

    def __call__(self, noise_bits: int) -> SoundFileSink:
        file_format, _ = output_format(self.track.bits_per_sample)
        extension = 'flac' if file_format == 'FLAC' else 'wav'
        path = self.output_dir / f"{self.stem}.noise{noise_bits:02d}.{extension}"
        effective_bits = self.track.bits_per_sample - noise_bits
        sink = SoundFileSink(path, self.track, tags={
            'TITLE': f"{self.stem} ({effective_bits} of {self.track.bits_per_sample} bits)",
            'COMMENT': f"Low {noise_bits} bits replaced with uniform noise",
            'ENCODER': 'bitdepth-engine',
        })
        self.paths.append(path)
        return sink
