"""
NoiseInjector - Dithered Bit Depth Reduction

Produces one variant of the input stream per noise width k, in which the
low k bits of every sample are discarded and refilled with uniform random
bits.  Listening to the variants side by side shows how many bits of
precision a recording can lose before the difference becomes audible.
"""

import logging
from typing import Callable, List, Protocol, Sequence, Union

import numpy as np

from ..algorithms.randomizer import Randomizer
from ..core.consumer import SampleConsumer
from ..core.errors import SinkError
from ..core.track_info import TrackInfo

logger = logging.getLogger(__name__)


class SampleSink(Protocol):
    """Destination for one noise width's interleaved output samples."""

    def write(self, samples: Union[Sequence[int], np.ndarray]) -> None:
        ...

    def close(self) -> None:
        ...

    def discard(self) -> None:
        ...


SinkFactory = Callable[[int], SampleSink]


def noisy(sample: int, noise_bits: int, randomizer: Randomizer) -> int:
    """
    Replace the ``noise_bits`` least significant bits of a sample with noise.

    Args:
        sample: Signed sample
        noise_bits: Number of low bits to replace (0 leaves the sample as is)
        randomizer: Source of the replacement bits

    Returns:
        int: (sample >> k) << k | uniform draw from [0, 2**k)
    """
    return (sample >> noise_bits) << noise_bits | randomizer.draw(0, 1 << noise_bits)


def noisy_array(samples: np.ndarray, noise_bits: int, randomizer: Randomizer) -> np.ndarray:
    """Element-wise noisy(), drawing the noise in row-major order."""
    values = np.asarray(samples, dtype=np.int64)
    noise = randomizer.draw_many(0, 1 << noise_bits, values.size).reshape(values.shape)
    return (values >> noise_bits) << noise_bits | noise


class NoiseInjector(SampleConsumer):
    """
    Streaming truncate-and-dither transform.

    Features:
    - One output sub-stream per noise width 0 .. bits_per_sample - 1
    - Width 0 is the identity transform
    - Frame alignment preserved across all sub-streams
    - Injected Randomizer for reproducible or mocked noise
    """

    def __init__(self, track: TrackInfo, sink_factory: SinkFactory, randomizer: Randomizer):
        """
        Initialize the injector and open every sub-stream.

        Args:
            track: Metadata of the input stream
            sink_factory: Called once per noise width to open its destination
            randomizer: Source of noise, owned by this injector from now on
        """
        self.track = track
        self.randomizer = randomizer
        self.sinks: List[SampleSink] = []
        self._finalized = False

        try:
            for noise_bits in self.noise_widths:
                self.sinks.append(sink_factory(noise_bits))
        except SinkError:
            self._discard_all()
            raise

        logger.info(f"NoiseInjector initialized - {len(self.sinks)} noise widths")

    @property
    def noise_widths(self) -> range:
        return range(self.track.bits_per_sample)

    def observe(self, sample: int) -> None:
        """Feed one sample to every noise width before the next sample arrives."""
        self._check_open()
        sample = int(sample)
        for noise_bits, sink in enumerate(self.sinks):
            sink.write((noisy(sample, noise_bits, self.randomizer),))

    def observe_batch(self, samples: np.ndarray) -> None:
        """
        Transform a [frames, channels] batch for every noise width.

        Noise is drawn sample by sample, every width per sample, exactly as
        repeated observe() calls would draw it, so the outputs do not depend
        on how the stream is split into batches.
        """
        self._check_open()
        values = np.asarray(samples, dtype=np.int64).reshape(-1)
        if values.size == 0:
            return
        highs = [1 << noise_bits for noise_bits in self.noise_widths]
        noise = self.randomizer.draw_rows(highs, values.size)
        for noise_bits, sink in enumerate(self.sinks):
            sink.write((values >> noise_bits) << noise_bits | noise[:, noise_bits])

    def finalize(self) -> None:
        """
        Flush and close every sub-stream exactly once.

        All sinks get closed even if one fails; the first failure is raised.
        """
        self._check_open()
        self._finalized = True
        first_error = None
        for sink in self.sinks:
            try:
                sink.close()
            except SinkError as e:
                logger.error(f"Failed to close sink: {e}")
                if first_error is None:
                    first_error = e
        if first_error is not None:
            raise first_error
        logger.info(f"NoiseInjector finished - {len(self.sinks)} outputs closed")

    def abort(self) -> None:
        """Discard every sub-stream after a failed pass; no partial output survives."""
        if not self._finalized:
            self._finalized = True
            self._discard_all()
            logger.warning(f"NoiseInjector aborted - {len(self.sinks)} outputs discarded")

    def _discard_all(self) -> None:
        for sink in self.sinks:
            try:
                sink.discard()
            except SinkError as e:
                logger.warning(f"Could not discard sink: {e}")

    def _check_open(self) -> None:
        if self._finalized:
            raise RuntimeError("NoiseInjector has already been finalized")
