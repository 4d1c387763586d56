"""Common capability implemented by every per-file sample consumer."""

from abc import ABC, abstractmethod
from typing import Any

import numpy as np


class SampleConsumer(ABC):
    """
    A single-pass consumer of decoded samples.

    observe() is called once per sample in arrival order (channels interleaved
    per frame), and finalize() exactly once after the last sample.
    """

    @abstractmethod
    def observe(self, sample: int) -> None:
        """Consume one sample."""

    def observe_batch(self, samples: np.ndarray) -> None:
        """
        Consume a batch of samples in row-major (frame, channel) order.

        Subclasses override this with a vectorized path that must give the
        same result as feeding every element to observe().
        """
        for sample in np.asarray(samples).reshape(-1).tolist():
            self.observe(sample)

    @abstractmethod
    def finalize(self) -> Any:
        """Finish the pass and release or report whatever the consumer holds."""

    def abort(self) -> None:
        """Release resources after a failed pass; finalize() is not called."""
