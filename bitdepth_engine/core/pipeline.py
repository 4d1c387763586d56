"""
Pipeline - Per-File Decode and Dispatch

Opens each input, selects the consumer for the requested mode once per
file, and pushes every decoded batch through it.  Files are independent:
a failure aborts only the file it occurred in.
"""

import logging
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Iterable, List, Optional, Union

from .consumer import SampleConsumer
from .errors import BitDepthEngineError
from .significance_analyzer import SignificanceAnalyzer, SignificanceReport
from .track_info import TrackInfo
from ..algorithms.randomizer import GenuineRandomizer
from ..processors.noise_injector import NoiseInjector
from ..utils.sample_sink import SoundFileSinkFactory
from ..utils.sample_source import SoundFileSource

logger = logging.getLogger(__name__)


class Mode(Enum):
    """What to do with each input file."""
    INFO = "info"
    DEEP = "deep"
    NOISE = "noise"


@dataclass
class EngineConfig:
    """Configuration for a processing run"""
    mode: Mode = Mode.INFO
    seed: int = 42
    output_dir: Optional[Path] = None
    batch_frames: int = 65536


@dataclass
class FileResult:
    """Outcome of processing one file."""
    path: Path
    report: Optional[SignificanceReport] = None
    outputs: List[Path] = field(default_factory=list)
    error: Optional[BitDepthEngineError] = None

    @property
    def ok(self) -> bool:
        return self.error is None


def build_consumer(track: TrackInfo,
                   config: EngineConfig,
                   path: Path,
                   outputs: Optional[List[Path]] = None) -> SampleConsumer:
    """
    Create the consumer for ``config.mode``.

    Args:
        track: Metadata of the opened stream
        config: Run configuration
        path: Input file, used to name noise outputs
        outputs: Receives the paths of any files the consumer creates

    Returns:
        SampleConsumer: Analyzer or noise injector
    """
    if config.mode in (Mode.INFO, Mode.DEEP):
        return SignificanceAnalyzer(track, deep=config.mode is Mode.DEEP)
    if config.mode is Mode.NOISE:
        output_dir = config.output_dir if config.output_dir is not None else path.parent
        factory = SoundFileSinkFactory(output_dir, path.stem, track)
        injector = NoiseInjector(track, factory, GenuineRandomizer(config.seed))
        if outputs is not None:
            outputs.extend(factory.paths)
        return injector
    raise ValueError(f"Unknown mode: {config.mode}")


def process_file(path: Union[str, Path], config: EngineConfig) -> FileResult:
    """
    Run one complete single-pass decode of ``path``.

    Raises:
        ConfigurationError: Unsupported stream format
        StreamError: Open or decode failure
        SinkError: Noise output could not be written
    """
    path = Path(path)
    result = FileResult(path=path)
    with SoundFileSource(path, batch_frames=config.batch_frames) as source:
        consumer = build_consumer(source.track, config, path, result.outputs)
        try:
            for batch in source:
                consumer.observe_batch(batch)
        except BitDepthEngineError:
            consumer.abort()
            raise
        outcome = consumer.finalize()

    if isinstance(outcome, SignificanceReport):
        result.report = outcome
    logger.info(f"Processed {path.name} ({config.mode.value})")
    return result


def process_files(paths: Iterable[Union[str, Path]], config: EngineConfig) -> List[FileResult]:
    """
    Process every file in turn, continuing past per-file failures.

    Returns:
        List[FileResult]: One result per input, failures carrying their error
    """
    results = []
    for path in paths:
        try:
            results.append(process_file(path, config))
        except BitDepthEngineError as e:
            logger.error(f"{path}: {e}")
            results.append(FileResult(path=Path(path), error=e))
    return results
