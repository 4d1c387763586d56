"""
Bit Depth Engine: True Bit Depth Analysis for PCM Audio

Measures how many bits of the declared sample format a recording really
uses, and renders dithered, bit-reduced variants for listening tests.
"""

from .core.errors import BitDepthEngineError, ConfigurationError, StreamError, SinkError
from .core.track_info import TrackInfo
from .core.significance_analyzer import SignificanceAnalyzer, SignificanceReport
from .core.pipeline import EngineConfig, FileResult, Mode, process_file, process_files
from .algorithms.randomizer import Randomizer, GenuineRandomizer
from .processors.noise_injector import NoiseInjector, noisy

__version__ = "1.0.0"

__all__ = [
    "BitDepthEngineError",
    "ConfigurationError",
    "StreamError",
    "SinkError",
    "TrackInfo",
    "SignificanceAnalyzer",
    "SignificanceReport",
    "EngineConfig",
    "FileResult",
    "Mode",
    "process_file",
    "process_files",
    "Randomizer",
    "GenuineRandomizer",
    "NoiseInjector",
    "noisy",
]
