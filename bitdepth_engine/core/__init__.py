"""Core stream model and the significance analyzer."""

from .errors import BitDepthEngineError, ConfigurationError, StreamError, SinkError
from .track_info import TrackInfo
from .consumer import SampleConsumer
from .significance_analyzer import SignificanceAnalyzer, SignificanceReport

__all__ = [
    "BitDepthEngineError",
    "ConfigurationError",
    "StreamError",
    "SinkError",
    "TrackInfo",
    "SampleConsumer",
    "SignificanceAnalyzer",
    "SignificanceReport",
]
