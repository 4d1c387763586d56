"""Decoder, encoder and report formatting collaborators."""

from .sample_source import SoundFileSource
from .sample_sink import SoundFileSink, SoundFileSinkFactory
from .report_formatter import format_report

__all__ = ["SoundFileSource", "SoundFileSink", "SoundFileSinkFactory", "format_report"]
