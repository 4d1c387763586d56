"""Error taxonomy for the bit depth engine."""


class BitDepthEngineError(Exception):
    """Base class for all errors raised by the engine."""


class ConfigurationError(BitDepthEngineError):
    """Stream metadata is missing or invalid (e.g. unsupported bits per sample)."""


class StreamError(BitDepthEngineError):
    """A source could not be opened or failed to decode mid-stream."""


class SinkError(BitDepthEngineError):
    """An output sink failed to open, write or close."""
