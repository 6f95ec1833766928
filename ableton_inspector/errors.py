"""
Exceptions raised while loading Ableton Live Set files.

Only loading can fail. Extractors never raise for missing data; they fall
back to the defaults in ``constants``.
"""


class InspectorError(Exception):
    """Base class for errors raised by the inspector."""
    pass


class DecompressionError(InspectorError):
    """Raised when an .als payload is not valid gzip data."""
    pass


class ParseError(InspectorError):
    """Raised when the decompressed payload is not well-formed XML."""
    pass
