"""
Ableton Inspector.

Extract tempo, scale, samples, locators, time signatures, tracks and devices
from Ableton Live Set (.als) files.
"""

from .errors import InspectorError, DecompressionError, ParseError
from .inspector import Inspector
from .models import (
    AbletonProject,
    Device,
    DevicesData,
    Locator,
    LocatorsData,
    Sample,
    SampleInfo,
    SampleOptions,
    Scale,
    ScaleInfo,
    TempoChange,
    TempoInfo,
    TimeSignature,
    TimeSignatureChange,
    TimeSignatureData,
    Track,
    TrackTypesData,
)

__version__ = "1.0.0"

__all__ = [
    "Inspector",
    # Errors
    "InspectorError",
    "DecompressionError",
    "ParseError",
    # Results
    "AbletonProject",
    "Device",
    "DevicesData",
    "Locator",
    "LocatorsData",
    "Sample",
    "SampleInfo",
    "SampleOptions",
    "Scale",
    "ScaleInfo",
    "TempoChange",
    "TempoInfo",
    "TimeSignature",
    "TimeSignatureChange",
    "TimeSignatureData",
    "Track",
    "TrackTypesData",
]
