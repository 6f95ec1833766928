"""
Parser module for Ableton Live project files.

This module handles:
- Loading and decompressing .als files
- Parsing the XML into a document tree of dicts and lists
- Searching that tree by element name or dotted path
- Extracting tempo, scale, samples, locators, time signatures,
  tracks and devices
"""

from .xml_loader import decompress, parse_xml, read_als_file
from .tree import as_list, find_all_elements, get_nested_value
from .tempo import extract_tempo
from .scale import extract_scale
from .samples import extract_samples
from .locators import extract_locators
from .time_signature import extract_time_signature
from .tracks import extract_track_types
from .devices import extract_devices

__all__ = [
    "decompress",
    "parse_xml",
    "read_als_file",
    "as_list",
    "find_all_elements",
    "get_nested_value",
    "extract_tempo",
    "extract_scale",
    "extract_samples",
    "extract_locators",
    "extract_time_signature",
    "extract_track_types",
    "extract_devices",
]
