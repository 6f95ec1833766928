"""
Configuration file loading.

A config file is JSON in the layout below. Every key is optional.

    {
        "samplePaths": {"splice": ["/Volumes/Samples/Splice"]},
        "output": {"format": "text", "showAllSamples": false},
        "defaults": {"extractTempo": true, "extractScale": true, "extractSamples": true}
    }

A missing or unreadable config is not an error: loading returns None and
the command line falls back to its defaults.
"""

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple, Union

from .constants import ExtractionDefaults

logger = logging.getLogger(__name__)

CONFIG_FILE_NAMES = (
    ".abletoninspectorrc",
    ".abletoninspectorrc.json",
    "abletoninspector.config.json",
)

# defaults.* flag -> section name
_SECTION_FLAGS = (
    ("extractTempo", "tempo"),
    ("extractScale", "scale"),
    ("extractSamples", "samples"),
    ("extractLocators", "locators"),
    ("extractTimeSignature", "time_signature"),
    ("extractTrackTypes", "track_types"),
    ("extractDevices", "devices"),
)


@dataclass
class InspectorConfig:
    """Settings read from a config file."""
    splice_paths: List[str] = field(default_factory=list)
    output_format: str = "text"
    show_all_samples: bool = False
    sections: Tuple[str, ...] = ExtractionDefaults.DEFAULT_SECTIONS
    source: Optional[Path] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any], source: Optional[Path] = None) -> "InspectorConfig":
        sample_paths = data.get("samplePaths") or {}
        output = data.get("output") or {}
        defaults = data.get("defaults") or {}

        output_format = output.get("format", "text")
        if output_format not in ("text", "json"):
            logger.warning(f"Ignoring unknown output format in config: {output_format}")
            output_format = "text"

        sections = tuple(
            section for flag, section in _SECTION_FLAGS
            if defaults.get(flag, section in ExtractionDefaults.DEFAULT_SECTIONS)
        )

        return cls(
            splice_paths=[str(p) for p in sample_paths.get("splice") or [] if p],
            output_format=output_format,
            show_all_samples=bool(output.get("showAllSamples", False)),
            sections=sections,
            source=source,
        )


def load_config(config_path: Optional[Union[str, Path]] = None) -> Optional[InspectorConfig]:
    """
    Load configuration from an explicit path or the standard locations.

    The current directory is searched first, then the home directory.

    Args:
        config_path: Optional explicit config file path

    Returns:
        InspectorConfig, or None when no usable config exists
    """
    if config_path is not None:
        candidates = [Path(config_path)]
    else:
        candidates = [
            directory / name
            for directory in (Path.cwd(), Path.home())
            for name in CONFIG_FILE_NAMES
        ]

    for candidate in candidates:
        if not candidate.is_file():
            continue
        try:
            data = json.loads(candidate.read_text(encoding="utf-8"))
        except (OSError, ValueError) as e:
            logger.warning(f"Ignoring unreadable config file {candidate}: {e}")
            return None
        if not isinstance(data, dict):
            logger.warning(f"Ignoring config file {candidate}: top level must be an object")
            return None
        logger.debug(f"Loaded config from {candidate}")
        return InspectorConfig.from_dict(data, source=candidate)

    logger.debug("No config file found")
    return None
