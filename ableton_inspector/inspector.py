"""
High-level API for inspecting Ableton Live Set files.

An Inspector owns one parsed document tree and runs extractors against it.
Extractors only read the tree, so one instance can serve any number of
extraction calls.
"""

import logging
from pathlib import Path
from typing import Any, Dict, Iterable, Optional, Union

from .constants import ALL_SECTIONS, ExtractionDefaults
from .models import (
    AbletonProject,
    DevicesData,
    LocatorsData,
    SampleInfo,
    SampleOptions,
    ScaleInfo,
    TempoInfo,
    TimeSignatureData,
    TrackTypesData,
)
from .parser import (
    decompress,
    parse_xml,
    read_als_file,
    extract_tempo,
    extract_scale,
    extract_samples,
    extract_locators,
    extract_time_signature,
    extract_track_types,
    extract_devices,
)

logger = logging.getLogger(__name__)


class Inspector:
    """
    Extracts structured facts from one Ableton Live Set.

    Usage:
        inspector = Inspector.from_file(Path("song.als"))
        tempo = inspector.extract_tempo()
        project = inspector.extract_all()
    """

    def __init__(self, xml_content: str):
        """
        Parse XML content into the document tree.

        Args:
            xml_content: Decompressed Live Set XML

        Raises:
            ParseError: If the XML is malformed
        """
        self._root: Dict[str, Any] = parse_xml(xml_content)

    @classmethod
    def from_text(cls, xml_content: str) -> "Inspector":
        return cls(xml_content)

    @classmethod
    def from_bytes(cls, data: bytes) -> "Inspector":
        """
        Create an Inspector from raw .als bytes (e.g. an upload).

        Raises:
            DecompressionError: If the data is not valid gzip
            ParseError: If the decompressed XML is malformed
        """
        return cls(decompress(data))

    @classmethod
    def from_file(cls, path: Union[str, Path]) -> "Inspector":
        """Create an Inspector from an .als or .xml file on disk."""
        logger.debug(f"Loading project file: {path}")
        return cls(read_als_file(path))

    @property
    def root(self) -> Dict[str, Any]:
        """The parsed document tree. Treat as read-only."""
        return self._root

    def extract_all(
        self,
        sample_options: Optional[SampleOptions] = None,
        sections: Iterable[str] = ExtractionDefaults.DEFAULT_SECTIONS,
        file: str = "unknown",
    ) -> AbletonProject:
        """
        Extract the requested sections into one project summary.

        Args:
            sample_options: Options for sample extraction
            sections: Names from ALL_SECTIONS; tempo, scale and samples by default
            file: Identifier of the inspected file, echoed in the result

        Returns:
            AbletonProject with only the requested sections populated
        """
        sections = set(sections)
        unknown = sections.difference(ALL_SECTIONS)
        if unknown:
            raise ValueError(f"Unknown sections: {', '.join(sorted(unknown))}")

        project = AbletonProject(file=file)
        if "tempo" in sections:
            project.tempo = self.extract_tempo()
        if "scale" in sections:
            project.scale = self.extract_scale()
        if "samples" in sections:
            project.samples = self.extract_samples(sample_options)
        if "locators" in sections:
            project.locators = self.extract_locators()
        if "time_signature" in sections:
            project.time_signature = self.extract_time_signature()
        if "track_types" in sections:
            project.track_types = self.extract_track_types()
        if "devices" in sections:
            project.devices = self.extract_devices()
        return project

    def extract_tempo(self) -> TempoInfo:
        return extract_tempo(self._root)

    def extract_scale(self) -> ScaleInfo:
        return extract_scale(self._root)

    def extract_samples(self, options: Optional[SampleOptions] = None) -> SampleInfo:
        """
        Extract audio samples.

        Args:
            options: Custom Splice paths and splice-only filter
        """
        return extract_samples(self._root, options)

    def extract_locators(self) -> LocatorsData:
        return extract_locators(self._root)

    def extract_time_signature(self) -> TimeSignatureData:
        return extract_time_signature(self._root)

    def extract_track_types(self) -> TrackTypesData:
        return extract_track_types(self._root)

    def extract_devices(self) -> DevicesData:
        return extract_devices(self._root)
