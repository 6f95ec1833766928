"""
Result records produced by the extractors.

Each record is an independent value: extractors copy what they need out of
the document tree and never keep references into it.
"""

from typing import Dict, List, Optional
from dataclasses import dataclass, field

from .constants import ExtractionDefaults


@dataclass
class TempoChange:
    """A single point of the tempo automation envelope."""
    time: float
    bpm: float


@dataclass
class TempoInfo:
    """Initial tempo plus every tempo automation event, in document order."""
    initial_tempo: float = ExtractionDefaults.DEFAULT_TEMPO
    tempo_changes: List[TempoChange] = field(default_factory=list)


@dataclass
class Scale:
    """A root note and scale type resolved from their Live indices."""
    root: str
    scale: str
    root_value: int
    scale_value: int

    @property
    def label(self) -> str:
        return f"{self.root} {self.scale}"


@dataclass
class ScaleInfo:
    unique_scales: List[Scale] = field(default_factory=list)
    distribution: Dict[str, int] = field(default_factory=dict)


@dataclass
class SampleOptions:
    """
    Options for sample extraction.

    splice_paths replaces the built-in Splice locations when non-empty.
    splice_only restricts the returned samples (not the Splice count).
    """
    splice_paths: Optional[List[str]] = None
    splice_only: bool = False


@dataclass
class Sample:
    filename: str
    full_path: str
    relative_path: str
    is_splice: bool
    pack_name: Optional[str] = None


@dataclass
class SampleInfo:
    total_samples: int = 0
    splice_samples: int = 0
    samples: List[Sample] = field(default_factory=list)
    searched_paths: Optional[List[str]] = None


@dataclass
class Locator:
    """An arrangement marker. Times and durations are in quarter-note beats."""
    id: int
    time: float
    name: str
    annotation: str = ""
    is_song_start: bool = False
    duration: Optional[float] = None
    duration_text: Optional[str] = None


@dataclass
class LocatorsData:
    locators: List[Locator] = field(default_factory=list)

    @property
    def total_locators(self) -> int:
        return len(self.locators)


@dataclass
class TimeSignature:
    numerator: int = ExtractionDefaults.DEFAULT_NUMERATOR
    denominator: int = ExtractionDefaults.DEFAULT_DENOMINATOR

    def __str__(self) -> str:
        return f"{self.numerator}/{self.denominator}"


@dataclass(frozen=True)
class TimeSignatureChange:
    time: float
    numerator: int
    denominator: int


@dataclass
class TimeSignatureData:
    initial_time_signature: TimeSignature = field(default_factory=TimeSignature)
    changes: List[TimeSignatureChange] = field(default_factory=list)

    @property
    def has_changes(self) -> bool:
        return bool(self.changes)


@dataclass
class Track:
    id: int
    type: str  # 'audio', 'midi', 'return', 'master'
    name: str = ""
    user_defined_name: str = ""
    color: int = ExtractionDefaults.DEFAULT_TRACK_COLOR
    annotation: str = ""


@dataclass
class TrackTypesData:
    tracks: List[Track] = field(default_factory=list)

    @property
    def summary(self) -> Dict[str, int]:
        counts = {"audio": 0, "midi": 0, "return": 0, "master": 0}
        for track in self.tracks:
            counts[track.type] += 1
        counts["total"] = len(self.tracks)
        return counts


@dataclass
class Device:
    id: int
    name: str
    type: str  # 'native', 'vst', 'au', 'max', 'unknown'
    category: str
    manufacturer: Optional[str] = None
    is_expanded: bool = False


@dataclass
class DevicesData:
    devices: List[Device] = field(default_factory=list)

    @property
    def summary(self) -> Dict[str, int]:
        counts = {"native": 0, "vst": 0, "au": 0, "max": 0}
        for device in self.devices:
            if device.type in counts:
                counts[device.type] += 1
        counts["total"] = len(self.devices)
        return counts


@dataclass
class AbletonProject:
    """Aggregate of the sections requested for one inspected file."""
    file: str
    tempo: Optional[TempoInfo] = None
    scale: Optional[ScaleInfo] = None
    samples: Optional[SampleInfo] = None
    locators: Optional[LocatorsData] = None
    time_signature: Optional[TimeSignatureData] = None
    track_types: Optional[TrackTypesData] = None
    devices: Optional[DevicesData] = None
