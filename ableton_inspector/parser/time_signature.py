"""
Extract time signature changes from Ableton Live XML.

Live stores time signatures per clip as a TimeSignature/TimeSignatures list.
Entries at the start of a clip in plain 4/4 carry no information and are
not reported.
"""

import logging
from typing import Any, Iterator, List, Optional

from ..constants import ExtractionDefaults
from ..models import TimeSignature, TimeSignatureChange, TimeSignatureData
from .tree import as_list, get_nested_value, get_value, walk

logger = logging.getLogger(__name__)


def extract_time_signature(root: Any) -> TimeSignatureData:
    """
    Collect time signature changes from every track.

    Changes are deduplicated by (time, numerator, denominator) and sorted by
    time. The initial signature is the first change only when it sits at
    time 0; otherwise 4/4 is assumed.
    """
    tracks = get_nested_value(root, "Ableton.LiveSet.Tracks")
    if not tracks:
        return TimeSignatureData()

    changes: List[TimeSignatureChange] = []
    _search(tracks, changes)

    unique_changes = sorted(dict.fromkeys(changes), key=lambda change: change.time)
    logger.debug(f"Found {len(unique_changes)} time signature changes")

    initial = TimeSignature()
    if unique_changes and unique_changes[0].time == 0:
        initial = TimeSignature(unique_changes[0].numerator, unique_changes[0].denominator)

    return TimeSignatureData(initial_time_signature=initial, changes=unique_changes)


def _search(tracks: Any, changes: List[TimeSignatureChange]) -> None:
    for node in walk(tracks, skip_keys=("TimeSignature",)):
        signatures = get_nested_value(node, "TimeSignature.TimeSignatures")
        if not signatures:
            continue
        for entry in _signature_entries(signatures):
            change = _parse_entry(entry)
            if change is not None:
                changes.append(change)


def _signature_entries(signatures: Any) -> Iterator[dict]:
    """Yield entries, unwrapping the RemoteableTimeSignature layout Live writes."""
    for item in as_list(signatures):
        if not isinstance(item, dict):
            continue
        if item.get("Numerator") is not None and item.get("Denominator") is not None:
            yield item
        else:
            for wrapped in as_list(item.get("RemoteableTimeSignature")):
                if isinstance(wrapped, dict) and wrapped.get("Numerator") is not None \
                        and wrapped.get("Denominator") is not None:
                    yield wrapped


def _parse_entry(entry: dict) -> Optional[TimeSignatureChange]:
    time = _to_number(get_value(entry, "Time"), 0.0, float)
    numerator = _to_number(get_value(entry, "Numerator"), ExtractionDefaults.DEFAULT_NUMERATOR, int)
    denominator = _to_number(get_value(entry, "Denominator"), ExtractionDefaults.DEFAULT_DENOMINATOR, int)

    if (numerator != ExtractionDefaults.DEFAULT_NUMERATOR
            or denominator != ExtractionDefaults.DEFAULT_DENOMINATOR
            or time > 0):
        return TimeSignatureChange(time=time, numerator=numerator, denominator=denominator)
    return None


def _to_number(value: Any, default, cast):
    # Zero and missing both fall back to the default
    if not value or isinstance(value, bool):
        return default
    try:
        return cast(value)
    except (TypeError, ValueError):
        return default
