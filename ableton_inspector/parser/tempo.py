"""
Extract the song tempo and its automation from Ableton Live XML.

Tempo lives in an automation envelope of the main track (MainTrack in
Live 12, MasterTrack before). Older sets may carry neither, in which case
the default tempo is reported.
"""

import logging
from typing import Any, List, Optional

from ..constants import ExtractionDefaults, FormatConstants
from ..models import TempoChange, TempoInfo
from .tree import as_list, get_nested_value

logger = logging.getLogger(__name__)

TRACK_TYPES = ("AudioTrack", "MidiTrack", "ReturnTrack")


def extract_tempo(root: Any) -> TempoInfo:
    """
    Extract the initial tempo and all tempo changes.

    Args:
        root: Parsed document tree

    Returns:
        TempoInfo; 120 BPM with no changes when no tempo envelope exists
    """
    main_track = _find_tempo_track(root)
    if not main_track:
        logger.debug("No track with tempo automation found, using default tempo")
        return TempoInfo()

    envelopes = get_nested_value(main_track, "AutomationEnvelopes.Envelopes.AutomationEnvelope")
    tempo_envelope = next(
        (
            envelope for envelope in as_list(envelopes)
            if get_nested_value(envelope, "EnvelopeTarget.PointeeId.@Value") == FormatConstants.TEMPO_POINTEE_ID
        ),
        None,
    )
    if tempo_envelope is None:
        logger.debug("No tempo envelope found, using default tempo")
        return TempoInfo()

    events = as_list(get_nested_value(tempo_envelope, "Automation.Events.FloatEvent"))
    tempo_changes = _parse_tempo_changes(events)

    return TempoInfo(
        initial_tempo=_find_initial_tempo(tempo_changes),
        tempo_changes=tempo_changes,
    )


def _find_tempo_track(root: Any) -> Optional[Any]:
    """Find the track holding the tempo envelope, newest layout first."""
    main_track = get_nested_value(root, "Ableton.LiveSet.MainTrack")

    # Live 11 and earlier
    if not main_track:
        main_track = get_nested_value(root, "Ableton.LiveSet.MasterTrack")

    if not main_track:
        tracks = get_nested_value(root, "Ableton.LiveSet.Tracks")
        for track_type in TRACK_TYPES:
            for track in as_list(get_nested_value(tracks, track_type)):
                if get_nested_value(track, "AutomationEnvelopes"):
                    return track

    return main_track


def _parse_tempo_changes(events: List[Any]) -> List[TempoChange]:
    changes = []
    for event in events:
        if not isinstance(event, dict):
            continue
        time = event.get("@Time")
        value = event.get("@Value")
        changes.append(TempoChange(
            time=_to_float(time, 0.0),
            bpm=round(_to_float(value, ExtractionDefaults.DEFAULT_TEMPO), 2),
        ))
    return changes


def _find_initial_tempo(changes: List[TempoChange]) -> float:
    for change in changes:
        if change.time == FormatConstants.INITIAL_TEMPO_TIME:
            return change.bpm
    return ExtractionDefaults.DEFAULT_TEMPO


def _to_float(value: Any, default: float) -> float:
    if value is None or isinstance(value, bool):
        return default
    try:
        return float(value)
    except (TypeError, ValueError):
        return default
