import logging
from typing import Any, Optional

from ..constants import ExtractionDefaults, FormatConstants
from ..models import Track, TrackTypesData
from .tree import as_list, get_nested_value, get_text, get_value

logger = logging.getLogger(__name__)

# XML collection under LiveSet.Tracks -> track type
TRACK_COLLECTIONS = (
    ("AudioTrack", "audio"),
    ("MidiTrack", "midi"),
    ("ReturnTrack", "return"),
)


def extract_track_types(root):
    """
    Extract audio, MIDI, return and master tracks.

    Return tracks live under <Tracks> next to the others. The master track
    is read from <PreHearTrack> and only counts when it is named "Master".
    """
    tracks = []

    for tag, track_type in TRACK_COLLECTIONS:
        for track_elem in as_list(get_nested_value(root, f"Ableton.LiveSet.Tracks.{tag}")):
            if not isinstance(track_elem, dict) or track_elem.get("@Id") is None:
                continue
            track = _build_track(track_elem, track_type, track_elem["@Id"])
            if track is not None:
                tracks.append(track)

    pre_hear_track = get_nested_value(root, "Ableton.LiveSet.PreHearTrack")
    if pre_hear_track:
        master_name = get_value(pre_hear_track, "Name.EffectiveName")
        if master_name == FormatConstants.MASTER_TRACK_NAME:
            # Master track is always reported with id 0
            tracks.append(_build_track(pre_hear_track, "master", FormatConstants.MASTER_TRACK_ID))

    logger.debug(f"Found {len(tracks)} tracks")
    return TrackTypesData(tracks=tracks)


def _build_track(track_elem: Any, track_type: str, track_id: Any) -> Optional[Track]:
    try:
        track_id = int(track_id)
    except (ValueError, TypeError):
        logger.debug(f"Skipping {track_type} track with non-numeric id {track_id!r}")
        return None

    # Extract color index (0-69 in Ableton's color palette)
    try:
        color_index = int(get_value(track_elem, "Color") or ExtractionDefaults.DEFAULT_TRACK_COLOR)
    except (ValueError, TypeError):
        color_index = ExtractionDefaults.DEFAULT_TRACK_COLOR

    return Track(
        id=track_id,
        type=track_type,
        name=get_text(track_elem, "Name.EffectiveName"),
        user_defined_name=get_text(track_elem, "Name.UserName"),
        color=color_index,
        annotation=get_text(track_elem, "Name.Annotation"),
    )
