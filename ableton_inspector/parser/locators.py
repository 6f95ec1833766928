"""Extract arrangement locators (cue markers) from Ableton Live XML."""

import logging
import math
from typing import Any, Optional

from ..constants import FormatConstants
from ..models import Locator, LocatorsData
from .tree import as_list, get_nested_value, get_text, get_value

logger = logging.getLogger(__name__)


def extract_locators(root: Any) -> LocatorsData:
    """
    Extract locators sorted by time, with the distance to the next one.

    Locators missing an id, time or name are skipped. The last locator has
    no duration.
    """
    locator_list = as_list(get_nested_value(root, "Ableton.LiveSet.Locators.Locators.Locator"))

    locators = []
    for locator_elem in locator_list:
        locator = _parse_locator(locator_elem)
        if locator is not None:
            locators.append(locator)

    locators.sort(key=lambda locator: locator.time)

    for current, following in zip(locators, locators[1:]):
        duration = following.time - current.time
        current.duration = duration
        current.duration_text = format_duration(duration)

    logger.debug(f"Found {len(locators)} locators")
    return LocatorsData(locators=locators)


def _parse_locator(locator_elem: Any) -> Optional[Locator]:
    if not isinstance(locator_elem, dict):
        return None

    locator_id = locator_elem.get("@Id")
    time = get_value(locator_elem, "Time")
    name = get_value(locator_elem, "Name")
    if locator_id is None or time is None or name is None:
        return None

    try:
        locator_id = int(locator_id)
        time = float(time)
    except (TypeError, ValueError):
        logger.debug(f"Skipping locator with non-numeric id/time: {locator_id!r} {time!r}")
        return None

    return Locator(
        id=locator_id,
        time=time,
        name=get_text(locator_elem, "Name"),
        annotation=get_text(locator_elem, "Annotation"),
        is_song_start=bool(get_value(locator_elem, "IsSongStart", False)),
    )


def format_duration(duration: float) -> str:
    """
    Render a duration in quarter-note beats as bars.

    16 -> "4 bars", 4 -> "1 bar", 6 -> "1.2 bars" (one bar and two beats).
    """
    bars = math.floor(duration / FormatConstants.BEATS_PER_BAR)
    beats = round(duration % FormatConstants.BEATS_PER_BAR, 2)

    if beats == 0:
        return f"{bars} bar{'' if bars == 1 else 's'}"
    return f"{bars}.{_format_number(beats)} bars"


def _format_number(value: float) -> str:
    return str(int(value)) if value == int(value) else str(value)
