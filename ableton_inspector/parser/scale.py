"""Extract key and scale information from Ableton Live XML."""

import logging
from typing import Any, Dict, List, Optional

from ..constants import NOTE_NAMES, SCALE_NAMES
from ..models import Scale, ScaleInfo
from .tree import find_all_elements, get_value

logger = logging.getLogger(__name__)


def extract_scale(root: Any) -> ScaleInfo:
    """
    Extract every ScaleInformation declaration (set-wide and per-clip).

    Declarations with an out-of-range root or scale index are dropped and
    do not count toward the distribution.
    """
    scales = [
        scale for scale in map(_parse_scale_element, find_all_elements(root, "ScaleInformation"))
        if scale is not None
    ]
    logger.debug(f"Found {len(scales)} valid scale declarations")

    return ScaleInfo(
        unique_scales=_unique_scales(scales),
        distribution=_scale_distribution(scales),
    )


def _parse_scale_element(element: Any) -> Optional[Scale]:
    root_value = _to_index(get_value(element, "Root"))
    scale_value = _to_index(get_value(element, "Name"))

    if not 0 <= root_value < len(NOTE_NAMES):
        return None
    if not 0 <= scale_value < len(SCALE_NAMES):
        return None

    return Scale(
        root=NOTE_NAMES[root_value],
        scale=SCALE_NAMES[scale_value],
        root_value=root_value,
        scale_value=scale_value,
    )


def _to_index(value: Any) -> int:
    """Parse a table index; anything unparsable maps to -1 (invalid)."""
    if value is None or isinstance(value, bool):
        return -1
    try:
        return int(value)
    except (TypeError, ValueError):
        return -1


def _unique_scales(scales: List[Scale]) -> List[Scale]:
    seen = set()
    unique = []
    for scale in scales:
        key = (scale.root_value, scale.scale_value)
        if key not in seen:
            seen.add(key)
            unique.append(scale)
    return unique


def _scale_distribution(scales: List[Scale]) -> Dict[str, int]:
    distribution: Dict[str, int] = {}
    for scale in scales:
        distribution[scale.label] = distribution.get(scale.label, 0) + 1
    return distribution
