"""
Extract audio sample references from Ableton Live XML.

FileRef elements point at samples, but also at presets, racks, Max devices
and built-in instruments. Only the audio samples are reported, each tagged
with its Splice provenance.
"""

import logging
import re
from typing import Any, List, Optional

from ..constants import (
    AUDIO_EXTENSIONS,
    BUILTIN_DEVICE_NAMES,
    DEFAULT_SPLICE_PATTERNS,
    DEVICE_FILE_EXTENSIONS,
)
from ..models import Sample, SampleInfo, SampleOptions
from .tree import find_all_elements, get_text, get_value

logger = logging.getLogger(__name__)

_PACK_NAME_RE = re.compile(r"packs[/\\]([^/\\]+)[/\\]", re.IGNORECASE)
_PATH_SEPARATOR_RE = re.compile(r"[/\\]")


def extract_samples(root: Any, options: Optional[SampleOptions] = None) -> SampleInfo:
    """
    Extract the audio samples referenced by the set.

    Samples are deduplicated by full path. The Splice count is taken over
    all deduplicated samples before the splice-only filter is applied, so
    with splice_only the count describes the returned list only because the
    filter keeps exactly the Splice samples.

    Args:
        root: Parsed document tree
        options: Custom Splice paths and splice-only filter

    Returns:
        SampleInfo with counts and sample details
    """
    options = options or SampleOptions()

    samples = []
    for file_ref in find_all_elements(root, "FileRef"):
        sample = _parse_sample(file_ref, options.splice_paths)
        if sample is not None:
            samples.append(sample)

    unique_samples = _deduplicate(samples)
    splice_count = sum(1 for sample in unique_samples if sample.is_splice)

    if options.splice_only:
        returned = [sample for sample in unique_samples if sample.is_splice]
    else:
        returned = unique_samples

    logger.debug(
        f"Found {len(unique_samples)} unique samples ({splice_count} from Splice) "
        f"in {len(samples)} sample references"
    )

    return SampleInfo(
        total_samples=len(returned),
        splice_samples=splice_count,
        samples=returned,
        searched_paths=options.splice_paths,
    )


def _parse_sample(file_ref: Any, custom_splice_paths: Optional[List[str]]) -> Optional[Sample]:
    full_path = get_text(file_ref, "Path")
    if not full_path:
        return None

    relative_path = get_text(file_ref, "RelativePath")
    original_file_size = get_value(file_ref, "OriginalFileSize")

    if not is_audio_sample(full_path, original_file_size):
        return None

    is_splice = is_splice_sample(full_path, custom_splice_paths)

    return Sample(
        filename=get_filename(full_path),
        full_path=full_path,
        relative_path=relative_path,
        is_splice=is_splice,
        pack_name=extract_pack_name(full_path) if is_splice else None,
    )


def is_audio_sample(path: str, original_file_size: Any = None) -> bool:
    """
    Decide whether a FileRef path is an audio sample.

    A path qualifies when it has an audio extension or a non-zero recorded
    size, and is not a device path, a built-in device or a device file.
    """
    lower_path = path.lower()

    has_audio_extension = lower_path.endswith(AUDIO_EXTENSIONS)
    is_device_path = "/devices/" in lower_path or "\\devices\\" in lower_path
    is_device_file = lower_path.endswith(DEVICE_FILE_EXTENSIONS)
    is_builtin_device = not has_audio_extension and (path in BUILTIN_DEVICE_NAMES or is_device_path)

    has_valid_extension = has_audio_extension and not is_device_file
    has_non_zero_size = _file_size(original_file_size) > 0

    return (
        (has_valid_extension or has_non_zero_size)
        and not is_device_path
        and not is_builtin_device
        and not is_device_file
    )


def is_splice_sample(path: str, custom_paths: Optional[List[str]] = None) -> bool:
    """Check a path against custom Splice locations, or the defaults."""
    normalized_path = _normalize(path)
    patterns = custom_paths if custom_paths else DEFAULT_SPLICE_PATTERNS
    return any(_normalize(pattern) in normalized_path for pattern in patterns)


def extract_pack_name(path: str) -> Optional[str]:
    """
    Extract the pack name from a Splice path.

    Splice samples live under .../Splice/sounds/packs/PACK_NAME/.../file.wav
    """
    match = _PACK_NAME_RE.search(path)
    return match.group(1) if match else None


def get_filename(path: str) -> str:
    return _PATH_SEPARATOR_RE.split(path)[-1] or path


def _normalize(path: str) -> str:
    return path.replace("\\", "/").lower()


def _file_size(value: Any) -> float:
    if value is None or isinstance(value, bool):
        return 0
    try:
        return float(value)
    except (TypeError, ValueError):
        return 0


def _deduplicate(samples: List[Sample]) -> List[Sample]:
    """The same sample can appear in many clips; keep its first occurrence."""
    seen = {}
    for sample in samples:
        seen.setdefault(sample.full_path, sample)
    return list(seen.values())
