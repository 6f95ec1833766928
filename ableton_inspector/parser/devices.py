"""
Extract device information from Ableton Live XML.

Devices include:
- Plugins (VST, VST3, AU) hosted in PluginDevice
- Racks (instrument, audio effect and MIDI effect racks)
- Max for Live devices
"""

from typing import Any, List, Optional, Tuple
import logging

from ..constants import DEVICE_CATEGORIES, DEVICE_CONTAINER_TAGS, FormatConstants
from ..models import Device, DevicesData
from .tree import as_list, get_nested_value, get_text, get_value, walk

logger = logging.getLogger(__name__)


def extract_devices(root: Any) -> DevicesData:
    """
    Extract all devices found anywhere in the set.

    Args:
        root: Parsed document tree

    Returns:
        DevicesData with devices deduplicated by (id, name)
    """
    devices: List[Device] = []
    _search_for_devices(root, devices)

    seen = set()
    unique_devices = []
    for device in devices:
        key = (device.id, device.name)
        if key not in seen:
            seen.add(key)
            unique_devices.append(device)

    logger.debug(f"Found {len(unique_devices)} unique devices ({len(devices)} instances)")
    return DevicesData(devices=unique_devices)


def _search_for_devices(node: Any, devices: List[Device]) -> None:
    """Walk the whole tree, including inside racks, collecting devices."""
    for current in walk(node):
        for device_tag in DEVICE_CONTAINER_TAGS:
            for device_elem in as_list(current.get(device_tag)):
                if isinstance(device_elem, dict) and device_elem.get("@Id") is not None:
                    device = _extract_device_info(device_elem, device_tag)
                    if device is not None:
                        devices.append(device)


def _extract_device_info(device_elem: dict, device_tag: str) -> Optional[Device]:
    """
    Extract information from a single device element.

    The name is taken from the first source that yields one: plugin
    descriptors (VST, AU, Max), the native DeviceName, any nested Name, and
    finally the container tag itself.
    """
    try:
        device_id = int(device_elem["@Id"])
    except (ValueError, TypeError):
        logger.debug(f"Skipping {device_tag} with non-numeric id {device_elem['@Id']!r}")
        return None

    is_expanded = bool(get_value(device_elem, "IsExpanded", False))
    manufacturer = None

    plugin_info = _extract_plugin_info(device_elem)
    if plugin_info:
        name, device_type, category, manufacturer = plugin_info
    else:
        device_type = "native"
        category = DEVICE_CATEGORIES.get(device_tag, "Unknown Device")
        name = (
            _first_value(device_elem, "DeviceName")
            or find_name_in_device(device_elem, device_tag, FormatConstants.DEVICE_NAME_SEARCH_DEPTH)
            or device_tag
        )

    return Device(
        id=device_id,
        name=name,
        type=device_type,
        category=category,
        manufacturer=manufacturer or None,
        is_expanded=is_expanded,
    )


def _extract_plugin_info(device_elem: dict) -> Optional[Tuple[str, str, str, Optional[str]]]:
    """
    Extract plugin-specific information (VST/VST3/AU/Max).

    Returns:
        (name, type, category, manufacturer), or None without a named descriptor
    """
    plugin_desc = get_nested_value(device_elem, "PluginDesc")
    if not plugin_desc:
        return None

    for info_tag in ("VstPluginInfo", "Vst3PluginInfo"):
        vst_info = get_nested_value(plugin_desc, info_tag)
        name = _first_value(vst_info, "PlugName", "Name")
        if name:
            manufacturer = _first_value(vst_info, "Manufacturer", "VendorName", "PlugCategory")
            return name, "vst", "VST Plugin", manufacturer

    au_info = get_nested_value(plugin_desc, "AuPluginInfo")
    name = _first_value(au_info, "PlugName", "Name")
    if name:
        manufacturer = _first_value(au_info, "Manufacturer", "PlugCategory")
        return name, "au", "AU Plugin", manufacturer

    max_info = get_nested_value(plugin_desc, "MaxDeviceInfo")
    name = _first_value(max_info, "PlugName", "Name")
    if name:
        return name, "max", "Max Device", None

    return None


def find_name_in_device(node: Any, excluded: str, max_depth: int, depth: int = 0) -> Optional[str]:
    """
    Depth-first search for the first Name/@Value that differs from `excluded`.

    Stops descending past `max_depth` levels.
    """
    if depth > max_depth:
        return None

    if isinstance(node, list):
        for item in node:
            found = find_name_in_device(item, excluded, max_depth, depth + 1)
            if found:
                return found
        return None
    if not isinstance(node, dict):
        return None

    name = get_text(node, "Name")
    if name and name != excluded:
        return name

    for value in node.values():
        if isinstance(value, (dict, list)):
            found = find_name_in_device(value, excluded, max_depth, depth + 1)
            if found:
                return found
    return None


def _first_value(node: Any, *tags: str) -> Optional[str]:
    """Get the first non-empty @Value among the given child tags."""
    if not isinstance(node, dict):
        return None
    for tag in tags:
        value = get_text(node, tag)
        if value:
            return value
    return None
