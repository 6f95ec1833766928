import gzip
import logging
import re
import zlib
import xml.etree.ElementTree as ET
from pathlib import Path
from typing import Any, Dict, Union

from ..errors import DecompressionError, ParseError

logger = logging.getLogger(__name__)

ATTRIBUTE_PREFIX = "@"
TEXT_KEY = "#text"

_NUMBER_RE = re.compile(r"^-?\d+(\.\d+)?$")


def decompress(data: bytes) -> str:
    """Decompress gzip-framed .als bytes into the XML text they carry."""
    if not data:
        raise DecompressionError(
            "Failed to decompress .als data. It may be corrupted or not a "
            "valid Ableton Live Set file. No gzip data found"
        )
    try:
        raw = gzip.decompress(data)
    except (OSError, EOFError, zlib.error) as e:
        raise DecompressionError(
            "Failed to decompress .als data. It may be corrupted or not a "
            f"valid Ableton Live Set file. {e}"
        ) from e
    logger.debug(f"Decompressed {len(data)} bytes into {len(raw)} bytes of XML")
    return raw.decode("utf-8", errors="replace")


def read_als_file(path: Union[str, Path]) -> str:
    """Read an .als (gzipped) or already decompressed .xml file as XML text."""
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"File not found: {path}")

    if path.suffix == ".als":
        return decompress(path.read_bytes())
    elif path.suffix == ".xml":
        return path.read_text(encoding="utf-8")
    else:
        raise ValueError(f"Unsupported file type: {path.suffix}")


def parse_xml(text: str) -> Dict[str, Any]:
    """
    Parse XML text into a document tree of dicts, lists and scalars.

    Attributes are stored under "@"-prefixed keys next to child elements.
    Same-tag siblings collapse into a list in document order. The root
    element is keyed by its own tag.

    Raises:
        ParseError: If the text is not well-formed XML
    """
    try:
        root = ET.fromstring(text)
    except ET.ParseError as e:
        raise ParseError(f"Failed to parse XML content: {e}") from e
    return {root.tag: _element_to_node(root)}


def coerce_value(value: str) -> Union[str, int, float, bool]:
    """
    Convert attribute text to a bool, int or float when that is lossless.

    A number is only produced when formatting it back gives the exact same
    text, so "007", "1.10" or "1e5" stay strings.
    """
    if value == "true":
        return True
    if value == "false":
        return False
    if _NUMBER_RE.match(value):
        if "." in value:
            number = float(value)
            if repr(number) == value:
                return number
        else:
            number = int(value)
            if str(number) == value:
                return number
    return value


def _element_to_node(root: ET.Element) -> Any:
    """
    Convert an element and its descendants without recursing per level.

    Each stack frame holds an element, the iterator over its children, the
    node being filled and the parent node it will be attached to.
    """
    stack = [(root, iter(root), _attributes(root), None)]
    while True:
        elem, children, node, parent = stack[-1]
        child = next(children, None)
        if child is not None:
            stack.append((child, iter(child), _attributes(child), node))
            continue

        stack.pop()
        value = _finish_node(elem, node)
        if parent is None:
            return value
        _add_child(parent, elem.tag, value)


def _attributes(elem: ET.Element) -> Dict[str, Any]:
    return {
        f"{ATTRIBUTE_PREFIX}{name}": coerce_value(value)
        for name, value in elem.attrib.items()
    }


def _add_child(node: Dict[str, Any], tag: str, value: Any) -> None:
    existing = node.get(tag)
    if existing is None:
        node[tag] = value
    elif isinstance(existing, list):
        existing.append(value)
    else:
        node[tag] = [existing, value]


def _finish_node(elem: ET.Element, node: Dict[str, Any]) -> Any:
    text = (elem.text or "").strip()
    if text:
        if not node:
            return coerce_value(text)
        node[TEXT_KEY] = coerce_value(text)
    return node
