"""
Search helpers over the parsed document tree.

The .als dialect has no schema: the same element may be missing, appear
once, or repeat depending on the Live version and the project. These
helpers normalize that so extractors never special-case cardinality.
"""

from typing import Any, Dict, Iterable, Iterator, List, Optional


def as_list(value: Any) -> List[Any]:
    """Wrap a singular node in a list; None becomes an empty list."""
    if value is None:
        return []
    if isinstance(value, list):
        return value
    return [value]


def find_all_elements(tree: Any, name: str) -> List[Any]:
    """
    Find every node stored under the key `name`, at any depth.

    The whole tree is searched in document order, including inside
    matches. Empty matches are skipped and singular matches are returned
    as one-element lists.

    Args:
        tree: Document tree (or any subtree) to search
        name: Element name to look for

    Returns:
        List of matching nodes
    """
    results: List[Any] = []
    for current in walk(tree):
        element = current.get(name)
        if element:
            results.extend(as_list(element))
    return results


def walk(tree: Any, skip_keys: Iterable[str] = ()) -> Iterator[Dict[str, Any]]:
    """
    Yield every mapping in the tree, depth first in document order.

    Uses an explicit stack, so arbitrarily deep documents are safe. Values
    stored under `skip_keys` are not descended into.
    """
    skip_keys = frozenset(skip_keys)
    stack = [tree]
    while stack:
        current = stack.pop()
        if isinstance(current, list):
            stack.extend(reversed(current))
        elif isinstance(current, dict):
            yield current
            stack.extend(reversed([
                value for key, value in current.items()
                if key not in skip_keys and isinstance(value, (dict, list))
            ]))


def get_nested_value(tree: Any, path: str) -> Optional[Any]:
    """
    Resolve a dotted path such as "Ableton.LiveSet.MainTrack".

    Returns None as soon as a segment is missing or the current node is not
    a mapping. Never raises for a missing path.
    """
    current = tree
    for key in path.split("."):
        if not isinstance(current, dict):
            return None
        current = current.get(key)
        if current is None:
            return None
    return current


def get_value(node: Any, path: str, default: Any = None) -> Any:
    """Read the "@Value" attribute found under `path`, or `default`."""
    value = get_nested_value(node, f"{path}.@Value")
    return default if value is None else value


def get_text(node: Any, path: str, default: str = "") -> str:
    """
    Read a "@Value" attribute as the text Live wrote.

    Coerced scalars are turned back into their source form, so a name of
    "0" or "true" is returned unchanged.
    """
    value = get_value(node, path)
    if value is None:
        return default
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)
