"""Serializers for converting extraction results to JSON-serializable dictionaries."""

import json
from dataclasses import fields, is_dataclass
from typing import Any, Dict, Optional

from .models import (
    AbletonProject,
    DevicesData,
    LocatorsData,
    TimeSignatureData,
    TrackTypesData,
)

# Properties computed from other fields that belong in the JSON form
_COMPUTED_FIELDS = {
    LocatorsData: ("total_locators",),
    TimeSignatureData: ("has_changes",),
    TrackTypesData: ("summary",),
    DevicesData: ("summary",),
}


def camel_case(name: str) -> str:
    """Convert a snake_case attribute name to its camelCase JSON key."""
    head, *rest = name.split("_")
    return head + "".join(part.title() for part in rest)


class ProjectSerializer:
    """Serializes result dataclasses to the camelCase JSON form."""

    @staticmethod
    def to_dict(value: Any) -> Any:
        """
        Serialize a result record (or list/dict of them).

        Fields that are None are left out, so optional values such as a
        sample's pack name or the last locator's duration are absent rather
        than null.
        """
        if is_dataclass(value) and not isinstance(value, type):
            result: Dict[str, Any] = {}
            for f in fields(value):
                field_value = getattr(value, f.name)
                if field_value is not None:
                    result[camel_case(f.name)] = ProjectSerializer.to_dict(field_value)
            for name in _COMPUTED_FIELDS.get(type(value), ()):
                result[camel_case(name)] = ProjectSerializer.to_dict(getattr(value, name))
            return result
        if isinstance(value, (list, tuple)):
            return [ProjectSerializer.to_dict(item) for item in value]
        if isinstance(value, dict):
            return {key: ProjectSerializer.to_dict(item) for key, item in value.items()}
        return value

    @staticmethod
    def to_json(value: Any, pretty: bool = False) -> str:
        """
        Convert a result record to a JSON string.

        Args:
            value: Record to serialize
            pretty: Whether to use pretty formatting

        Returns:
            JSON string
        """
        data = ProjectSerializer.to_dict(value)
        if pretty:
            return json.dumps(data, indent=2, ensure_ascii=False)
        return json.dumps(data, ensure_ascii=False)


def to_dict(value: Any) -> Any:
    return ProjectSerializer.to_dict(value)


def to_json(value: Any, pretty: bool = False) -> str:
    return ProjectSerializer.to_json(value, pretty)


def create_message(msg_type: str, payload: Dict[str, Any]) -> Dict[str, Any]:
    """
    Create a WebSocket message with a type and payload.

    Args:
        msg_type: Message type (PROJECT_SUMMARY, ERROR, ACK)
        payload: Message payload

    Returns:
        Message dictionary
    """
    return {
        'type': msg_type,
        'payload': payload,
    }


def create_summary_message(project: AbletonProject) -> Dict[str, Any]:
    """Create a PROJECT_SUMMARY message carrying an extraction result."""
    return create_message('PROJECT_SUMMARY', {
        'project': to_dict(project),
    })


def create_error_message(error: str, details: Optional[str] = None) -> Dict[str, Any]:
    """
    Create an ERROR message.

    Args:
        error: Error message
        details: Optional error details

    Returns:
        Message dictionary
    """
    payload = {'error': error}
    if details:
        payload['details'] = details
    return create_message('ERROR', payload)


def create_ack_message(request_id: Optional[str] = None) -> Dict[str, Any]:
    payload = {'status': 'ok'}
    if request_id:
        payload['request_id'] = request_id
    return create_message('ACK', payload)
