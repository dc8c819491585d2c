from datetime import datetime, timedelta
from typing import Any, Optional
from bson import ObjectId

from contesthub.utils.errors import InvalidInput


def serialize_value(value: Any) -> Any:
    """Recursively serialize non-JSON-serializable values"""
    if isinstance(value, datetime):
        return value.isoformat()
    elif isinstance(value, timedelta):
        return str(value)
    elif isinstance(value, ObjectId):
        return str(value)
    elif isinstance(value, dict):
        return {k: serialize_value(v) for k, v in value.items()}
    elif isinstance(value, list):
        return [serialize_value(item) for item in value]
    return value


def convert_document_to_json(document: Optional[dict]) -> Optional[dict]:
    """Convert a Mongo document to a JSON-serializable dict with a string `_id`"""
    if document is None:
        return None
    return {key: serialize_value(value) for key, value in document.items()}


def convert_user_to_json(user: dict) -> dict:
    """Serialize a user document, never exposing the password hash"""
    user = convert_document_to_json(user)
    user.pop("password", None)
    return user


def parse_object_id(identifier: str, label: str = "ID") -> ObjectId:
    """Parse a path identifier, rejecting malformed ids"""
    if not identifier or not ObjectId.is_valid(identifier):
        raise InvalidInput(f"Invalid {label}")
    return ObjectId(identifier)
