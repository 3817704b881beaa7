"""
Generic document mapper.
Turns raw MongoDB documents into JSON-safe dicts for API responses.
"""

from datetime import datetime
from typing import Any, Dict, Optional

from bson import ObjectId


def serialize_value(obj: Any) -> Any:
    """Recursively convert ObjectIds to strings and datetimes to ISO format"""
    if isinstance(obj, ObjectId):
        return str(obj)
    if isinstance(obj, datetime):
        return obj.isoformat()
    if isinstance(obj, dict):
        return {k: serialize_value(v) for k, v in obj.items()}
    if isinstance(obj, (list, tuple)):
        return [serialize_value(item) for item in obj]
    return obj


def serialize_document(
    doc: Optional[Dict[str, Any]], exclude: tuple = ()
) -> Optional[Dict[str, Any]]:
    """Map a document to its API shape: ``_id`` becomes ``id``; ``exclude`` keys are dropped."""
    if doc is None:
        return None
    out: Dict[str, Any] = {}
    if "_id" in doc:
        out["id"] = serialize_value(doc["_id"])
    for key, value in doc.items():
        if key == "_id" or key in exclude:
            continue
        out[key] = serialize_value(value)
    return out
