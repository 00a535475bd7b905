"""
Helper utility functions
"""
from bson import ObjectId
from typing import Dict, List, Optional
from datetime import datetime
import pytz

IST = pytz.timezone('Asia/Kolkata')


def to_local(value: datetime) -> datetime:
    """Stored datetimes are naive UTC; present them in Indian time"""
    if value.tzinfo is None:
        value = pytz.utc.localize(value)
    return value.astimezone(IST)


def serialize_doc(doc: Optional[Dict]) -> Optional[Dict]:
    """Convert MongoDB document to JSON-serializable format"""
    if doc is None:
        return None

    for key, value in doc.items():
        if isinstance(value, ObjectId):
            doc[key] = str(value)
        elif isinstance(value, datetime):
            doc[key] = to_local(value).isoformat()
        elif isinstance(value, list):
            doc[key] = [serialize_doc(item) if isinstance(item, dict) else item for item in value]
        elif isinstance(value, dict):
            doc[key] = serialize_doc(value)

    return doc


def serialize_docs(docs: List[Dict]) -> List[Dict]:
    """Convert list of MongoDB documents to JSON-serializable format"""
    return [serialize_doc(doc) for doc in docs]


def format_room_number(floor, room) -> str:
    """Floor 2, room 3 -> '203'"""
    return f"{floor}{int(room):02d}"
