"""Serialization utilities."""

from dataclasses import asdict
from datetime import date
from enum import Enum


def _serialize_value(value):
    if isinstance(value, date):
        return value.isoformat()
    if isinstance(value, Enum):
        return value.value
    return value


def serialize_dataclass(obj) -> dict:
    """Serialize a dataclass to dict, converting dates and enums to strings."""
    data = asdict(obj)
    for key, value in data.items():
        if isinstance(value, dict):
            data[key] = {k: _serialize_value(v) for k, v in value.items()}
        else:
            data[key] = _serialize_value(value)
    return data
