"""Shared field helpers for request schemas"""
from typing import Optional


def strip_required(value: Optional[str], label: str) -> str:
    """Trim ``value`` and reject it when nothing is left."""
    if value is None:
        raise ValueError(f"{label} is required")
    if not isinstance(value, str):
        raise ValueError(f"{label} must be a string")
    value = value.strip()
    if not value:
        raise ValueError(f"{label} cannot be empty")
    return value
