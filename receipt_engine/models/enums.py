"""
Python enums shared across the receipt pipeline.
Values are the wire strings used in detail payloads and API responses.
"""

from enum import Enum


class Category(str, Enum):
    TOKEN = "token"
    UTILITY = "utility"
    WITHDRAWAL = "withdrawal"


class StatusTone(str, Enum):
    SUCCESS = "success"
    FAILED = "failed"
    PENDING = "pending"


class ShareState(str, Enum):
    IDLE = "IDLE"
    GENERATING = "GENERATING"
    READY = "READY"
    SHARED = "SHARED"
    FAILED = "FAILED"


class ShareChannel(str, Enum):
    """Which facility delivered the receipt."""
    FILE = "FILE"
    MESSAGE = "MESSAGE"
