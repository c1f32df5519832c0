"""
Enumerated vocabularies stored as plain strings in the database.
"""
from enum import Enum


class Role(str, Enum):
    EMPLOYEE = "employee"
    LEAD = "lead"
    SUPERVISOR = "supervisor"
    MANAGER = "manager"
    ADMIN = "admin"


class UserStatus(str, Enum):
    PENDING = "pending"
    ACTIVE = "active"
    REMOVED = "removed"


class InventoryStatus(str, Enum):
    OK = "OK"
    LOW = "LOW"
    OUT = "OUT"


class EquipmentStatus(str, Enum):
    WORKING = "Working"
    ATTENTION = "Attention"
    BROKEN = "Broken"


class ListType(str, Enum):
    OPENING = "opening"
    SHIFT = "shift"
    CLOSING = "closing"


class TimelineEventType(str, Enum):
    INFO = "info"
    SUCCESS = "success"
    WARNING = "warning"
    ALERT = "alert"


class ChatMessageType(str, Enum):
    TEXT = "text"
    ACTION = "action"


class NotificationType(str, Enum):
    USER_REGISTRATION = "user_registration"
    SYSTEM = "system"


class InventoryLogReason(str, Enum):
    SALE = "sale"
    ADJUSTMENT = "adjustment"
