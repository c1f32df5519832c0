"""
SQLAlchemy models for FlowOps.
"""
# Accounts
from flowops.models.user import User
from flowops.models.notification import Notification
from flowops.models.token_blacklist import TokenBlacklist

# Operations
from flowops.models.inventory import InventoryItem, InventoryLog
from flowops.models.equipment import Equipment
from flowops.models.checklist import ChecklistItem
from flowops.models.task import WeeklyTask, TaskCompletion

# Menu & sales
from flowops.models.menu import MenuItem, Ingredient
from flowops.models.sale import Sale

# Communication & audit
from flowops.models.chat import ChatMessage
from flowops.models.timeline import TimelineEvent


__all__ = [
    # Accounts
    "User",
    "Notification",
    "TokenBlacklist",
    # Operations
    "InventoryItem",
    "InventoryLog",
    "Equipment",
    "ChecklistItem",
    "WeeklyTask",
    "TaskCompletion",
    # Menu & sales
    "MenuItem",
    "Ingredient",
    "Sale",
    # Communication & audit
    "ChatMessage",
    "TimelineEvent",
]
