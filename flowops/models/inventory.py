"""
Inventory tracking models.
"""
import uuid

from sqlalchemy import Column, String, Text, Numeric, DateTime, ForeignKey, Index, Uuid
from sqlalchemy.orm import relationship

from flowops.db.base import Base, utcnow
from flowops.models.enums import InventoryStatus


class InventoryItem(Base):
    """
    Stock on hand for one item of one establishment.

    ``quantity`` is the deduction ledger and may go negative; ``status`` is a
    manual signal set by staff and is never derived from quantity.
    """
    __tablename__ = "inventory"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    name = Column(String(255), nullable=False)
    icon = Column(String(1024), nullable=False, default="📦")  # emoji or image URL
    category = Column(String(255))  # canonical "Food/Dairy" form, see services.categories
    quantity = Column(Numeric(14, 4), nullable=False, default=0)
    unit = Column(String(50))
    cost_per_unit = Column(Numeric(10, 4))
    status = Column(String(10), nullable=False, default=InventoryStatus.OK.value)
    low_comment = Column(Text)
    last_updated = Column(DateTime(timezone=True), nullable=False, default=utcnow)
    updated_by = Column(String(255), nullable=False)
    establishment = Column(String(255), nullable=False)

    logs = relationship("InventoryLog", back_populates="inventory_item", passive_deletes=True)

    __table_args__ = (
        Index("idx_inventory_establishment_name", "establishment", "name"),
        Index("idx_inventory_establishment_category", "establishment", "category"),
    )


class InventoryLog(Base):
    """Append-only trail of quantity movements."""
    __tablename__ = "inventory_logs"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    inventory_item_id = Column(Uuid, ForeignKey("inventory.id", ondelete="SET NULL"))
    item_name = Column(String(255), nullable=False)
    change = Column(Numeric(14, 4), nullable=False)  # Positive for in, negative for out
    reason = Column(String(20), nullable=False)  # sale, adjustment
    sale_id = Column(Uuid, ForeignKey("sales.id", ondelete="SET NULL"))
    author = Column(String(255), nullable=False)
    establishment = Column(String(255), nullable=False)
    date = Column(DateTime(timezone=True), nullable=False, default=utcnow)

    inventory_item = relationship("InventoryItem", back_populates="logs")

    __table_args__ = (
        Index("idx_inventory_logs_establishment_date", "establishment", "date"),
    )
