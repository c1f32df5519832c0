"""
Menu items and their recipes.
"""
import uuid

from sqlalchemy import Column, DateTime, ForeignKey, Numeric, String, Text, Uuid
from sqlalchemy.orm import relationship

from flowops.db.base import Base, utcnow


class MenuItem(Base):
    """A dish or product sold by an establishment."""
    __tablename__ = "menu_items"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    name = Column(String(255), nullable=False)
    category = Column(String(100), nullable=False)
    establishment = Column(String(255), nullable=False, index=True)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)

    ingredients = relationship(
        "Ingredient",
        back_populates="menu_item",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="Ingredient.created_at",
    )
    sales = relationship("Sale", back_populates="menu_item", passive_deletes=True)


class Ingredient(Base):
    """
    One recipe line of a menu item.

    When ``inventory_item_id`` is set, every sale of the menu item deducts
    ``quantity`` per unit sold from that inventory row.
    """
    __tablename__ = "ingredients"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    menu_item_id = Column(Uuid, ForeignKey("menu_items.id", ondelete="CASCADE"), nullable=False, index=True)
    name = Column(String(255), nullable=False)
    quantity = Column(Numeric(10, 4), nullable=False)
    unit = Column(String(50), nullable=False)  # grams, oz, cups, bowls, tablespoons, pieces
    notes = Column(Text)
    inventory_item_id = Column(Uuid, ForeignKey("inventory.id", ondelete="SET NULL"))
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)

    menu_item = relationship("MenuItem", back_populates="ingredients")
    inventory_item = relationship("InventoryItem")
