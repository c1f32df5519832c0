import uuid

from sqlalchemy import Column, DateTime, ForeignKey, Index, Integer, String, Uuid
from sqlalchemy.orm import relationship

from flowops.db.base import Base, utcnow


class Sale(Base):
    """Units of one menu item sold. Creating one triggers stock deduction."""
    __tablename__ = "sales"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    menu_item_id = Column(Uuid, ForeignKey("menu_items.id", ondelete="SET NULL"))
    quantity_sold = Column(Integer, nullable=False)
    establishment = Column(String(255), nullable=False)
    date = Column(DateTime(timezone=True), nullable=False, default=utcnow)

    menu_item = relationship("MenuItem", back_populates="sales")

    __table_args__ = (
        Index("idx_sales_establishment_date", "establishment", "date"),
    )

    @property
    def menu_item_name(self):
        return self.menu_item.name if self.menu_item is not None else None
