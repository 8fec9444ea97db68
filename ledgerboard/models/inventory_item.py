from sqlalchemy import Column, DateTime, ForeignKey, Index, Integer, Numeric, String

from ledgerboard.core.constants import DEFAULT_UNIT
from ledgerboard.database.base import Base


class InventoryItem(Base):
    __tablename__ = "inventory_items"

    id = Column(Integer, primary_key=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False)

    name = Column(String, nullable=False)
    category = Column(String)

    current_stock = Column(Integer, nullable=False, default=0)
    min_stock_level = Column(Integer, nullable=False, default=0)
    unit = Column(String, nullable=False, default=DEFAULT_UNIT)

    price_per_unit = Column(Numeric(15, 2, asdecimal=True))
    supplier = Column(String)
    last_restocked = Column(DateTime(timezone=True))

    __table_args__ = (
        Index("idx_inventory_user_name", "user_id", "name"),
    )


__all__ = ["InventoryItem"]
