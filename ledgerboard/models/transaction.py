from datetime import datetime, timezone

from sqlalchemy import Column, DateTime, ForeignKey, Index, Integer, Numeric, String

from ledgerboard.database.base import Base


class Transaction(Base):
    __tablename__ = "transactions"

    id = Column(Integer, primary_key=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False)

    type = Column(String, nullable=False)
    amount = Column(Numeric(15, 2, asdecimal=True), nullable=False)
    description = Column(String, nullable=False)
    category = Column(String)

    date = Column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )

    inventory_item_id = Column(
        Integer,
        ForeignKey("inventory_items.id", ondelete="SET NULL"),
    )
    quantity = Column(Integer)

    __table_args__ = (
        Index("idx_transactions_user_date", "user_id", "date"),
    )


__all__ = ["Transaction"]
