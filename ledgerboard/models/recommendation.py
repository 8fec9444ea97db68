from datetime import datetime, timezone

from sqlalchemy import JSON, Boolean, Column, DateTime, ForeignKey, Index, Integer, String

from ledgerboard.database.base import Base


class Recommendation(Base):
    __tablename__ = "ai_recommendations"

    id = Column(Integer, primary_key=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False)

    type = Column(String, nullable=False)
    title = Column(String, nullable=False)
    description = Column(String, nullable=False)
    priority = Column(String, nullable=False, default="medium")
    actionable = Column(Boolean, nullable=False, default=True)

    # "metadata" is reserved on declarative classes
    details = Column("metadata", JSON)

    created_at = Column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
    is_read = Column(Boolean, nullable=False, default=False)

    __table_args__ = (
        Index("idx_recommendations_user_created", "user_id", "created_at"),
    )


__all__ = ["Recommendation"]
