from datetime import datetime, timezone

from sqlalchemy import Column, DateTime, ForeignKey, Integer, Numeric, String

from storefront.data.database import Base


class SettlementModel(Base):
    """Receipt of a checkout, written in the same transaction as the wallet debit and cart clear."""

    __tablename__ = "settlements"

    id = Column(Integer, primary_key=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    email = Column(String(255), nullable=False)

    total = Column(Numeric(12, 2), nullable=False)
    item_count = Column(Integer, nullable=False)
    created_at = Column(DateTime(timezone=True), nullable=False, default=lambda: datetime.now(timezone.utc))
