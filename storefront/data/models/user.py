from datetime import datetime, timezone

from sqlalchemy import CheckConstraint, Column, DateTime, Integer, Numeric, String

from storefront.data.database import Base


def _utcnow():
    return datetime.now(timezone.utc)


class UserModel(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True)
    name = Column(String(100), nullable=False)
    # zawsze lowercase, unikalnosc case-insensitive robi serwis
    email = Column(String(255), nullable=False, unique=True, index=True)

    wallet_money = Column(Numeric(12, 2), nullable=False)
    address = Column(String(255), nullable=False)

    created_at = Column(DateTime(timezone=True), nullable=False, default=_utcnow)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=_utcnow, onupdate=_utcnow)

    __table_args__ = (
        CheckConstraint("wallet_money >= 0", name="ck_users_wallet_non_negative"),
    )
