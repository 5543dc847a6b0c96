"""SQLAlchemy models for the shopper store."""
from __future__ import annotations

from sqlalchemy import Column, String

from .session import Base


class ShopperRecord(Base):
    __tablename__ = "shoppers"

    username = Column(String(255), primary_key=True)
    full_name = Column(String(255), nullable=False, default="")
    email = Column(String(255), nullable=False, default="")
    street = Column(String(255), nullable=False, default="")
    city = Column(String(255), nullable=False, default="")
    state = Column(String(255), nullable=False, default="")
    zip_code = Column(String(32), nullable=False, default="")
    # YYYY-MM-DD, stamped once at creation
    date_joined = Column(String(10), nullable=False)

    def __repr__(self) -> str:
        return f"ShopperRecord(username={self.username!r})"
