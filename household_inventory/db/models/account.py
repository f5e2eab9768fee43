"""
Database model for accounts.
"""

from sqlalchemy import Column, DateTime, Integer, String, func
from sqlalchemy.orm import relationship

from household_inventory.db.session import Base


class Account(Base):
    """
    An inventory owner. Every category and item belongs to exactly one account.
    """

    __tablename__ = "accounts"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), nullable=False)
    email = Column(String(255), nullable=False, unique=True, index=True)
    hashed_password = Column(String(255), nullable=False)

    # Timestamps
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())
    updated_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now(), onupdate=func.now())

    # Relationships
    categories = relationship("Category", back_populates="account", passive_deletes=True)
    items = relationship("Item", back_populates="account", passive_deletes=True)
