"""
Database model for items.
"""

from sqlalchemy import CheckConstraint, Column, DateTime, ForeignKey, Integer, String, UniqueConstraint, func
from sqlalchemy.orm import relationship

from household_inventory.db.session import Base


class Item(Base):
    """
    Database model for items.

    ``category_id`` is a weak reference: deleting the category sets it to NULL.
    """

    __tablename__ = "items"
    __table_args__ = (
        UniqueConstraint("account_id", "name", name="uq_items_account_id_name"),
        CheckConstraint("quantity >= 0", name="ck_items_quantity_non_negative"),
    )

    id = Column(Integer, primary_key=True, index=True)
    account_id = Column(Integer, ForeignKey("accounts.id", ondelete="CASCADE"), nullable=False, index=True)
    name = Column(String(255), nullable=False)
    quantity = Column(Integer, nullable=False, default=0, server_default="0")
    restock_threshold = Column(Integer, nullable=False, default=1, server_default="1")

    # Foreign keys
    category_id = Column(Integer, ForeignKey("categories.id", ondelete="SET NULL"), nullable=True, index=True)

    # Timestamps
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())
    updated_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now(), onupdate=func.now())

    # Relationships
    account = relationship("Account", back_populates="items")
    category = relationship("Category", lazy="joined")
