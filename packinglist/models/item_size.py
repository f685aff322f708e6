"""Size breakdown model for items."""

from __future__ import annotations

from typing import TYPE_CHECKING

from sqlalchemy import CheckConstraint, ForeignKey, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from packinglist.database import Base

if TYPE_CHECKING:
    from packinglist.models.item import Item


class ItemSize(Base):
    """Model representing the quantity packed for one size label."""

    __tablename__ = "item_sizes"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    item_id: Mapped[int] = mapped_column(
        ForeignKey("items.id", ondelete="CASCADE"), nullable=False
    )
    position: Mapped[int] = mapped_column(nullable=False, default=0)
    size_name: Mapped[str] = mapped_column(String(64), nullable=False)
    quantity: Mapped[int] = mapped_column(nullable=False)

    item: Mapped[Item] = relationship(back_populates="sizes")

    __table_args__ = (
        CheckConstraint("quantity >= 0", name="ck_item_sizes_quantity_non_negative"),
    )

    def __repr__(self) -> str:
        return f"<ItemSize {self.size_name}={self.quantity}>"
