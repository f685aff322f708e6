"""Item model: one color variant inside a carton."""

from __future__ import annotations

from typing import TYPE_CHECKING

from sqlalchemy import ForeignKey, String
from sqlalchemy.ext.orderinglist import ordering_list
from sqlalchemy.orm import Mapped, mapped_column, relationship

from packinglist.database import Base

if TYPE_CHECKING:
    from packinglist.models.carton import Carton
    from packinglist.models.item_size import ItemSize


class Item(Base):
    """Model representing a color variant packed in a carton."""

    __tablename__ = "items"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    carton_id: Mapped[int] = mapped_column(
        ForeignKey("cartons.id", ondelete="CASCADE"), nullable=False
    )
    position: Mapped[int] = mapped_column(nullable=False, default=0)
    color_name: Mapped[str] = mapped_column(String(255), nullable=False)

    carton: Mapped[Carton] = relationship(back_populates="items")
    sizes: Mapped[list[ItemSize]] = relationship(
        "ItemSize",
        back_populates="item",
        cascade="all, delete-orphan",
        order_by="ItemSize.position",
        collection_class=ordering_list("position"),
        lazy="selectin",
    )

    def __repr__(self) -> str:
        return f"<Item {self.color_name}>"
