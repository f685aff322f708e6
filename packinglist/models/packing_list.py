"""Packing list model, the root of the shipping document tree."""

from __future__ import annotations

from datetime import date, datetime
from typing import TYPE_CHECKING

from sqlalchemy import JSON, String, func
from sqlalchemy.ext.orderinglist import ordering_list
from sqlalchemy.orm import Mapped, mapped_column, relationship

from packinglist.database import Base

if TYPE_CHECKING:
    from packinglist.models.carton import Carton


class PackingList(Base):
    """Persistent representation of a shipment's packing list."""

    __tablename__ = "packing_lists"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    packing_no: Mapped[str] = mapped_column(String(64), unique=True, nullable=False)
    packing_date: Mapped[date] = mapped_column(nullable=False)
    buyer_name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    available_sizes: Mapped[list[str]] = mapped_column(JSON, nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        nullable=False, server_default=func.now()
    )
    updated_at: Mapped[datetime] = mapped_column(
        nullable=False, server_default=func.now(), onupdate=func.now()
    )

    cartons: Mapped[list[Carton]] = relationship(
        "Carton",
        back_populates="packing_list",
        cascade="all, delete-orphan",
        order_by="Carton.position",
        collection_class=ordering_list("position"),
        lazy="selectin",
    )

    def referenced_sizes(self) -> set[str]:
        """Return every size label used by the items of this packing list."""
        return {
            size.size_name
            for carton in self.cartons
            for item in carton.items
            for size in item.sizes
        }

    def __repr__(self) -> str:
        return f"<PackingList {self.packing_no}: {len(self.cartons)} cartons>"
