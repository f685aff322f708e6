"""Carton model for packing lists."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING

from sqlalchemy import Enum as SQLEnum
from sqlalchemy import ForeignKey, String
from sqlalchemy.ext.orderinglist import ordering_list
from sqlalchemy.orm import Mapped, mapped_column, relationship

from packinglist.database import Base

if TYPE_CHECKING:
    from packinglist.models.item import Item
    from packinglist.models.packing_list import PackingList


CM_PER_INCH = 2.54


class MeasurementUnit(str, Enum):
    """Length units accepted for carton dimensions."""

    CM = "CM"
    INCH = "INCH"


@dataclass
class CartonMeasurement:
    """Outer dimensions of a carton."""
    length: float
    width: float
    height: float
    unit: MeasurementUnit = MeasurementUnit.CM


class Carton(Base):
    """Model representing a physical shipping carton."""

    __tablename__ = "cartons"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    packing_list_id: Mapped[int] = mapped_column(
        ForeignKey("packing_lists.id", ondelete="CASCADE"), nullable=False
    )
    position: Mapped[int] = mapped_column(nullable=False, default=0)
    carton_no: Mapped[str] = mapped_column(String(64), unique=True, nullable=False)
    length: Mapped[float] = mapped_column(nullable=False)
    width: Mapped[float] = mapped_column(nullable=False)
    height: Mapped[float] = mapped_column(nullable=False)
    unit: Mapped[MeasurementUnit] = mapped_column(
        SQLEnum(
            MeasurementUnit,
            name="measurement_unit",
            values_callable=lambda enum_cls: [item.value for item in enum_cls],
            native_enum=False,
        ),
        nullable=False,
        default=MeasurementUnit.CM,
        server_default=MeasurementUnit.CM.value,
    )
    net_weight: Mapped[float] = mapped_column(nullable=False)
    gross_weight: Mapped[float] = mapped_column(nullable=False)
    style: Mapped[str] = mapped_column(String(255), nullable=False)
    customer: Mapped[str | None] = mapped_column(String(255), nullable=True)
    customer_po: Mapped[str | None] = mapped_column(String(255), nullable=True)

    packing_list: Mapped[PackingList] = relationship(back_populates="cartons")
    items: Mapped[list[Item]] = relationship(
        "Item",
        back_populates="carton",
        cascade="all, delete-orphan",
        order_by="Item.position",
        collection_class=ordering_list("position"),
        lazy="selectin",
    )

    @property
    def measurement(self) -> CartonMeasurement:
        """Dimensions grouped the way they appear in the document."""
        return CartonMeasurement(
            length=self.length, width=self.width, height=self.height, unit=self.unit
        )

    @property
    def volume_cbm(self) -> float:
        """Outer volume in cubic metres."""
        factor = CM_PER_INCH if self.unit == MeasurementUnit.INCH else 1.0
        cubic_cm = (self.length * factor) * (self.width * factor) * (self.height * factor)
        return cubic_cm / 1_000_000

    @property
    def total_quantity(self) -> int:
        """Number of pieces packed in this carton."""
        return sum(size.quantity for item in self.items for size in item.sizes)

    def __repr__(self) -> str:
        return f"<Carton {self.carton_no}: {self.style}>"
