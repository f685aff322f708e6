"""Packing list document schemas for input validation and serialization."""

from __future__ import annotations

from datetime import date, datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from packinglist.models.carton import MeasurementUnit


def default_unit() -> MeasurementUnit:
    """Measurement unit applied when a carton omits one."""
    return MeasurementUnit.CM


def normalize_size_labels(labels: list[str]) -> list[str]:
    """Strip size labels and drop repeats, keeping first-seen order."""
    stripped = [label.strip() for label in labels]
    if any(not label for label in stripped):
        raise ValueError("size labels cannot be empty")
    return list(dict.fromkeys(stripped))


class SizeSchema(BaseModel):
    """Schema for the quantity packed in a single size."""

    model_config = ConfigDict(str_strip_whitespace=True)

    size_name: str = Field(
        ...,
        min_length=1,
        max_length=64,
        description="Size label; must be one of the packing list's available sizes",
        json_schema_extra={"example": "M"}
    )
    quantity: int = Field(
        ...,
        ge=0,
        strict=True,
        description="Number of pieces of this size",
        json_schema_extra={"example": 12}
    )


class ItemSchema(BaseModel):
    """Schema for a color variant inside a carton."""

    model_config = ConfigDict(str_strip_whitespace=True)

    color_name: str = Field(
        ...,
        min_length=1,
        max_length=255,
        description="Color of the packed garments",
        json_schema_extra={"example": "Red"}
    )
    sizes: list[SizeSchema] = Field(
        default_factory=list,
        description="Size breakdown in document order"
    )


class MeasurementSchema(BaseModel):
    """Schema for carton outer dimensions."""

    length: float = Field(
        ...,
        gt=0,
        allow_inf_nan=False,
        description="Outer length of the carton",
        json_schema_extra={"example": 60.0}
    )
    width: float = Field(
        ...,
        gt=0,
        allow_inf_nan=False,
        description="Outer width of the carton",
        json_schema_extra={"example": 40.0}
    )
    height: float = Field(
        ...,
        gt=0,
        allow_inf_nan=False,
        description="Outer height of the carton",
        json_schema_extra={"example": 35.0}
    )
    unit: MeasurementUnit = Field(
        default_factory=default_unit,
        description="Unit of the three dimensions",
        json_schema_extra={"example": MeasurementUnit.CM.value}
    )

    @field_validator("unit", mode="before")
    @classmethod
    def normalize_unit(cls, value: Any) -> Any:
        if isinstance(value, str):
            return value.strip().upper()
        return value


class CartonSchema(BaseModel):
    """Schema for a carton and its contents."""

    model_config = ConfigDict(str_strip_whitespace=True)

    carton_no: str = Field(
        ...,
        min_length=1,
        max_length=64,
        description="Carton number, unique across all packing lists",
        json_schema_extra={"example": "1"}
    )
    measurement: MeasurementSchema = Field(
        ...,
        description="Outer dimensions of the carton"
    )
    net_weight: float = Field(
        ...,
        gt=0,
        allow_inf_nan=False,
        description="Weight of the goods without packaging",
        json_schema_extra={"example": 11.5}
    )
    gross_weight: float = Field(
        ...,
        gt=0,
        allow_inf_nan=False,
        description="Weight of the goods including packaging",
        json_schema_extra={"example": 12.8}
    )
    style: str = Field(
        ...,
        min_length=1,
        max_length=255,
        description="Style of the items in the carton",
        json_schema_extra={"example": "ST-2024-118"}
    )
    customer: str | None = Field(
        None,
        max_length=255,
        description="Customer the carton is packed for",
        json_schema_extra={"example": "Acme Retail"}
    )
    customer_po: str | None = Field(
        None,
        max_length=255,
        description="Customer purchase order reference",
        json_schema_extra={"example": "PO-55821"}
    )
    items: list[ItemSchema] = Field(
        default_factory=list,
        description="Items in document order"
    )

    @field_validator("carton_no", mode="before")
    @classmethod
    def coerce_numeric_carton_no(cls, value: Any) -> Any:
        # Older documents number cartons with integers
        if isinstance(value, int) and not isinstance(value, bool):
            return str(value)
        return value


class PackingListCreateSchema(BaseModel):
    """Schema for a complete packing list document."""

    model_config = ConfigDict(str_strip_whitespace=True)

    packing_no: str = Field(
        ...,
        min_length=1,
        max_length=64,
        description="Unique packing list number",
        json_schema_extra={"example": "PL-001"}
    )
    packing_date: date = Field(
        ...,
        description="Date the packing list was issued",
        json_schema_extra={"example": "2024-05-01"}
    )
    buyer_name: str | None = Field(
        None,
        max_length=255,
        description="Buyer the shipment is destined for",
        json_schema_extra={"example": "Northwind Apparel"}
    )
    available_sizes: list[str] = Field(
        ...,
        min_length=1,
        description="Size labels items in this packing list may use",
        json_schema_extra={"example": ["S", "M", "L"]}
    )
    cartons: list[CartonSchema] = Field(
        default_factory=list,
        description="Cartons in document order"
    )

    @field_validator("available_sizes")
    @classmethod
    def dedupe_sizes(cls, value: list[str]) -> list[str]:
        return normalize_size_labels(value)


class AvailableSizesUpdateSchema(BaseModel):
    """Schema for replacing a packing list's available sizes."""

    available_sizes: list[str] = Field(
        ...,
        min_length=1,
        description="New set of size labels",
        json_schema_extra={"example": ["S", "M", "L", "XL"]}
    )

    @field_validator("available_sizes")
    @classmethod
    def dedupe_sizes(cls, value: list[str]) -> list[str]:
        return normalize_size_labels(value)


class SizeResponseSchema(BaseModel):
    """Schema for a stored size breakdown."""

    model_config = ConfigDict(from_attributes=True)

    size_name: str = Field(description="Size label", json_schema_extra={"example": "M"})
    quantity: int = Field(description="Number of pieces", json_schema_extra={"example": 12})


class ItemResponseSchema(BaseModel):
    """Schema for a stored item."""

    model_config = ConfigDict(from_attributes=True)

    color_name: str = Field(description="Item color", json_schema_extra={"example": "Red"})
    sizes: list[SizeResponseSchema] = Field(description="Size breakdown")


class MeasurementResponseSchema(BaseModel):
    """Schema for stored carton dimensions."""

    model_config = ConfigDict(from_attributes=True)

    length: float
    width: float
    height: float
    unit: MeasurementUnit


class CartonResponseSchema(BaseModel):
    """Schema for a stored carton with derived totals."""

    model_config = ConfigDict(from_attributes=True)

    carton_no: str = Field(description="Carton number", json_schema_extra={"example": "1"})
    measurement: MeasurementResponseSchema = Field(description="Outer dimensions")
    net_weight: float = Field(description="Net weight", json_schema_extra={"example": 11.5})
    gross_weight: float = Field(description="Gross weight", json_schema_extra={"example": 12.8})
    style: str = Field(description="Style of the packed items", json_schema_extra={"example": "ST-2024-118"})
    customer: str | None = Field(description="Customer name", json_schema_extra={"example": "Acme Retail"})
    customer_po: str | None = Field(description="Customer purchase order", json_schema_extra={"example": "PO-55821"})
    items: list[ItemResponseSchema] = Field(description="Items in document order")
    total_quantity: int = Field(description="Pieces packed in the carton", json_schema_extra={"example": 24})
    volume_cbm: float = Field(description="Outer volume in cubic metres", json_schema_extra={"example": 0.084})


class PackingListResponseSchema(BaseModel):
    """Schema for a full stored packing list document."""

    model_config = ConfigDict(from_attributes=True)

    packing_no: str = Field(
        description="Unique packing list number",
        json_schema_extra={"example": "PL-001"}
    )
    packing_date: date = Field(
        description="Date the packing list was issued",
        json_schema_extra={"example": "2024-05-01"}
    )
    buyer_name: str | None = Field(
        description="Buyer the shipment is destined for",
        json_schema_extra={"example": "Northwind Apparel"}
    )
    available_sizes: list[str] = Field(
        description="Size labels items may use",
        json_schema_extra={"example": ["S", "M", "L"]}
    )
    cartons: list[CartonResponseSchema] = Field(
        description="Cartons in document order"
    )
    created_at: datetime = Field(
        description="Timestamp when the packing list was stored",
        json_schema_extra={"example": "2024-05-01T10:30:00Z"}
    )
    updated_at: datetime = Field(
        description="Timestamp when the packing list was last modified",
        json_schema_extra={"example": "2024-05-02T14:45:00Z"}
    )


class PackingListSummarySchema(BaseModel):
    """Schema for shipment totals of a packing list."""

    packing_no: str = Field(
        description="Packing list number",
        json_schema_extra={"example": "PL-001"}
    )
    carton_count: int = Field(
        description="Number of cartons",
        json_schema_extra={"example": 2}
    )
    total_quantity: int = Field(
        description="Pieces across all cartons",
        json_schema_extra={"example": 48}
    )
    quantity_by_size: dict[str, int] = Field(
        description="Pieces per size label, in available_sizes order",
        json_schema_extra={"example": {"S": 20, "M": 28}}
    )
    total_net_weight: float = Field(
        description="Sum of carton net weights",
        json_schema_extra={"example": 23.0}
    )
    total_gross_weight: float = Field(
        description="Sum of carton gross weights",
        json_schema_extra={"example": 25.6}
    )
    total_volume_cbm: float = Field(
        description="Sum of carton volumes in cubic metres",
        json_schema_extra={"example": 0.168}
    )
