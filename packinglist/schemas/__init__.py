"""Pydantic schemas for packing list documents."""

# Import all schemas here for easy access
from packinglist.schemas.common import ErrorResponseSchema
from packinglist.schemas.packing_list import (
    AvailableSizesUpdateSchema,
    CartonResponseSchema,
    CartonSchema,
    ItemResponseSchema,
    ItemSchema,
    MeasurementResponseSchema,
    MeasurementSchema,
    PackingListCreateSchema,
    PackingListResponseSchema,
    PackingListSummarySchema,
    SizeResponseSchema,
    SizeSchema,
)

__all__: list[str] = [
    "AvailableSizesUpdateSchema",
    "CartonResponseSchema",
    "CartonSchema",
    "ErrorResponseSchema",
    "ItemResponseSchema",
    "ItemSchema",
    "MeasurementResponseSchema",
    "MeasurementSchema",
    "PackingListCreateSchema",
    "PackingListResponseSchema",
    "PackingListSummarySchema",
    "SizeResponseSchema",
    "SizeSchema",
]
