"""SQLAlchemy models for packing lists."""

# Import all models here so they are registered with the metadata
from packinglist.models.carton import Carton, CartonMeasurement, MeasurementUnit
from packinglist.models.item import Item
from packinglist.models.item_size import ItemSize
from packinglist.models.packing_list import PackingList

__all__: list[str] = [
    "Carton",
    "CartonMeasurement",
    "Item",
    "ItemSize",
    "MeasurementUnit",
    "PackingList",
]
