"""Services package for packing lists."""

from packinglist.services.carton_index_service import CartonIndexService
from packinglist.services.container import ServiceContainer
from packinglist.services.packing_list_service import PackingListService
from packinglist.services.packing_list_validator import (
    PackingListContext,
    PackingListValidator,
)

__all__ = [
    "CartonIndexService",
    "PackingListContext",
    "PackingListService",
    "PackingListValidator",
    "ServiceContainer",
]
