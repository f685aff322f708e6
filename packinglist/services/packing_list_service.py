"""Packing list service for storing and maintaining packing list documents."""

import logging
from collections.abc import Mapping, Sequence
from typing import Any

from pydantic import BaseModel
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from packinglist.exceptions import DuplicateKeyException, RecordNotFoundException
from packinglist.models.carton import Carton
from packinglist.models.item import Item
from packinglist.models.item_size import ItemSize
from packinglist.models.packing_list import PackingList
from packinglist.schemas.packing_list import (
    CartonSchema,
    ItemSchema,
    PackingListSummarySchema,
)
from packinglist.services.base import BaseService
from packinglist.services.carton_index_service import CartonIndexService
from packinglist.services.packing_list_validator import (
    PackingListContext,
    PackingListValidator,
    check_item_sizes,
)
from packinglist.utils.error_handling import translate_integrity_error

logger = logging.getLogger(__name__)

Document = Mapping[str, Any] | BaseModel


class PackingListService(BaseService):
    """Service class for packing list persistence operations.

    Every write validates the complete affected document first and only then
    touches the session, so a rejected write leaves nothing behind.
    Committing is left to the caller.

    A constraint violation that slips past validation, such as a carton
    number taken by a concurrent writer, rolls back the whole session
    transaction. Uncommitted changes the caller made earlier in the same
    unit of work are discarded along with the failed write.
    """

    def __init__(
        self,
        db: Session,
        validator: PackingListValidator,
        carton_index_service: CartonIndexService,
    ):
        super().__init__(db)
        self.validator = validator
        self.carton_index_service = carton_index_service

    def create_packing_list(self, document: Document) -> PackingList:
        """Store a new packing list with all of its cartons.

        Raises:
            DocumentValidationException: If the document is rejected
        """
        data = self.validator.load(document)

        packing_list = PackingList(
            packing_no=data.packing_no,
            packing_date=data.packing_date,
            buyer_name=data.buyer_name,
            available_sizes=list(data.available_sizes),
            cartons=[
                self._build_carton(carton, position)
                for position, carton in enumerate(data.cartons)
            ],
        )
        self.db.add(packing_list)
        self._flush(data.packing_no, self._carton_fields(data.cartons))

        logger.info(
            f"Created packing list {packing_list.packing_no} with {len(packing_list.cartons)} cartons"
        )
        return packing_list

    def get_packing_list(self, packing_no: str) -> PackingList:
        """Get a packing list by number."""
        stmt = select(PackingList).where(PackingList.packing_no == packing_no)
        packing_list = self.db.execute(stmt).scalar_one_or_none()
        if not packing_list:
            raise RecordNotFoundException("Packing list", packing_no)
        return packing_list

    def get_all_packing_lists(self) -> list[PackingList]:
        """List all packing lists ordered by number."""
        stmt = select(PackingList).order_by(PackingList.packing_no)
        return list(self.db.execute(stmt).scalars().all())

    def update_packing_list(self, packing_no: str, document: Document) -> PackingList:
        """Replace a stored packing list with a new version of the document.

        The packing number may change as long as the new one is free. Carton
        numbers already owned by this packing list may be reused.
        """
        packing_list = self.get_packing_list(packing_no)
        data = self.validator.load(document, exclude_packing_list_id=packing_list.id)

        # Old cartons must be gone before their numbers are inserted again
        packing_list.cartons.clear()
        self._flush()

        packing_list.packing_no = data.packing_no
        packing_list.packing_date = data.packing_date
        packing_list.buyer_name = data.buyer_name
        packing_list.available_sizes = list(data.available_sizes)
        packing_list.cartons.extend(
            self._build_carton(carton, position)
            for position, carton in enumerate(data.cartons)
        )
        self._flush(
            data.packing_no,
            self._carton_fields(data.cartons),
            exclude_packing_list_id=packing_list.id,
        )

        logger.info(f"Replaced packing list {packing_no} as {packing_list.packing_no}")
        return packing_list

    def delete_packing_list(self, packing_no: str) -> None:
        """Delete a packing list together with its cartons."""
        packing_list = self.get_packing_list(packing_no)
        self.db.delete(packing_list)
        self._flush()
        logger.info(f"Deleted packing list {packing_no}")

    def add_carton(self, packing_no: str, carton: Document) -> Carton:
        """Append a carton to an existing packing list."""
        packing_list = self.get_packing_list(packing_no)
        data = self.validator.validate_carton(carton, PackingListContext.of(packing_list))

        new_carton = self._build_carton(data, len(packing_list.cartons))
        packing_list.cartons.append(new_carton)
        self._flush(carton_fields={"carton_no": data.carton_no})

        logger.info(f"Added carton {new_carton.carton_no} to packing list {packing_no}")
        return new_carton

    def update_carton(self, carton_no: str, carton: Document) -> Carton:
        """Replace the contents of a stored carton.

        The carton keeps its place in the packing list; its number may change
        as long as the new one is free.
        """
        existing = self.carton_index_service.get_carton(carton_no)
        context = PackingListContext.of(existing.packing_list)
        data = self.validator.validate_carton(carton, context, exclude_carton_id=existing.id)

        existing.carton_no = data.carton_no
        existing.length = data.measurement.length
        existing.width = data.measurement.width
        existing.height = data.measurement.height
        existing.unit = data.measurement.unit
        existing.net_weight = data.net_weight
        existing.gross_weight = data.gross_weight
        existing.style = data.style
        existing.customer = data.customer
        existing.customer_po = data.customer_po
        existing.items = [
            self._build_item(item, position) for position, item in enumerate(data.items)
        ]
        self._flush(carton_fields={"carton_no": data.carton_no}, exclude_carton_id=existing.id)

        logger.info(f"Updated carton {carton_no} in packing list {context.packing_no}")
        return existing

    def remove_carton(self, carton_no: str) -> None:
        """Remove a carton from its packing list."""
        carton = self.carton_index_service.get_carton(carton_no)
        packing_list = carton.packing_list

        # ordering_list renumbers the remaining cartons on remove
        packing_list.cartons.remove(carton)
        self._flush()

        logger.info(f"Removed carton {carton_no} from packing list {packing_list.packing_no}")

    def update_available_sizes(self, packing_no: str, sizes: Sequence[str]) -> PackingList:
        """Replace the size allow-list of a packing list.

        Raises:
            SizeNotAvailableException: If a stored item uses a size that the
                new list drops
        """
        packing_list = self.get_packing_list(packing_no)
        labels = self.validator.load_available_sizes(sizes)

        context = PackingListContext(packing_no=packing_no, available_sizes=tuple(labels))
        for index, carton in enumerate(packing_list.cartons):
            check_item_sizes(carton.items, context, prefix=f"cartons.{index}")

        packing_list.available_sizes = labels
        self._flush()

        logger.info(f"Packing list {packing_no} now offers sizes {', '.join(labels)}")
        return packing_list

    def summarize_packing_list(self, packing_no: str) -> PackingListSummarySchema:
        """Calculate shipment totals for a packing list."""
        packing_list = self.get_packing_list(packing_no)

        quantity_by_size: dict[str, int] = dict.fromkeys(packing_list.available_sizes, 0)
        for carton in packing_list.cartons:
            for item in carton.items:
                for size in item.sizes:
                    quantity_by_size[size.size_name] = (
                        quantity_by_size.get(size.size_name, 0) + size.quantity
                    )

        cartons = packing_list.cartons
        return PackingListSummarySchema(
            packing_no=packing_list.packing_no,
            carton_count=len(cartons),
            total_quantity=sum(quantity_by_size.values()),
            quantity_by_size=quantity_by_size,
            total_net_weight=round(sum(c.net_weight for c in cartons), 3),
            total_gross_weight=round(sum(c.gross_weight for c in cartons), 3),
            total_volume_cbm=round(sum(c.volume_cbm for c in cartons), 4),
        )

    def _build_carton(self, data: CartonSchema, position: int) -> Carton:
        return Carton(
            position=position,
            carton_no=data.carton_no,
            length=data.measurement.length,
            width=data.measurement.width,
            height=data.measurement.height,
            unit=data.measurement.unit,
            net_weight=data.net_weight,
            gross_weight=data.gross_weight,
            style=data.style,
            customer=data.customer,
            customer_po=data.customer_po,
            items=[self._build_item(item, index) for index, item in enumerate(data.items)],
        )

    def _build_item(self, data: ItemSchema, position: int) -> Item:
        return Item(
            position=position,
            color_name=data.color_name,
            sizes=[
                ItemSize(position=index, size_name=size.size_name, quantity=size.quantity)
                for index, size in enumerate(data.sizes)
            ],
        )

    def _flush(
        self,
        packing_no: str | None = None,
        carton_fields: Mapping[str, str] | None = None,
        exclude_packing_list_id: int | None = None,
        exclude_carton_id: int | None = None,
    ) -> None:
        """Flush pending changes, reporting constraint violations as domain errors.

        Args:
            packing_no: Packing number being written, if any
            carton_fields: Document field path to carton number for the
                cartons being written
            exclude_packing_list_id: Packing list whose cartons the write replaces
            exclude_carton_id: Carton the write replaces
        """
        try:
            self.db.flush()
        except IntegrityError as e:
            self.db.rollback()
            error = translate_integrity_error(e)
            if isinstance(error, DuplicateKeyException):
                error = self._locate_duplicate(
                    error,
                    packing_no,
                    carton_fields or {},
                    exclude_packing_list_id=exclude_packing_list_id,
                    exclude_carton_id=exclude_carton_id,
                )
            raise error from e

    def _locate_duplicate(
        self,
        error: DuplicateKeyException,
        packing_no: str | None,
        carton_fields: Mapping[str, str],
        exclude_packing_list_id: int | None = None,
        exclude_carton_id: int | None = None,
    ) -> DuplicateKeyException:
        # The driver error may not carry the value; look up the stored row instead
        if error.resource_type == "Carton":
            conflicts = set(
                self.carton_index_service.find_conflicts(
                    carton_fields.values(),
                    exclude_packing_list_id=exclude_packing_list_id,
                    exclude_carton_id=exclude_carton_id,
                )
            )
            for field, carton_no in carton_fields.items():
                if carton_no in conflicts:
                    return DuplicateKeyException("Carton", field, carton_no)
        elif packing_no is not None:
            return DuplicateKeyException("Packing list", "packing_no", packing_no)
        return error

    @staticmethod
    def _carton_fields(cartons: Sequence[CartonSchema]) -> dict[str, str]:
        return {
            f"cartons.{index}.carton_no": carton.carton_no
            for index, carton in enumerate(cartons)
        }
