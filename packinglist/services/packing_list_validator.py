"""Validation of packing list documents before they are stored."""

import logging
from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass
from typing import Any, TypeVar

from pydantic import BaseModel, ValidationError
from sqlalchemy import select
from sqlalchemy.orm import Session

from packinglist.exceptions import (
    DocumentValidationException,
    DuplicateKeyException,
    InvalidWeightException,
    SizeNotAvailableException,
)
from packinglist.models.carton import MeasurementUnit
from packinglist.models.packing_list import PackingList
from packinglist.schemas.packing_list import (
    AvailableSizesUpdateSchema,
    CartonSchema,
    PackingListCreateSchema,
    default_unit,
)
from packinglist.services.base import BaseService
from packinglist.services.carton_index_service import CartonIndexService
from packinglist.utils.error_handling import field_path, translate_validation_error

logger = logging.getLogger(__name__)

SchemaT = TypeVar("SchemaT", bound=BaseModel)


@dataclass(frozen=True)
class PackingListContext:
    """Values of the root document that nested cartons are checked against."""
    packing_no: str
    available_sizes: tuple[str, ...]

    @classmethod
    def of(cls, packing_list: PackingList | PackingListCreateSchema) -> "PackingListContext":
        return cls(
            packing_no=packing_list.packing_no,
            available_sizes=tuple(packing_list.available_sizes),
        )


def check_item_sizes(
    items: Iterable[Any], context: PackingListContext, prefix: str = ""
) -> None:
    """Ensure every size used by ``items`` is offered by the packing list.

    Works on both parsed schemas and stored models.

    Raises:
        SizeNotAvailableException: On the first unknown size label
    """
    allowed = set(context.available_sizes)
    for item_index, item in enumerate(items):
        for size_index, size in enumerate(item.sizes):
            if size.size_name not in allowed:
                raise SizeNotAvailableException(
                    field_path(("items", item_index, "sizes", size_index, "size_name"), prefix),
                    size.size_name,
                    context.available_sizes,
                )


def check_carton(carton: CartonSchema, context: PackingListContext, prefix: str = "") -> None:
    """Check a carton subtree against its packing list.

    Raises:
        InvalidWeightException: If gross weight is below net weight
        SizeNotAvailableException: If an item uses a size the list does not offer
    """
    if carton.gross_weight < carton.net_weight:
        raise InvalidWeightException(
            field_path(("gross_weight",), prefix), carton.net_weight, carton.gross_weight
        )
    check_item_sizes(carton.items, context, prefix)


class PackingListValidator(BaseService):
    """Checks structural, cross-field and uniqueness rules for packing lists."""

    def __init__(self, db: Session, carton_index_service: CartonIndexService):
        super().__init__(db)
        self.carton_index_service = carton_index_service

    def default_unit(self) -> MeasurementUnit:
        return default_unit()

    def validate(
        self, document: Mapping[str, Any] | BaseModel, exclude_packing_list_id: int | None = None
    ) -> None:
        """Validate a complete packing list document.

        Args:
            document: Raw document or parsed schema
            exclude_packing_list_id: Stored packing list the document replaces,
                whose own numbers do not count as duplicates

        Raises:
            DocumentValidationException: Subclass naming the first violation
        """
        self.load(document, exclude_packing_list_id)

    def load(
        self, document: Mapping[str, Any] | BaseModel, exclude_packing_list_id: int | None = None
    ) -> PackingListCreateSchema:
        """Validate a packing list document and return its normalized form."""
        try:
            packing_list = self._parse(PackingListCreateSchema, document)

            context = PackingListContext.of(packing_list)
            for index, carton in enumerate(packing_list.cartons):
                check_carton(carton, context, prefix=f"cartons.{index}")

            self._check_packing_no(packing_list.packing_no, exclude_packing_list_id)
            self._check_carton_nos(packing_list.cartons, exclude_packing_list_id)
        except DocumentValidationException as e:
            logger.warning(f"Rejected packing list document: {e.message} ({e.field})")
            raise

        return packing_list

    def validate_carton(
        self,
        carton: Mapping[str, Any] | BaseModel,
        context: PackingListContext,
        exclude_carton_id: int | None = None,
    ) -> CartonSchema:
        """Validate a carton that is attached to an existing packing list.

        Args:
            carton: Raw carton or parsed schema
            context: The packing list the carton belongs to
            exclude_carton_id: Stored carton being replaced

        Returns:
            Normalized carton schema
        """
        try:
            parsed = self._parse(CartonSchema, carton)
            check_carton(parsed, context)

            if self.carton_index_service.is_taken(parsed.carton_no, exclude_carton_id=exclude_carton_id):
                raise DuplicateKeyException("Carton", "carton_no", parsed.carton_no)
        except DocumentValidationException as e:
            logger.warning(
                f"Rejected carton for packing list {context.packing_no}: {e.message} ({e.field})"
            )
            raise

        return parsed

    def load_available_sizes(self, sizes: Sequence[str]) -> list[str]:
        """Validate and normalize a replacement set of size labels."""
        parsed = self._parse(AvailableSizesUpdateSchema, {"available_sizes": list(sizes)})
        return parsed.available_sizes

    def _parse(self, schema: type[SchemaT], document: Mapping[str, Any] | BaseModel) -> SchemaT:
        if isinstance(document, schema):
            return document
        if isinstance(document, BaseModel):
            document = document.model_dump()

        try:
            return schema.model_validate(document)
        except ValidationError as e:
            raise translate_validation_error(e) from e

    def _check_packing_no(self, packing_no: str, exclude_packing_list_id: int | None) -> None:
        stmt = select(PackingList.id).where(PackingList.packing_no == packing_no)
        if exclude_packing_list_id is not None:
            stmt = stmt.where(PackingList.id != exclude_packing_list_id)

        if self.db.scalar(stmt.limit(1)) is not None:
            raise DuplicateKeyException("Packing list", "packing_no", packing_no)

    def _check_carton_nos(
        self, cartons: Sequence[CartonSchema], exclude_packing_list_id: int | None
    ) -> None:
        seen: set[str] = set()
        for index, carton in enumerate(cartons):
            if carton.carton_no in seen:
                raise DuplicateKeyException("Carton", f"cartons.{index}.carton_no", carton.carton_no)
            seen.add(carton.carton_no)

        conflicts = set(
            self.carton_index_service.find_conflicts(
                seen, exclude_packing_list_id=exclude_packing_list_id
            )
        )
        for index, carton in enumerate(cartons):
            if carton.carton_no in conflicts:
                raise DuplicateKeyException("Carton", f"cartons.{index}.carton_no", carton.carton_no)
