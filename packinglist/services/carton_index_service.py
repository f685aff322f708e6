"""Global carton number index."""

from collections.abc import Iterable

from sqlalchemy import select

from packinglist.exceptions import RecordNotFoundException
from packinglist.models.carton import Carton
from packinglist.services.base import BaseService


class CartonIndexService(BaseService):
    """Looks up carton numbers across every packing list.

    Carton numbers are unique over the whole carton collection, not just
    within one packing list. The unique index on ``cartons.carton_no`` is
    the final guard; this service answers the question before a write.
    """

    def find_conflicts(
        self,
        carton_nos: Iterable[str],
        exclude_packing_list_id: int | None = None,
        exclude_carton_id: int | None = None,
    ) -> list[str]:
        """Return the carton numbers from ``carton_nos`` that are already stored.

        Args:
            carton_nos: Candidate carton numbers
            exclude_packing_list_id: Ignore cartons of this packing list
            exclude_carton_id: Ignore this carton

        Returns:
            Conflicting carton numbers, sorted
        """
        candidates = list(carton_nos)
        if not candidates:
            return []

        stmt = select(Carton.carton_no).where(Carton.carton_no.in_(candidates))
        if exclude_packing_list_id is not None:
            stmt = stmt.where(Carton.packing_list_id != exclude_packing_list_id)
        if exclude_carton_id is not None:
            stmt = stmt.where(Carton.id != exclude_carton_id)

        return sorted(self.db.scalars(stmt).all())

    def is_taken(
        self,
        carton_no: str,
        exclude_packing_list_id: int | None = None,
        exclude_carton_id: int | None = None,
    ) -> bool:
        """Check whether a carton number is already in use."""
        return bool(
            self.find_conflicts(
                [carton_no],
                exclude_packing_list_id=exclude_packing_list_id,
                exclude_carton_id=exclude_carton_id,
            )
        )

    def get_carton(self, carton_no: str) -> Carton:
        """Get a carton by its number.

        Raises:
            RecordNotFoundException: If no carton has this number
        """
        carton = self.db.scalar(select(Carton).where(Carton.carton_no == carton_no))
        if not carton:
            raise RecordNotFoundException("Carton", carton_no)
        return carton
