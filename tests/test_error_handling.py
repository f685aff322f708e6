"""Test suite for error handling functionality."""

import pytest
from pydantic import ValidationError
from sqlalchemy.exc import IntegrityError

from packinglist.exceptions import (
    BusinessLogicException,
    DocumentValidationException,
    DuplicateKeyException,
    InvalidWeightException,
    MissingFieldException,
    RecordNotFoundException,
    SizeNotAvailableException,
    TypeMismatchException,
)
from packinglist.schemas.packing_list import PackingListCreateSchema
from packinglist.utils.error_handling import (
    field_path,
    to_error_response,
    translate_integrity_error,
    translate_validation_error,
)


class TestDomainExceptions:
    """Test domain exception classes."""

    def test_record_not_found_exception(self):
        """Test RecordNotFoundException formatting."""
        exception = RecordNotFoundException("Packing list", "PL-005")
        assert exception.message == "Packing list PL-005 was not found"
        assert str(exception) == "Packing list PL-005 was not found"
        assert exception.error_code == "RECORD_NOT_FOUND"

    def test_missing_field_exception(self):
        exception = MissingFieldException("cartons.0.style")
        assert exception.message == "cartons.0.style is required"
        assert exception.field == "cartons.0.style"
        assert exception.error_code == "MISSING_FIELD"

    def test_duplicate_key_exception(self):
        exception = DuplicateKeyException("Carton", "cartons.2.carton_no", "17")
        assert exception.message == "A carton with number 17 already exists"
        assert exception.value == "17"
        assert exception.resource_type == "Carton"

    def test_size_not_available_exception(self):
        exception = SizeNotAvailableException("items.0.sizes.0.size_name", "XL", ("S", "M"))
        assert exception.message == "Size XL is not available in the packing list (available: S, M)"
        assert exception.available_sizes == ["S", "M"]

    def test_size_not_available_without_sizes(self):
        exception = SizeNotAvailableException("size_name", "XL", [])
        assert exception.message == "Size XL is not available in the packing list (available: none)"

    def test_type_mismatch_exception(self):
        exception = TypeMismatchException("packing_date", "Input should be a valid date")
        assert exception.message == "packing_date is invalid: Input should be a valid date"
        assert exception.detail == "Input should be a valid date"

    def test_validation_exceptions_share_base(self):
        for exception in (
            MissingFieldException("a"),
            TypeMismatchException("a", "b"),
            DuplicateKeyException("Carton", "a", "1"),
            SizeNotAvailableException("a", "L", ["S"]),
            InvalidWeightException("a", 2.0, 1.0),
        ):
            assert isinstance(exception, DocumentValidationException)
            assert isinstance(exception, BusinessLogicException)


class TestValidationErrorTranslation:
    """Test mapping pydantic errors to domain exceptions."""

    def _errors_for(self, document) -> ValidationError:
        with pytest.raises(ValidationError) as exc_info:
            PackingListCreateSchema.model_validate(document)
        return exc_info.value

    def test_field_path(self):
        assert field_path(("cartons", 0, "items", 2, "color_name")) == "cartons.0.items.2.color_name"
        assert field_path(("carton_no",), "cartons.3") == "cartons.3.carton_no"
        assert field_path((), "cartons.3") == "cartons.3"

    def test_missing_becomes_missing_field(self, make_document):
        document = make_document()
        del document["packing_no"]

        exception = translate_validation_error(self._errors_for(document))

        assert isinstance(exception, MissingFieldException)
        assert exception.field == "packing_no"

    def test_none_becomes_missing_field(self, make_document):
        exception = translate_validation_error(self._errors_for(make_document(packing_date=None)))

        assert isinstance(exception, MissingFieldException)
        assert exception.field == "packing_date"

    def test_wrong_type_becomes_type_mismatch(self, make_document, make_carton):
        carton = make_carton()
        carton["net_weight"] = "heavy"

        exception = translate_validation_error(self._errors_for(make_document(cartons=[carton])))

        assert isinstance(exception, TypeMismatchException)
        assert exception.field == "cartons.0.net_weight"

    def test_prefix_applied(self, make_document):
        document = make_document()
        del document["packing_no"]

        exception = translate_validation_error(self._errors_for(document), prefix="documents.4")

        assert exception.field == "documents.4.packing_no"


class TestIntegrityErrorTranslation:
    """Test mapping database constraint violations."""

    def test_unique_carton_no(self):
        error = IntegrityError(
            "INSERT INTO cartons ...",
            {"carton_no": "7"},
            Exception("UNIQUE constraint failed: cartons.carton_no"),
        )

        exception = translate_integrity_error(error)

        assert isinstance(exception, DuplicateKeyException)
        assert exception.field == "carton_no"
        assert exception.value == "7"

    def test_unique_packing_no_postgres(self):
        error = IntegrityError(
            "INSERT INTO packing_lists ...",
            {"packing_no": "PL-001"},
            Exception('duplicate key value violates unique constraint "packing_lists_packing_no_key"'),
        )

        exception = translate_integrity_error(error)

        assert isinstance(exception, DuplicateKeyException)
        assert exception.field == "packing_no"
        assert exception.value == "PL-001"

    def test_unique_carton_no_positional_params(self):
        """SQLite binds positionally, so the colliding value is unknown."""
        error = IntegrityError(
            "INSERT INTO cartons ...",
            (1, 0, "7", 60.0, 40.0, 35.0),
            Exception("UNIQUE constraint failed: cartons.carton_no"),
        )

        exception = translate_integrity_error(error)

        assert isinstance(exception, DuplicateKeyException)
        assert exception.value is None
        assert exception.message == "A carton with this number already exists"

    def test_unique_carton_no_single_row_executemany(self):
        error = IntegrityError(
            "INSERT INTO cartons ...",
            [{"carton_no": "8", "style": "ST-1"}],
            Exception("UNIQUE constraint failed: cartons.carton_no"),
        )

        assert translate_integrity_error(error).value == "8"

    def test_unique_carton_no_postgres_detail(self):
        error = IntegrityError(
            "INSERT INTO cartons ...",
            [{"carton_no": "1"}, {"carton_no": "9"}],
            Exception(
                'duplicate key value violates unique constraint "cartons_carton_no_key"\n'
                "DETAIL:  Key (carton_no)=(9) already exists."
            ),
        )

        exception = translate_integrity_error(error)

        assert exception.value == "9"
        assert exception.message == "A carton with number 9 already exists"

    def test_not_null(self):
        error = IntegrityError(
            "INSERT INTO cartons ...",
            {},
            Exception("NOT NULL constraint failed: cartons.style"),
        )

        exception = translate_integrity_error(error)

        assert isinstance(exception, MissingFieldException)
        assert exception.field == "style"

    def test_other_constraint(self):
        error = IntegrityError(
            "INSERT INTO item_sizes ...",
            {},
            Exception("CHECK constraint failed: ck_item_sizes_quantity_non_negative"),
        )

        exception = translate_integrity_error(error)

        assert type(exception) is BusinessLogicException
        assert exception.error_code == "CONSTRAINT_VIOLATION"


class TestErrorResponse:
    """Test the error payload handed to outer layers."""

    def test_validation_error_payload(self):
        response = to_error_response(
            SizeNotAvailableException("cartons.0.items.0.sizes.0.size_name", "L", ["S", "M"])
        )

        assert response.model_dump() == {
            "error": "Size L is not available in the packing list (available: S, M)",
            "error_code": "SIZE_NOT_AVAILABLE",
            "field": "cartons.0.items.0.sizes.0.size_name",
        }

    def test_not_found_payload_has_no_field(self):
        response = to_error_response(RecordNotFoundException("Carton", "9"))

        assert response.field is None
        assert response.error_code == "RECORD_NOT_FOUND"
