"""Pytest configuration and fixtures."""

from collections.abc import Callable, Generator, Iterable
from typing import Any

import pytest
from sqlalchemy.orm import Session

from packinglist import create_container
from packinglist.config import Settings
from packinglist.services.container import ServiceContainer


def _build_test_settings() -> Settings:
    """Construct base Settings object for tests."""
    return Settings(
        DATABASE_URL="sqlite://",
        APP_ENV="testing",
        DEBUG=True,
        LOG_LEVEL="DEBUG",
    )


@pytest.fixture
def test_settings() -> Settings:
    """Create test settings with in-memory database."""
    return _build_test_settings()


@pytest.fixture
def container(test_settings: Settings) -> Generator[ServiceContainer, None, None]:
    """Service container bound to a fresh in-memory database."""
    container = create_container(test_settings)

    yield container

    container.engine().dispose()


@pytest.fixture
def session(container: ServiceContainer) -> Generator[Session, None, None]:
    """The database session shared with the services under test."""
    session = container.db_session()

    yield session

    session.rollback()
    session.close()
    container.db_session.reset()


def build_carton(
    carton_no: Any = 1,
    sizes: Iterable[tuple[str, int]] = (("S", 10),),
    color_name: str = "Red",
    **overrides: Any,
) -> dict[str, Any]:
    """Build a valid carton document with a single item."""
    carton: dict[str, Any] = {
        "carton_no": carton_no,
        "measurement": {"length": 60, "width": 40, "height": 35},
        "net_weight": 11.5,
        "gross_weight": 12.8,
        "style": "ST-118",
        "customer": "Acme Retail",
        "customer_po": "PO-55821",
        "items": [
            {
                "color_name": color_name,
                "sizes": [
                    {"size_name": size_name, "quantity": quantity}
                    for size_name, quantity in sizes
                ],
            }
        ],
    }
    carton.update(overrides)
    return carton


def build_document(
    packing_no: str = "PL-001",
    available_sizes: Iterable[str] = ("S", "M"),
    cartons: list[dict[str, Any]] | None = None,
    **overrides: Any,
) -> dict[str, Any]:
    """Build a valid packing list document."""
    document: dict[str, Any] = {
        "packing_no": packing_no,
        "packing_date": "2024-05-01",
        "buyer_name": "Northwind Apparel",
        "available_sizes": list(available_sizes),
        "cartons": cartons if cartons is not None else [build_carton()],
    }
    document.update(overrides)
    return document


@pytest.fixture
def make_carton() -> Callable[..., dict[str, Any]]:
    """Factory for carton documents."""
    return build_carton


@pytest.fixture
def make_document() -> Callable[..., dict[str, Any]]:
    """Factory for packing list documents."""
    return build_document
