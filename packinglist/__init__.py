"""Packing list data model: composition root."""

import logging
from collections.abc import Generator
from contextlib import contextmanager
from typing import TYPE_CHECKING

from sqlalchemy.orm import Session

if TYPE_CHECKING:
    from packinglist.config import Settings

from packinglist.config import get_settings
from packinglist.database import build_engine, build_session_maker, init_db
from packinglist.services.container import ServiceContainer
from packinglist.utils.logging_config import configure_logging

logger = logging.getLogger(__name__)


def create_container(settings: "Settings | None" = None) -> ServiceContainer:
    """Create and configure the service container."""
    if settings is None:
        settings = get_settings()

    configure_logging(settings)

    engine = build_engine(settings)
    init_db(engine)

    container = ServiceContainer()
    container.config.override(settings)
    container.engine.override(engine)
    container.session_maker.override(build_session_maker(engine))

    logger.info(f"Packing list store ready ({engine.dialect.name}, env={settings.APP_ENV})")
    return container


@contextmanager
def session_scope(container: ServiceContainer) -> Generator[Session, None, None]:
    """Run a unit of work on the container's session.

    Commits when the block succeeds, rolls back when it raises, and always
    releases the context-local session afterwards.
    """
    db_session = container.db_session()
    try:
        yield db_session
        db_session.commit()
    except Exception:
        db_session.rollback()
        raise
    finally:
        db_session.close()
        container.db_session.reset()
