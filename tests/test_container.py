"""Tests for container creation and unit-of-work handling."""

import pytest
from sqlalchemy import func, select

from packinglist import create_container, session_scope
from packinglist.config import Settings
from packinglist.database import check_db_connection, drop_all_tables, init_db
from packinglist.exceptions import SizeNotAvailableException
from packinglist.models.packing_list import PackingList
from packinglist.services.packing_list_service import PackingListService
from packinglist.services.packing_list_validator import PackingListValidator


class TestCreateContainer:
    """Test cases for the composition root."""

    def test_services_share_session(self, container):
        service = container.packing_list_service()

        assert isinstance(service, PackingListService)
        assert isinstance(service.validator, PackingListValidator)
        assert service.db is service.validator.db
        assert service.db is service.carton_index_service.db

    def test_database_reachable(self, container):
        assert check_db_connection(container.engine())

    def test_config_exposed(self, container, test_settings: Settings):
        assert container.config() is test_settings

    def test_init_db_is_idempotent(self, container):
        init_db(container.engine())
        init_db(container.engine())

    def test_drop_all_tables(self, test_settings: Settings):
        container = create_container(test_settings)
        engine = container.engine()

        drop_all_tables(engine)

        with engine.connect() as connection:
            assert connection.exec_driver_sql(
                "SELECT count(*) FROM sqlite_master WHERE type='table'"
            ).scalar() == 0
        engine.dispose()


class TestSessionScope:
    """Test cases for committing and rolling back units of work."""

    def _count_packing_lists(self, container) -> int:
        with container.engine().connect() as connection:
            return connection.execute(select(func.count()).select_from(PackingList)).scalar_one()

    def test_commit_on_success(self, container, make_document):
        with session_scope(container):
            container.packing_list_service().create_packing_list(make_document())

        assert self._count_packing_lists(container) == 1

    def test_rollback_on_error(self, container, make_document, make_carton):
        with pytest.raises(SizeNotAvailableException):
            with session_scope(container):
                service = container.packing_list_service()
                service.create_packing_list(make_document("PL-001", cartons=[make_carton(1)]))
                service.add_carton("PL-001", make_carton(2, sizes=[("XXL", 1)]))

        assert self._count_packing_lists(container) == 0

    def test_session_released_after_scope(self, container):
        with session_scope(container) as first:
            pass
        with session_scope(container) as second:
            pass

        assert first is not second
