"""Dependency injection container for services."""

from dependency_injector import containers, providers
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker

from packinglist.config import Settings
from packinglist.services.carton_index_service import CartonIndexService
from packinglist.services.packing_list_service import PackingListService
from packinglist.services.packing_list_validator import PackingListValidator


class ServiceContainer(containers.DeclarativeContainer):
    """Container for service dependency injection."""

    # Configuration and database session providers
    config = providers.Dependency(instance_of=Settings)
    engine = providers.Dependency(instance_of=Engine)
    session_maker = providers.Dependency(instance_of=sessionmaker)
    db_session = providers.ContextLocalSingleton(
        session_maker.provided.call()
    )

    # Service providers - Factory creates new instances on every call
    carton_index_service = providers.Factory(CartonIndexService, db=db_session)
    packing_list_validator = providers.Factory(
        PackingListValidator,
        db=db_session,
        carton_index_service=carton_index_service,
    )
    packing_list_service = providers.Factory(
        PackingListService,
        db=db_session,
        validator=packing_list_validator,
        carton_index_service=carton_index_service,
    )
