"""
Dependency container injection module - Main Layer

This module implements the dependency injection container
to simplify the management and lifecycle of dependencies
in the application.
"""

from contextlib import asynccontextmanager
from datetime import timedelta

from dependency_injector import containers, providers

from src.application.models import SystemInfo
from src.application.services import (
    AirQualityService,
    BeachService,
    CityworkService,
    ExerciseTrailService,
    RoadAccidentService,
    SportsFieldService,
    SportsVenueService,
    WaterQualityService,
)
from src.application.use_cases.health_use_cases import (
    GetApplicationInfoUseCase,
    GetHealthStatusUseCase,
)
from src.application.use_cases.temperature_use_cases import (
    GetAirTemperatureSensorsUseCase,
    GetAirTemperaturesUseCase,
)
from src.application.use_cases.traffic_flow_use_cases import GetTrafficFlowsUseCase
from src.application.use_cases.weather_use_cases import (
    GetWeatherByIdUseCase,
    GetWeatherNearPointUseCase,
)
from src.domain.services.windowed_aggregator import WindowedAggregator
from src.infrastructure.gateways.context_broker_gateway import ContextBrokerGateway
from src.infrastructure.services.health_check_service import HealthCheckService
from src.shared import get_logger

from .config import AppSettings

logger = get_logger(__name__)


def _seconds(value: float) -> timedelta:
    return timedelta(seconds=value)


class AppContainer(containers.DeclarativeContainer):
    """Composition Root using dependency-injector."""

    wiring_config = containers.WiringConfiguration(packages=["..presentation"])

    # Settings
    config = providers.Configuration()

    success_interval = providers.Callable(
        _seconds, config.cache.success_interval_seconds
    )
    failure_interval = providers.Callable(
        _seconds, config.cache.failure_interval_seconds
    )

    # Gateways
    context_broker_gateway = providers.Singleton(
        ContextBrokerGateway,
        base_url=config.broker.url,
        timeout=config.broker.timeout,
        page_size=config.broker.page_size,
        max_pages=config.broker.max_pages,
    )

    # Dataset services (each owns one refresh loop)
    water_quality_service = providers.Singleton(
        WaterQualityService,
        gateway=context_broker_gateway,
        tenant=config.broker.tenant,
        success_interval=success_interval,
        failure_interval=failure_interval,
    )

    beach_service = providers.Singleton(
        BeachService,
        gateway=context_broker_gateway,
        water_quality=water_quality_service,
        tenant=config.broker.tenant,
        max_wqo_distance=config.beaches.max_wqo_distance,
        success_interval=success_interval,
        failure_interval=failure_interval,
    )

    exercise_trail_service = providers.Singleton(
        ExerciseTrailService,
        gateway=context_broker_gateway,
        tenant=config.broker.tenant,
        success_interval=success_interval,
        failure_interval=failure_interval,
    )

    sports_field_service = providers.Singleton(
        SportsFieldService,
        gateway=context_broker_gateway,
        tenant=config.broker.tenant,
        success_interval=success_interval,
        failure_interval=failure_interval,
    )

    sports_venue_service = providers.Singleton(
        SportsVenueService,
        gateway=context_broker_gateway,
        tenant=config.broker.tenant,
        success_interval=success_interval,
        failure_interval=failure_interval,
    )

    road_accident_service = providers.Singleton(
        RoadAccidentService,
        gateway=context_broker_gateway,
        tenant=config.broker.tenant,
        success_interval=success_interval,
        failure_interval=failure_interval,
    )

    citywork_service = providers.Singleton(
        CityworkService,
        gateway=context_broker_gateway,
        tenant=config.broker.tenant,
        success_interval=success_interval,
        failure_interval=failure_interval,
    )

    air_quality_service = providers.Singleton(
        AirQualityService,
        gateway=context_broker_gateway,
        tenant=config.broker.tenant,
        success_interval=success_interval,
        failure_interval=failure_interval,
    )

    # Water quality first so beaches can attach temperatures on their first refresh.
    dataset_services = providers.List(
        water_quality_service,
        beach_service,
        exercise_trail_service,
        sports_field_service,
        sports_venue_service,
        road_accident_service,
        citywork_service,
        air_quality_service,
    )

    # Application (use cases)
    windowed_aggregator = providers.Singleton(WindowedAggregator)

    get_air_temperatures_use_case = providers.Factory(
        GetAirTemperaturesUseCase,
        context_broker_gateway=context_broker_gateway,
        tenant=config.broker.tenant,
        aggregator=windowed_aggregator,
    )

    get_air_temperature_sensors_use_case = providers.Factory(
        GetAirTemperatureSensorsUseCase,
        context_broker_gateway=context_broker_gateway,
        tenant=config.broker.tenant,
    )

    get_traffic_flows_use_case = providers.Factory(
        GetTrafficFlowsUseCase,
        context_broker_gateway=context_broker_gateway,
        tenant=config.broker.tenant,
    )

    get_weather_near_point_use_case = providers.Factory(
        GetWeatherNearPointUseCase,
        context_broker_gateway=context_broker_gateway,
        tenant=config.broker.tenant,
    )

    get_weather_by_id_use_case = providers.Factory(
        GetWeatherByIdUseCase,
        context_broker_gateway=context_broker_gateway,
        tenant=config.broker.tenant,
    )

    health_check_service = providers.Singleton(
        HealthCheckService,
        broker_url=config.broker.url,
        datasets=dataset_services,
        tenant=config.broker.tenant,
    )

    system_info = providers.Singleton(
        SystemInfo,
        title=config.ge.title,
        description=config.ge.description,
        version=config.ge.version,
        environment=providers.Callable(
            lambda env: env.value if hasattr(env, "value") else str(env),
            config.environment,
        ),
        git_commit=config.ge.git_commit,
        build_time=config.ge.build_time,
        broker_url=config.broker.url,
        tenant=config.broker.tenant,
    )

    get_health_status_use_case = providers.Factory(
        GetHealthStatusUseCase,
        health_check_service=health_check_service,
    )

    get_application_info_use_case = providers.Factory(
        GetApplicationInfoUseCase,
        health_check_service=health_check_service,
        system_info=system_info,
    )


# -------------------------
# Global Container Instance
# -------------------------
_app_container: AppContainer | None = None


def init_container(settings: AppSettings) -> AppContainer:
    """Initialize global container with application settings."""

    global _app_container

    container = AppContainer()
    container.config.from_pydantic(settings)
    _app_container = container
    return container


def get_container() -> AppContainer:
    """Get the initialized global container."""

    if _app_container is None:
        raise RuntimeError("Container has not been initialized yet")

    return _app_container


@asynccontextmanager
async def app_lifespan():
    """
    Start every dataset refresh loop on startup and stop them on shutdown.

    Loops run on their own threads, so startup does not wait for the first
    refresh: readers get empty snapshots until it completes.
    """
    container = get_container()
    services = container.dataset_services()
    timeout = container.config.cache.shutdown_timeout_seconds()

    try:
        if container.config.cache.autostart():
            for service in services:
                service.start()
            logger.info("container.datasets.started", count=len(services))
        else:
            logger.info("container.datasets.autostart_disabled")
        yield container

    finally:
        for service in services:
            service.shutdown(timeout)
        logger.info("container.resources.shutdown")
