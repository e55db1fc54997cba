"""
Controllers Package - Presentation Layer

This package contains FastAPI controllers (routers) that handle
HTTP requests and responses. Controllers are responsible for
content negotiation, error mapping and turning cached domain
entities or use case results into API DTOs.
"""

from .beaches_controller import router as beaches_router
from .exercise_trails_controller import router as exercise_trails_router
from .observations_controller import (
    airquality_router,
    cityworks_router,
    roadaccidents_router,
)
from .sports_controller import sportsfields_router, sportsvenues_router
from .system_controller import router as system_router
from .temperature_controller import router as temperature_router
from .traffic_flow_controller import router as trafficflow_router
from .waterquality_controller import router as waterquality_router
from .weather_controller import router as weather_router

__all__ = [
    "beaches_router",
    "exercise_trails_router",
    "sportsfields_router",
    "sportsvenues_router",
    "roadaccidents_router",
    "cityworks_router",
    "airquality_router",
    "waterquality_router",
    "temperature_router",
    "trafficflow_router",
    "weather_router",
    "system_router",
]
