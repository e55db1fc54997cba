"""
Use Cases Package - Application Layer

On-demand queries against the context broker (air temperature, weather
and traffic flow) plus the system health and info use cases. Cached datasets are
served by the dataset services in ``src.application.services``.
"""

from .health_use_cases import GetApplicationInfoUseCase, GetHealthStatusUseCase
from .temperature_use_cases import (
    GetAirTemperatureSensorsUseCase,
    GetAirTemperaturesUseCase,
    TemperatureQuery,
)
from .traffic_flow_use_cases import GetTrafficFlowsUseCase
from .weather_use_cases import GetWeatherByIdUseCase, GetWeatherNearPointUseCase

__all__ = [
    "GetAirTemperaturesUseCase",
    "GetAirTemperatureSensorsUseCase",
    "TemperatureQuery",
    "GetTrafficFlowsUseCase",
    "GetWeatherNearPointUseCase",
    "GetWeatherByIdUseCase",
    "GetHealthStatusUseCase",
    "GetApplicationInfoUseCase",
]
