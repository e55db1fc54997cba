"""
DTOs Package - Application Layer

This package contains Data Transfer Objects (DTOs) used for data exchange
between the context broker, the application layer and the presentation
layer.
"""

from .beach_dto import (
    BeachDetailsDTO,
    BeachDTO,
    WaterQualityReadingDTO,
    render_beaches_csv,
)
from .exercise_trail_dto import ExerciseTrailDTO
from .geojson_dto import (
    FeatureCollectionDTO,
    FeatureDTO,
    SelectableDTO,
    parse_field_list,
)
from .health_dto import (
    ApplicationInfoDTO,
    DatasetStatusDTO,
    DependencyStatusDTO,
    SystemHealthDTO,
)
from .observation_dto import (
    AirQualityDTO,
    CityworkDTO,
    RoadAccidentDTO,
    WaterQualityTemporalDTO,
)
from .sports_dto import SportsFieldDTO, SportsVenueDTO
from .traffic_flow_dto import render_traffic_flow_csv
from .weather_dto import (
    SensorTemperaturesDTO,
    TemperatureResponseDTO,
    TemperatureSensorDTO,
    TemperatureValueDTO,
    WeatherDTO,
)

__all__ = [
    "BeachDTO",
    "BeachDetailsDTO",
    "WaterQualityReadingDTO",
    "render_beaches_csv",
    "ExerciseTrailDTO",
    "SportsFieldDTO",
    "SportsVenueDTO",
    "render_traffic_flow_csv",
    "RoadAccidentDTO",
    "CityworkDTO",
    "AirQualityDTO",
    "WaterQualityTemporalDTO",
    "SelectableDTO",
    "FeatureDTO",
    "FeatureCollectionDTO",
    "parse_field_list",
    "TemperatureValueDTO",
    "SensorTemperaturesDTO",
    "TemperatureResponseDTO",
    "TemperatureSensorDTO",
    "WeatherDTO",
    "SystemHealthDTO",
    "DependencyStatusDTO",
    "DatasetStatusDTO",
    "ApplicationInfoDTO",
]
