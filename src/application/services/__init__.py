"""
Dataset Services Package - Application Layer

Cached datasets polled from the context broker.
"""

from .beach_service import BeachService
from .dataset_service import CategorisedDatasetService, DatasetService
from .exercise_trail_service import ExerciseTrailService
from .observation_services import AirQualityService, CityworkService, RoadAccidentService
from .sports_service import SportsFieldService, SportsVenueService
from .water_quality_service import WaterQualityService

__all__ = [
    "DatasetService",
    "CategorisedDatasetService",
    "BeachService",
    "ExerciseTrailService",
    "SportsFieldService",
    "SportsVenueService",
    "RoadAccidentService",
    "CityworkService",
    "AirQualityService",
    "WaterQualityService",
]
