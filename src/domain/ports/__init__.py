"""Domain ports package."""

from .cached_dataset import ICachedDataset
from .health_check import IHealthCheckService

__all__ = ["ICachedDataset", "IHealthCheckService"]
