"""
Domain Layer Package

This package contains the dataset entities, the snapshot cache and the
time-window aggregation rules. It defines gateways and ports without
dependencies on external frameworks or infrastructure concerns.
"""

# Re-export submodules
from src.domain import entities, gateways, ports, services

__all__ = ["entities", "gateways", "services", "ports"]
