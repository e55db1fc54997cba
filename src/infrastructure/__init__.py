"""
Infrastructure Layer Package

This package contains implementations of interfaces defined in the
domain layer: the HTTP context broker gateway and the health checks.
"""

from src.infrastructure import gateways, services

__all__ = ["gateways", "services"]
