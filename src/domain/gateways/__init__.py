"""
Gateways Package - Domain Layer

Interfaces for the external systems the gateway reads from. The
infrastructure layer provides the HTTP implementations.
"""

from .context_broker_gateway import IContextBrokerGateway

__all__ = ["IContextBrokerGateway"]
