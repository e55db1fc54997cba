"""
Gateways Package - Infrastructure Layer

Concrete implementations of the domain gateway interfaces.
"""

from .context_broker_gateway import ContextBrokerGateway

__all__ = ["ContextBrokerGateway"]
