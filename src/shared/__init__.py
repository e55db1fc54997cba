"""
Shared module - Cross-cutting concerns / Shared Layer

Constants, enums and logging helpers used by every layer of the gateway.
Nothing in here may depend on Infrastructure or on web frameworks.
"""

from .consts import DEFAULT_TENANT, EnumEnvironment, EnumLogLevel
from .logging import configure_logging, get_logger, update_logging_from_settings

__all__ = [
    "DEFAULT_TENANT",
    "EnumEnvironment",
    "EnumLogLevel",
    "configure_logging",
    "get_logger",
    "update_logging_from_settings",
]
