"""
Adapter Configuration Module

Key components:
    - AdapterConfig: settlement currency, endpoints, TTL, schain fields
    - load_adapter_config(): YAML + environment loader
    - get_adapter_config(): process-wide instance
"""

from .adapter_config import (
    AdapterConfig,
    ConfigError,
    get_adapter_config,
    load_adapter_config,
    reset_adapter_config,
    set_adapter_config,
)

__all__ = [
    "AdapterConfig",
    "ConfigError",
    "get_adapter_config",
    "load_adapter_config",
    "reset_adapter_config",
    "set_adapter_config",
]
