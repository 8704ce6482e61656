"""
Configuration adapters
"""
from .resolver import ConfigResolver, parse_connection_config
from .loader import RuntimeSettings, SettingsLoader

__all__ = [
    "ConfigResolver",
    "parse_connection_config",
    "RuntimeSettings",
    "SettingsLoader",
]
