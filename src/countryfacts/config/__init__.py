"""
Configuration module for the country dataset.
Dataset location, logging defaults and the country registry.
"""

from .countries import CountryRegistry, get_country
from .settings import (
    Config,
    ConfigurationError,
    DatasetConfig,
    LoggingConfig,
)

__all__ = [
    'Config',
    'ConfigurationError',
    'DatasetConfig',
    'LoggingConfig',
    'CountryRegistry',
    'get_country'
]
