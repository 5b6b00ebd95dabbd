"""
Configuration management for the country dataset.

Usage:
    from countryfacts.config.settings import Config
    config = Config()
    path = config.dataset.data_file

Environment Variables:
    COUNTRYFACTS_DATA_FILE: Alternative dataset JSON file
    COUNTRYFACTS_REQUIRED_FIELDS: Comma-separated fields the audit treats as required
    COUNTRYFACTS_LOG_LEVEL: Default log level for the CLI (DEBUG, INFO, WARNING, ...)
    ENVIRONMENT: development | staging | production, selects .env.{ENVIRONMENT}
"""

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional

from dotenv import load_dotenv

logger = logging.getLogger(__name__)

PACKAGED_DATA_FILE = Path(__file__).resolve().parent.parent / "data" / "countries.json"
DEFAULT_REQUIRED_FIELDS = ("name", "isoAlpha3", "numericCode")
VALID_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass
class DatasetConfig:
    """Location of the dataset and the audit's required fields."""
    data_file: Path = PACKAGED_DATA_FILE
    required_fields: tuple[str, ...] = field(default=DEFAULT_REQUIRED_FIELDS)

    def __post_init__(self):
        """Validate dataset configuration."""
        self.data_file = Path(self.data_file)
        if not self.data_file.is_file():
            raise ValueError(f"Dataset file does not exist: {self.data_file}")
        if self.data_file.suffix.lower() != ".json":
            raise ValueError(f"Dataset file must be a .json file, got {self.data_file.name}")
        if not self.required_fields:
            raise ValueError("At least one required field must be configured")


@dataclass
class LoggingConfig:
    """Default logging behaviour for the CLI."""
    level: str = "INFO"

    def __post_init__(self):
        """Validate log level name."""
        self.level = self.level.upper()
        if self.level not in VALID_LOG_LEVELS:
            raise ValueError(f"Log level must be one of: {', '.join(VALID_LOG_LEVELS)}")


class ConfigurationError(Exception):
    """Raised when configuration is invalid or incomplete."""
    pass


class Config:
    """
    Centralized configuration for dataset consumers and the CLI.

    Environment variables loaded (in order of preference):
    1. Explicit environment file passed to constructor
    2. .env.{ENVIRONMENT} (where ENVIRONMENT=development|production|staging)
    3. .env file in project root
    4. System environment variables

    Example:
        # Defaults: packaged dataset, INFO logging
        config = Config()

        # Point at a reviewed copy of the dataset
        config = Config(env_file=Path("review.env"))
    """

    def __init__(self,
                 environment: Optional[str] = None,
                 env_file: Optional[Path] = None):
        """
        Initialize configuration.

        Args:
            environment: Target environment (development|staging|production)
            env_file: Explicit path to environment file
        """
        self.environment = environment or os.getenv("ENVIRONMENT", "development")
        self.project_root = self._find_project_root()

        self._load_environment_variables(env_file)

        self._load_dataset_config()
        self._load_logging_config()

    def _find_project_root(self) -> Path:
        """Find project root directory containing pyproject.toml, .git or a .env file."""
        current = Path(__file__).resolve()

        for parent in current.parents:
            if any((parent / marker).exists() for marker in ['pyproject.toml', '.git']):
                return parent

        if (Path.cwd() / '.env').exists():
            return Path.cwd()

        return Path.cwd()

    def _load_environment_variables(self, env_file: Optional[Path]) -> None:
        """Load environment variables from appropriate source."""
        loaded_files = []

        if env_file:
            env_file = Path(env_file)
            if env_file.exists():
                load_dotenv(env_file)
                loaded_files.append(str(env_file))
                logger.info(f"Loaded configuration from {env_file}")
            else:
                raise ConfigurationError(f"Specified env file not found: {env_file}")

        else:
            env_specific_file = self.project_root / f".env.{self.environment}"
            if env_specific_file.exists():
                load_dotenv(env_specific_file)
                loaded_files.append(str(env_specific_file))
                logger.info(f"Loaded environment-specific config: {env_specific_file}")

            generic_env_file = self.project_root / ".env"
            if generic_env_file.exists():
                load_dotenv(generic_env_file)
                loaded_files.append(str(generic_env_file))
                logger.debug(f"Loaded generic config: {generic_env_file}")

        self._loaded_env_files = loaded_files

        logger.debug(f"Project root: {self.project_root}")
        logger.debug(f"Loaded env files: {loaded_files}")
        logger.debug(f"Environment: {self.environment}")

    def _load_dataset_config(self) -> None:
        """Load dataset location and required-field list."""
        data_file = os.getenv("COUNTRYFACTS_DATA_FILE") or PACKAGED_DATA_FILE
        raw_fields = os.getenv("COUNTRYFACTS_REQUIRED_FIELDS")
        if raw_fields is None:
            required_fields = DEFAULT_REQUIRED_FIELDS
        else:
            required_fields = tuple(f.strip() for f in raw_fields.split(",") if f.strip())

        try:
            self.dataset = DatasetConfig(
                data_file=Path(data_file),
                required_fields=required_fields
            )
        except ValueError as e:
            raise ConfigurationError(f"Invalid dataset configuration: {e}")

    def _load_logging_config(self) -> None:
        """Load default log level."""
        try:
            self.logging = LoggingConfig(level=os.getenv("COUNTRYFACTS_LOG_LEVEL", "INFO"))
        except ValueError as e:
            raise ConfigurationError(f"Invalid logging configuration: {e}")

    def get_dataset_settings(self) -> dict[str, Any]:
        """
        Get dataset configuration settings as dictionary.

        Returns:
            Dictionary of dataset settings
        """
        return {
            'data_file': str(self.dataset.data_file),
            'packaged': self.dataset.data_file.resolve() == PACKAGED_DATA_FILE,
            'required_fields': list(self.dataset.required_fields),
            'log_level': self.logging.level,
            'environment': self.environment,
            'loaded_env_files': self._loaded_env_files,
        }

    def __repr__(self) -> str:
        return (
            f"Config(environment={self.environment}, "
            f"data_file={self.dataset.data_file}, "
            f"log_level={self.logging.level})"
        )
