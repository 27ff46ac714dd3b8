"""Configuration package for pgtest."""

from .config_manager import ConfigValidationError, ConnectionConfig, TestDatabaseConfig

__all__ = ['ConfigValidationError', 'ConnectionConfig', 'TestDatabaseConfig']
