#!/usr/bin/env python3
"""Modular configuration system for EarnGage

Configuration hierarchy:
- rows_config: Rows spreadsheet API connection
- auth_config: JWT and password hashing
- logging_config: Logging configuration
- earngage_config: Main config combining the above
"""
import os
from dotenv import load_dotenv
from .auth_config import AuthConfig
from .earngage_config import EarnGageConfig
from .logging_config import LoggingConfig
from .rows_config import RowsConfig, DEFAULT_ROWS_API_URL

# Load environment file based on ENV
env = os.getenv("ENV") or os.getenv("ENVIRONMENT", "development")
env_files = {
    "development": "deployment/environments/dev.env",
    "dev": "deployment/environments/dev.env",
    "testing": "deployment/environments/test.env",
    "test": "deployment/environments/test.env",
    "staging": "deployment/environments/staging.env",
    "production": "deployment/environments/production.env",
}
env_file = env_files.get(env, "deployment/environments/dev.env")
load_dotenv(env_file, override=False)

# Create global settings instance
settings = EarnGageConfig.from_env()

def get_settings() -> EarnGageConfig:
    """Get global settings instance"""
    return settings

def reload_settings() -> EarnGageConfig:
    """Reload settings from environment"""
    global settings
    settings = EarnGageConfig.from_env()
    return settings

__all__ = [
    'EarnGageConfig',
    'get_settings',
    'reload_settings',
    'settings',
    'AuthConfig',
    'LoggingConfig',
    'RowsConfig',
    'DEFAULT_ROWS_API_URL',
]
