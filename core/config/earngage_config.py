#!/usr/bin/env python3
"""EarnGage main configuration

Combines the Rows, auth and logging sub-configs.
"""
import os
from dataclasses import dataclass, field

from .auth_config import AuthConfig
from .logging_config import LoggingConfig
from .rows_config import RowsConfig


def _bool(val: str) -> bool:
    return val.lower() == "true"

def _int(val: str, default: int) -> int:
    try:
        return int(val) if val else default
    except ValueError:
        return default


@dataclass
class EarnGageConfig:
    """Main EarnGage configuration with all sub-configs"""

    # Environment
    environment: str = "development"
    debug: bool = False

    # HTTP surface
    host: str = "0.0.0.0"
    port: int = 8000
    cors_origins: str = "*"

    # Sub-configurations
    rows: RowsConfig = field(default_factory=RowsConfig)
    auth: AuthConfig = field(default_factory=AuthConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    @property
    def cors_origin_list(self):
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]

    @classmethod
    def from_env(cls) -> 'EarnGageConfig':
        """Load complete configuration from environment"""
        env = os.getenv("ENV") or os.getenv("ENVIRONMENT", "development")
        return cls(
            environment=env,
            debug=_bool(os.getenv("DEBUG", "true" if env == "development" else "false")),
            host=os.getenv("HOST", "0.0.0.0"),
            port=_int(os.getenv("PORT", "8000"), 8000),
            cors_origins=os.getenv("CORS_ORIGINS", "*"),
            rows=RowsConfig.from_env(),
            auth=AuthConfig.from_env(),
            logging=LoggingConfig.from_env(),
        )
