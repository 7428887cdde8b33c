#!/usr/bin/env python3
"""Logging configuration"""
import os
from dataclasses import dataclass


@dataclass
class LoggingConfig:
    """Logging configuration"""
    log_level: str = "INFO"
    log_format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    log_file: str = ""
    enable_console: bool = True

    # Service identity for logging
    service_name: str = "album_catalog"
    environment: str = "development"

    @classmethod
    def from_env(cls) -> 'LoggingConfig':
        """Load logging config from environment variables"""
        env = os.getenv("ENV") or os.getenv("ENVIRONMENT", "development")
        return cls(
            log_level=os.getenv("LOG_LEVEL", "DEBUG" if env == "development" else "INFO"),
            log_format=os.getenv("LOG_FORMAT", "%(asctime)s - %(name)s - %(levelname)s - %(message)s"),
            log_file=os.getenv("LOG_FILE", ""),
            enable_console=True,
            service_name=os.getenv("SERVICE_NAME", "album_catalog"),
            environment=env,
        )
