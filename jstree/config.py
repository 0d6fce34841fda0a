"""
Application configuration management.
"""

from pydantic_settings import BaseSettings
from typing import List, Optional


class Settings(BaseSettings):
    """Settings loaded from JSTREE_* environment variables."""

    # Logging
    log_level: str = "INFO"

    # Acorn runner
    acorn_path: Optional[str] = None
    acorn_flags: List[str] = ["--ecma6", "--module"]

    # Concurrent assembly
    assembly_timeout_seconds: Optional[float] = None
    max_workers: int = 8

    class Config:
        env_prefix = "JSTREE_"
        env_file = ".env"
        case_sensitive = False


# Global settings instance
settings = Settings()
