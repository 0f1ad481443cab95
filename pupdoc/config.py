"""
Application configuration management.
"""

from typing import List

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Extractor settings loaded from environment variables."""

    model_config = SettingsConfigDict(env_prefix="PUPDOC_", env_file=".env", case_sensitive=False, frozen=True, extra="ignore")

    # Application
    log_level: str = "INFO"

    # Plans are only understood by runtimes at or above this version
    minimum_plan_version: str = "5.0.0"
    plans_path_pattern: str = r"^plans/"

    # Blank lines tolerated between a comment block and its declaration
    max_blank_lines: int = 1


class RuntimeSettings(BaseSettings):
    """
    Settings of the hosting Puppet runtime.

    Queried read-only: the parser never mutates these, it derives grammar
    options from them instead.
    """

    model_config = SettingsConfigDict(env_prefix="PUPPET_", case_sensitive=False, frozen=True, extra="ignore")

    version: str = "6.0.0"
    supported_settings: List[str] = ["tasks"]

    def supports(self, key: str) -> bool:
        """Return True if the runtime knows the given setting key."""
        return key in self.supported_settings


# Global settings instances
settings = Settings()
runtime_settings = RuntimeSettings()
