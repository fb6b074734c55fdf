# neo4j_helper/config/settings.py
"""
Configuration settings for neo4j_helper.
Uses Pydantic BaseSettings for automatic environment variable loading.
"""

from __future__ import annotations

from dotenv import load_dotenv
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

load_dotenv()


class HelperSettings(BaseSettings):
    """Full configuration for the Neo4j helper."""

    # Neo4j Connection Settings
    NEO4J_URI: str = Field("bolt://localhost:7687", alias="NEO4J_CONNECTION_STRING")
    NEO4J_USER: str = "neo4j"
    NEO4J_PASSWORD: str = "neo4j_password"
    NEO4J_DATABASE: str | None = "neo4j"

    # Runtime environment; anything starting with "prod" is a production runtime
    APP_ENV: str = "development"

    # Record mapping: fields whose driver temporal values are rendered as ISO strings
    TIMESTAMP_FIELDS: list[str] = ["createdAt", "updatedAt", "identity"]

    # Logging
    LOG_LEVEL_STR: str = Field("INFO", alias="LOG_LEVEL")
    LOG_FORMAT: str = "%(asctime)s - %(levelname)s - [%(name)s:%(funcName)s:%(lineno)d] - %(message)s"
    LOG_DATE_FORMAT: str = "%Y-%m-%d %H:%M:%S"
    LOG_FILE: str | None = None

    @property
    def is_production(self) -> bool:
        return self.APP_ENV.strip().lower().startswith("prod")

    model_config = SettingsConfigDict(
        env_prefix="",
        env_file=".env",
        extra="ignore",
        populate_by_name=True,
    )


settings = HelperSettings()
