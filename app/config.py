"""
Modern configuration using Pydantic Settings for the Assessment Engine
"""
from typing import List
from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field, field_validator
from enum import Enum


class Environment(str, Enum):
    DEVELOPMENT = "development"
    STAGING = "staging"
    PRODUCTION = "production"


class Settings(BaseSettings):
    """Application settings with validation and type safety"""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )

    # Environment
    environment: Environment = Field(default=Environment.DEVELOPMENT)
    debug: bool = Field(default=False)
    cors_origins: List[str] = Field(default_factory=lambda: ["*"])

    # Grading
    grading_concurrency: int = Field(
        default=8,
        description="Max questions graded at once by the async engine entrypoint"
    )
    passing_score: int = Field(
        default=60,
        description="Attempt percentage at or above which an attempt is marked as passed"
    )

    # Generation planning
    max_question_count: int = Field(default=100)

    # Logging
    log_level: str = Field(default="INFO")
    log_format: str = Field(default="json")

    @field_validator("grading_concurrency", "max_question_count")
    def validate_positive(cls, v):
        if v < 1:
            raise ValueError("value must be at least 1")
        return v

    @field_validator("passing_score")
    def validate_passing_score(cls, v):
        if not 0 <= v <= 100:
            raise ValueError("passing_score must be between 0 and 100")
        return v

    @property
    def is_production(self) -> bool:
        return self.environment == Environment.PRODUCTION

    @property
    def is_development(self) -> bool:
        return self.environment == Environment.DEVELOPMENT


# Create global settings instance
settings = Settings()
