# Request Pipeline Configuration
"""Configuration settings loaded from environment variables."""

from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Service settings from environment variables."""

    # Service identity
    service_name: str = Field(default="request-pipeline", description="Service name")
    service_version: str = Field(default="1.0.0", description="Service version")
    environment: str = Field(
        default="development",
        description="Deployment environment (development, test, production)",
    )

    # Server settings
    host: str = Field(default="0.0.0.0", description="Server host")
    port: int = Field(default=8080, description="Server port")
    log_level: str = Field(default="INFO", description="Logging level")
    debug: bool = Field(default=False, description="Debug mode")

    # Pipeline
    policy_file: str = Field(
        default="policy.yaml",
        description="Path to the security policy file",
    )
    strict_contracts: Optional[bool] = Field(
        default=None,
        description=(
            "Raise on stage contract violations. Defaults to true outside "
            "production; in production repeated continuations are logged and ignored"
        ),
    )

    @property
    def is_production(self) -> bool:
        return self.environment.lower() == "production"

    @property
    def enforce_contracts(self) -> bool:
        if self.strict_contracts is not None:
            return self.strict_contracts
        return not self.is_production

    class Config:
        env_prefix = "PIPELINE_"
        case_sensitive = False
        env_file = ".env"
        env_file_encoding = "utf-8"
        extra = "ignore"


# Global settings instance
settings = Settings()
