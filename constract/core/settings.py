"""Application settings and configuration."""
from typing import Literal
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration settings."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )

    # LLM Providers (키가 없으면 규칙 기반 분석으로 동작)
    openai_api_key: str | None = Field(default=None, description="OpenAI API key (gpt-4o-mini)")
    anthropic_api_key: str | None = Field(default=None, description="Anthropic Claude API key")

    # LLM Configuration
    primary_llm: Literal["openai", "claude"] = Field(
        default="openai",
        description="AI 분석에 사용할 LLM provider"
    )
    openai_analysis_model: str = Field(
        default="gpt-4o-mini",
        description="OpenAI model for contract risk analysis"
    )
    claude_analysis_model: str = Field(
        default="claude-3-5-sonnet-latest",
        description="Claude model for contract risk analysis"
    )

    # Model Parameters
    llm_temperature: float = Field(
        default=0.3,
        ge=0.0,
        le=2.0,
        description="LLM temperature"
    )
    llm_max_tokens: int = Field(
        default=2000,
        ge=256,
        le=16384,
        description="Maximum tokens for LLM response"
    )
    llm_timeout: int = Field(
        default=30,
        ge=1,
        description="LLM request timeout (seconds)"
    )

    # API Configuration
    ai_allowed_origins: str = Field(
        default="*",
        description="CORS allowed origins (comma-separated)"
    )

    # Observability
    sentry_dsn: str | None = Field(
        default=None,
        description="Sentry DSN for error tracking"
    )

    # Application
    app_env: Literal["development", "staging", "production"] = Field(
        default="development",
        description="Application environment"
    )
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(
        default="INFO",
        description="Logging level"
    )

    @property
    def llm_api_key(self) -> str | None:
        """primary_llm에 해당하는 API 키 (없으면 None)."""
        key = self.openai_api_key if self.primary_llm == "openai" else self.anthropic_api_key
        return key or None

    @property
    def cors_origins(self) -> list[str]:
        """Parse CORS origins from comma-separated string."""
        if self.ai_allowed_origins == "*":
            return ["*"]
        return [origin.strip() for origin in self.ai_allowed_origins.split(",")]


# Global settings instance
settings = Settings()
