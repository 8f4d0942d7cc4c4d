"""Application configuration using pydantic-settings."""
from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )

    # Database
    database_url: str
    db_pool_size: int = Field(default=10, ge=1, validation_alias="DB_POOL_SIZE")
    db_max_overflow: int = Field(default=10, ge=0, validation_alias="DB_MAX_OVERFLOW")

    # Token signing - the secret has no default and must be supplied explicitly
    jwt_secret: str = Field(min_length=32, validation_alias="JWT_SECRET")
    jwt_expiration_hours: int = Field(default=24, ge=1, validation_alias="JWT_EXPIRATION_HOURS")

    # Argon2id cost parameters (argon2-cffi defaults)
    password_hash_time_cost: int = Field(
        default=3, ge=1, validation_alias="PASSWORD_HASH_TIME_COST",
    )
    password_hash_memory_cost: int = Field(
        default=65536, ge=8, validation_alias="PASSWORD_HASH_MEMORY_COST",
    )
    password_hash_parallelism: int = Field(
        default=4, ge=1, validation_alias="PASSWORD_HASH_PARALLELISM",
    )

    # CORS - comma-separated list of allowed origins (stored as string, parsed via property)
    cors_origins_str: str = Field(
        default="http://localhost:5173",
        validation_alias="CORS_ORIGINS",
    )

    @field_validator("jwt_secret")
    @classmethod
    def reject_blank_secret(cls, v: str) -> str:
        """A secret made only of whitespace is as good as no secret."""
        if not v.strip():
            raise ValueError("JWT_SECRET must not be blank")
        return v

    @property
    def cors_origins(self) -> list[str]:
        """Parse comma-separated CORS origins string into a list."""
        if not self.cors_origins_str:
            return []
        return [origin.strip() for origin in self.cors_origins_str.split(",") if origin.strip()]


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
