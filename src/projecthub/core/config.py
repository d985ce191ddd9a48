from functools import lru_cache

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # App
    app_name: str = "ProjectHub"
    app_env: str = "development"  # development, testing, production
    debug: bool = False

    # Database
    database_url: str
    database_pool_size: int = 5
    database_max_overflow: int = 10
    database_ssl_mode: str = "prefer"  # disable, prefer, require, verify-ca, verify-full

    # Auth
    jwt_secret_key: str
    jwt_algorithm: str = "HS256"
    access_token_expire_minutes: int = 60 * 24
    auth_cookie_name: str = "authToken"
    auth_cookie_secure: bool = True
    argon2_time_cost: int = 3
    argon2_memory_cost: int = 65536
    argon2_parallelism: int = 1

    # Actor cache (Redis when REDIS_URL is set, in-process otherwise)
    redis_url: str | None = None
    redis_pool_size: int = 10
    actor_cache_ttl_seconds: int = 300

    # CORS
    cors_origins: list[str] = ["http://localhost:5173"]

    # Metrics
    metrics_api_key: str | None = None  # If set, /metrics requires this key

    # Email queue
    email_from: str = "noreply@example.com"
    app_url: str = "http://localhost:5173"

    # Image storage (S3 compatible)
    storage_bucket: str = "project-images"
    storage_region: str = "us-east-1"
    storage_endpoint_url: str | None = None  # e.g. MinIO "http://localhost:9000"
    storage_access_key_id: str | None = None
    storage_secret_access_key: str | None = None
    storage_public_base_url: str | None = None
    max_image_size_bytes: int = 5 * 1024 * 1024

    # Workflow
    workflow_max_attempts: int = 3

    @field_validator("jwt_secret_key")
    @classmethod
    def validate_jwt_secret(cls, v: str) -> str:
        if v == "change-this-to-a-secure-random-string":
            raise ValueError(
                "JWT_SECRET_KEY must be changed from default value. "
                "Generate a secure secret with: openssl rand -hex 32"
            )
        if len(v) < 32:
            raise ValueError("JWT_SECRET_KEY must be at least 32 characters")
        return v

    @field_validator("cors_origins")
    @classmethod
    def validate_cors_origins(cls, v: list[str]) -> list[str]:
        """Reject wildcards, the auth cookie requires allow_credentials=True."""
        for origin in v:
            if origin == "*":
                raise ValueError(
                    "CORS wildcard '*' is not allowed when allow_credentials=True. "
                    "Specify explicit origins instead."
                )
        return v

    @field_validator("workflow_max_attempts")
    @classmethod
    def validate_workflow_max_attempts(cls, v: int) -> int:
        if v < 1:
            raise ValueError("WORKFLOW_MAX_ATTEMPTS must be at least 1")
        return v


@lru_cache
def get_settings() -> Settings:
    return Settings()
