from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # Application
    debug: bool = False
    cors_origins: list[str] = ["http://localhost:3000"]

    # AI / Anthropic
    # Empty string = placeholder analysis (no model call)
    anthropic_api_key: str = ""
    analyzer_model: str = "claude-opus-4-5-20251101"
    analyzer_max_tokens: int = 16000
    analyzer_thinking_budget: int = 10000

    # GitHub - optional token for private repos and higher rate limits
    github_token: str = ""

    # Storage backend
    # "memory" keeps everything in-process (development), "remote" uses
    # a Redis REST endpoint for key/value data and S3-compatible blob storage
    storage_backend: Literal["memory", "remote"] = "memory"

    # Key/value store (Upstash / Vercel KV REST API)
    kv_rest_api_url: str = ""
    kv_rest_api_token: str = ""

    # Blob store (S3-compatible, e.g. MinIO)
    blob_endpoint: str = "localhost:9000"
    blob_access_key: str = ""
    blob_secret_key: str = ""
    blob_bucket: str = "arch-flow"
    blob_secure: bool = False

    # Retention
    job_ttl_seconds: int = 60 * 60  # 1 hour
    cache_ttl_seconds: int = 60 * 60 * 24 * 7  # 7 days

    # Status stream polling interval (seconds)
    stream_poll_interval: float = 1.0

    # Mermaid rendering service
    mermaid_render_url: str = "https://mermaid.ink/svg"

    @property
    def mock_mode(self) -> bool:
        """No GitHub or Anthropic credentials: skip download and use placeholder analysis."""
        return not self.github_token and not self.anthropic_api_key

    @property
    def remote_storage_enabled(self) -> bool:
        """Check if remote storage is selected and the KV endpoint is configured."""
        return self.storage_backend == "remote" and bool(self.kv_rest_api_url)


settings = Settings()
