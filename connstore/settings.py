from __future__ import annotations

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    # Runtime
    environment: str = Field(default="development", validation_alias="ENVIRONMENT")
    log_level: str = Field(default="INFO", validation_alias="LOG_LEVEL")

    # AWS
    aws_region: str = Field(default="us-east-1", validation_alias="AWS_REGION")
    # Optional: point the clients at DynamoDB Local / localstack.
    aws_endpoint_url: str | None = Field(default=None, validation_alias="AWS_ENDPOINT_URL")

    # Data
    connections_table_name: str | None = Field(
        default=None, validation_alias="CONNECTIONS_TABLE_NAME"
    )
    queue_url: str | None = Field(default=None, validation_alias="QUEUE_URL")
    scan_page_size: int = Field(default=25, gt=0, validation_alias="SCAN_PAGE_SIZE")

    # Key used to seal scan cursors handed out to callers.
    cursor_token_key: str | None = Field(default=None, validation_alias="CURSOR_TOKEN_KEY")

    # ---- helpers / derived flags ----
    @property
    def normalized_environment(self) -> str:
        v = (self.environment or "").strip().lower()
        if v in ("prod", "production"):
            return "production"
        if v in ("stage", "staging"):
            return "staging"
        if v in ("dev", "development"):
            return "development"
        return v or "development"

    @property
    def is_production(self) -> bool:
        return self.normalized_environment == "production"

    def require_in_production(self) -> None:
        """
        Enforce required settings in production.

        Development/staging may run with partial config; production must not
        seal cursors with the development fallback key.
        """
        if not self.is_production:
            return

        missing: list[str] = []
        if not (self.cursor_token_key and str(self.cursor_token_key).strip()):
            missing.append("CURSOR_TOKEN_KEY")

        if missing:
            raise RuntimeError(
                "Missing required production environment variables: "
                + ", ".join(missing)
            )

    def to_log_safe_dict(self) -> dict[str, object]:
        """
        A redacted representation safe for structured logs / diagnostics.
        """
        def _has(v: object) -> bool:
            return v is not None and str(v).strip() != ""

        return {
            "environment": self.normalized_environment,
            "log_level": self.log_level,
            "aws": {
                "aws_region": self.aws_region,
                "aws_endpoint_url": self.aws_endpoint_url,
            },
            "data": {
                "connections_table_name": self.connections_table_name,
                "queue_url": self.queue_url,
                "scan_page_size": self.scan_page_size,
                "cursor_token_key_configured": _has(self.cursor_token_key),
            },
        }


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    s = Settings()
    s.require_in_production()
    return s
