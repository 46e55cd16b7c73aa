"""Application settings."""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Event store settings loaded from environment variables.

    Table names are resolved per aggregate type: an explicit entry in
    ``tables`` wins, then ``table_prefix`` + aggregate type, then
    ``default_table``.
    """

    model_config = SettingsConfigDict(
        env_prefix="EVENT_STORE_",
        env_file=".env",
        extra="ignore",
    )

    # AWS
    aws_region: str = "ap-northeast-1"
    environment: str = "development"
    # DynamoDB Local などを使う場合のみ設定
    endpoint_url: str | None = None

    # DynamoDB
    default_table: str = "events-development"
    tables: dict[str, str] = Field(default_factory=dict)
    table_prefix: str = ""
    page_size: int | None = None

    # Observability
    service_name: str = "EventStore"
    tracing_enabled: bool = False
    metrics_enabled: bool = False
    metrics_namespace: str = "EventStore"

    # Logging
    log_level: str = "INFO"
    log_json: bool = False

    def table_name_for(self, aggregate_type: str) -> str:
        """Resolve the table that holds events of the given aggregate type."""
        if aggregate_type in self.tables:
            return self.tables[aggregate_type]
        if self.table_prefix:
            return f"{self.table_prefix}{aggregate_type}"
        return self.default_table
