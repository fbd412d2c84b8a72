from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    app_env: str = "dev"
    log_level: str = "INFO"

    csv_path: Path = Path("data/PaymentSlips.csv")
    staging_root: Path = Path("temp")

    raster_engine: str = "graphicsmagick"
    raster_density: int = 300
    raster_timeout_seconds: int = 120

    download_timeout_seconds: int = 60

    fail_fast: bool = True

    dedup_enabled: bool = False
    db_host: str = "localhost"
    db_port: int = 5432
    db_database: str = "slipstage"
    db_username: str = "slipstage"
    db_password: str = "secret"
    db_pool_min_size: int = 1
    db_pool_max_size: int = 4
    db_connect_timeout_seconds: int = 10
    payment_table: str = "payment_records"

    extraction_provider: str = "none"
    extraction_openai_api_key: str = ""
    extraction_openai_model_name: str = "gpt-4o-mini"
    extraction_openai_timeout_seconds: int = 30
    extraction_openai_base_url: str | None = None
