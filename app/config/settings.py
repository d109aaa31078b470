from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    app_env: str = "dev"
    log_level: str = "INFO"

    storage_backend: str = "memory"

    db_host: str = "host.docker.internal"
    db_port: int = 5432
    db_database: str = "docvalidator"
    db_username: str = "docvalidator"
    db_password: str = "secret"
    db_pool_min_size: int = 1
    db_pool_max_size: int = 10
    db_connect_timeout_seconds: float = 10.0

    blob_root: str = "/app/files"

    fetch_backend: str = "blob"
    fetch_max_attempts: int = 3
    fetch_backoff_seconds: float = 1.0
    fetch_timeout_seconds: int = 30

    allowed_extensions: list[str] = ["pdf", "doc", "docx", "txt"]
    text_extensions: list[str] = ["txt"]
    max_upload_bytes: int = 10 * 1024 * 1024

    corruption_rate: float = 0.1
    corruption_seed: int | None = None

    oracle_provider: str = "example"
    oracle_api_key: str = ""
    oracle_model_name: str = ""
    oracle_base_url: str = ""
    oracle_timeout_seconds: int = 30
    oracle_temperature: float = 0.0
    oracle_max_input_chars: int = 12000
