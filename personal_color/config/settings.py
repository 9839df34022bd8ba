from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    app_env: str = "dev"
    log_level: str = "INFO"

    db_host: str = "host.docker.internal"
    db_port: int = 5432
    db_database: str = "personal_color"
    db_username: str = "personal_color"
    db_password: str = "secret"
    db_pool_min_size: int = 1
    db_pool_max_size: int = 10

    upload_dir: str = "uploads"
    max_file_size_bytes: int = 10 * 1024 * 1024
    allowed_extensions: list[str] = [".jpg", ".jpeg", ".png", ".gif", ".bmp"]

    analysis_max_workers: int = 50
    analysis_queue_capacity: int = 100
    analysis_thread_name_prefix: str = "PersonalColor-"

    classifier_engine: str = "placeholder"
    repository_backend: str = "postgres"
