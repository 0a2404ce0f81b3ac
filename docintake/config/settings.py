from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    app_env: str = "dev"
    log_level: str = "INFO"

    db_host: str = "host.docker.internal"
    db_port: int = 5432
    db_database: str = "docintake"
    db_username: str = "docintake"
    db_password: str = "secret"
    db_pool_min_size: int = 1
    db_pool_max_size: int = 4
    db_connect_timeout_seconds: int = 10

    poll_interval_seconds: int = 5
    stale_session_timeout_seconds: int = 1800
    reaper_interval_polls: int = 60

    storage_backend: str = "local"
    storage_files_root: str = "/app/files"
    storage_s3_bucket: str = "documents"

    aws_region: str = "us-east-1"
    aws_connect_timeout_seconds: int = 10
    aws_read_timeout_seconds: int = 60
    aws_max_attempts: int = 3

    ocr_backend: str = "textract"
    ocr_max_document_bytes: int = 5 * 1024 * 1024
    ocr_feature_types: list[str] = ["FORMS", "TABLES"]

    pdf_text_engine: str = "pdfplumber"
    pdf_page_engine: str = "pymupdf"

    extraction_provider: str = "openai"
    extraction_api_key: str = ""
    extraction_model_name: str = "gpt-4o-mini"
    extraction_base_url: str | None = None
    extraction_timeout_seconds: int = 60
    extraction_temperature: float = 0.1
    extraction_max_attempts: int = 3
    extraction_retry_backoff_seconds: float = 1.0
