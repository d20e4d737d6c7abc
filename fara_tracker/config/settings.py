from pathlib import Path

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    app_env: str = "dev"
    log_level: str = "INFO"

    db_host: str = "localhost"
    db_port: int = 5432
    db_database: str = "fara_tracker"
    db_username: str = "fara_tracker"
    db_password: str = "secret"

    manifest_path: Path = Path("data/FARA_All_RegistrantDocs.csv")
    downloads_dir: Path = Path("tmp/fara_downloads")
    download_rate_limit_seconds: float = 2.0
    download_timeout_seconds: int = 30
    download_user_agent: str = "FARA-Transparency-Tool/1.0 (Public Interest Research)"

    pdf_engine: str = "pdftotext"
    pdftotext_binary: str = "pdftotext"
    pdf_timeout_seconds: int = 30
    pdf_min_text_bytes: int = 100
    pdf_fallback_max_chars: int = 20000

    extraction_provider: str = "openai"

    extraction_openai_api_key: str = Field(
        default="",
        validation_alias=AliasChoices("extraction_openai_api_key", "openai_api_key"),
    )
    extraction_openai_model_name: str = "gpt-4o-mini"
    extraction_openai_timeout_seconds: int = 60
    extraction_openai_temperature: float = 0.1
    extraction_openai_max_tokens: int = 2000

    extraction_openai_compatible_base_url: str = ""
    extraction_openai_compatible_api_key: str = ""
    extraction_openai_compatible_model_name: str = ""
    extraction_openai_compatible_timeout_seconds: int = 60

    extraction_ollama_api_key: str = "ollama"
    extraction_ollama_model_name: str = "llama3.1"
    extraction_ollama_timeout_seconds: int = 120
