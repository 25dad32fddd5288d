from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    app_env: str = "dev"
    log_level: str = "INFO"

    portal_base_url: str = "https://idocswebdpss.meathcoco.ie/iDocsWebDPSS"
    user_agent: str = (
        "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
        "(KHTML, like Gecko) Chrome/91.0.4472.124 Safari/537.36"
    )
    accept_language: str = "en-US,en;q=0.5"
    page_timeout_seconds: int = 30
    download_timeout_seconds: int = 60
    politeness_delay_seconds: float = 1.0

    storage_mode: str = "local"
    downloads_root: str = "."
    debug_dir: str = "."
    debug_artifacts_enabled: bool = True

    s3_bucket: str = ""
    s3_region: str = "us-east-1"
    s3_prefix: str = "planning-docs"
    s3_source_tag: str = "meath-planning-scraper"
