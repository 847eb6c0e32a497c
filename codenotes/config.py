"""Environment configuration using Pydantic Settings."""

from functools import lru_cache
from pathlib import Path

from dotenv import load_dotenv
from pydantic_settings import BaseSettings, SettingsConfigDict

# Load .env file early to ensure environment variables are set
load_dotenv()


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False)

    algolia_app: str = ""
    algolia_search_key: str = ""
    algolia_admin_key: str = ""
    algolia_index: str = "notes"
    webhook_secret: str | None = None
    site_url: str = "https://notes.zander.wtf"

    content_dir: Path = Path("src/notes")
    output_dir: Path = Path("_site")

    site_title: str = "Code Notes"
    site_description: str = "TILs, snippets—my digital code garden 🌱. By Zander Martineau"
    site_lang: str = "en"
    author_name: str = "Zander"
    author_url: str = "https://zander.wtf"

    host: str = "127.0.0.1"
    port: int = 8000
    log_level: str = "INFO"
    http_timeout: float = 10.0


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
