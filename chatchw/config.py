"""Application configuration loaded from environment variables."""

from pathlib import Path
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Global application settings."""

    default_document: str = Field(
        default="who-guide.pdf",
        description="Document used when a source cannot be tied to a file.",
    )
    pdf_base_path: str = "/pdfs"
    pdf_root: str = "public/pdfs"
    document_suffix: str = ".pdf"
    resolver_rules_path: Optional[str] = Field(
        default=None, description="JSON file overriding the built-in rule tables."
    )

    chunk_preview_chars: int = 80
    export_filename_prefix: str = "chatCHW_export"

    openai_api_key: Optional[str] = Field(
        default=None, description="Secret key for OpenAI APIs."
    )
    openai_base_url: str = "https://api.openai.com/v1"
    openai_model_chat: str = "gpt-4.1-mini"

    log_level: str = "INFO"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    @property
    def pdf_root_path(self) -> Path:
        return Path(self.pdf_root)

    @property
    def resolver_rules_path_obj(self) -> Optional[Path]:
        if not self.resolver_rules_path:
            return None
        return Path(self.resolver_rules_path)


settings = Settings()
