import codecs
from typing import Optional
from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import field_validator


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="RECORDCSV_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )

    # Encodings (Windows-31J is what spreadsheet tools write for ja locales)
    EXPORT_ENCODING: str = "cp932"
    IMPORT_ENCODING: str = "cp932"
    UPLOAD_ENCODING: str = "cp932"

    # Export
    FORCE_QUOTES: bool = True

    # Attribute names
    LOCALE: str = "ja"
    LOCALE_PATH: Optional[str] = None  # Directory holding <locale>.yml files

    # Logging
    LOG_LEVEL: str = "INFO"
    LOG_DIR: Optional[str] = None  # File logging is off unless set

    @field_validator("EXPORT_ENCODING", "IMPORT_ENCODING", "UPLOAD_ENCODING")
    @classmethod
    def check_encoding(cls, v: str) -> str:
        try:
            return codecs.lookup(v).name
        except LookupError:
            raise ValueError(f"Unknown text encoding: {v}")


settings = Settings()
