from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=str(Path(__file__).parent.parent.parent / ".env"),
        case_sensitive=False,
    )

    # Application
    app_env: str = "development"
    debug: bool = False
    log_level: str = "INFO"

    # Parsing
    pdf_max_size_mb: int = 25
    statement_year_scan_lines: int = 20

    # Money / amounts
    home_currency: str = "HKD"

    # Record import
    import_default_tags: list[str] = ["Personal"]


settings = Settings()
