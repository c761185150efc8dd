from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables"""
    
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False
    )
    
    # Database
    database_url: str = "sqlite+aiosqlite:///./careersite.db"
    
    # Sections
    provisional_id_prefix: str = "new-"  # Client-side ids for not-yet-saved sections
    
    # Theme fallbacks when a company has no colors set
    default_primary_color: str = "#0ea5e9"
    default_accent_color: str = "#7c3aed"
    
    # App
    debug: bool = False
    allowed_origins: str = ""  # Comma-separated


settings = Settings()
