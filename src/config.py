from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    app_name: str = "Ballot Compass"
    debug: bool = False

    openai_api_key: Optional[str] = None
    openai_api_base: str = "https://api.openai.com/v1"
    openai_model: str = "gpt-4"
    llm_temperature: float = 0.3
    llm_max_tokens: int = 1500
    enable_llm_analysis: bool = False

    civic_api_key: Optional[str] = None
    civic_api_base: str = "https://civicinfo.googleapis.com/civicinfo/v2"
    civic_timeout_seconds: float = 15.0
    enable_civic_lookup: bool = False

    recommendation_cache_enabled: bool = True

    api_host: str = "0.0.0.0"
    api_port: int = 8000
    api_reload: bool = False


settings = Settings()
