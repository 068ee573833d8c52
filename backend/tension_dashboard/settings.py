from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    GNEWS_API_KEY: str = ""
    NEWS_QUERY: str = "India Pakistan"
    NEWS_LANGUAGE: str = "en"
    NEWS_MAX_ARTICLES: int = 40
    CACHE_TTL_MS: int = 15 * 60 * 1000
    REFRESH_INTERVAL_SECONDS: int = 300
    HTTP_TIMEOUT_SECONDS: float = 15.0
    PORT: int = 3000


settings = Settings()
