from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    FRONTEND_URL: str = "http://localhost:3000"
    LOG_LEVEL: str = "INFO"
    HISTORY_FILE: str = "data/history.json"
    HISTORY_KEY: str = "forexCalculatorHistory"
    HISTORY_LIMIT: int = 10
    # Legacy builds used 0.01 for gold, silver and the indices
    METAL_INDEX_PIP_MULTIPLIER: float = 0.10
    PRICE_LOOKUP_DELAY: float = 0.0


settings = Settings()
