from pydantic_settings import BaseSettings

class Settings(BaseSettings):
    # App
    ENV: str = "development"
    PORT: int = 8000
    LOG_LEVEL: str = "INFO"

    # Remote bill store (REST API backing the web client)
    API_URL: str = "http://localhost:5678"
    API_TOKEN: str | None = None
    API_TIMEOUT: int = 30  # Timeout w sekundach

    # Owner of the bills created from this client
    USER_EMAIL: str | None = None

    model_config = {
        "env_file": ".env",
        "extra": "ignore"
    }

settings = Settings()
