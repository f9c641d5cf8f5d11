from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    ENV: str = "dev"
    LOG_LEVEL: str = "INFO"
    BUSINESS_NAME: str = "Your Studio"
    BUSINESS_TIMEZONE: str = "America/New_York"

    STORE_PROVIDER: str = "memory"  # "memory" | "json"
    STORE_PATH: str = "./data/studiodesk.json"

    DEFAULT_COMMISSION_RATE: float = 0.10
    COMMISSION_RATES: dict[str, float] = Field(
        default_factory=lambda: {
            "front-desk": 0.15,
            "coach": 0.10,
            "instructor": 0.10,
            "head-coach": 0.12,
            "manager": 0.05,
            "owner": 0.0,
        }
    )


settings = Settings()
