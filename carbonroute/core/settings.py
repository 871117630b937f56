from functools import lru_cache
from typing import List
from pydantic_settings import BaseSettings
from pydantic import validator


class Settings(BaseSettings):
    # API Configuration
    HOST: str = "0.0.0.0"
    PORT: int = 8000
    ALLOWED_ORIGINS: List[str] = ["*"]

    # Maps API Keys
    GOOGLE_MAPS_API_KEY: str | None = None

    # BMKG public forecast API
    BMKG_BASE_URL: str = "https://api.bmkg.go.id/publik/prakiraan-cuaca"

    # External fetch behaviour
    REQUEST_TIMEOUT_SECONDS: float = 10.0
    FETCH_MAX_ATTEMPTS: int = 3

    # Calculation engine
    WEATHER_ADJUSTMENT_SOURCE: str = "scenario"  # "scenario" or "live"
    APPLY_ROUTE_ADJUSTMENT: bool = False
    FALLBACK_DISTANCE_KM: float = 150.0

    # Seed for the mock weather generator used when BMKG is unreachable
    MOCK_WEATHER_SEED: int = 42

    LOG_LEVEL: str = "INFO"

    # Environment name
    ENVIRONMENT: str = "development"

    @validator("ALLOWED_ORIGINS", pre=True)
    def assemble_cors_origins(cls, v: str | List[str]) -> List[str]:
        if isinstance(v, str) and not v.startswith("["):
            return [i.strip() for i in v.split(",")]
        elif isinstance(v, (list, str)):
            return v
        raise ValueError(v)

    @validator("WEATHER_ADJUSTMENT_SOURCE")
    def validate_weather_source(cls, v: str) -> str:
        v = v.lower()
        if v not in ("scenario", "live"):
            raise ValueError("WEATHER_ADJUSTMENT_SOURCE must be 'scenario' or 'live'")
        return v

    class Config:
        case_sensitive = True
        env_file = ".env"
        env_file_encoding = "utf-8"


@lru_cache()
def get_settings() -> Settings:
    return Settings()


settings = get_settings()
