from typing import Literal, Optional

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    # App
    app_name: str = "skycast"
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"

    # Provider
    openweather_api_key: str
    openweather_base_url: str = "https://api.openweathermap.org/data/2.5"
    openweather_icon_url: str = "https://openweathermap.org/img/wn"
    http_timeout_seconds: float = 5.0

    # Forecast strip length, in calendar days
    forecast_days: int = 5

    # Fallback geolocation when the device sends no coordinates, e.g. "https://ipapi.co/json/"
    ip_geolocation_url: Optional[str] = None

    @field_validator("log_level", mode="before")
    @classmethod
    def _upper_log_level(cls, v):
        return v.strip().upper() if isinstance(v, str) else v


settings = Settings()
