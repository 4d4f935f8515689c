from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    app_name: str = "Lumee Environment Signal"
    timezone: str = "Asia/Seoul"

    # Provider credentials
    openweather_api_key: str = ""
    google_maps_api_key: str = ""

    # Air quality: newer endpoint first, older one as the single fallback
    air_quality_primary_url: str = "https://api.openweathermap.org/data/3.0/air_pollution"
    air_quality_secondary_url: str = "https://api.openweathermap.org/data/2.5/air_pollution"

    weather_url: str = "https://api.openweathermap.org/data/3.0/onecall"

    pollen_url: str = "https://pollen.googleapis.com/v1/forecast:lookup"
    pollen_language_code: str = "ko"
    pollen_days: int = 1

    # A timeout counts as a plain fetch failure
    http_timeout_seconds: float = 10.0

    # Salience increment applied when a signal hits a user's sensitivity
    brightness_boost: int = 30

    # Indicator: "sim" for development; "http" for the LED bridge
    indicator_mode: str = Field(default="sim")
    indicator_ip: str = "192.168.4.1"
    indicator_port: int = 80
    indicator_path: str = "/led"
    indicator_timeout_seconds: float = 3.0

    # Logging
    log_file: str = "lumee.log"
    log_level: str = "INFO"


settings = Settings()
