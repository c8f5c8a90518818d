from pydantic import BaseModel, Field
from typing import Optional
import os


def _env_float(name: str) -> Optional[float]:
    val = os.getenv(name)
    if val is None or not val.strip():
        return None
    return float(val)


class Settings(BaseModel):
    # Factories, so a Settings() built after load_dotenv() sees the new values.
    base_url: str = Field(default_factory=lambda: os.getenv("PLACEPICKER_BASE_URL", "https://nominatim.openstreetmap.org"))
    user_agent: str = Field(
        default_factory=lambda: os.getenv("PLACEPICKER_USER_AGENT", "placepicker/0.1 (https://example.invalid/placepicker)")
    )
    locale: str = Field(default_factory=lambda: os.getenv("PLACEPICKER_LOCALE", "en_US"))
    api_key: str = Field(default_factory=lambda: os.getenv("PLACEPICKER_API_KEY", ""))
    device_lat: Optional[float] = Field(default_factory=lambda: _env_float("PLACEPICKER_DEVICE_LAT"))
    device_lon: Optional[float] = Field(default_factory=lambda: _env_float("PLACEPICKER_DEVICE_LON"))
    log_level: str = Field(default_factory=lambda: os.getenv("PLACEPICKER_LOG_LEVEL", "INFO"))

settings = Settings()
