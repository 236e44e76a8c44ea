# app/core/config.py
# Runtime settings loaded from the environment (and .env for local runs).

from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field
from typing import Optional

from app.models.dto import Coordinates

class Settings(BaseSettings):
    PROJECT_NAME: str = "Khám Phá Địa Điểm Việt Nam"
    VERSION: str = "0.2.0"
    BRIEF_DESCRIPTION: str = "A small map application that finds a place in Vietnam and lists five nearby points of interest using Gemini."

    ENV: str = Field("development", description="Application environment (e.g., production, development)")

    # --- Gemini ---
    # No fallback key: a missing key leaves the search endpoints unavailable.
    GEMINI_API_KEY: Optional[str] = Field(None, description="Google Gemini API key")
    GEMINI_MODEL: str = Field("gemini-2.5-flash", description="Gemini model identifier used for both calls")

    # --- Search ---
    COUNTRY_NAME: str = Field("Việt Nam", description="Country appended to every place name in the coordinate prompt")
    POI_COUNT: int = Field(5, description="Number of points of interest requested from the model")
    MAX_QUERY_LENGTH: int = Field(200, description="Longest place name accepted by the search")

    # Da Nang, Vietnam
    DEFAULT_CENTER_LAT: float = 16.047079
    DEFAULT_CENTER_LNG: float = 108.206230

    # --- UI ---
    DEFAULT_LANG: str = Field("vi", description="Language of the landing page when none is requested")

    # Pydantic configuration
    model_config = SettingsConfigDict(
        env_file=".env",
        extra="ignore"
    )

settings = Settings()

def default_center() -> Coordinates:
    """The map center used before the first search and after a failed one."""
    return Coordinates(latitude=settings.DEFAULT_CENTER_LAT, longitude=settings.DEFAULT_CENTER_LNG)
