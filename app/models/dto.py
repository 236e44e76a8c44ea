# app/models/dto.py
# Domain models and public request/response DTOs.

from pydantic import BaseModel, ConfigDict, Field, field_validator
from typing import List, Optional

# --- Domain Models ---

class Coordinates(BaseModel):
    """A finite latitude/longitude pair."""
    model_config = ConfigDict(frozen=True)

    latitude: float = Field(..., allow_inf_nan=False, description="Latitude.")
    longitude: float = Field(..., allow_inf_nan=False, description="Longitude.")

class PointOfInterest(BaseModel):
    """A single place suggested near the searched location."""
    model_config = ConfigDict(frozen=True)

    name: str = Field(..., description="Name of the place.")
    description: str = Field("", description="One-sentence description (may be empty).")
    coordinates: Coordinates

    @field_validator("name")
    @classmethod
    def name_not_blank(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("name must not be blank")
        return value

class SearchResult(BaseModel):
    """Everything the page needs to render: map center, markers, error and loading flag."""
    center: Coordinates = Field(..., description="Current map center.")
    points_of_interest: List[PointOfInterest] = Field(default_factory=list, description="Points of interest in the order the model returned them.")
    error: Optional[str] = Field(None, description="User-facing error message of the last search.")
    is_loading: bool = Field(False, description="True while a search is in flight.")
    query: str = Field("", description="Last searched place name.")

# --- API Request Models ---

class SearchRequest(BaseModel):
    """Request model for the /api/search endpoint."""
    query: str = Field(..., description="Free-text place name in Vietnam.")

# --- Error Response Model ---

class ErrorResponse(BaseModel):
    """Standardized error response model."""
    error: str = Field(..., description="A machine-readable error code.")
    detail: str = Field(..., description="A human-readable explanation.")
