"""
Pydantic schemas for SurfSession model.
"""
from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel
from uuid import UUID
from datetime import datetime
from typing import Optional, List
from enum import Enum


class WindDirection(str, Enum):
    """Compass points accepted for wind direction."""
    N = "N"
    NE = "NE"
    E = "E"
    SE = "SE"
    S = "S"
    SW = "SW"
    W = "W"
    NW = "NW"


class TideType(str, Enum):
    """Enum for tide values."""
    LOW = "low"
    RISING = "rising"
    HIGH = "high"
    FALLING = "falling"


class SessionFields(BaseModel):
    """Editable session fields, already validated at the form layer."""
    title: str
    description: Optional[str] = None
    location: str
    wave_height: float
    wave_period: float
    wind_speed: float
    wind_direction: WindDirection
    tide_type: TideType
    rating: int


class SessionResponse(BaseModel):
    """Schema for session responses."""
    id: UUID
    user_id: UUID
    title: str
    description: Optional[str]
    image_url: Optional[str]
    location: str
    wave_height: float
    wave_period: float
    wind_speed: float
    wind_direction: WindDirection
    tide_type: TideType
    rating: int
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class SessionFeedItem(SessionResponse):
    """Session annotated with author and social aggregates."""
    username: Optional[str] = None
    avatar_url: Optional[str] = None
    like_count: int = 0
    comment_count: int = 0
    user_liked: bool = False


class Pagination(BaseModel):
    """Pagination metadata, serialized in camelCase."""
    current_page: int
    total_pages: int
    has_next: bool
    has_prev: bool

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class FeedPagination(Pagination):
    total_sessions: int


class FeedResponse(BaseModel):
    """Schema for paginated feed."""
    sessions: List[SessionFeedItem]
    pagination: FeedPagination


class SessionListResponse(BaseModel):
    sessions: List[SessionFeedItem]


class SessionDetailResponse(BaseModel):
    session: SessionFeedItem


class SessionEnvelope(BaseModel):
    """Schema for create/update responses."""
    message: str
    session: SessionResponse
