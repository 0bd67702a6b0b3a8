from datetime import datetime, timezone
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, field_validator

from launchboard.utils.time import parse_utc


class LaunchRecord(BaseModel):
    """A single launch from /v4/launches. Only name, success and date_utc drive filtering."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    # Identifiers
    id: Optional[str] = None
    name: Optional[str] = None
    flight_number: Optional[int] = None

    # Timing
    date_utc: Optional[datetime] = None
    date_precision: Optional[str] = None
    upcoming: Optional[bool] = None

    # Mission outcome: True, False, or None when unknown
    success: Optional[bool] = None

    # Metadata
    details: Optional[str] = None
    rocket: Optional[str] = None
    launchpad: Optional[str] = None

    @field_validator("date_utc", mode="before")
    @classmethod
    def _parse_date_utc(cls, value: Any) -> Any:
        if isinstance(value, str):
            return parse_utc(value)
        return value

    @field_validator("date_utc")
    @classmethod
    def _ensure_utc(cls, value: Optional[datetime]) -> Optional[datetime]:
        if value is None:
            return None
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value.astimezone(timezone.utc)
