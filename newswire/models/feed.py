"""Feed model for operator-configured RSS/Atom sources."""

from typing import Optional

from pydantic import Field, field_validator

from .base import WireModel

DEFAULT_CATEGORY = "Other"


class Feed(WireModel):
    """RSS/Atom feed source."""

    id: str = Field(..., min_length=1, description="Unique feed identifier")
    name: str = Field(..., description="Display name")
    url: str = Field(..., min_length=1, description="RSS/Atom feed URL")
    category: str = Field(DEFAULT_CATEGORY, description="Category used to group feeds")
    logo_url: Optional[str] = Field(None, description="Logo override for every article of this feed")

    @field_validator("category", mode="before")
    @classmethod
    def default_category(cls, v: Optional[str]) -> str:
        """Empty categories fall back to the default one."""
        if v is None or not str(v).strip():
            return DEFAULT_CATEGORY
        return v

    @field_validator("logo_url", mode="before")
    @classmethod
    def blank_logo_is_none(cls, v: Optional[str]) -> Optional[str]:
        if v is not None and not str(v).strip():
            return None
        return v
