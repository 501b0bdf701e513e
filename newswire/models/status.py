"""Engine status written after every poll cycle."""

from typing import Optional

from pydantic import Field

from .base import WireModel


class EngineStatus(WireModel):
    """Freshness and reachability of the article cache."""

    last_updated_at: Optional[int] = Field(None, description="Last cycle time in epoch milliseconds")
    is_offline: bool = Field(False, description="True if no feed was reachable in the last cycle")
