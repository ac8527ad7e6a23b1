from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, Field

from .funding import FundingState
from .metrics import MetricSnapshot


class EntityRecord(BaseModel):
    entity_id: str
    funding: FundingState = Field(default_factory=FundingState)
    snapshot: Optional[MetricSnapshot] = Field(default=None, description="Latest snapshot, if any")
