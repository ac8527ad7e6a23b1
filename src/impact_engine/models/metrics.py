from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, confloat


Score = confloat(ge=0, le=100)


class MetricSnapshot(BaseModel):
    model_config = ConfigDict(frozen=True)

    entity_id: str
    captured_at: datetime
    consolidated_impact: Optional[Score] = Field(
        default=None, description="Pre-computed consolidated score; authoritative when present"
    )
    financial_score: Optional[Score] = None
    technology_score: Optional[Score] = None
    industry_score: Optional[Score] = None
    social_score: Optional[Score] = None
    ai_impact_startup: Optional[Score] = Field(
        default=None, description="Technology proxy used when technology_score is missing"
    )
