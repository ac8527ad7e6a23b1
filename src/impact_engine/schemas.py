from __future__ import annotations

from typing import Any, List, Optional

from pydantic import BaseModel, Field, confloat, conint

from .models.funding import DealTerms, FundingState, Holding
from .models.metrics import MetricSnapshot
from .models.results import HoldingsSummary, ProjectionResult, RollupResult, ScoreResult


class FundingPayload(BaseModel):
    amount_raised: confloat(ge=0, allow_inf_nan=False) = 0.0
    view_count: conint(ge=0) = 0
    investor_count: conint(ge=0) = 0

    def to_state(self) -> FundingState:
        return FundingState(**self.model_dump())


class DealTermsPayload(DealTerms):
    raise_goal: confloat(gt=0, allow_inf_nan=False)
    equity_offered: confloat(gt=0, le=100, allow_inf_nan=False)
    valuation: confloat(gt=0, allow_inf_nan=False)
    min_investment: Optional[confloat(ge=0, allow_inf_nan=False)] = None
    max_investment: Optional[confloat(ge=0, allow_inf_nan=False)] = None


class EntityCreateRequest(BaseModel):
    entity_id: str
    funding: FundingPayload = Field(default_factory=FundingPayload)
    deal_terms: Optional[DealTermsPayload] = None
    snapshots: List[MetricSnapshot] = Field(default_factory=list)


class EntityCreateResponse(BaseModel):
    entity_id: str


class EntitySummary(BaseModel):
    entity_id: str
    consolidated: float = Field(..., description="Consolidated score rounded for display")
    band: str
    amount_raised: str


class EntityListResponse(BaseModel):
    entities: List[EntitySummary]


class ScoreResponse(BaseModel):
    entity_id: str
    score: ScoreResult
    band: str


class ProjectionRequest(BaseModel):
    investment_amount: float


class ProjectionResponse(BaseModel):
    entity_id: str
    projection: ProjectionResult
    within_bounds: bool
    funding_progress: float


class RollupRequest(BaseModel):
    entity_ids: List[str]


class RollupResponse(BaseModel):
    result: RollupResult


class HoldingsRequest(BaseModel):
    holdings: List[Holding]


class HoldingsResponse(BaseModel):
    result: HoldingsSummary


class ErrorResponse(BaseModel):
    error: str
    message: str
    detail: Any = None
