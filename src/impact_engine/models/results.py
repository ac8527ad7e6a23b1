from __future__ import annotations

from typing import List

from pydantic import BaseModel, Field

from ..numeric import score_band


class ScoreResult(BaseModel):
    financial: float
    technology: float
    social: float
    industry: float
    consolidated: float
    authoritative: bool = Field(False, description="True when consolidated came straight from the snapshot")

    def band(self) -> str:
        return score_band(self.consolidated)


class ScenarioOutcome(BaseModel):
    exit_value: float
    return_amount: float
    multiple: float


class ProjectionResult(BaseModel):
    investment_amount: float
    equity_percentage: float
    conservative: ScenarioOutcome
    expected: ScenarioOutcome
    optimistic: ScenarioOutcome

    def scenarios(self) -> List[ScenarioOutcome]:
        return [self.conservative, self.expected, self.optimistic]


class RollupResult(BaseModel):
    entity_count: int = 0
    total_raised: float = 0.0
    total_investors: int = 0
    total_views: int = 0
    average_consolidated_score: float = 0.0
    per_entity: List[ScoreResult] = Field(default_factory=list)


class HoldingsSummary(BaseModel):
    total_invested: float = 0.0
    active_positions: int = 0
    average_consolidated_score: float = 0.0
