from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator


class FundingState(BaseModel):
    amount_raised: float = 0.0
    view_count: int = 0
    investor_count: int = Field(0, description="Distinct completed investment records")


class DealTerms(BaseModel):
    model_config = ConfigDict(frozen=True)

    raise_goal: float = Field(..., description="Fundraising target for the round")
    equity_offered: float = Field(..., description="Percentage of the entity offered at the stated valuation")
    valuation: float
    min_investment: Optional[float] = None
    max_investment: Optional[float] = None

    @model_validator(mode="after")
    def _check_bounds(self) -> "DealTerms":
        if (
            self.min_investment is not None
            and self.max_investment is not None
            and self.min_investment > self.max_investment
        ):
            raise ValueError("min_investment must not exceed max_investment")
        return self

    def progress(self, amount_raised: float) -> float:
        if self.raise_goal <= 0:
            return 0.0
        return max(0.0, min(100.0, amount_raised / self.raise_goal * 100))


class Holding(BaseModel):
    entity_id: str
    amount: float
    completed: bool = True
