from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, confloat, model_validator


class ScoringPolicy(BaseModel):
    model_config = ConfigDict(frozen=True)

    financial_saturation: confloat(gt=0) = Field(100000.0, description="Amount raised that saturates the financial score")
    social_saturation: confloat(gt=0) = Field(1000.0, description="Cumulative views that saturate the social score")
    industry_saturation: confloat(gt=0) = Field(50.0, description="Distinct investors that saturate the industry score")
    technology_default: confloat(ge=0, le=100) = Field(
        85.0, description="Technology score assumed when no telemetry exists"
    )


class ScenarioMultipliers(BaseModel):
    model_config = ConfigDict(frozen=True)

    conservative: confloat(gt=0) = 0.5
    expected: confloat(gt=0) = 2.0
    optimistic: confloat(gt=0) = 5.0

    @model_validator(mode="after")
    def _check_ordering(self) -> "ScenarioMultipliers":
        if not self.conservative < self.expected < self.optimistic:
            raise ValueError("scenario multipliers must satisfy conservative < expected < optimistic")
        return self
