from __future__ import annotations

from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict

from .models.policy import ScenarioMultipliers, ScoringPolicy


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="IMPACT_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Score saturation points
    FINANCIAL_SATURATION: float = 100000.0
    SOCIAL_SATURATION: float = 1000.0
    INDUSTRY_SATURATION: float = 50.0
    TECHNOLOGY_DEFAULT: float = 85.0

    # Exit scenarios, as multiples of the stated valuation
    CONSERVATIVE_MULTIPLIER: float = 0.5
    EXPECTED_MULTIPLIER: float = 2.0
    OPTIMISTIC_MULTIPLIER: float = 5.0

    # Rollup fan-out
    ROLLUP_MAX_WORKERS: int = 8
    ROLLUP_PARALLEL_THRESHOLD: int = 16

    def scoring_policy(self) -> ScoringPolicy:
        return ScoringPolicy(
            financial_saturation=self.FINANCIAL_SATURATION,
            social_saturation=self.SOCIAL_SATURATION,
            industry_saturation=self.INDUSTRY_SATURATION,
            technology_default=self.TECHNOLOGY_DEFAULT,
        )

    def scenario_multipliers(self) -> ScenarioMultipliers:
        return ScenarioMultipliers(
            conservative=self.CONSERVATIVE_MULTIPLIER,
            expected=self.EXPECTED_MULTIPLIER,
            optimistic=self.OPTIMISTIC_MULTIPLIER,
        )


@lru_cache
def get_settings() -> Settings:
    return Settings()
