from __future__ import annotations

from typing import Optional

import structlog

from ..models.funding import FundingState
from ..models.metrics import MetricSnapshot
from ..models.policy import ScoringPolicy
from ..models.results import ScoreResult
from ..numeric import mean, saturating_ratio

logger = structlog.get_logger()


class ScoreDeriver:
    """Turns the latest metric snapshot and live funding counters into scores.

    Authoritative snapshot values always win. A missing dimension falls back
    to an estimate from funding counters, independently of the others, and
    the consolidated figure is only averaged when the snapshot lacks one.
    """

    def __init__(self, policy: ScoringPolicy | None = None) -> None:
        self.policy = policy or ScoringPolicy()

    def derive(self, snapshot: Optional[MetricSnapshot], funding: FundingState) -> ScoreResult:
        amount_raised = self._non_negative("amount_raised", funding.amount_raised, snapshot)
        view_count = self._non_negative("view_count", funding.view_count, snapshot)
        investor_count = self._non_negative("investor_count", funding.investor_count, snapshot)

        financial = self._authoritative(snapshot, "financial_score")
        if financial is None:
            financial = saturating_ratio(amount_raised, self.policy.financial_saturation)

        technology = self._authoritative(snapshot, "technology_score")
        if technology is None:
            technology = self._compute_technology_fallback(snapshot)

        social = self._authoritative(snapshot, "social_score")
        if social is None:
            social = saturating_ratio(view_count, self.policy.social_saturation)

        industry = self._authoritative(snapshot, "industry_score")
        if industry is None:
            industry = saturating_ratio(investor_count, self.policy.industry_saturation)

        consolidated = self._authoritative(snapshot, "consolidated_impact")
        authoritative = consolidated is not None
        if consolidated is None:
            consolidated = mean([financial, technology, social, industry])

        logger.debug(
            "score_derived",
            entity_id=snapshot.entity_id if snapshot is not None else None,
            consolidated=consolidated,
            authoritative=authoritative,
        )
        return ScoreResult(
            financial=financial,
            technology=technology,
            social=social,
            industry=industry,
            consolidated=consolidated,
            authoritative=authoritative,
        )

    def _compute_technology_fallback(self, snapshot: Optional[MetricSnapshot]) -> float:
        proxy = self._authoritative(snapshot, "ai_impact_startup")
        if proxy is not None:
            return proxy
        return self.policy.technology_default

    @staticmethod
    def _authoritative(snapshot: Optional[MetricSnapshot], field: str) -> Optional[float]:
        if snapshot is None:
            return None
        return getattr(snapshot, field)

    @staticmethod
    def _non_negative(field: str, value: float, snapshot: Optional[MetricSnapshot]) -> float:
        if value >= 0:
            return value
        # Counters are owned upstream; report the fault and score as zero.
        logger.warning(
            "upstream_data_quality_fault",
            field=field,
            value=value,
            entity_id=snapshot.entity_id if snapshot is not None else None,
        )
        return 0
