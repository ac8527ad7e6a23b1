from __future__ import annotations

from typing import Dict, Sequence

import structlog

from .config import Settings, get_settings
from .models.entity import EntityRecord
from .models.funding import Holding
from .models.results import HoldingsSummary, ProjectionResult, RollupResult, ScoreResult
from .repositories.base import DealTermsLookup, FundingLookup, SnapshotAccessor
from .services.projector import ReturnProjector
from .services.rollup import PortfolioAggregator
from .services.scorer import ScoreDeriver

logger = structlog.get_logger()


class ImpactEngine:
    """Entry point used by every presentation surface.

    Results are derived fresh on each call from the current lookups; nothing
    is cached between calls.
    """

    def __init__(
        self,
        snapshots: SnapshotAccessor,
        funding: FundingLookup,
        deal_terms: DealTermsLookup,
        settings: Settings | None = None,
    ) -> None:
        settings = settings or get_settings()
        self.snapshots = snapshots
        self.funding = funding
        self.deal_terms = deal_terms
        self.scorer = ScoreDeriver(settings.scoring_policy())
        self.projector = ReturnProjector(settings.scenario_multipliers())
        self.aggregator = PortfolioAggregator(
            self.scorer,
            max_workers=settings.ROLLUP_MAX_WORKERS,
            parallel_threshold=settings.ROLLUP_PARALLEL_THRESHOLD,
        )

    def derive_score(self, entity_id: str) -> ScoreResult:
        return self.scorer.derive(
            self.snapshots.get_latest_snapshot(entity_id),
            self.funding.get_funding_state(entity_id),
        )

    def project_return(self, entity_id: str, investment_amount: float) -> ProjectionResult:
        return self.projector.project(investment_amount, self.deal_terms.get_deal_terms(entity_id))

    def aggregate_portfolio(self, entity_ids: Sequence[str]) -> RollupResult:
        records = [
            EntityRecord(
                entity_id=entity_id,
                funding=self.funding.get_funding_state(entity_id),
                snapshot=self.snapshots.get_latest_snapshot(entity_id),
            )
            for entity_id in entity_ids
        ]
        return self.aggregator.aggregate(records)

    def summarize_holdings(self, holdings: Sequence[Holding]) -> HoldingsSummary:
        scores: Dict[str, ScoreResult] = {}
        for holding in holdings:
            if holding.entity_id not in scores:
                scores[holding.entity_id] = self.derive_score(holding.entity_id)
        summary = self.aggregator.summarize_holdings(holdings, scores)
        logger.info(
            "holdings_summarized",
            positions=len(holdings),
            total_invested=summary.total_invested,
        )
        return summary
