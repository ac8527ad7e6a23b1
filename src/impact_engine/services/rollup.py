from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor
from typing import Dict, List, Sequence

import structlog

from ..models.entity import EntityRecord
from ..models.funding import Holding
from ..models.results import HoldingsSummary, RollupResult, ScoreResult
from ..numeric import mean
from .scorer import ScoreDeriver

logger = structlog.get_logger()


class PortfolioAggregator:
    """Dashboard rollups over many entities.

    Entities without any reported activity still count toward the average
    with their default score, so the figure stays comparable between
    refreshes.
    """

    def __init__(
        self,
        scorer: ScoreDeriver | None = None,
        max_workers: int = 8,
        parallel_threshold: int = 16,
    ) -> None:
        self.scorer = scorer or ScoreDeriver()
        self.max_workers = max(1, max_workers)
        self.parallel_threshold = parallel_threshold

    def aggregate(self, entities: Sequence[EntityRecord]) -> RollupResult:
        if not entities:
            return RollupResult()

        per_entity = self._derive_all(entities)
        result = RollupResult(
            entity_count=len(entities),
            total_raised=sum(entity.funding.amount_raised for entity in entities),
            total_investors=sum(entity.funding.investor_count for entity in entities),
            total_views=sum(entity.funding.view_count for entity in entities),
            average_consolidated_score=mean(score.consolidated for score in per_entity),
            per_entity=per_entity,
        )
        logger.info(
            "portfolio_aggregated",
            entity_count=result.entity_count,
            total_raised=result.total_raised,
            average_consolidated_score=result.average_consolidated_score,
        )
        return result

    def summarize_holdings(
        self,
        holdings: Sequence[Holding],
        scores: Dict[str, ScoreResult],
    ) -> HoldingsSummary:
        completed = [holding for holding in holdings if holding.completed]
        held_ids = list(dict.fromkeys(holding.entity_id for holding in holdings))
        held_scores = [scores[entity_id].consolidated for entity_id in held_ids if entity_id in scores]
        return HoldingsSummary(
            total_invested=sum(holding.amount for holding in holdings),
            active_positions=len(completed),
            average_consolidated_score=mean(held_scores),
        )

    def _derive_all(self, entities: Sequence[EntityRecord]) -> List[ScoreResult]:
        if len(entities) <= self.parallel_threshold or self.max_workers == 1:
            return [self._derive(entity) for entity in entities]
        workers = min(self.max_workers, len(entities))
        with ThreadPoolExecutor(max_workers=workers) as executor:
            # map() yields in submission order
            return list(executor.map(self._derive, entities))

    def _derive(self, entity: EntityRecord) -> ScoreResult:
        return self.scorer.derive(entity.snapshot, entity.funding)
