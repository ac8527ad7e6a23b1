from __future__ import annotations

from datetime import datetime, timezone
from typing import Dict, List

from .models.entity import EntityRecord
from .models.funding import DealTerms, FundingState
from .models.metrics import MetricSnapshot
from .repositories.in_memory import InMemoryEntityRepository


def build_sample_entities() -> List[EntityRecord]:
    reported = EntityRecord(
        entity_id="solar-grid",
        funding=FundingState(amount_raised=240000, view_count=3200, investor_count=61),
        snapshot=MetricSnapshot(
            entity_id="solar-grid",
            captured_at=datetime(2025, 11, 1, tzinfo=timezone.utc),
            consolidated_impact=72.4,
            financial_score=68.0,
            technology_score=91.5,
            social_score=60.2,
            industry_score=70.0,
        ),
    )

    partial = EntityRecord(
        entity_id="agri-sense",
        funding=FundingState(amount_raised=50000, view_count=500, investor_count=25),
        snapshot=MetricSnapshot(
            entity_id="agri-sense",
            captured_at=datetime(2025, 10, 15, tzinfo=timezone.utc),
            ai_impact_startup=77.0,
        ),
    )

    unreported = EntityRecord(entity_id="water-works", funding=FundingState())

    return [reported, partial, unreported]


def build_sample_deal_terms() -> Dict[str, DealTerms]:
    return {
        "solar-grid": DealTerms(
            raise_goal=500000,
            equity_offered=10,
            valuation=5000000,
            min_investment=1000,
            max_investment=100000,
        ),
        "agri-sense": DealTerms(raise_goal=250000, equity_offered=8, valuation=2000000, min_investment=500),
        "water-works": DealTerms(raise_goal=150000, equity_offered=12, valuation=1200000),
    }


def build_sample_repository() -> InMemoryEntityRepository:
    repository = InMemoryEntityRepository()
    deal_terms = build_sample_deal_terms()
    for entity in build_sample_entities():
        snapshots = [entity.snapshot] if entity.snapshot is not None else []
        repository.save(entity.entity_id, entity.funding, deal_terms.get(entity.entity_id), snapshots)
    return repository
