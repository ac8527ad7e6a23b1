from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional

from ..errors import EntityNotFound
from ..models.funding import DealTerms, FundingState
from ..models.metrics import MetricSnapshot
from .base import DealTermsLookup, FundingLookup, SnapshotAccessor


@dataclass
class StoredEntity:
    funding: FundingState
    deal_terms: Optional[DealTerms] = None
    snapshots: List[MetricSnapshot] = field(default_factory=list)


class InMemoryEntityRepository(SnapshotAccessor, FundingLookup, DealTermsLookup):
    def __init__(self) -> None:
        self.store: Dict[str, StoredEntity] = {}

    def save(
        self,
        entity_id: str,
        funding: FundingState,
        deal_terms: Optional[DealTerms] = None,
        snapshots: Iterable[MetricSnapshot] = (),
    ) -> None:
        self.store[entity_id] = StoredEntity(funding=funding, deal_terms=deal_terms, snapshots=list(snapshots))

    def add_snapshot(self, snapshot: MetricSnapshot) -> None:
        self._get(snapshot.entity_id).snapshots.append(snapshot)

    def update_funding(self, entity_id: str, funding: FundingState) -> None:
        self._get(entity_id).funding = funding

    def list_ids(self) -> List[str]:
        return list(self.store.keys())

    def get_latest_snapshot(self, entity_id: str) -> Optional[MetricSnapshot]:
        snapshots = self._get(entity_id).snapshots
        if not snapshots:
            return None
        return max(snapshots, key=lambda snapshot: snapshot.captured_at)

    def get_funding_state(self, entity_id: str) -> FundingState:
        return self._get(entity_id).funding

    def get_deal_terms(self, entity_id: str) -> DealTerms:
        deal_terms = self._get(entity_id).deal_terms
        if deal_terms is None:
            raise EntityNotFound(entity_id)
        return deal_terms

    def _get(self, entity_id: str) -> StoredEntity:
        entity = self.store.get(entity_id)
        if entity is None:
            raise EntityNotFound(entity_id)
        return entity
