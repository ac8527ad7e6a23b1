from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Optional

from ..models.funding import DealTerms, FundingState
from ..models.metrics import MetricSnapshot


class SnapshotAccessor(ABC):
    """
    Source of metric snapshots. Implementations return the snapshot with the
    greatest ``captured_at`` and normalize older schema versions themselves.
    """

    @abstractmethod
    def get_latest_snapshot(self, entity_id: str) -> Optional[MetricSnapshot]:
        raise NotImplementedError


class FundingLookup(ABC):
    @abstractmethod
    def get_funding_state(self, entity_id: str) -> FundingState:
        raise NotImplementedError


class DealTermsLookup(ABC):
    @abstractmethod
    def get_deal_terms(self, entity_id: str) -> DealTerms:
        raise NotImplementedError
