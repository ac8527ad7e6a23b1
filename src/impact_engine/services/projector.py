from __future__ import annotations

import math

import structlog

from ..errors import InvalidInput
from ..models.funding import DealTerms
from ..models.policy import ScenarioMultipliers
from ..models.results import ProjectionResult, ScenarioOutcome

logger = structlog.get_logger()


class ReturnProjector:
    """What-if return calculator for a candidate investment.

    Equity is allocated against the raise goal, not the amount raised so far.
    Investment bounds are reported by ``within_bounds`` but never enforced.
    """

    def __init__(self, multipliers: ScenarioMultipliers | None = None) -> None:
        self.multipliers = multipliers or ScenarioMultipliers()

    def project(self, investment_amount: float, terms: DealTerms) -> ProjectionResult:
        self._require_positive("investment_amount", investment_amount)
        self._require_positive("raise_goal", terms.raise_goal)
        self._require_positive("valuation", terms.valuation)
        self._require_positive("equity_offered", terms.equity_offered)
        if terms.equity_offered > 100:
            raise InvalidInput(
                "equity_offered",
                terms.equity_offered,
                f"equity_offered must not exceed 100, got {terms.equity_offered!r}",
            )

        if not self.within_bounds(investment_amount, terms):
            logger.debug(
                "projection_outside_investment_bounds",
                investment_amount=investment_amount,
                min_investment=terms.min_investment,
                max_investment=terms.max_investment,
            )

        equity_percentage = (investment_amount / terms.raise_goal) * terms.equity_offered
        result = ProjectionResult(
            investment_amount=investment_amount,
            equity_percentage=equity_percentage,
            conservative=self._compute_scenario(self.multipliers.conservative, investment_amount, equity_percentage, terms),
            expected=self._compute_scenario(self.multipliers.expected, investment_amount, equity_percentage, terms),
            optimistic=self._compute_scenario(self.multipliers.optimistic, investment_amount, equity_percentage, terms),
        )
        logger.info(
            "return_projected",
            investment_amount=investment_amount,
            equity_percentage=equity_percentage,
            expected_multiple=result.expected.multiple,
        )
        return result

    @staticmethod
    def _require_positive(field: str, value: float) -> None:
        if not math.isfinite(value) or value <= 0:
            raise InvalidInput(field, value)

    @staticmethod
    def within_bounds(investment_amount: float, terms: DealTerms) -> bool:
        if terms.min_investment is not None and investment_amount < terms.min_investment:
            return False
        if terms.max_investment is not None and investment_amount > terms.max_investment:
            return False
        return True

    def _compute_scenario(
        self,
        multiplier: float,
        investment_amount: float,
        equity_percentage: float,
        terms: DealTerms,
    ) -> ScenarioOutcome:
        exit_value = terms.valuation * multiplier
        return_amount = exit_value * (equity_percentage / 100)
        return ScenarioOutcome(
            exit_value=exit_value,
            return_amount=return_amount,
            multiple=return_amount / investment_amount,
        )
