from __future__ import annotations

import math

import pytest

from impact_engine.errors import InvalidInput
from impact_engine.models.funding import DealTerms
from impact_engine.models.policy import ScenarioMultipliers
from impact_engine.services.projector import ReturnProjector


TERMS = DealTerms(raise_goal=500000, equity_offered=10, valuation=5000000, min_investment=1000, max_investment=50000)


def test_reference_projection():
    result = ReturnProjector().project(10000, TERMS)

    assert result.equity_percentage == pytest.approx(0.2)
    assert result.expected.exit_value == pytest.approx(10_000_000)
    assert result.expected.return_amount == pytest.approx(20000)
    assert result.expected.multiple == pytest.approx(2.0)
    assert result.conservative.exit_value == pytest.approx(2_500_000)
    assert result.conservative.multiple == pytest.approx(0.5)
    assert result.optimistic.return_amount == pytest.approx(50000)
    assert result.optimistic.multiple == pytest.approx(5.0)


@pytest.mark.parametrize("amount", [1, 999, 10000, 250000, 2_000_000])
def test_scenarios_are_strictly_ordered(amount):
    conservative, expected, optimistic = ReturnProjector().project(amount, TERMS).scenarios()

    assert conservative.return_amount < expected.return_amount < optimistic.return_amount


def test_equity_scales_with_share_of_goal_not_amount_raised():
    projector = ReturnProjector()

    assert projector.project(500000, TERMS).equity_percentage == pytest.approx(10)
    assert projector.project(250000, TERMS).equity_percentage == pytest.approx(5)


@pytest.mark.parametrize("amount", [0, -100, math.inf, math.nan])
def test_invalid_investment_amount(amount):
    with pytest.raises(InvalidInput) as excinfo:
        ReturnProjector().project(amount, TERMS)

    assert excinfo.value.field == "investment_amount"


def test_zero_raise_goal_is_rejected():
    terms = DealTerms(raise_goal=0, equity_offered=10, valuation=5000000)

    with pytest.raises(InvalidInput) as excinfo:
        ReturnProjector().project(10000, terms)

    assert excinfo.value.field == "raise_goal"


def test_non_positive_valuation_is_rejected():
    terms = DealTerms(raise_goal=100000, equity_offered=10, valuation=0)

    with pytest.raises(InvalidInput):
        ReturnProjector().project(10000, terms)


def test_out_of_range_amounts_are_still_projected():
    projector = ReturnProjector()
    result = projector.project(100, TERMS)

    assert result.investment_amount == 100
    assert projector.within_bounds(100, TERMS) is False
    assert projector.within_bounds(60000, TERMS) is False
    assert projector.within_bounds(1000, TERMS) is True
    assert projector.within_bounds(50000, TERMS) is True


def test_open_bounds_accept_any_amount():
    terms = DealTerms(raise_goal=100000, equity_offered=5, valuation=1000000)

    assert ReturnProjector.within_bounds(1_000_000_000, terms) is True


def test_custom_multipliers():
    projector = ReturnProjector(ScenarioMultipliers(conservative=1.0, expected=3.0, optimistic=10.0))
    result = projector.project(10000, TERMS)

    assert result.conservative.exit_value == pytest.approx(5_000_000)
    assert result.optimistic.multiple == pytest.approx(10.0)


def test_multipliers_must_be_ordered():
    with pytest.raises(ValueError):
        ScenarioMultipliers(conservative=2.0, expected=2.0, optimistic=5.0)


def test_deal_terms_reject_inverted_bounds():
    with pytest.raises(ValueError):
        DealTerms(raise_goal=100000, equity_offered=5, valuation=1000000, min_investment=5000, max_investment=1000)


def test_funding_progress_is_capped():
    assert TERMS.progress(125000) == pytest.approx(25)
    assert TERMS.progress(900000) == 100
    assert DealTerms(raise_goal=0, equity_offered=5, valuation=1).progress(10) == 0


@pytest.mark.parametrize("equity_offered", [0, -10, 100.5, 150, math.inf, math.nan])
def test_invalid_equity_offered_is_rejected(equity_offered):
    terms = DealTerms(raise_goal=500000, equity_offered=equity_offered, valuation=5000000)

    with pytest.raises(InvalidInput) as excinfo:
        ReturnProjector().project(10000, terms)

    assert excinfo.value.field == "equity_offered"


def test_full_equity_offered_is_accepted():
    terms = DealTerms(raise_goal=500000, equity_offered=100, valuation=5000000)

    assert ReturnProjector().project(500000, terms).equity_percentage == pytest.approx(100)
