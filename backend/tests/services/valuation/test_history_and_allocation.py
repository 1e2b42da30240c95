# backend/tests/services/valuation/test_history_and_allocation.py
"""
Unit tests for the wealth history series and allocation breakdown.

Test Coverage:
- WealthHistoryCalculator: Month bucketing, BUY/SELL effect, ignored fees and dividends
- AllocationCalculator: Category shares, liabilities, drift from target
"""

from datetime import date
from decimal import Decimal

import pytest

from wealthvault.models import AssetCategory
from wealthvault.services.valuation.calculators import AllocationCalculator, PortfolioValuator
from wealthvault.services.valuation.history_calculator import WealthHistoryCalculator

from tests.conftest import buy, dividend, make_asset, sell


# =============================================================================
# WEALTH HISTORY
# =============================================================================

class TestWealthHistory:
    """Tests for monthly cumulative invested capital."""

    @pytest.fixture
    def calc(self) -> WealthHistoryCalculator:
        return WealthHistoryCalculator()

    def test_empty(self, calc):
        assert calc.calculate([]) == []

    def test_one_point_per_month(self, calc):
        """Several entries in a month collapse into the month-end total."""
        points = calc.calculate([
            buy("10", "100", txn_date=date(2024, 1, 5)),
            buy("5", "100", txn_date=date(2024, 1, 20)),
            buy("1", "200", txn_date=date(2024, 3, 2)),
        ])

        assert [p.period for p in points] == ["2024-01", "2024-03"]
        assert [p.value for p in points] == [Decimal("1500"), Decimal("1700")]

    def test_sell_subtracts_gross_amount(self, calc):
        """SELL subtracts quantity x price at the sale price, not at cost."""
        points = calc.calculate([
            buy("10", "100", txn_date=date(2024, 1, 1)),
            sell("4", "150", txn_date=date(2024, 2, 1)),
        ])

        assert points[-1].value == Decimal("400")

    def test_fees_and_dividends_ignored(self, calc):
        points = calc.calculate([
            buy("10", "100", "50", txn_date=date(2024, 1, 1)),
            dividend("30", txn_date=date(2024, 2, 1)),
        ])

        assert [p.value for p in points] == [Decimal("1000"), Decimal("1000")]

    def test_unsorted_input(self, calc):
        """Input order does not matter; months come out ascending."""
        points = calc.calculate([
            buy("1", "10", txn_date=date(2024, 5, 1)),
            buy("1", "10", txn_date=date(2023, 12, 1)),
        ])

        assert [p.period for p in points] == ["2023-12", "2024-05"]
        assert [p.value for p in points] == [Decimal("10"), Decimal("20")]


# =============================================================================
# ALLOCATION
# =============================================================================

class TestAllocation:
    """Tests for category breakdown and target drift."""

    @pytest.fixture
    def snapshot(self):
        assets = [
            make_asset(1, "Index", AssetCategory.ETF, price="100", target="60"),
            make_asset(2, "Bonds", AssetCategory.BOND, price="50", target="30"),
            make_asset(3, "Savings", AssetCategory.CASH, price="1", target="10"),
            make_asset(4, "Other ETF", AssetCategory.ETF, price="10", target="0"),
            make_asset(5, "Loan", AssetCategory.DEBT, price="1"),
        ]
        txns = [
            buy("5", "100", asset_id=1),    # 500
            buy("4", "50", asset_id=2),     # 200
            buy("200", "1", asset_id=3),    # 200
            buy("10", "10", asset_id=4),    # 100
            buy("250", "1", asset_id=5),    # 250 liability
        ]
        return PortfolioValuator().calculate(assets, txns)

    def test_by_category_excludes_liabilities(self, snapshot):
        slices = AllocationCalculator().by_category(snapshot)

        shares = {s.category: s.share_pct for s in slices}
        assert AssetCategory.DEBT not in shares
        assert shares[AssetCategory.ETF] == Decimal("60")
        assert shares[AssetCategory.BOND] == Decimal("20")
        assert shares[AssetCategory.CASH] == Decimal("20")

    def test_shares_sum_to_100(self, snapshot):
        slices = AllocationCalculator().by_category(snapshot, include_liabilities=True)

        total = sum(s.share_pct for s in slices)
        assert abs(total - Decimal("100")) < Decimal("1e-20")
        assert {s.category for s in slices} >= {AssetCategory.DEBT}

    def test_empty_portfolio_has_zero_shares(self):
        snapshot = PortfolioValuator().calculate([make_asset(price="0")], [])

        slices = AllocationCalculator().by_category(snapshot)

        assert len(slices) == 1
        assert slices[0].share_pct == Decimal("0")

    def test_drift_against_target(self, snapshot):
        drift = {d.asset_id: d for d in AllocationCalculator().drift(snapshot)}

        assert 5 not in drift
        assert drift[1].actual_pct == Decimal("50")
        assert drift[1].drift_pct == Decimal("-10")
        assert drift[4].drift_pct == Decimal("10")
