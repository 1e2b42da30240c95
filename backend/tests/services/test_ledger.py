# backend/tests/services/test_ledger.py
"""
Tests for LedgerService.

Test Coverage:
- Numeric input checks (non-finite, negative, zero)
- Oversell rejection on SELL and on deleting a BUY
- Cascade delete of an asset
- Ledger listing order and "Unknown" labels
- Goal link validation
- Rollback on rejected writes
"""

from datetime import date
from decimal import Decimal

import pytest

from wealthvault.models import AssetCategory, TransactionType
from wealthvault.services.exceptions import (
    AssetNotFoundError,
    GoalNotFoundError,
    OversellError,
    TransactionNotFoundError,
    ValidationError,
)
from wealthvault.services.ledger import LedgerService
from wealthvault.services.store import RecordStore


# =============================================================================
# HELPERS
# =============================================================================

def create_fund(db, ledger, name: str = "Index Fund", price: str = "100"):
    return ledger.create_asset(db, {
        "name": name,
        "category": AssetCategory.ETF,
        "current_price": Decimal(price),
    })


def record(db, ledger, asset_id: int, txn_type: TransactionType, quantity: str,
           price: str = "100", on: date = date(2024, 1, 1), fees: str | None = None):
    values = {
        "asset_id": asset_id,
        "transaction_type": txn_type,
        "date": on,
        "quantity": Decimal(quantity),
        "price": Decimal(price),
    }
    if fees is not None:
        values["fees"] = Decimal(fees)
    return ledger.record_transaction(db, values)


# =============================================================================
# ASSETS
# =============================================================================

class TestAssets:

    def test_create_asset(self, db, ledger):
        asset = create_fund(db, ledger)

        assert asset.id is not None
        assert asset.category == AssetCategory.ETF
        assert RecordStore(db).get("assets", asset.id).name == "Index Fund"

    def test_create_rejects_negative_price(self, db, ledger):
        with pytest.raises(ValidationError) as exc_info:
            create_fund(db, ledger, price="-1")

        assert exc_info.value.field == "current_price"
        assert RecordStore(db).get_all("assets") == []

    def test_create_rejects_nan_price(self, db, ledger):
        with pytest.raises(ValidationError):
            ledger.create_asset(db, {
                "name": "Broken", "category": AssetCategory.STOCK, "current_price": float("nan"),
            })

    def test_create_rejects_blank_name(self, db, ledger):
        with pytest.raises(ValidationError) as exc_info:
            ledger.create_asset(db, {"name": "   ", "category": AssetCategory.STOCK})

        assert exc_info.value.field == "name"

    def test_update_price(self, db, ledger):
        asset = create_fund(db, ledger)

        updated = ledger.update_price(db, asset.id, Decimal("123.45"))

        assert updated.current_price == Decimal("123.45")

    def test_update_price_missing_asset(self, db, ledger):
        with pytest.raises(AssetNotFoundError):
            ledger.update_price(db, 999, Decimal("1"))

    def test_update_asset_partial(self, db, ledger):
        asset = create_fund(db, ledger)

        updated = ledger.update_asset(db, asset.id, {"target_allocation": Decimal("25")})

        assert updated.target_allocation == Decimal("25")
        assert updated.name == "Index Fund"

    def test_delete_asset_cascades(self, db, ledger):
        fund = create_fund(db, ledger)
        other = create_fund(db, ledger, name="Other")
        record(db, ledger, fund.id, TransactionType.BUY, "10")
        record(db, ledger, fund.id, TransactionType.DIVIDEND, "1", price="5")
        record(db, ledger, other.id, TransactionType.BUY, "1")
        goal = ledger.create_goal(db, {
            "name": "Linked", "target_amount": Decimal("1000"),
            "linked_asset_ids": [fund.id, other.id],
        })

        removed = ledger.delete_asset(db, fund.id)

        store = RecordStore(db)
        assert removed == 2
        assert [a.id for a in store.get_all("assets")] == [other.id]
        assert [t.asset_id for t in store.get_all("transactions")] == [other.id]
        assert store.get("goals", goal.id).linked_asset_ids == (other.id,)

    def test_delete_missing_asset(self, db, ledger):
        with pytest.raises(AssetNotFoundError):
            ledger.delete_asset(db, 42)


# =============================================================================
# TRANSACTIONS
# =============================================================================

class TestRecordTransaction:

    def test_fees_default_to_zero(self, db, ledger):
        fund = create_fund(db, ledger)

        txn = record(db, ledger, fund.id, TransactionType.BUY, "10")

        assert txn.fees == Decimal("0")

    def test_unknown_asset(self, db, ledger):
        with pytest.raises(AssetNotFoundError):
            record(db, ledger, 77, TransactionType.BUY, "1")

    @pytest.mark.parametrize("field,value", [
        ("quantity", "0"),
        ("quantity", "-1"),
        ("price", "-0.01"),
        ("fees", "-5"),
        ("price", "Infinity"),
    ])
    def test_rejects_bad_numbers(self, db, ledger, field, value):
        fund = create_fund(db, ledger)
        values = {
            "asset_id": fund.id,
            "transaction_type": TransactionType.BUY,
            "date": date(2024, 1, 1),
            "quantity": Decimal("1"),
            "price": Decimal("1"),
            field: Decimal(value),
        }

        with pytest.raises(ValidationError) as exc_info:
            ledger.record_transaction(db, values)

        assert exc_info.value.field == field

    def test_sell_within_holdings(self, db, ledger):
        fund = create_fund(db, ledger)
        record(db, ledger, fund.id, TransactionType.BUY, "10")

        txn = record(db, ledger, fund.id, TransactionType.SELL, "10", on=date(2024, 2, 1))

        assert txn.transaction_type == TransactionType.SELL

    def test_oversell_rejected_and_rolled_back(self, db, ledger):
        fund = create_fund(db, ledger)
        record(db, ledger, fund.id, TransactionType.BUY, "10")

        with pytest.raises(OversellError) as exc_info:
            record(db, ledger, fund.id, TransactionType.SELL, "11", on=date(2024, 2, 1))

        error = exc_info.value
        assert error.requested == Decimal("11")
        assert error.available == Decimal("10")
        assert error.on_date == date(2024, 2, 1)
        assert len(RecordStore(db).get_all("transactions")) == 1

    def test_backdated_sell_before_buy_rejected(self, db, ledger):
        """Units are checked on the sale date, not against today's balance."""
        fund = create_fund(db, ledger)
        record(db, ledger, fund.id, TransactionType.BUY, "10", on=date(2024, 6, 1))

        with pytest.raises(OversellError) as exc_info:
            record(db, ledger, fund.id, TransactionType.SELL, "5", on=date(2024, 1, 1))

        assert exc_info.value.available == Decimal("0")

    def test_oversell_allowed_when_guard_disabled(self, db):
        permissive = LedgerService(reject_oversell=False)
        fund = create_fund(db, permissive)

        txn = record(db, permissive, fund.id, TransactionType.SELL, "3")

        assert txn.id is not None


class TestDeleteTransaction:

    def test_delete(self, db, ledger):
        fund = create_fund(db, ledger)
        txn = record(db, ledger, fund.id, TransactionType.BUY, "1")

        ledger.delete_transaction(db, txn.id)

        assert RecordStore(db).get_all("transactions") == []

    def test_delete_missing(self, db, ledger):
        with pytest.raises(TransactionNotFoundError):
            ledger.delete_transaction(db, 5)

    def test_deleting_buy_that_a_sell_needs_is_rejected(self, db, ledger):
        fund = create_fund(db, ledger)
        buy_txn = record(db, ledger, fund.id, TransactionType.BUY, "10")
        record(db, ledger, fund.id, TransactionType.SELL, "8", on=date(2024, 3, 1))

        with pytest.raises(OversellError):
            ledger.delete_transaction(db, buy_txn.id)

        assert len(RecordStore(db).get_all("transactions")) == 2

    def test_deleting_sell_is_always_allowed(self, db, ledger):
        fund = create_fund(db, ledger)
        record(db, ledger, fund.id, TransactionType.BUY, "10")
        sell_txn = record(db, ledger, fund.id, TransactionType.SELL, "8", on=date(2024, 3, 1))

        ledger.delete_transaction(db, sell_txn.id)

        assert len(RecordStore(db).get_all("transactions")) == 1


class TestListTransactions:

    def test_newest_first(self, db, ledger):
        fund = create_fund(db, ledger)
        first = record(db, ledger, fund.id, TransactionType.BUY, "1", on=date(2024, 1, 1))
        latest = record(db, ledger, fund.id, TransactionType.BUY, "1", on=date(2024, 5, 1))
        same_day = record(db, ledger, fund.id, TransactionType.BUY, "1", on=date(2024, 1, 1))

        entries = ledger.list_transactions(db)

        assert [e.transaction.id for e in entries] == [latest.id, same_day.id, first.id]
        assert all(e.asset_name == "Index Fund" for e in entries)

    def test_filter_by_asset(self, db, ledger):
        fund = create_fund(db, ledger)
        other = create_fund(db, ledger, name="Other")
        record(db, ledger, fund.id, TransactionType.BUY, "1")
        record(db, ledger, other.id, TransactionType.BUY, "1")

        entries = ledger.list_transactions(db, asset_id=other.id)

        assert [e.asset_name for e in entries] == ["Other"]

    def test_dangling_transaction_named_unknown(self, db, ledger):
        """Transactions whose asset is gone (e.g. from a restored backup) are listed as Unknown."""
        RecordStore(db).create("transactions", {
            "asset_id": 404,
            "transaction_type": TransactionType.DIVIDEND,
            "date": date(2024, 1, 1),
            "quantity": Decimal("1"),
            "price": Decimal("10"),
            "fees": Decimal("0"),
        })
        db.commit()

        entries = ledger.list_transactions(db)

        assert entries[0].asset_name == "Unknown"
        assert ledger.get_transaction(db, entries[0].transaction.id).asset_name == "Unknown"


# =============================================================================
# GOALS
# =============================================================================

class TestGoals:

    def test_create_goal_without_links(self, db, ledger):
        goal = ledger.create_goal(db, {"name": "Retire", "target_amount": Decimal("500000")})

        assert goal.linked_asset_ids == ()

    def test_create_goal_with_missing_link(self, db, ledger):
        with pytest.raises(AssetNotFoundError):
            ledger.create_goal(db, {
                "name": "House", "target_amount": Decimal("1000"), "linked_asset_ids": [3],
            })

        assert RecordStore(db).get_all("goals") == []

    def test_create_goal_rejects_zero_target(self, db, ledger):
        with pytest.raises(ValidationError) as exc_info:
            ledger.create_goal(db, {"name": "Nothing", "target_amount": Decimal("0")})

        assert exc_info.value.field == "target_amount"

    def test_update_goal_links(self, db, ledger):
        fund = create_fund(db, ledger)
        goal = ledger.create_goal(db, {"name": "House", "target_amount": Decimal("1000")})

        updated = ledger.update_goal(db, goal.id, {"linked_asset_ids": [fund.id]})

        assert updated.linked_asset_ids == (fund.id,)

    def test_update_goal_with_missing_link(self, db, ledger):
        goal = ledger.create_goal(db, {"name": "House", "target_amount": Decimal("1000")})

        with pytest.raises(AssetNotFoundError):
            ledger.update_goal(db, goal.id, {"linked_asset_ids": [9]})

    def test_delete_goal(self, db, ledger):
        goal = ledger.create_goal(db, {"name": "House", "target_amount": Decimal("1000")})

        ledger.delete_goal(db, goal.id)

        with pytest.raises(GoalNotFoundError):
            RecordStore(db).get("goals", goal.id)
