"""Tests for the trade and strategy form controllers.

**Feature: trading-journal**
"""

import tempfile
from datetime import date
from pathlib import Path

import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from tradejournal.controller import FormState, StrategyForm, TradeForm
from tradejournal.errors import StoreError, ValidationError
from tradejournal.models import Strategy, TradeEntry
from tradejournal.store import SQLiteTradeStore, strategies_path, trades_path


@pytest.fixture
def temp_store():
    """Create a temporary store for testing."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield SQLiteTradeStore(Path(tmpdir) / "test.db")


def fill_winning_buy(form: TradeForm) -> None:
    form.update(
        pair="EURUSD",
        direction="Buy",
        lot_size="1",
        entry_price="1.1000",
        stop_loss="1.0980",
        take_profit="1.1040",
        close_reason="TP hit",
    )


class FailingStore(SQLiteTradeStore):
    """Store whose writes always fail."""

    def create(self, path, record):
        raise StoreError("network down")

    def update(self, path, record_id, partial):
        raise StoreError("network down")


class TestDerivedFields:
    """
    **Feature: trading-journal, Property 13: Derived Fields**

    *For any* draft change, risk:reward is recomputed and profit/loss
    follows the close reason unless it was entered manually.
    """

    def test_take_profit_exit(self, temp_store):
        form = TradeForm(temp_store, "alice")
        fill_winning_buy(form)

        assert form.draft["rr"] == "2.00"
        assert form.draft["profit_loss"] == "400.00"
        assert not form.manual_pnl

    def test_stop_loss_exit(self, temp_store):
        form = TradeForm(temp_store, "alice")
        fill_winning_buy(form)
        form.set_field("close_reason", "SL hit")

        assert form.draft["profit_loss"] == "-200.00"

    def test_manual_uses_exit_price(self, temp_store):
        form = TradeForm(temp_store, "alice")
        fill_winning_buy(form)
        form.update(close_reason="Manual", exit_price="1.1010")

        assert form.draft["profit_loss"] == "100.00"

    def test_incomplete_draft_has_no_pnl(self, temp_store):
        form = TradeForm(temp_store, "alice")
        form.update(pair="EURUSD", entry_price="1.1")

        assert form.draft["profit_loss"] == ""
        assert form.draft["rr"] == "N/A"
        assert form.state == FormState.EDITING

    def test_unknown_field(self, temp_store):
        form = TradeForm(temp_store, "alice")
        with pytest.raises(ValidationError):
            form.set_field("rr", "3.00")


class TestManualOverride:
    """
    **Feature: trading-journal, Property 14: Manual P&L Override**

    *For any* manual or break-even P&L, later field changes never overwrite
    it until the close reason changes or the override is cleared.
    """

    def test_break_even_keeps_existing_pnl(self, temp_store):
        form = TradeForm(temp_store, "alice")
        fill_winning_buy(form)
        form.set_field("close_reason", "BE hit")

        assert form.manual_pnl
        assert form.draft["profit_loss"] == "400.00"

    def test_break_even_on_empty_pnl(self, temp_store):
        form = TradeForm(temp_store, "alice")
        form.update(pair="EURUSD", close_reason="BE hit", direction="Buy", lot_size="1",
                    entry_price="1.1", take_profit="1.2")

        assert form.draft["profit_loss"] == "0.00"

    @given(price=st.decimals(min_value="1.0", max_value="2.0", places=4))
    @settings(max_examples=25)
    def test_typed_pnl_survives_price_changes(self, price):
        with tempfile.TemporaryDirectory() as tmpdir:
            form = TradeForm(SQLiteTradeStore(Path(tmpdir) / "test.db"), "alice")
            fill_winning_buy(form)
            form.set_field("profit_loss", "123.45")
            form.set_field("take_profit", str(price))

            assert form.manual_pnl
            assert form.draft["profit_loss"] == "123.45"

    def test_non_break_even_reason_clears_override(self, temp_store):
        form = TradeForm(temp_store, "alice")
        fill_winning_buy(form)
        form.set_field("profit_loss", "1.00")
        form.set_field("close_reason", "TP hit")

        assert not form.manual_pnl
        assert form.draft["profit_loss"] == "400.00"

    def test_clear_override(self, temp_store):
        form = TradeForm(temp_store, "alice")
        fill_winning_buy(form)
        form.set_field("profit_loss", "1.00")
        form.clear_override()

        assert form.draft["profit_loss"] == "400.00"

    @pytest.mark.parametrize("reason", ["Win", "Loss", "Win with Partial"])
    def test_load_keeps_legacy_result_pnl(self, temp_store, reason):
        entry = TradeEntry.from_record("old", {
            "result": reason, "pnl": 150, "entryPrice": 1.1, "lotSize": 1,
            "direction": "Buy", "pair": "EURUSD",
        })
        form = TradeForm(temp_store, "alice")
        form.load(entry)
        form.set_field("notes", "typo fix")

        assert form.manual_pnl
        assert form.draft["profit_loss"] == "150.00"

    def test_load_keeps_pnl_without_exit_price(self, temp_store):
        entry = TradeEntry(id="abc", date="2024-03-01", pair="XAUUSD", direction="Sell",
                           lot_size=1.0, entry_price=1950.0, close_reason="Manual",
                           profit_loss=-42.0)
        form = TradeForm(temp_store, "alice")
        form.load(entry)
        form.set_field("session", "London")

        assert form.manual_pnl
        assert form.draft["profit_loss"] == "-42.00"

    def test_load_recalculates_reproducible_pnl(self, temp_store):
        entry = TradeEntry(id="abc", date="2024-03-01", pair="EURUSD", direction="Buy",
                           lot_size=1.0, entry_price=1.1, stop_loss=1.098, take_profit=1.104,
                           close_reason="TP hit", profit_loss=400.0)
        form = TradeForm(temp_store, "alice")
        form.load(entry)
        form.set_field("lot_size", "2")

        assert not form.manual_pnl
        assert form.draft["profit_loss"] == "800.00"


class TestValidation:
    """
    **Feature: trading-journal, Property 15: Draft Validation**
    """

    def test_required_fields(self, temp_store):
        form = TradeForm(temp_store, "alice")

        with pytest.raises(ValidationError) as exc_info:
            form.submit()

        assert set(exc_info.value.errors) == {
            "pair", "direction", "lot_size", "entry_price", "close_reason",
        }
        assert temp_store.get_snapshot(trades_path("alice")) == {}

    def test_bad_numbers(self, temp_store):
        form = TradeForm(temp_store, "alice")
        fill_winning_buy(form)
        form.update(lot_size="-1", stop_loss="abc")

        errors = form.validate()
        assert errors == {"lot_size": "must be positive", "stop_loss": "must be a number"}

    def test_bad_direction(self, temp_store):
        form = TradeForm(temp_store, "alice")
        fill_winning_buy(form)
        form.set_field("direction", "Long")

        assert "direction" in form.validate()


class TestSubmission:
    """
    **Feature: trading-journal, Property 16: Create or Update**

    *For any* submitted draft, a new draft creates a record and a loaded
    draft updates the same record id.
    """

    def test_create(self, temp_store):
        form = TradeForm(temp_store, "alice", today=lambda: date(2024, 3, 5))
        fill_winning_buy(form)
        form.set_field("pair", "eurusd")

        record_id = form.submit()

        snapshot = temp_store.get_snapshot(trades_path("alice"))
        entry = TradeEntry.from_record(record_id, snapshot[record_id])
        assert entry.pair == "EURUSD"
        assert entry.date == "2024-03-05"
        assert entry.profit_loss == 400.0
        assert entry.rr == "2.00"
        assert form.state == FormState.IDLE
        assert form.draft["pair"] == ""
        assert form.last_submitted == snapshot[record_id]

    def test_edit_updates_same_id(self, temp_store):
        form = TradeForm(temp_store, "alice")
        fill_winning_buy(form)
        record_id = form.submit()

        stored = temp_store.get_snapshot(trades_path("alice"))[record_id]
        form.load(TradeEntry.from_record(record_id, stored))
        assert form.is_editing
        form.set_field("close_reason", "SL hit")
        updated_id = form.submit()

        snapshot = temp_store.get_snapshot(trades_path("alice"))
        assert updated_id == record_id
        assert list(snapshot) == [record_id]
        assert snapshot[record_id]["profitLoss"] == -200.0
        assert not form.is_editing

    def test_load_keeps_break_even_override(self, temp_store):
        entry = TradeEntry(id="abc", date="2024-03-01", pair="EURUSD", direction="Buy",
                           lot_size=1.0, entry_price=1.1, take_profit=1.2,
                           close_reason="BE", profit_loss=3.5)
        form = TradeForm(temp_store, "alice")
        form.load(entry)
        form.set_field("notes", "moved stop")

        assert form.manual_pnl
        assert form.draft["profit_loss"] == "3.50"

    def test_store_failure_keeps_draft(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            form = TradeForm(FailingStore(Path(tmpdir) / "test.db"), "alice")
            fill_winning_buy(form)

            with pytest.raises(StoreError):
                form.submit()

            assert form.state == FormState.EDITING
            assert form.error == "network down"
            assert form.draft["pair"] == "EURUSD"

    def test_update_of_deleted_record_fails(self, temp_store):
        form = TradeForm(temp_store, "alice")
        fill_winning_buy(form)
        record_id = form.submit()
        stored = temp_store.get_snapshot(trades_path("alice"))[record_id]

        form.load(TradeEntry.from_record(record_id, stored))
        temp_store.delete(trades_path("alice"), record_id)

        with pytest.raises(StoreError):
            form.submit()
        assert form.is_editing

    def test_reset(self, temp_store):
        form = TradeForm(temp_store, "alice")
        fill_winning_buy(form)
        form.set_field("profit_loss", "5")
        form.reset()

        assert form.state == FormState.IDLE
        assert not form.manual_pnl
        assert all(value == "" for value in form.draft.values())

    def test_edit_of_legacy_record_keeps_stored_pnl(self, temp_store):
        path = trades_path("alice")
        record_id = temp_store.create(path, {
            "date": "2023-11-02", "result": "Win", "profitLoss": 150,
            "entryPrice": 1.1, "lotSize": 1, "direction": "Buy", "pair": "EURUSD",
        })

        form = TradeForm(temp_store, "alice")
        form.load(TradeEntry.from_record(record_id, temp_store.get_snapshot(path)[record_id]))
        form.set_field("notes", "typo fix")
        form.submit()

        stored = temp_store.get_snapshot(path)[record_id]
        assert stored["profitLoss"] == 150
        assert stored["manualPnl"] is True
        assert stored["notes"] == "typo fix"

    def test_edit_keeps_missing_date(self, temp_store):
        path = trades_path("alice")
        record_id = temp_store.create(path, {
            "pair": "EURUSD", "direction": "Buy", "lotSize": 1, "entryPrice": 1.1,
            "closeReason": "Manual", "exitPrice": 1.101,
        })

        form = TradeForm(temp_store, "alice", today=lambda: date(2024, 3, 5))
        form.load(TradeEntry.from_record(record_id, temp_store.get_snapshot(path)[record_id]))
        form.set_field("notes", "x")
        form.submit()

        assert temp_store.get_snapshot(path)[record_id]["date"] == ""

    def test_failing_listener_does_not_block_submit(self, temp_store):
        def broken_render(snapshot):
            if snapshot:
                raise RuntimeError("render failed")

        temp_store.subscribe(trades_path("alice"), broken_render)
        form = TradeForm(temp_store, "alice")
        fill_winning_buy(form)

        record_id = form.submit()

        assert form.state == FormState.IDLE
        assert list(temp_store.get_snapshot(trades_path("alice"))) == [record_id]


class TestStrategyForm:
    """
    **Feature: trading-journal, Property 17: Strategy Drafts**
    """

    def test_submit_splits_rules_and_pairs(self, temp_store):
        form = StrategyForm(temp_store, "alice")
        form.set_field("name", "Breakout")
        form.set_field("description", "Asian range break")
        form.set_field("rules", "Wait for close\n\n  Stop below range ")
        form.set_field("pairs", "EURUSD, GBPUSD,")

        record_id = form.submit()

        stored = temp_store.get_snapshot(strategies_path("alice"))[record_id]
        assert stored == {
            "name": "Breakout",
            "description": "Asian range break",
            "rules": ["Wait for close", "Stop below range"],
            "pairs": ["EURUSD", "GBPUSD"],
        }

    def test_requires_name_and_description(self, temp_store):
        form = StrategyForm(temp_store, "alice")
        with pytest.raises(ValidationError) as exc_info:
            form.submit()
        assert set(exc_info.value.errors) == {"name", "description"}

    def test_edit(self, temp_store):
        form = StrategyForm(temp_store, "alice")
        form.set_field("name", "Breakout")
        form.set_field("description", "x")
        record_id = form.submit()

        form.load(Strategy.from_record(record_id, {"name": "Breakout", "description": "x"}))
        form.set_field("description", "Range break")
        assert form.submit() == record_id
        assert temp_store.get_snapshot(strategies_path("alice"))[record_id]["description"] == "Range break"
