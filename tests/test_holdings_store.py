"""Tests for portfolio.holdings — schema validation, store CRUD, history."""
import logging
import math
import threading

import pytest

from config.settings import HISTORY_MAXLEN
from portfolio.holdings import (
    Holding,
    HoldingsStore,
    NotFoundError,
    ValidationError,
)
from portfolio.holdings.history import ChangeHistory


# ---------------------------------------------------------------------------
# Holding
# ---------------------------------------------------------------------------

class TestHolding:
    def test_market_value_and_day_change(self):
        h = Holding(symbol="TCS", price=100.0, change_percent=10.0, shares=10)
        assert h.market_value == 1000.0
        assert h.day_change == pytest.approx(100.0)

    def test_frozen(self):
        h = Holding(symbol="TCS", price=100.0, shares=1)
        with pytest.raises(Exception):
            h.price = 5.0

    def test_from_dict_accepts_camel_case(self):
        h = Holding.from_dict({
            "id": "abc", "symbol": "INFY", "name": "Infosys Ltd.", "price": 1500,
            "changePercent": -0.8, "shares": 20, "sector": "Technology", "type": "ETF",
        })
        assert h.id == "abc"
        assert h.change_percent == -0.8
        assert h.type == "ETF"

    def test_to_dict_roundtrip_fields(self):
        h = Holding(symbol="ITC", name="ITC Ltd.", price=450.0, change_percent=0.4,
                    shares=100, sector="Consumer Goods", id="x1")
        assert Holding.from_dict(h.to_dict()) == h


# ---------------------------------------------------------------------------
# add
# ---------------------------------------------------------------------------

class TestAdd:
    def test_assigns_fresh_id(self, empty_store):
        h = empty_store.add(Holding(symbol="TCS", price=3500.0, shares=10))
        assert h.id
        assert h.id in empty_store
        assert len(empty_store) == 1

    def test_preserves_insertion_order(self, store, sample_holdings):
        symbols = [h.symbol for h in store.list()]
        assert symbols == [h.symbol for h in sample_holdings]

    def test_keeps_supplied_id(self, empty_store):
        h = empty_store.add(Holding(symbol="TCS", price=1.0, shares=1, id="tcs-1"))
        assert h.id == "tcs-1"
        assert empty_store.get("tcs-1") == h

    @pytest.mark.parametrize("shares", [0, -5])
    def test_rejects_non_positive_shares(self, empty_store, shares):
        with pytest.raises(ValidationError) as exc:
            empty_store.add(Holding(symbol="TCS", price=10.0, shares=shares))
        assert exc.value.field == "shares"
        assert len(empty_store) == 0

    def test_rejects_fractional_shares(self, empty_store):
        with pytest.raises(ValidationError):
            empty_store.add(Holding(symbol="TCS", price=10.0, shares=1.5))

    def test_integral_float_shares_normalized(self, empty_store):
        h = empty_store.add(Holding(symbol="TCS", price=10, shares=3.0))
        assert h.shares == 3
        assert isinstance(h.shares, int)
        assert isinstance(h.price, float)

    def test_rejects_negative_price(self, empty_store):
        with pytest.raises(ValidationError) as exc:
            empty_store.add(Holding(symbol="TCS", price=-0.01, shares=1))
        assert exc.value.field == "price"

    def test_zero_price_allowed(self, empty_store):
        h = empty_store.add(Holding(symbol="DELISTED", price=0.0, shares=1))
        assert h.market_value == 0.0

    @pytest.mark.parametrize("price", [math.nan, math.inf, "100"])
    def test_rejects_non_finite_price(self, empty_store, price):
        with pytest.raises(ValidationError):
            empty_store.add(Holding(symbol="TCS", price=price, shares=1))

    def test_rejects_empty_symbol(self, empty_store):
        with pytest.raises(ValidationError):
            empty_store.add(Holding(symbol="  ", price=1.0, shares=1))

    def test_rejects_live_id(self, empty_store):
        empty_store.add(Holding(symbol="TCS", price=1.0, shares=1, id="dup"))
        with pytest.raises(ValidationError):
            empty_store.add(Holding(symbol="INFY", price=1.0, shares=1, id="dup"))

    def test_removed_id_never_reused(self, empty_store):
        h = empty_store.add(Holding(symbol="TCS", price=1.0, shares=1, id="gone"))
        empty_store.remove(h.id)
        with pytest.raises(ValidationError):
            empty_store.add(Holding(symbol="TCS", price=1.0, shares=1, id="gone"))

    def test_generated_ids_unique(self, empty_store):
        ids = {empty_store.add(Holding(symbol=f"S{i}", price=1.0, shares=1)).id for i in range(50)}
        assert len(ids) == 50


# ---------------------------------------------------------------------------
# edit
# ---------------------------------------------------------------------------

class TestEdit:
    def test_preserves_id_and_count(self, store):
        target = store.list()[1]
        updated = store.edit(target.id, price=1600.0, symbol="INFY2")
        assert updated.id == target.id
        assert updated.price == 1600.0
        assert updated.symbol == "INFY2"
        assert len(store) == 5
        assert store.list()[1] == updated

    def test_unknown_id(self, store):
        with pytest.raises(NotFoundError) as exc:
            store.edit("missing", price=1.0)
        assert exc.value.holding_id == "missing"

    def test_invalid_shares_leaves_holding_unchanged(self, store):
        target = store.list()[0]
        with pytest.raises(ValidationError):
            store.edit(target.id, shares=0)
        assert store.get(target.id) == target

    def test_cannot_change_id(self, store):
        target = store.list()[0]
        with pytest.raises(ValidationError):
            store.edit(target.id, id="other")

    def test_unknown_field(self, store):
        target = store.list()[0]
        with pytest.raises(ValidationError):
            store.edit(target.id, cost_basis=10.0)


# ---------------------------------------------------------------------------
# remove / list
# ---------------------------------------------------------------------------

class TestRemoveAndList:
    def test_add_then_remove_restores_state(self, store):
        before = store.list()
        h = store.add(Holding(symbol="ITC", price=450.0, shares=100))
        store.remove(h.id)
        assert store.list() == before

    def test_remove_returns_holding(self, store):
        target = store.list()[2]
        removed = store.remove(target.id)
        assert removed == target
        assert target.id not in store
        with pytest.raises(NotFoundError):
            store.get(target.id)

    def test_remove_unknown(self, store):
        with pytest.raises(NotFoundError):
            store.remove("missing")

    def test_remove_twice(self, store):
        target = store.list()[0]
        store.remove(target.id)
        with pytest.raises(NotFoundError):
            store.remove(target.id)

    def test_snapshot_is_immutable(self, store):
        snap = store.list()
        assert isinstance(snap, tuple)
        store.add(Holding(symbol="ITC", price=450.0, shares=100))
        assert len(snap) == 5
        assert len(store.list()) == 6

    def test_empty_store(self, empty_store):
        assert empty_store.list() == ()
        assert len(empty_store) == 0


# ---------------------------------------------------------------------------
# listeners / history
# ---------------------------------------------------------------------------

class TestNotificationAndHistory:
    def test_listener_receives_committed_snapshot(self, empty_store):
        seen = []
        empty_store.subscribe(lambda snap: seen.append(len(snap)))
        h = empty_store.add(Holding(symbol="TCS", price=1.0, shares=1))
        empty_store.edit(h.id, price=2.0)
        empty_store.remove(h.id)
        assert seen == [1, 1, 0]

    def test_rejected_commands_do_not_notify(self, empty_store):
        seen = []
        empty_store.subscribe(seen.append)
        with pytest.raises(ValidationError):
            empty_store.add(Holding(symbol="TCS", price=1.0, shares=0))
        with pytest.raises(NotFoundError):
            empty_store.remove("missing")
        assert seen == []

    def test_unsubscribe(self, empty_store):
        seen = []
        empty_store.subscribe(seen.append)
        empty_store.unsubscribe(seen.append)
        empty_store.add(Holding(symbol="TCS", price=1.0, shares=1))
        assert seen == []

    def test_history_records_each_mutation(self, empty_store):
        h = empty_store.add(Holding(symbol="tcs", price=1.0, shares=1))
        empty_store.edit(h.id, shares=5)
        empty_store.remove(h.id)
        actions = [r.action for r in empty_store.history.entries(holding_id=h.id)]
        assert actions == ["ADD", "EDIT", "REMOVE"]
        edit = empty_store.history.entries(symbol="TCS")[1]
        assert edit.details == {"old": {"shares": 1}, "new": {"shares": 5}}

    def test_recent_history(self, empty_store):
        empty_store.add(Holding(symbol="TCS", price=1.0, shares=1))
        assert len(empty_store.history.recent(days=1)) == 1

    def test_failing_listener_does_not_block_others(self, empty_store, caplog):
        def broken(snap):
            raise RuntimeError("listener bug")

        seen = []
        empty_store.subscribe(broken)
        empty_store.subscribe(lambda snap: seen.append(len(snap)))

        with caplog.at_level(logging.ERROR, logger="portfolio.holdings.store"):
            h = empty_store.add(Holding(symbol="TCS", price=1.0, shares=1))

        assert h.id in empty_store
        assert seen == [1]
        assert "failed after commit" in caplog.text

    def test_history_is_bounded(self):
        store = HoldingsStore(history=ChangeHistory(maxlen=2))
        h = store.add(Holding(symbol="TCS", price=1.0, shares=1))
        store.edit(h.id, shares=2)
        store.edit(h.id, shares=3)
        entries = store.history.entries()
        assert len(entries) == 2
        # oldest (the ADD) dropped first
        assert [r.action for r in entries] == ["EDIT", "EDIT"]
        assert entries[-1].details["new"] == {"shares": 3}

    def test_default_history_bound_from_settings(self, empty_store):
        assert empty_store.history.maxlen == HISTORY_MAXLEN

    def test_history_clear(self, store):
        assert len(store.history) == 5
        store.history.clear()
        assert len(store.history) == 0
        assert store.history.entries() == []
        assert len(store) == 5


class TestConcurrentMutation:
    def test_parallel_adds_all_committed(self, empty_store):
        def worker(offset):
            for i in range(25):
                empty_store.add(Holding(symbol=f"S{offset}-{i}", price=1.0, shares=1))

        threads = [threading.Thread(target=worker, args=(t,)) for t in range(4)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        snap = empty_store.list()
        assert len(snap) == 100
        assert len({h.id for h in snap}) == 100
        assert len(empty_store.history) == 100
