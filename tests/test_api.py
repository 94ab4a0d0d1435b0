"""
Tests for the HTTP routers.
"""

import asyncio
import time

import httpx
import pytest

from services import sync
from services.history import HistoryStore
from services.pips import price_from_pips
from services.session import FormSession

CALCULATE_BODY = {
    "account_currency": "USD",
    "account_size": 10000,
    "leverage": "1:500",
    "risk_type": "percentage",
    "risk_value": 0.5,
    "symbol": "EUR/USD",
    "entry_price": 1.07,
    "stop_loss_price": 1.065,
    "take_profit_price": 1.08,
    "trade_type": "buy",
}


class TestHealth:

    def test_health(self, client):
        assert client.get("/health").json() == {"status": "ok"}


class TestTradeRouter:

    def test_calculate(self, client):
        resp = client.post("/api/trade/calculate", json=CALCULATE_BODY)
        assert resp.status_code == 200

        body = resp.json()
        assert body["currency_pair"]["symbol"] == "EUR/USD"
        assert body["results"]["final_lot_size"] == 0.1
        assert body["results"]["risk_to_reward_ratio"] == pytest.approx(2.0)
        assert body["risk_level"] == "low"

    def test_calculate_with_free_text_symbol(self, client):
        resp = client.post("/api/trade/calculate", json={**CALCULATE_BODY, "symbol": "eurusd"})
        assert resp.json()["currency_pair"]["symbol"] == "EUR/USD"

    def test_stop_on_entry_is_specific_error(self, client):
        resp = client.post("/api/trade/calculate", json={**CALCULATE_BODY, "stop_loss_price": 1.07})

        assert resp.status_code == 422
        assert "0.5 pips" in resp.json()["detail"]

    @pytest.mark.parametrize("override", [
        {"account_size": 0},
        {"risk_value": -1},
        {"leverage": "1:0"},
        {"leverage": "500"},
        {"trade_type": "hold"},
    ])
    def test_invalid_body(self, client, override):
        resp = client.post("/api/trade/calculate", json={**CALCULATE_BODY, **override})
        assert resp.status_code == 422

    def test_unparseable_symbol(self, client):
        resp = client.post("/api/trade/calculate", json={**CALCULATE_BODY, "symbol": "???"})
        assert resp.status_code == 422

    def test_pips(self, client):
        resp = client.post("/api/trade/pips", json={
            "symbol": "XAU/USD", "entry_price": 2330.5, "target_price": 2325.5,
        })
        body = resp.json()

        assert body["pips"] == pytest.approx(50)
        assert body["pip_multiplier"] == 0.1

    def test_price(self, client):
        resp = client.post("/api/trade/price", json={
            "symbol": "EUR/USD", "entry_price": 1.07, "pips": 50,
            "trade_type": "sell", "is_stop_loss": True,
        })
        assert resp.json()["price"] == pytest.approx(1.075)


class TestInstrumentsRouter:

    def test_list(self, client):
        body = client.get("/api/instruments").json()
        assert body["Major FX Pairs"][0]["symbol"] == "EUR/USD"

    def test_search(self, client):
        body = client.get("/api/instruments/search", params={"q": "xa"}).json()
        assert body == ["XAU/USD", "XAG/USD"]

    def test_resolve(self, client):
        body = client.get("/api/instruments/resolve", params={"symbol": "USDSEK"}).json()

        assert body["instrument"]["quote"] == "SEK"
        assert body["pip_multiplier"] == 0.0001

    def test_resolve_unknown(self, client):
        resp = client.get("/api/instruments/resolve", params={"symbol": "??"})
        assert resp.status_code == 404

    def test_options(self, client):
        body = client.get("/api/instruments/options").json()
        assert "1:500" in body["leverage"]


class TestMarketRouter:

    def test_price(self, client):
        body = client.get("/api/market/price", params={"symbol": "eur/usd"}).json()
        assert body == {"symbol": "EUR/USD", "price": 1.07}

    def test_price_not_found(self, client):
        assert client.get("/api/market/price", params={"symbol": "USD/SEK"}).status_code == 404

    def test_batch(self, client):
        body = client.get("/api/market/prices", params={"symbols": "EUR/USD, USD/SEK,XAU/USD"}).json()
        assert body == {"EUR/USD": 1.07, "XAU/USD": 2330.5}

    def test_batch_requires_symbols(self, client):
        assert client.get("/api/market/prices", params={"symbols": " , "}).status_code == 400


class TestFormRouter:

    def test_default_form(self, client):
        body = client.get("/api/form").json()

        assert body["stop_loss_status"] == "anchored_on_price"
        assert body["results"]["final_lot_size"] == 0.2

    def test_full_flow_saves_history(self, client, history_file):
        body = client.post("/api/form/instrument", json={"symbol": "XAU/USD"}).json()
        assert body["state"]["entry_price"] == 2330.5
        assert body["stop_loss_status"] == "uninitialized"
        assert body["results"] is None

        body = client.post("/api/form/stop-loss", json={"field": "pips", "value": 50}).json()
        assert body["state"]["stop_loss"]["price"] == pytest.approx(2325.5)
        assert body["results"]["final_lot_size"] == 0.2

        body = client.post("/api/form/take-profit", json={"field": "price", "value": 2345.5}).json()
        assert body["results"]["risk_to_reward_ratio"] == pytest.approx(3.0)

        saved = client.post("/api/form/calculate").json()
        assert saved["saved"] is True
        assert saved["results"]["final_lot_size"] == 0.2
        assert saved["risk_level"] == "low"

        history = client.get("/api/history").json()
        assert [h["id"] for h in history] == [saved["id"]]
        assert history_file.exists()

        assert client.delete("/api/history").status_code == 204
        assert client.get("/api/history").json() == []

    def test_entry_price_and_direction(self, client):
        client.post("/api/form/stop-loss", json={"field": "pips", "value": 50})
        body = client.post("/api/form/trade-type", json={"trade_type": "sell"}).json()
        assert body["state"]["stop_loss"]["price"] == pytest.approx(1.075)

        body = client.post("/api/form/entry-price", json={"entry_price": 1.08}).json()
        assert body["state"]["stop_loss"]["price"] == pytest.approx(1.085)

    def test_account_update(self, client):
        body = client.patch("/api/form/account", json={"risk_type": "amount", "risk_value": 200}).json()
        assert body["results"]["final_lot_size"] == 0.4

    def test_account_update_requires_fields(self, client):
        assert client.patch("/api/form/account", json={}).status_code == 400

    def test_calculate_incomplete(self, client):
        client.patch("/api/form/account", json={"account_size": None})
        resp = client.post("/api/form/calculate")

        assert resp.status_code == 422
        assert resp.json()["detail"]["missing"] == ["account_size"]

    def test_calculate_tight_stop(self, client):
        client.post("/api/form/stop-loss", json={"field": "price", "value": 1.07})
        resp = client.post("/api/form/calculate")

        assert resp.status_code == 422
        assert client.get("/api/history").json() == []

    def test_unknown_instrument(self, client):
        resp = client.post("/api/form/instrument", json={"symbol": "???"})
        assert resp.status_code == 422

    def test_calculate_not_archived_has_no_id(self, client, monkeypatch):
        monkeypatch.setattr(client.app.state.history, "record", lambda state, results: None)
        resp = client.post("/api/form/calculate")

        assert resp.status_code == 200
        body = resp.json()
        assert body["saved"] is False
        assert body["id"] is None
        assert body["results"]["final_lot_size"] == 0.2
        assert client.get("/api/history").json() == []


class TestFormConcurrency:

    @pytest.fixture
    def app(self, tmp_path):
        from main import app

        app.state.session = FormSession()
        app.state.history = HistoryStore(path=tmp_path / "history.json")
        return app

    @pytest.fixture
    def slow_edit(self, monkeypatch):
        edit = sync.edit

        def delayed(leg_field, value, ctx):
            time.sleep(0.05)
            return edit(leg_field, value, ctx)

        monkeypatch.setattr(sync, "edit", delayed)

    @pytest.mark.asyncio
    async def test_leg_edit_and_entry_change_stay_consistent(self, app, slow_edit):
        transport = httpx.ASGITransport(app=app)
        async with httpx.AsyncClient(transport=transport, base_url="http://test") as ac:
            await ac.post("/api/form/stop-loss", json={"field": "pips", "value": 50})
            await asyncio.gather(
                ac.post("/api/form/stop-loss", json={"field": "pips", "value": 40}),
                ac.post("/api/form/entry-price", json={"entry_price": 1.1}),
            )
            body = (await ac.get("/api/form")).json()

        state = app.state.session.state
        assert state.entry_price == 1.1
        assert state.stop_loss.anchor == "pips"
        assert state.stop_loss.effective_price == pytest.approx(
            price_from_pips(
                state.entry_price,
                state.stop_loss.pips,
                state.currency_pair,
                state.trade_type,
                True,
            )
        )
        assert body["state"]["stop_loss"] == state.stop_loss.model_dump()
