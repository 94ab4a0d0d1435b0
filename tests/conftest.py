import pytest
from fastapi.testclient import TestClient

from core.catalog import DEFAULT_PAIR
from core.config import settings
from models.trade import CalculationInputs


@pytest.fixture
def history_file(tmp_path, monkeypatch):
    path = tmp_path / "history.json"
    monkeypatch.setattr(settings, "HISTORY_FILE", str(path))
    return path


@pytest.fixture
def client(history_file):
    from main import app

    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def legacy_pip_multiplier(monkeypatch):
    monkeypatch.setattr(settings, "METAL_INDEX_PIP_MULTIPLIER", 0.01)


@pytest.fixture
def eurusd_inputs():
    """10k USD account, 1:500, 1% risk, buy EUR/USD 1.0700 with a 50 pip stop."""
    return CalculationInputs(
        account_currency="USD",
        account_size=10_000,
        leverage="1:500",
        risk_type="percentage",
        risk_value=1,
        currency_pair=DEFAULT_PAIR,
        entry_price=1.0700,
        stop_loss_price=1.0650,
        take_profit_price=None,
        trade_type="buy",
    )
