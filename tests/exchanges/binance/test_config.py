import pytest

from exchanges.base_client import ExchangeCredentials
from exchanges.binance.api import BASE_URL
from exchanges.binance.config import DEFAULT_RECV_WINDOW, DEFAULT_TIMEOUT, BinanceConfig

ENV_NAMES = ("BINANCE_API_KEY", "BINANCE_API_SECRET", "BINANCE_BASE_URL", "BINANCE_TIMEOUT", "BINANCE_RECV_WINDOW")


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in ENV_NAMES:
        monkeypatch.delenv(name, raising=False)


def test_defaults_without_environment():
    config = BinanceConfig.from_env()
    assert config.base_url == BASE_URL
    assert config.api_key is None
    assert config.api_secret is None
    assert config.timeout == DEFAULT_TIMEOUT
    assert config.recv_window == DEFAULT_RECV_WINDOW
    assert config.credentials is None


def test_environment_overrides(monkeypatch):
    monkeypatch.setenv("BINANCE_API_KEY", "K")
    monkeypatch.setenv("BINANCE_API_SECRET", "S")
    monkeypatch.setenv("BINANCE_BASE_URL", "https://testnet.binance.vision")
    monkeypatch.setenv("BINANCE_TIMEOUT", "2.5")
    monkeypatch.setenv("BINANCE_RECV_WINDOW", "5000")

    config = BinanceConfig.from_env()

    assert config.base_url == "https://testnet.binance.vision"
    assert config.timeout == 2.5
    assert config.recv_window == 5000
    assert config.credentials == ExchangeCredentials(api_key="K", api_secret="S")


def test_invalid_timeout(monkeypatch):
    monkeypatch.setenv("BINANCE_TIMEOUT", "soon")
    with pytest.raises(ValueError, match="Invalid Binance"):
        BinanceConfig.from_env()


def test_local_config_module_is_a_fallback(monkeypatch):
    import config as config_module

    monkeypatch.setattr(config_module, "BINANCE_API_KEY", "from-module", raising=False)
    monkeypatch.setattr(config_module, "BINANCE_TIMEOUT", 4.0, raising=False)
    config = BinanceConfig.from_env()
    assert config.api_key == "from-module"
    assert config.timeout == 4.0

    monkeypatch.setenv("BINANCE_API_KEY", "from-env")
    assert BinanceConfig.from_env().api_key == "from-env"
