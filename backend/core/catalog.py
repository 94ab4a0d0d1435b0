"""Static reference data: instruments, USD rates, reference prices, options."""

from models.trade import CurrencyPair

# Value of one unit of the currency in USD. Metals, indices and crypto are
# valued from the entry price instead, so they have no entry here.
EXCHANGE_RATES_TO_USD: dict[str, float] = {
    "USD": 1.0,
    "USDT": 1.0,
    "EUR": 1.08,
    "GBP": 1.27,
    "JPY": 0.0064,
    "INR": 0.012,
    "AUD": 0.66,
    "NZD": 0.61,
    "CAD": 0.73,
    "CHF": 1.11,
}

ACCOUNT_CURRENCIES: list[str] = ["USD", "INR", "GBP", "EUR"]
LEVERAGE_OPTIONS: list[str] = ["1:30", "1:50", "1:100", "1:200", "1:500", "1:1000"]
TRADE_TYPES: dict[str, str] = {"buy": "Buy (Long)", "sell": "Sell (Short)"}

# Effective risk % upper bounds for the low / medium bands
RISK_LOW_MAX = 1.0
RISK_MEDIUM_MAX = 2.0


def _fx(symbol: str, base: str, quote: str) -> CurrencyPair:
    return CurrencyPair(symbol=symbol, base=base, quote=quote, contract_size=100_000)


CURRENCY_PAIRS: dict[str, list[CurrencyPair]] = {
    "Major FX Pairs": [
        _fx("EUR/USD", "EUR", "USD"),
        _fx("GBP/USD", "GBP", "USD"),
        _fx("USD/JPY", "USD", "JPY"),
        _fx("USD/CHF", "USD", "CHF"),
        _fx("AUD/USD", "AUD", "USD"),
        _fx("USD/CAD", "USD", "CAD"),
        _fx("NZD/USD", "NZD", "USD"),
    ],
    "Minor FX Pairs": [
        _fx("EUR/GBP", "EUR", "GBP"),
        _fx("EUR/JPY", "EUR", "JPY"),
        _fx("GBP/JPY", "GBP", "JPY"),
        _fx("AUD/JPY", "AUD", "JPY"),
        _fx("CHF/JPY", "CHF", "JPY"),
        _fx("EUR/CAD", "EUR", "CAD"),
        _fx("GBP/CAD", "GBP", "CAD"),
        _fx("AUD/CAD", "AUD", "CAD"),
        _fx("AUD/CHF", "AUD", "CHF"),
        _fx("AUD/NZD", "AUD", "NZD"),
        _fx("EUR/AUD", "EUR", "AUD"),
        _fx("EUR/NZD", "EUR", "NZD"),
        _fx("GBP/AUD", "GBP", "AUD"),
        _fx("GBP/CHF", "GBP", "CHF"),
        _fx("GBP/NZD", "GBP", "NZD"),
        _fx("NZD/CAD", "NZD", "CAD"),
        _fx("NZD/JPY", "NZD", "JPY"),
        _fx("NZD/CHF", "NZD", "CHF"),
        _fx("CAD/JPY", "CAD", "JPY"),
        _fx("EUR/CHF", "EUR", "CHF"),
        _fx("CAD/CHF", "CAD", "CHF"),
    ],
    "Commodity Pairs": [
        CurrencyPair(symbol="XAU/USD", base="XAU", quote="USD", contract_size=100),
        CurrencyPair(symbol="XAG/USD", base="XAG", quote="USD", contract_size=5000),
        CurrencyPair(symbol="XCU/USD", base="XCU", quote="USD", contract_size=25000),
    ],
    "Indices": [
        CurrencyPair(symbol="NAS100/USD", base="NAS100", quote="USD", contract_size=20),
        CurrencyPair(symbol="US30/USD", base="US30", quote="USD", contract_size=10),
    ],
    "Crypto Pairs": [
        CurrencyPair(symbol="BTC/USDT", base="BTC", quote="USDT", contract_size=1),
        CurrencyPair(symbol="ETH/USD", base="ETH", quote="USD", contract_size=1),
    ],
}

ALL_CURRENCY_PAIRS: list[CurrencyPair] = [
    pair for pairs in CURRENCY_PAIRS.values() for pair in pairs
]

DEFAULT_PAIR = ALL_CURRENCY_PAIRS[0]

# Reference prices used to pre-fill the entry price
MARKET_PRICES: dict[str, float] = {
    "EUR/USD": 1.0700,
    "GBP/USD": 1.2700,
    "USD/JPY": 156.20,
    "USD/CHF": 0.9010,
    "AUD/USD": 0.6600,
    "USD/CAD": 1.3690,
    "NZD/USD": 0.6100,
    "EUR/GBP": 0.8500,
    "EUR/JPY": 167.10,
    "GBP/JPY": 198.40,
    "AUD/JPY": 103.10,
    "CHF/JPY": 173.30,
    "EUR/CAD": 1.4650,
    "GBP/CAD": 1.7390,
    "AUD/CAD": 0.9040,
    "AUD/CHF": 0.5950,
    "AUD/NZD": 1.0820,
    "EUR/AUD": 1.6210,
    "EUR/NZD": 1.7540,
    "GBP/AUD": 1.9240,
    "GBP/CHF": 1.1440,
    "GBP/NZD": 2.0820,
    "NZD/CAD": 0.8350,
    "NZD/JPY": 95.30,
    "NZD/CHF": 0.5500,
    "CAD/JPY": 114.10,
    "EUR/CHF": 0.9640,
    "CAD/CHF": 0.6580,
    "XAU/USD": 2330.50,
    "XAG/USD": 29.45,
    "XCU/USD": 4.55,
    "NAS100/USD": 18650.0,
    "US30/USD": 39100.0,
    "BTC/USDT": 67250.0,
    "ETH/USD": 3520.0,
}
