"""
Kraken API Integration

Provides modular API clients for interacting with the Kraken REST API:
- Authentication (nonces and HMAC-SHA512 request signing)
- Envelope decoding and request dispatch
- Public market data
- Account balances, orders, trades and ledgers
"""
