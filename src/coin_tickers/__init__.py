"""Cached CoinGecko prices and chart histories for multi-chain wallet tokens."""
