"""API routes for the RNS dashboard."""

from rns_dashboard.api_routes import dashboard, nfts, rns, tokens, transactions

__all__ = ["dashboard", "nfts", "rns", "tokens", "transactions"]
