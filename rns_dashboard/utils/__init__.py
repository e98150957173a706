"""Utility helpers for the RNS dashboard."""
