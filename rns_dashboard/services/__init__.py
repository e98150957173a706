"""Services that aggregate account data for the RNS dashboard."""
