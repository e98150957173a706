"""RNS Dashboard Package.

This package resolves RIF Name Service (.rsk) names to Rootstock addresses and
aggregates balances, token holdings, NFTs and recent transfers for them.
"""

__version__ = "0.1.0"
__author__ = "RNS Dashboard Contributors"
__email__ = "dev@rns-dashboard.example"
