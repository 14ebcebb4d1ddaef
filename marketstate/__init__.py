"""
Market-state reconciliation and caching for an on-chain limit-order exchange.
"""

__version__ = "0.1.0"
