"""
Fulfillment Fee Tool Package

A deterministic fee engine for marketplace fulfillment profitability.
Resolves product dimensions → size tier → fee schedule for shipping,
placement, storage, aged inventory, removal and returns.
"""

__version__ = "2.0.0"
