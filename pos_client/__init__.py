"""
Client for the point-of-sale backend.

Catalog, category hierarchy, sale entry, receipts and reports.
"""

from .client import PosClient

__all__ = ["PosClient"]

__version__ = "0.1.0"
