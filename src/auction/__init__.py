"""
Auction module: proxy bids, per-item ledgers and winner resolution.
"""

from .errors import (
    AuctionError,
    InvalidIdentifier,
    ItemNotFound,
    InvalidRequestBody,
    NoBidsError,
)
from .ledger import BidLedger
from .models import ProxyBid, Item
from .registry import ItemRegistry
from .resolver import Resolution, resolve, resolve_with_stats
from .currency import dollars_to_cents, format_cents

__all__ = [
    "AuctionError",
    "InvalidIdentifier",
    "ItemNotFound",
    "InvalidRequestBody",
    "NoBidsError",
    "BidLedger",
    "ProxyBid",
    "Item",
    "ItemRegistry",
    "Resolution",
    "resolve",
    "resolve_with_stats",
    "dollars_to_cents",
    "format_cents",
]
