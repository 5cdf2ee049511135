"""
Auction Marketplace

Service layer and HTTP API over the auction core.
"""

from .config import ServiceConfig
from .service import AuctionService, parse_item_id, validate_bid

__all__ = [
    'AuctionService',
    'ServiceConfig',
    'parse_item_id',
    'validate_bid'
]
