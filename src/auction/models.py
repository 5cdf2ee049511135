"""
Auction models: proxy bids and items.
"""

from dataclasses import dataclass, field, replace
from typing import Any, Dict

from .ledger import BidLedger


@dataclass
class ProxyBid:
    """Standing instruction to raise a bid automatically up to max_bid"""

    bidder: str
    initial_bid: int  # cents
    max_bid: int  # cents, ceiling the proxy never exceeds
    increment: int  # cents per raise; 0 freezes the bid
    current_bid: int  # cents, overwritten in place by resolution
    item_id: int

    def can_raise(self) -> bool:
        """True if one more increment stays within max_bid"""
        return self.increment > 0 and self.current_bid + self.increment <= self.max_bid

    def copy(self) -> "ProxyBid":
        return replace(self)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "bidder_name": self.bidder,
            "initial_bid": self.initial_bid,
            "max_bid": self.max_bid,
            "bid_increment": self.increment,
            "current_bid": self.current_bid,
            "item_id": self.item_id,
        }


@dataclass
class Item:
    """Auction item with its own bid ledger"""

    id: int
    name: str
    ledger: BidLedger = field(default_factory=BidLedger, repr=False, compare=False)

    def to_dict(self) -> Dict[str, Any]:
        return {"id": self.id, "name": self.name}
