"""
Auction errors: typed failures raised by the core and the service layer.

None of these are fatal. The HTTP adapter maps each one to a client response.
"""

from typing import Optional


class AuctionError(Exception):
    """Base class for all auction failures"""


class InvalidIdentifier(AuctionError):
    """Raised when an item id cannot be parsed"""

    def __init__(self, raw_id):
        super().__init__(f"Invalid item id: {raw_id!r}")
        self.raw_id = raw_id


class ItemNotFound(AuctionError):
    """Raised when an item id is not registered"""

    def __init__(self, item_id: int):
        super().__init__(f"Item {item_id} not found")
        self.item_id = item_id


class InvalidRequestBody(AuctionError):
    """Raised when an item or bid payload is malformed"""


class NoBidsError(AuctionError):
    """Raised when a winner is requested for an item without bids"""

    def __init__(self, item_id: Optional[int] = None):
        message = "No bids to resolve"
        if item_id is not None:
            message = f"No bids to resolve for item {item_id}"
        super().__init__(message)
        self.item_id = item_id
