"""
Auction Service: the operations the transport layer calls into.

Parses item ids, validates item and bid payloads, and drives the registry and
per-item ledgers. Validation runs before any lock is taken.
"""

import re
import logging
from typing import List, Optional

from auction.errors import InvalidIdentifier, InvalidRequestBody, NoBidsError
from auction.models import Item, ProxyBid
from auction.registry import ItemRegistry
from observability.metrics import metrics_collector, resolution_latency, track_time

logger = logging.getLogger(__name__)

_ITEM_ID_PATTERN = re.compile(r"[+-]?[0-9]+")


def parse_item_id(raw_id) -> int:
    """
    Parse an item id from a path segment or integer.

    Raises:
        InvalidIdentifier: If raw_id is empty or not an integer
    """
    if isinstance(raw_id, bool):
        raise InvalidIdentifier(raw_id)
    if isinstance(raw_id, int):
        return raw_id
    if isinstance(raw_id, str) and _ITEM_ID_PATTERN.fullmatch(raw_id):
        return int(raw_id)
    raise InvalidIdentifier(raw_id)


def _require_amount(name: str, value) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidRequestBody(f"{name} must be an integer number of cents")
    if value < 0:
        raise InvalidRequestBody(f"{name} must be non-negative, got {value}")
    return value


def validate_bid(bidder, initial_bid, max_bid, increment) -> None:
    """
    Check a bid payload before it reaches a ledger.

    A zero increment is accepted and yields a bid that never rises.

    Raises:
        InvalidRequestBody: On wrong types, negative amounts or max_bid below initial_bid
    """
    if not isinstance(bidder, str):
        raise InvalidRequestBody("bidder_name must be a string")

    _require_amount("initial_bid", initial_bid)
    _require_amount("max_bid", max_bid)
    _require_amount("bid_increment", increment)

    if max_bid < initial_bid:
        raise InvalidRequestBody(
            f"max_bid ({max_bid}) must not be below initial_bid ({initial_bid})"
        )


class AuctionService:
    """
    Item and bid operations over a shared registry.

    Safe to call from many request threads at once.
    """

    def __init__(self, registry: Optional[ItemRegistry] = None, metrics=None):
        """
        Initialize service.

        Args:
            registry: Item registry (fresh one if None)
            metrics: Metrics collector (global collector if None)
        """
        self.registry = registry if registry is not None else ItemRegistry()
        self.metrics = metrics if metrics is not None else metrics_collector

    def create_item(self, name) -> Item:
        """
        Create an auction item.

        Raises:
            InvalidRequestBody: If name is missing or empty
        """
        if not isinstance(name, str) or name == "":
            raise InvalidRequestBody("Item name must be a non-empty string")

        item = self.registry.create(name)
        self.metrics.record_item_created()
        return item

    def list_items(self) -> List[Item]:
        return self.registry.list()

    def get_item(self, item_id) -> Item:
        """
        Look up an item by id.

        Raises:
            InvalidIdentifier, ItemNotFound
        """
        return self.registry.get(parse_item_id(item_id))

    def submit_bid(
        self, item_id, bidder: str, initial_bid: int, max_bid: int, increment: int
    ) -> ProxyBid:
        """
        Append a proxy bid to an item's ledger.

        Args:
            item_id: Item id (int or path string)
            bidder: Bidder label
            initial_bid: Opening amount in cents
            max_bid: Ceiling in cents
            increment: Raise step in cents

        Returns:
            Copy of the stored bid, with current_bid equal to initial_bid

        Raises:
            InvalidIdentifier, ItemNotFound, InvalidRequestBody
        """
        item = self.registry.get(parse_item_id(item_id))
        validate_bid(bidder, initial_bid, max_bid, increment)

        bid = ProxyBid(
            bidder=bidder,
            initial_bid=initial_bid,
            max_bid=max_bid,
            increment=increment,
            current_bid=initial_bid,
            item_id=item.id,
        )
        item.ledger.append(bid)
        self.metrics.record_bid_submitted()

        logger.info(
            f"Bid from {bidder!r} on item {item.id}: "
            f"initial={initial_bid} max={max_bid} increment={increment}"
        )
        return bid.copy()

    def list_bids(self, item_id) -> List[ProxyBid]:
        """
        Bids of an item as currently stored (after the last resolution).

        Raises:
            InvalidIdentifier, ItemNotFound
        """
        item = self.registry.get(parse_item_id(item_id))
        return item.ledger.copy_bids()

    @track_time(resolution_latency)
    def get_winner(self, item_id) -> ProxyBid:
        """
        Resolve the winning bid of an item.

        Returns:
            Copy of the winning bid; its current_bid is the clearing price

        Raises:
            InvalidIdentifier, ItemNotFound, NoBidsError
        """
        item = self.registry.get(parse_item_id(item_id))

        try:
            result, winner = item.ledger.resolve_winner()
        except NoBidsError:
            self.metrics.record_no_bids()
            raise NoBidsError(item.id) from None

        self.metrics.record_resolution(result.passes)
        logger.info(
            f"Item {item.id} won by {winner.bidder!r} at {result.clearing_price} "
            f"(bid #{result.winner_index}, {result.passes} passes)"
        )
        return winner
