"""
Winner Resolver: ascending proxy auction simulation.

Every bidder's proxy keeps raising by its own increment until it clears the
running highest bid or would exceed its ceiling. Passes repeat until no bid
can move, then the earliest bid holding the highest amount wins.

Resolution works in place: current_bid values are left in their post-simulation
state and the next call starts from them.
"""

import logging
from dataclasses import dataclass
from typing import Sequence, Tuple

from .errors import NoBidsError

logger = logging.getLogger(__name__)


@dataclass
class Resolution:
    """Outcome of one resolution call"""

    winner_index: int
    clearing_price: int  # cents
    passes: int


def _is_stable(bid, highest: int) -> bool:
    """A bid is settled when it holds the highest amount or cannot rise."""
    if bid.current_bid == highest:
        return True
    if bid.current_bid >= bid.max_bid:
        return True
    return not bid.can_raise()


def _run_pass(bids: Sequence, highest: int) -> int:
    """One pass over all bids; returns the new running highest."""
    for bid in bids:
        # Unresolved bids open at their initial amount
        if bid.current_bid == 0:
            bid.current_bid = bid.initial_bid

        # Chase the leader within the ceiling
        while bid.current_bid <= highest and bid.can_raise():
            bid.current_bid += bid.increment

        if bid.current_bid > highest:
            highest = bid.current_bid

    return highest


def resolve_with_stats(bids: Sequence) -> Resolution:
    """
    Simulate proxy bidding to a fixed point.

    Args:
        bids: Proxy bids for one item, in insertion order

    Returns:
        Resolution with winner position, clearing price and pass count

    Raises:
        NoBidsError: If bids is empty
    """
    if not bids:
        raise NoBidsError()

    highest = 0
    passes = 0

    while True:
        highest = _run_pass(bids, highest)
        passes += 1

        if all(_is_stable(bid, highest) for bid in bids):
            break

    # Ties go to the earliest registered bid
    winner_index = next(i for i, bid in enumerate(bids) if bid.current_bid == highest)

    logger.debug(
        f"Resolved {len(bids)} bids in {passes} passes: "
        f"winner index {winner_index} at {highest}"
    )
    return Resolution(winner_index=winner_index, clearing_price=highest, passes=passes)


def resolve(bids: Sequence) -> Tuple[int, int]:
    """
    Determine the winning bid and clearing price.

    Args:
        bids: Proxy bids for one item, in insertion order

    Returns:
        (winner_index, clearing_price)

    Raises:
        NoBidsError: If bids is empty
    """
    result = resolve_with_stats(bids)
    return result.winner_index, result.clearing_price
