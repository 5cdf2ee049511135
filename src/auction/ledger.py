"""
Bid Ledger: append-only proxy bids for one item, guarded by the item's lock.
"""

import threading
from typing import List, Tuple

from .resolver import Resolution, resolve_with_stats


class BidLedger:
    """
    Ordered proxy bids for a single item.

    The ledger owns the item's exclusive lock. Appending and resolving both
    hold it for their full duration, since resolution rewrites current_bid in
    place. Ledgers of different items never share a lock.

    Use the ledger as a context manager to hold the lock around snapshot():

        with ledger:
            for bid in ledger.snapshot():
                ...
    """

    def __init__(self):
        self._bids: List = []
        self._lock = threading.Lock()

    def __enter__(self):
        self._lock.acquire()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self._lock.release()
        return False

    def __len__(self) -> int:
        with self._lock:
            return len(self._bids)

    def append(self, bid) -> None:
        """Add a bid to the end of the ledger."""
        with self._lock:
            self._bids.append(bid)

    def snapshot(self) -> List:
        """
        Current bid sequence, by reference.

        Caller must hold the lock (``with ledger:``) while using the result.
        """
        return self._bids

    def copy_bids(self) -> List:
        """Detached copies of the stored bids, taken under the lock."""
        with self._lock:
            return [bid.copy() for bid in self._bids]

    def resolve_winner(self) -> Tuple[Resolution, object]:
        """
        Run the resolver over the stored bids under the lock.

        Returns:
            (resolution, detached copy of the winning bid)

        Raises:
            NoBidsError: If the ledger is empty
        """
        with self._lock:
            result = resolve_with_stats(self._bids)
            winner = self._bids[result.winner_index].copy()
            return result, winner
