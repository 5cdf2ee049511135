#!/usr/bin/env python3
"""
Resolve the winner of a proxy auction from a JSON file of bids.

Input is a list of bids (or an object with a "bids" list) in dollars:

    [
        {"bidder_name": "Sasha", "initial_bid": 50.00, "max_bid": 80.00, "bid_increment": 3.00},
        {"bidder_name": "Pat", "initial_bid": 55.00, "max_bid": 85.00, "bid_increment": 5.00}
    ]

Usage:
    python tools/resolve_bids.py bids.json
    python tools/resolve_bids.py bids.json --json
"""

import sys
import json
import argparse
import logging
from pathlib import Path
from typing import List, Dict, Any, Optional

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from auction.currency import dollars_to_cents, format_cents
from auction.errors import AuctionError, NoBidsError
from marketplace.service import AuctionService

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_NO_BIDS = 1
EXIT_INVALID = 2

BID_FIELDS = ("bidder_name", "initial_bid", "max_bid", "bid_increment")


def load_bids(path: Path) -> List[Dict[str, Any]]:
    """
    Read bid entries from a JSON file.

    Raises:
        ValueError: If the file is not a list of bid objects
    """
    with open(path, "r") as f:
        data = json.load(f)

    if isinstance(data, dict):
        data = data.get("bids")
    if not isinstance(data, list):
        raise ValueError("Expected a list of bids or an object with a 'bids' list")

    for index, entry in enumerate(data):
        if not isinstance(entry, dict):
            raise ValueError(f"Bid #{index} is not an object")
        missing = [name for name in BID_FIELDS if name not in entry]
        if missing:
            raise ValueError(f"Bid #{index} is missing {', '.join(missing)}")

    return data


def resolve_file(path: Path, service: Optional[AuctionService] = None):
    """
    Load bids from path and resolve them as a single item.

    Returns:
        The winning ProxyBid

    Raises:
        ValueError: On malformed input
        NoBidsError: If the file holds no bids
    """
    service = service or AuctionService()
    item = service.create_item(path.stem or "item")

    for entry in load_bids(path):
        service.submit_bid(
            item.id,
            bidder=str(entry["bidder_name"]),
            initial_bid=dollars_to_cents(entry["initial_bid"]),
            max_bid=dollars_to_cents(entry["max_bid"]),
            increment=dollars_to_cents(entry["bid_increment"]),
        )

    return service.get_winner(item.id)


def main(argv=None) -> int:
    """Command-line interface for resolving a bid file"""
    parser = argparse.ArgumentParser(
        description="Resolve the winner of a proxy auction from a JSON bid file"
    )

    parser.add_argument("bids_file", type=Path, help="JSON file with bids in dollars")

    parser.add_argument(
        "--json",
        action="store_true",
        help="Print the winning bid as JSON"
    )

    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Enable verbose logging"
    )

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format='%(asctime)s - %(levelname)s - %(message)s'
    )

    try:
        winner = resolve_file(args.bids_file)
    except NoBidsError:
        print("No winner found: the file contains no bids", file=sys.stderr)
        return EXIT_NO_BIDS
    except (OSError, ValueError, AuctionError) as e:
        print(f"Invalid bid file: {e}", file=sys.stderr)
        return EXIT_INVALID

    if args.json:
        result = winner.to_dict()
        result["clearing_price"] = format_cents(winner.current_bid)
        print(json.dumps(result, indent=2))
    else:
        print(f"Winner: {winner.bidder} at {format_cents(winner.current_bid)}")

    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
