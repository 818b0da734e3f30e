"""``switchyard claim`` and ``switchyard link`` — debug the claim protocol.

Both commands build a location from an href and print what each step
produces, so routing problems can be reproduced without a UI.
"""

import argparse
import sys

from switchyard.errors import ClaimError
from switchyard.routing.location import RouterLocation


def run_claim(args: argparse.Namespace) -> None:
    """Claim ``args.patterns`` one after another, printing each result.

    Exits with status 1 at the first pattern that cannot be claimed.
    """
    location = RouterLocation.from_href(args.href)
    print(f"{'start':<20}  {location}")

    for pattern in args.patterns:
        try:
            location = location.claim(pattern)
        except ClaimError as exc:
            print(f"Error: {exc}", file=sys.stderr)
            raise SystemExit(1) from exc
        params = ", ".join(f"{k}={v}" for k, v in location.params.items())
        line = f"{pattern:<20}  {location}"
        print(f"{line}  ({params})" if params else line)


def run_link(args: argparse.Namespace) -> None:
    """Resolve ``args.target`` after applying any requested claims."""
    location = RouterLocation.from_href(args.href)

    try:
        for pattern in args.claim:
            location = location.claim(pattern)
    except ClaimError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc

    if args.claim_all:
        location = location.claim_all()

    print(location.link_to(args.target))
