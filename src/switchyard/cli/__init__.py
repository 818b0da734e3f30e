"""Switchyard CLI — inspect how locations claim and resolve.

Entry point registered as ``switchyard`` in ``pyproject.toml``::

    [project.scripts]
    switchyard = "switchyard.cli:main"
"""

import argparse
import sys


def main(argv: list[str] | None = None) -> None:
    """CLI entry point for the ``switchyard`` command."""
    parser = argparse.ArgumentParser(
        prog="switchyard",
        description="Switchyard — claim-based hierarchical routing.",
    )
    subparsers = parser.add_subparsers(dest="command")

    # -- switchyard claim -------------------------------------------------
    claim_parser = subparsers.add_parser("claim", help="Claim patterns from an href in order")
    claim_parser.add_argument("href", help="Location href (e.g. /customers/cus1)")
    claim_parser.add_argument("patterns", nargs="+", help="Patterns to claim (e.g. customers/:id)")

    # -- switchyard link --------------------------------------------------
    link_parser = subparsers.add_parser("link", help="Resolve a link target against a location")
    link_parser.add_argument("href", help="Location href (e.g. /customers/cus1)")
    link_parser.add_argument("target", help="Link target (e.g. ../orders, ?sort=date)")
    link_parser.add_argument(
        "--claim",
        action="append",
        default=[],
        metavar="PATTERN",
        help="Claim PATTERN before resolving (repeatable)",
    )
    link_parser.add_argument(
        "--claim-all",
        action="store_true",
        help="Claim every remaining segment before resolving",
    )

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        sys.exit(0)

    if args.command == "claim":
        from switchyard.cli._inspect import run_claim

        run_claim(args)
    elif args.command == "link":
        from switchyard.cli._inspect import run_link

        run_link(args)
