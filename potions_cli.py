#!/usr/bin/env python3
"""
Potions Balance CLI.

Rebalances the potions of a Morrowind load order and writes one override
plugin. See `python potions_cli.py --help` for the subcommands.
"""

import sys
from typing import List, Optional

from potions_balance.cli import HANDLERS, build_parser
from potions_balance.cli.utils import print_error
from potions_balance.config import get_config
from potions_balance.utils.logger import setup_logger


def _log_level(args, default: str) -> str:
    if args.debug:
        return "DEBUG"
    if args.verbose:
        return "INFO"
    if args.quiet:
        return "WARNING"
    return default


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point."""
    # Parse CLI arguments FIRST (before any config or logging)
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 2

    try:
        config = get_config()
    except ValueError as e:
        print_error(str(e))
        return 1

    setup_logger(config.log.log_dir, _log_level(args, config.log.level))

    try:
        return HANDLERS[args.command](args)
    except KeyboardInterrupt:
        print_error("Interrupted.")
        return 130


if __name__ == "__main__":
    sys.exit(main())
