"""
Argument parser setup for the potions balance CLI.

Defines all subcommands and their arguments:
- balance: merge a load order, rescale from a table, write the override plugin
- scan: merge a load order and write the winning potions unchanged
- init: export a built-in preset as CSV or YAML
- apply: rescale an existing plugin in place
- show: print a preset or table file
- report: merge and classify without writing
"""

import argparse

from .. import __version__
from ..config.constants import CODE_PAGES, PRESET_NAMES, STRATEGY_NAMES


def build_parser() -> argparse.ArgumentParser:
    """Build the top-level parser with all subcommands."""
    parser = argparse.ArgumentParser(
        prog="potions_cli.py",
        description="Potions balance - normalize Morrowind potion prices, weights and effects",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python potions_cli.py balance "C:/Games/Morrowind/Morrowind.ini" -o "Potions Balance.esp"
  python potions_cli.py balance ~/.config/openmw/openmw.cfg -o potions.esp --table my.yaml
  python potions_cli.py init -o table.csv -t recommended
  python potions_cli.py apply -s table.csv "Potions Balance.esp"
  python potions_cli.py report ~/.config/openmw/openmw.cfg
        """
    )

    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")

    # Verbosity: mutually exclusive group (-q / -v / --debug)
    verbosity = parser.add_mutually_exclusive_group()
    verbosity.add_argument(
        "-q", "--quiet",
        action="store_true",
        default=False,
        help="Quiet mode: warnings and errors only"
    )
    verbosity.add_argument(
        "-v", "--verbose",
        action="store_true",
        default=False,
        help="Verbose mode: INFO level"
    )
    verbosity.add_argument(
        "--debug",
        action="store_true",
        default=False,
        help="Debug mode: per-potion changes on the console"
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    _setup_balance_subcommand(subparsers)
    _setup_scan_subcommand(subparsers)
    _setup_init_subcommand(subparsers)
    _setup_apply_subcommand(subparsers)
    _setup_show_subcommand(subparsers)
    _setup_report_subcommand(subparsers)

    return parser


def _add_code_page(parser) -> None:
    parser.add_argument(
        "-p", "--code-page",
        choices=list(CODE_PAGES),
        default=None,
        help="Game language: selects the text encoding (default: POTIONS_CODE_PAGE or en)"
    )


def _add_include_self(parser) -> None:
    parser.add_argument(
        "--include-self",
        action="store_true",
        default=None,
        help="Also merge plugins previously generated by this tool"
    )


def _add_json(parser) -> None:
    parser.add_argument("--json", action="store_true", dest="json_output", help="Output results as JSON")


def _setup_balance_subcommand(subparsers) -> None:
    balance_parser = subparsers.add_parser("balance", help="Merge, rescale and write the override plugin")
    balance_parser.add_argument("config", help="Morrowind.ini or openmw.cfg")
    balance_parser.add_argument("-o", "--output", required=True, help="Plugin to write")
    source = balance_parser.add_mutually_exclusive_group()
    source.add_argument("-t", "--preset", choices=PRESET_NAMES, help="Built-in balance table")
    source.add_argument("-s", "--table", dest="table_path", help="Balance table file (.csv, .yaml)")
    balance_parser.add_argument(
        "--strategy",
        choices=STRATEGY_NAMES,
        default=None,
        help="Value rescale strategy (default: POTIONS_STRATEGY or direct)"
    )
    _add_code_page(balance_parser)
    _add_include_self(balance_parser)
    _add_json(balance_parser)


def _setup_scan_subcommand(subparsers) -> None:
    scan_parser = subparsers.add_parser("scan", help="Merge the load order and write potions unmodified")
    scan_parser.add_argument("config", help="Morrowind.ini or openmw.cfg")
    scan_parser.add_argument("-o", "--output", required=True, help="Plugin to write")
    _add_code_page(scan_parser)
    _add_include_self(scan_parser)
    _add_json(scan_parser)


def _setup_init_subcommand(subparsers) -> None:
    init_parser = subparsers.add_parser("init", help="Export a built-in balance table")
    init_parser.add_argument("-o", "--output", required=True, help="Table file to write (.csv, .yaml)")
    init_parser.add_argument("-t", "--preset", choices=PRESET_NAMES, required=True, help="Preset to export")


def _setup_apply_subcommand(subparsers) -> None:
    apply_parser = subparsers.add_parser("apply", help="Rescale an existing plugin in place")
    apply_parser.add_argument("target", help="Plugin to rewrite")
    apply_parser.add_argument("-s", "--table", dest="table_path", required=True, help="Balance table file (.csv, .yaml)")
    apply_parser.add_argument("--strategy", choices=STRATEGY_NAMES, default=None, help="Value rescale strategy")
    _add_code_page(apply_parser)
    _add_json(apply_parser)


def _setup_show_subcommand(subparsers) -> None:
    show_parser = subparsers.add_parser("show", help="Print a balance table")
    source = show_parser.add_mutually_exclusive_group(required=True)
    source.add_argument("-t", "--preset", choices=PRESET_NAMES, help="Built-in balance table")
    source.add_argument("-s", "--table", dest="table_path", help="Balance table file (.csv, .yaml)")
    _add_json(show_parser)


def _setup_report_subcommand(subparsers) -> None:
    report_parser = subparsers.add_parser("report", help="Merge and classify without writing")
    report_parser.add_argument("config", help="Morrowind.ini or openmw.cfg")
    _add_code_page(report_parser)
    _add_include_self(report_parser)
    _add_json(report_parser)
