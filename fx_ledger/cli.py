"""Command line access to the currency and rate stores."""

from __future__ import annotations

import argparse
import sys
from typing import Sequence

from fx_ledger import FxLedger
from fx_ledger.exceptions import FxLedgerError
from fx_ledger.models import CurrencyFormat
from fx_ledger.utils.logger import get_logger, set_verbosity

LOGGER = get_logger(__name__)

__all__ = ["parse_args", "main"]


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="fx-ledger", description=__doc__)
    parser.add_argument(
        "--home",
        dest="home",
        default=None,
        help="Directory holding .currencies.txt and .rates.txt (default: user home)",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    commands = parser.add_subparsers(dest="command", required=True)

    commands.add_parser("init", help="Create missing stores from the bundled templates")
    commands.add_parser("list", help="List stored currencies and their rates")
    commands.add_parser("rates", help="Print the rate matrix")
    commands.add_parser("clear-all-rates", help="Delete every stored rate")

    add = commands.add_parser("add", help="Add a currency")
    add.add_argument("name")
    add.add_argument("format", choices=[member.code for member in CurrencyFormat])

    remove = commands.add_parser("remove", help="Remove a currency")
    remove.add_argument("name")

    set_rate = commands.add_parser("set-rate", help="Store the rate from one currency to another")
    set_rate.add_argument("source")
    set_rate.add_argument("target")
    set_rate.add_argument("rate", type=float)

    clear = commands.add_parser("clear-rates", help="Delete the rates stored for a currency")
    clear.add_argument("name")

    convert = commands.add_parser("convert", help="Convert an amount between currencies")
    convert.add_argument("amount", type=float)
    convert.add_argument("source")
    convert.add_argument("target")

    words = commands.add_parser("words", help="Write a number with unit names")
    words.add_argument("value", type=float)
    words.add_argument(
        "--format",
        dest="format",
        default=CurrencyFormat.WESTERN.code,
        choices=[member.code for member in CurrencyFormat],
    )
    return parser.parse_args(argv)


def run(args: argparse.Namespace) -> None:
    ledger = FxLedger(args.home)
    command = args.command
    if command == "init":
        created = ledger.init()
        for path in created:
            print(f"created {path}")
        if not created:
            print("stores already present")
    elif command == "list":
        for name, currency in ledger.currencies().items():
            rates = ", ".join(f"{target}={rate}" for target, rate in sorted(currency.rates.items()))
            print(f"{name} ({currency.format_code}) {rates}".rstrip())
    elif command == "rates":
        print(ledger.rate_table().to_string(na_rep="-"))
    elif command == "clear-all-rates":
        ledger.clear_all_rates()
    elif command == "add":
        currency = ledger.add_currency(args.name, args.format)
        print(currency.name)
    elif command == "remove":
        ledger.remove_currency(args.name)
    elif command == "set-rate":
        ledger.set_rate(args.source, args.target, args.rate)
    elif command == "clear-rates":
        ledger.clear_rates(args.name)
    elif command == "convert":
        source = ledger.currency(args.source)
        target = ledger.currency(args.target)
        converted = source.convert(args.amount, target.name)
        print(f"{converted} {target.name} ({target.to_words(converted)})")
    elif command == "words":
        print(CurrencyFormat.from_code(args.format).scale.scale(args.value))


def main(argv: Sequence[str] | None = None) -> int:
    args = parse_args(argv)
    set_verbosity(args.verbose)
    try:
        run(args)
    except (FxLedgerError, ValueError) as exc:
        LOGGER.debug("Command %s failed", args.command, exc_info=True)
        print(f"error: {exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":  # pragma: no cover - CLI entry point
    sys.exit(main())
