"""Command-line interface for the ledger message coder.

The CLI is a thin façade over the encoder, decoder and plan helpers so that
operators can turn text into codeword amounts (and back) without writing
Python.
"""

from __future__ import annotations

import argparse
import logging
import sys
from typing import Sequence

from .amounts import AmountFormatError, format_amount, to_units
from .config import ConfigurationError, CoderConfig, load_coder_config, set_default_config_path
from .encoder import ChunkUnencodableError
from .model import FrequencyTableError, format_range_table
from .plan import format_plan, plan_message
from .text import InvalidInputSymbolError, sanitize_message, validate_message

logger = logging.getLogger(__name__)


class CLIError(RuntimeError):
    """Raised when CLI arguments are invalid."""


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Ledger message coder CLI")
    parser.add_argument(
        "--config",
        default=None,
        help="Path to a YAML config file (default: ~/.ledgercoder.yaml)",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Enable debug logging",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    encode_parser = subparsers.add_parser(
        "encode", help="encode a lowercase message into codeword amounts"
    )
    encode_parser.add_argument("message", help="Text to encode (letters and spaces)")
    encode_parser.add_argument(
        "--sanitize",
        action="store_true",
        help="Lower-case the message and drop unsupported characters first",
    )

    decode_parser = subparsers.add_parser(
        "decode", help="decode codeword amounts back into plaintext"
    )
    decode_parser.add_argument(
        "amounts",
        help="Comma-separated amounts in received order (e.g. 0.06,0.0123)",
    )
    decode_parser.add_argument(
        "--show-chunks",
        action="store_true",
        help="Print the text decoded from each amount",
    )

    subparsers.add_parser("table", help="print the symbol frequency and range table")

    plan_parser = subparsers.add_parser(
        "plan", help="show the payments needed to send a message"
    )
    plan_parser.add_argument("message", help="Text to send (letters and spaces)")
    plan_parser.add_argument(
        "--address",
        default="<recipient>",
        help="Destination address shown in the plan",
    )
    plan_parser.add_argument(
        "--sanitize",
        action="store_true",
        help="Lower-case the message and drop unsupported characters first",
    )

    return parser


def _split_csv(raw: str) -> list[str]:
    return [segment.strip() for segment in raw.split(",") if segment.strip()]


def _prepare_message(raw: str, config: CoderConfig, *, sanitize: bool) -> str:
    message = sanitize_message(raw) if sanitize else raw
    if not message:
        raise CLIError("message is empty")
    return validate_message(message, config.range_table())


def cmd_encode(args: argparse.Namespace, config: CoderConfig) -> None:
    message = _prepare_message(args.message, config, sanitize=args.sanitize)
    amounts = config.build_encoder().encode(message)
    print(",".join(format_amount(amount) for amount in amounts))


def cmd_decode(args: argparse.Namespace, config: CoderConfig) -> None:
    parts = _split_csv(args.amounts)
    if not parts:
        raise CLIError("At least one amount is required")
    amounts = [to_units(part) for part in parts]

    chunks = config.build_decoder().decode_chunks(amounts)
    print("".join(chunk.text for chunk in chunks))

    if args.show_chunks:
        for chunk in chunks:
            if chunk.corrupt:
                print(f"{format_amount(chunk.amount)} → corrupt (dropped)")
            else:
                print(f"{format_amount(chunk.amount)} → {chunk.text!r}")


def cmd_table(config: CoderConfig) -> None:
    print(format_range_table(config.range_table()))


def cmd_plan(args: argparse.Namespace, config: CoderConfig) -> None:
    message = _prepare_message(args.message, config, sanitize=args.sanitize)
    plan = plan_message(message, args.address, config.build_encoder())
    print(format_plan(plan))


def main(argv: Sequence[str] | None = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO)
    try:
        set_default_config_path(args.config)
        config = load_coder_config()
        if args.command == "encode":
            cmd_encode(args, config)
        elif args.command == "decode":
            cmd_decode(args, config)
        elif args.command == "table":
            cmd_table(config)
        elif args.command == "plan":
            cmd_plan(args, config)
        else:  # pragma: no cover - argparse enforces choices
            raise CLIError(f"Unknown command: {args.command}")
    except KeyboardInterrupt:  # pragma: no cover - interactive use
        logger.info("Interrupted by user")
    except (
        CLIError,
        ConfigurationError,
        AmountFormatError,
        ChunkUnencodableError,
        FrequencyTableError,
        InvalidInputSymbolError,
    ) as exc:
        parser.exit(1, f"error: {exc}\n")


if __name__ == "__main__":
    main(sys.argv[1:])
