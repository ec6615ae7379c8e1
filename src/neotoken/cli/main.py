# Copyright 2026 Neotoken Contributors
# SPDX-License-Identifier: Apache-2.0

"""Entry point for the neotoken command-line interface."""

import argparse
import logging
import sys
from pathlib import Path

from neotoken.config import CONFIG_FILE_NAME, ConfigError, TokenizerConfig, load_config
from neotoken.parser.document import tokenize

# ###############
# Public Interface
# ###############


def main() -> None:
    """Run the neotoken CLI."""
    parser = argparse.ArgumentParser(
        prog="neotoken",
        description="neotoken - semantic tokens for neopolitan documents",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable debug logging",
    )
    subparsers = parser.add_subparsers(dest="command", metavar="COMMAND")

    # tokens subcommand
    tokens_parser = subparsers.add_parser(
        "tokens",
        help="Print the semantic tokens of a document",
        description="Tokenize a document and print one line per token.",
    )
    tokens_parser.add_argument("file", help="Document to tokenize")
    _add_config_argument(tokens_parser)

    # check subcommand
    check_parser = subparsers.add_parser(
        "check",
        help="Report syntax errors in documents",
        description="Tokenize documents and report every grammar error found.",
    )
    check_parser.add_argument("files", nargs="+", help="Documents to check")
    _add_config_argument(check_parser)

    args = parser.parse_args()
    if args.command is None:
        parser.print_help()
        sys.exit(0)

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")

    sys.exit(_dispatch(args))


# ################
# Implementation
# ################


def _add_config_argument(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--config",
        default=None,
        help=f"Path to the configuration file (default: ./{CONFIG_FILE_NAME} if present)",
    )


def _dispatch(args: argparse.Namespace) -> int:
    """Dispatch to the appropriate subcommand handler."""
    if args.command == "tokens":
        return _cmd_tokens(args)
    if args.command == "check":
        return _cmd_check(args)
    return 0


def _load_config(args: argparse.Namespace) -> TokenizerConfig:
    """Load the configuration named on the command line, or the default file if present."""
    if args.config is not None:
        return load_config(Path(args.config))
    default = Path.cwd() / CONFIG_FILE_NAME
    if default.exists():
        return load_config(default)
    return TokenizerConfig()


def _read_document(path: Path) -> str | None:
    """Read a document, printing an error and returning None on failure.

    Line breaks are kept as they are so offsets match the file.
    """
    try:
        with path.open(encoding="utf-8", newline="") as handle:
            return handle.read()
    except FileNotFoundError:
        print(f"Error: file '{path}' does not exist.", file=sys.stderr)
    except (OSError, UnicodeDecodeError) as exc:
        print(f"Error: cannot read '{path}': {exc}", file=sys.stderr)
    return None


def _cmd_tokens(args: argparse.Namespace) -> int:
    """Handle the tokens subcommand."""
    try:
        config = _load_config(args)
    except ConfigError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    path = Path(args.file)
    source = _read_document(path)
    if source is None:
        return 1

    result = tokenize(source, config.keyword_table())
    for tok in result.tokens:
        print(f"{tok.start}-{tok.end} {tok.kind.value} {tok.text!r}")
    for error in result.errors:
        line, column = error.location(source)
        print(f"{path}:{line}:{column}: {error.message}", file=sys.stderr)
    return 1 if result.errors else 0


def _cmd_check(args: argparse.Namespace) -> int:
    """Handle the check subcommand."""
    try:
        config = _load_config(args)
    except ConfigError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    keywords = config.keyword_table()
    has_errors = False
    for name in args.files:
        path = Path(name)
        source = _read_document(path)
        if source is None:
            has_errors = True
            continue
        result = tokenize(source, keywords)
        for error in result.errors:
            line, column = error.location(source)
            print(f"{path}:{line}:{column}: {error.message}", file=sys.stderr)
            has_errors = True

    if has_errors:
        return 1

    print("No issues found.")
    return 0
