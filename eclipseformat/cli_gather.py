"""
CLI Phase 1: Gather user requirements.

Parses command-line arguments and returns UserConfig dataclass.
No side effects beyond argparse's own usage/help handling.
"""

from __future__ import annotations

import argparse
from pathlib import Path
from typing import List, Optional

from . import __version__
from .cli_config import DEFAULT_CONFIG_FILE, DEFAULT_TIMEOUT, UserConfig
from .providers import DEFAULT_PROVIDER, describe_providers
from .shared import DEFAULT_EXTENSION


def _handle_list_command(what: str) -> None:
    """Print the registered components of the given kind."""
    if what == "providers":
        print("Available Providers:")
        for name, description in describe_providers():
            print(f"  {name:<10} {description}")


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="eclipse-format",
        description="Eclipse Code Formatter CLI Tool",
        epilog="""
Examples:
  Format every Java file under src/ recursively:
    eclipse-format -c config.xml -r src/

  Show what would change in a single file, with details:
    eclipse-format -d -v MyClass.java

  Use google-java-format instead of Eclipse:
    eclipse-format --provider command \\
      --formatter-command "google-java-format -" -r src/
""",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    parser.add_argument("target", nargs="?", metavar="TARGET",
                        help="File or directory to format")
    parser.add_argument("-c", "--config", default=DEFAULT_CONFIG_FILE,
                        help="Path to Eclipse formatter configuration file "
                             f"(default: {DEFAULT_CONFIG_FILE})")
    parser.add_argument("-d", "--dry-run", action="store_true",
                        help="Show what would be formatted without making changes")
    parser.add_argument("-r", "--recursive", action="store_true",
                        help="Format files recursively")
    parser.add_argument("-v", "--verbose", action="store_true",
                        help="Verbose output")

    parser.add_argument("--extension", default=DEFAULT_EXTENSION,
                        help=f"File extension to format, case-insensitive (default: {DEFAULT_EXTENSION})")
    parser.add_argument("--provider", default=DEFAULT_PROVIDER,
                        help=f"Formatting engine to use (default: {DEFAULT_PROVIDER}). "
                             "See --list providers")
    parser.add_argument("--eclipse", metavar="PATH",
                        help="Eclipse executable for the eclipse provider "
                             "(default: $ECLIPSE_FORMATTER_EXECUTABLE or 'eclipse' on PATH)")
    parser.add_argument("--formatter-command", metavar="CMD",
                        help="Command for the command provider; reads source on stdin, writes stdout")
    parser.add_argument("--timeout", type=float, default=DEFAULT_TIMEOUT,
                        help=f"Seconds to wait for the formatter per file (default: {DEFAULT_TIMEOUT:g})")

    parser.add_argument("--debug", action="store_true",
                        help="Verbose logs + stack traces on failure.")
    parser.add_argument("--log-file",
                        help="Optional path to a log file. If set, all output is also written there.")
    parser.add_argument("--list", choices=["providers"], dest="list_what",
                        help="List available components and exit")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def gather_user_requirements(argv: Optional[List[str]] = None) -> Optional[UserConfig]:
    """
    Phase 1: Parse command-line arguments and return user configuration.

    Returns None when a listing was requested and printed instead.
    A missing TARGET exits with status 2 through argparse.
    """
    parser = _build_parser()
    args = parser.parse_args(argv)

    if args.list_what:
        _handle_list_command(args.list_what)
        return None

    if args.target is None:
        parser.error("the following arguments are required: TARGET")

    return UserConfig(
        target=Path(args.target),
        config_file=Path(args.config),
        dry_run=args.dry_run,
        recursive=args.recursive,
        extension=args.extension,
        provider=args.provider,
        eclipse=args.eclipse,
        formatter_command=args.formatter_command,
        timeout=args.timeout,
        verbose=args.verbose,
        debug=args.debug,
        log_file=args.log_file,
    )
