"""
CLI to test principals against user extraction rules.
"""

import argparse
import json
import logging
import sys
from pathlib import Path

from dotenv import find_dotenv, load_dotenv

from userextract import (
    ConfigError,
    ExtractionSettings,
    UserExtractionError,
    UserExtractor,
)

EXIT_OK = 0
EXIT_EXTRACTION_FAILED = 1
EXIT_CONFIG_ERROR = 2


def build_parser():
    parser = argparse.ArgumentParser(
        prog="userextract",
        description="Map authenticated principals to local users",
    )

    parser.add_argument(
        "principals",
        nargs="*",
        help="Principals to map (default: read one per line from stdin)",
    )

    source = parser.add_mutually_exclusive_group()
    source.add_argument(
        "-p",
        "--pattern",
        help="Single extraction pattern; the user is its first group",
    )
    source.add_argument(
        "-f",
        "--rule-file",
        type=Path,
        help="JSON rule document",
    )

    parser.add_argument(
        "--env",
        action="store_true",
        help="Load .env and fall back to USER_EXTRACTION_PATTERN / USER_EXTRACTION_FILE",
    )
    parser.add_argument(
        "--list-rules",
        action="store_true",
        help="List the configured rules and exit",
    )
    parser.add_argument(
        "--json",
        action="store_true",
        help="Print results as JSON",
    )
    parser.add_argument(
        "--pretty",
        action="store_true",
        help="Pretty print JSON output",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable debug logging",
    )

    return parser


def resolve_settings(args) -> ExtractionSettings:
    """Command-line options first, then the environment when --env is given."""
    settings = ExtractionSettings(pattern=args.pattern, rule_file=args.rule_file)
    if args.env:
        load_dotenv(find_dotenv(usecwd=True))
        settings = settings.merged_with(ExtractionSettings.from_env())
    return settings


def print_rules(extractor: UserExtractor, as_json: bool, indent):
    """Print rules in evaluation order."""
    rules = extractor.describe()

    if as_json:
        print(json.dumps({"rules": rules}, indent=indent))
        return

    print("\nExtraction rules (first match wins):")
    print("=" * 50)

    for index, rule in enumerate(rules):
        action = "allow" if rule["allow"] else "DENY"
        print(f"  {index:>3}  {action:<5}  {rule['pattern']}  ->  {rule['user']}")

    print()


def iter_principals(args):
    if args.principals:
        yield from args.principals
        return
    for line in sys.stdin:
        line = line.rstrip("\r\n")
        if line:
            yield line


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        extractor = UserExtractor.from_settings(resolve_settings(args))
    except ConfigError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(EXIT_CONFIG_ERROR)

    indent = 2 if args.pretty else None

    if args.list_rules:
        print_rules(extractor, args.json, indent)
        sys.exit(EXIT_OK)

    results = []
    failed = False

    for principal in iter_principals(args):
        try:
            user = extractor.extract_user(principal)
        except UserExtractionError as e:
            failed = True
            results.append({"principal": principal, "error": e.kind.value, "message": e.message})
            if not args.json:
                print(f"{principal} !! {e.kind.value}: {e.message}", file=sys.stderr)
            continue

        results.append({"principal": principal, "user": user})
        if not args.json:
            print(f"{principal} -> {user}")

    if args.json:
        print(json.dumps(results, indent=indent))

    sys.exit(EXIT_EXTRACTION_FAILED if failed else EXIT_OK)


if __name__ == "__main__":
    main()
