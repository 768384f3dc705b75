from __future__ import annotations

import argparse
import asyncio
import json
import sys

from gandiscout_api.cli import make_client, report_error
from gandiscout_api.config import Credentials, default_config_paths, load_credentials
from gandiscout_api.errors import GandiError
from gandiscout_api.log import configure_logging
from gandiscout_api.term import ansi, supports_color

from .pipeline import SuggestionResult, base_name_from_input, count_available, suggest_domains
from .settings import CheckerConfig, load_checker_config, parse_tld_list, resolve_tlds


RULE = "=" * 55

USAGE = """\
Usage: gandi-suggest <domain> [options]

Options:
  --tlds <list>        Comma-separated TLD list (e.g., com,net,org)
  --no-variations      Skip name variations, only check TLDs
  --variations-only    Skip exact TLD matches, only show variations
  --json               Output as JSON
  -v, --verbose        Log progress to stderr (repeat for debug output)

Examples:
  gandi-suggest example
  gandi-suggest example.com --tlds com,net,io
  gandi-suggest example --no-variations
"""


def _render_user_report(result: SuggestionResult, *, variations_only: bool, no_variations: bool) -> str:
    color = supports_color()
    lines: list[str] = []

    if not variations_only and result.exact:
        lines.append(RULE)
        lines.append(ansi("EXACT MATCHES (Different TLDs)", "1;36", enabled=color))
        lines.append(RULE)
        lines.append("")

        available = [r for r in result.exact if r.available]
        unavailable = [r for r in result.exact if not r.available]
        if available:
            lines.append(ansi("Available:", "1;32", enabled=color))
            lines.append("")
            lines.extend(f"  {r.domain:<30} {r.price or 'N/A'}" for r in available)
            lines.append("")
        if unavailable:
            lines.append(ansi("Unavailable:", "1;31", enabled=color))
            lines.append("")
            lines.extend(f"  {r.domain:<30} ({r.status})" for r in unavailable)
            lines.append("")

    if not no_variations and result.variations:
        lines.append(RULE)
        lines.append(ansi("NAME VARIATIONS", "1;35", enabled=color))
        lines.append(RULE)
        lines.append("")
        for pattern, domains in result.variations.items():
            if not domains:
                continue
            lines.append(f"{pattern.capitalize()}:")
            lines.append("")
            lines.extend(f"  {r.domain:<30} {r.price or 'N/A'}" for r in domains)
            lines.append("")

    lines.append(RULE)
    lines.append(f"SUMMARY: {count_available(result)} available domains found")
    lines.append(RULE)
    return "\n".join(lines) + "\n"


async def _run_suggestions(
    credentials: Credentials,
    base_name: str,
    config: CheckerConfig,
    args: argparse.Namespace,
) -> SuggestionResult:
    async with make_client(credentials) as client:
        return await suggest_domains(
            client,
            base_name,
            config,
            tlds=args.tlds,
            include_exact=not args.variations_only,
            include_variations=not args.no_variations,
        )


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(prog="gandi-suggest", add_help=False)
    parser.add_argument("domain", nargs="?")
    parser.add_argument("--tlds", type=parse_tld_list)
    parser.add_argument("--no-variations", action="store_true")
    parser.add_argument("--variations-only", action="store_true")
    parser.add_argument("--json", action="store_true")
    parser.add_argument("-v", "--verbose", action="count", default=0)
    parser.add_argument("-h", "--help", action="store_true")
    args = parser.parse_args(argv)

    if args.help:
        sys.stdout.write(USAGE)
        return 0
    if not args.domain:
        sys.stderr.write(USAGE)
        return 1

    configure_logging(args.verbose)
    paths = default_config_paths()
    base_name = base_name_from_input(args.domain)

    try:
        credentials = load_credentials(paths)
        config = load_checker_config(paths.checker_config_file)
        if not args.json:
            tld_count = len(resolve_tlds(config, args.tlds))
            sys.stdout.write(f"Checking availability for: {base_name}\n\n")
            extra = "" if args.no_variations else " and generating variations"
            sys.stdout.write(f"Checking {tld_count} TLDs{extra}...\n\n")
        result = asyncio.run(_run_suggestions(credentials, base_name, config, args))
    except GandiError as exc:
        report_error(exc)
        return 1

    if args.json:
        sys.stdout.write(json.dumps(result.model_dump(mode="json"), indent=2) + "\n")
    else:
        sys.stdout.write(
            _render_user_report(
                result,
                variations_only=args.variations_only,
                no_variations=args.no_variations,
            )
        )
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
