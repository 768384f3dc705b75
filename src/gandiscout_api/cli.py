from __future__ import annotations

import argparse
import asyncio
import json
import sys
from typing import Any

from .checker import check_availability
from .client import GandiClient
from .config import Credentials, default_config_paths, load_credentials
from .errors import ApiError, GandiError
from .log import configure_logging
from .models import DomainProduct, format_amount
from .term import ansi, status_label, supports_color


def make_client(credentials: Credentials) -> GandiClient:
    return GandiClient(credentials)


def report_error(exc: GandiError) -> None:
    sys.stderr.write(f"Error: {exc}\n")
    if isinstance(exc, ApiError) and exc.response_body is not None:
        sys.stderr.write(f"API response: {json.dumps(exc.response_body, default=str)}\n")


def _with_default_tld(domain: str) -> str:
    return domain if "." in domain else f"{domain}.com"


def _render_product(product: DomainProduct, taxes_included: bool | None = None) -> str:
    color = supports_color()
    lines = [f"Domain: {product.name}", ""]
    lines.append(f"Status: {status_label(product, color=color)}")

    kind = product.status_kind
    if kind == "available":
        if product.prices:
            lines.append("")
            lines.append(ansi("Pricing", "1;34", enabled=color))
            for price in product.prices:
                line = f"  {price.duration_unit}: {format_amount(price.price_after_taxes)} {price.currency}"
                if price.taxes is not None:
                    line += f" (+ {price.taxes} tax)"
                lines.append(line)
        if product.process:
            lines.append("")
            lines.append(ansi("Supported features", "1;34", enabled=color))
            lines.extend(f"  - {feature}" for feature in product.process)
        if product.tld:
            lines.append("")
            lines.append(ansi("TLD information", "1;34", enabled=color))
            lines.append(f"  Extension: {product.tld}")
    elif kind == "unavailable":
        lines.append("  already registered")
    elif kind == "pending":
        lines.append("  registration in progress")
    elif kind == "error" and product.message:
        lines.append(f"  Message: {product.message}")

    if taxes_included is not None:
        lines.append("")
        lines.append(f"Taxes included: {'Yes' if taxes_included else 'No'}")
    return "\n".join(lines) + "\n"


async def _check_one(credentials: Credentials, domain: str) -> DomainProduct | None:
    async with make_client(credentials) as client:
        response = await check_availability(client, [domain])
    if not response.products:
        return None
    return response.products[0]


def check_main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="gandi-check",
        description="Check availability and pricing of a single domain",
    )
    parser.add_argument("domain", nargs="?", help="Domain to check; '.com' is added when no TLD is given")
    parser.add_argument("-v", "--verbose", action="count", default=0)
    args = parser.parse_args(argv)

    if not args.domain:
        sys.stderr.write("Usage: gandi-check <domain>\nExample: gandi-check example.com\n")
        return 1

    configure_logging(args.verbose)
    domain = _with_default_tld(args.domain)
    sys.stdout.write(f"Checking availability for: {domain}\n\n")

    try:
        credentials = load_credentials(default_config_paths())
        product = asyncio.run(_check_one(credentials, domain))
    except GandiError as exc:
        report_error(exc)
        return 1

    if product is None:
        sys.stderr.write("No results returned from API\n")
        return 1

    sys.stdout.write(_render_product(product, product.taxes_included))
    return 0


def _render_records(records: list[Any]) -> str:
    lines = []
    for record in records:
        ttl = record.rrset_ttl if record.rrset_ttl is not None else "-"
        values = ", ".join(record.rrset_values)
        lines.append(f"{record.rrset_name:<30} {record.rrset_type:<6} {ttl!s:>6}  {values}")
    return "\n".join(lines) + ("\n" if lines else "")


async def _run_dns_command(credentials: Credentials, args: argparse.Namespace) -> Any:
    async with make_client(credentials) as client:
        if args.command == "auth":
            result = await client.test_auth()
            if not result.success:
                raise ApiError(result.error or "authentication failed", status_code=result.status_code)
            return result.organizations
        if args.command == "domains":
            return await client.list_domains(page=args.page, per_page=args.per_page, sort_by=args.sort_by)
        if args.command == "info":
            return await client.get_domain(args.domain)
        if args.command == "list":
            return await client.list_dns_records(args.domain)
        if args.command == "get":
            return await client.get_dns_record(args.domain, args.name, args.type)
        if args.command == "add":
            return await client.create_dns_record(args.domain, args.name, args.type, args.values, args.ttl)
        if args.command == "set":
            return await client.update_dns_record(args.domain, args.name, args.type, args.values, args.ttl)
        if args.command == "delete":
            await client.delete_dns_record(args.domain, args.name, args.type)
            return {"message": f"Deleted {args.name} {args.type.upper()} on {args.domain}"}
    raise ValueError(f"Unknown command: {args.command}")


def _to_jsonable(payload: Any) -> Any:
    if isinstance(payload, list):
        return [_to_jsonable(item) for item in payload]
    if hasattr(payload, "model_dump"):
        return payload.model_dump(mode="json", exclude_none=True)
    return payload


def dns_main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(prog="gandi-dns", description="Inspect Gandi domains and LiveDNS records")
    parser.add_argument("--json", action="store_true", help="Output as JSON")
    parser.add_argument("-v", "--verbose", action="count", default=0)
    sub = parser.add_subparsers(dest="command", required=True)

    sub.add_parser("auth", help="Verify the API token")

    domains = sub.add_parser("domains", help="List domains in the account")
    domains.add_argument("--page", type=int)
    domains.add_argument("--per-page", type=int)
    domains.add_argument("--sort-by")

    info = sub.add_parser("info", help="Show domain details")
    info.add_argument("domain")

    list_cmd = sub.add_parser("list", help="List DNS records")
    list_cmd.add_argument("domain")

    get_cmd = sub.add_parser("get", help="Show one record set")
    get_cmd.add_argument("domain")
    get_cmd.add_argument("name")
    get_cmd.add_argument("type")

    for command, help_text in (("add", "Create a record set"), ("set", "Create or replace a record set")):
        write_cmd = sub.add_parser(command, help=help_text)
        write_cmd.add_argument("domain")
        write_cmd.add_argument("name")
        write_cmd.add_argument("type")
        write_cmd.add_argument("values", nargs="+")
        write_cmd.add_argument("--ttl", type=int)

    delete_cmd = sub.add_parser("delete", help="Delete a record set")
    delete_cmd.add_argument("domain")
    delete_cmd.add_argument("name")
    delete_cmd.add_argument("type")

    args = parser.parse_args(argv)
    configure_logging(args.verbose)

    try:
        credentials = load_credentials(default_config_paths())
        payload = asyncio.run(_run_dns_command(credentials, args))
    except GandiError as exc:
        report_error(exc)
        return 1

    if args.json or args.command not in {"list", "get"}:
        sys.stdout.write(json.dumps(_to_jsonable(payload), indent=2) + "\n")
    elif args.command == "list":
        sys.stdout.write(_render_records(payload))
    else:
        sys.stdout.write(_render_records([payload]))
    return 0


if __name__ == "__main__":
    raise SystemExit(check_main())
