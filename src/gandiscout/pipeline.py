from __future__ import annotations

import asyncio
import logging
from typing import Awaitable, Callable, Iterator

from pydantic import BaseModel, ConfigDict, Field

from gandiscout_api.checker import check_availability
from gandiscout_api.client import GandiClient
from gandiscout_api.models import DomainProduct

from .settings import CheckerConfig, primary_tlds, resolve_tlds
from .variations import generate_variations


logger = logging.getLogger(__name__)

Sleep = Callable[[float], Awaitable[None]]


class DomainSuggestion(BaseModel):
    model_config = ConfigDict(extra="forbid")

    domain: str
    available: bool
    status: str
    price: str | None = None
    tld: str | None = None


class SuggestionResult(BaseModel):
    model_config = ConfigDict(extra="forbid")

    exact: list[DomainSuggestion] = Field(default_factory=list)
    variations: dict[str, list[DomainSuggestion]] = Field(default_factory=dict)


def base_name_from_input(text: str) -> str:
    return text.strip().split(".")[0]


def project_product(product: DomainProduct) -> DomainSuggestion:
    price = product.first_price
    return DomainSuggestion(
        domain=product.name,
        available=product.is_available,
        status=product.status,
        price=price.label() if price is not None else None,
        tld=product.tld,
    )


def count_available(result: SuggestionResult) -> int:
    exact = sum(1 for item in result.exact if item.available)
    variations = sum(len(items) for items in result.variations.values())
    return exact + variations


def _chunk(items: list[str], size: int) -> Iterator[list[str]]:
    for idx in range(0, len(items), size):
        yield items[idx : idx + size]


async def check_exact_matches(
    client: GandiClient,
    base_name: str,
    tlds: list[str],
    config: CheckerConfig,
    *,
    sleep: Sleep = asyncio.sleep,
) -> list[DomainSuggestion]:
    domains = [f"{base_name}.{tld}" for tld in tlds]
    batch_size = config.rate_limit.max_concurrent
    delay_s = config.rate_limit.delay_ms / 1000

    results: list[DomainSuggestion] = []
    batches = list(_chunk(domains, batch_size))
    for idx, batch in enumerate(batches, start=1):
        logger.debug("exact batch %d/%d: %s", idx, len(batches), ", ".join(batch))
        response = await check_availability(client, batch)
        results.extend(project_product(product) for product in response.products)
        if idx < len(batches) and delay_s > 0:
            await sleep(delay_s)
    return results


async def check_variations(
    client: GandiClient,
    base_name: str,
    tlds: list[str],
    config: CheckerConfig,
    *,
    sleep: Sleep = asyncio.sleep,
) -> dict[str, list[DomainSuggestion]]:
    """Check every generated candidate against ``tlds``, one call per candidate.

    Only available domains are kept. Patterns without candidates get no key.
    """
    if not tlds:
        return {}
    variation_set = generate_variations(base_name, config.variations)
    delay_s = config.rate_limit.delay_ms / 1000

    results: dict[str, list[DomainSuggestion]] = {}
    calls = 0
    for pattern, names in variation_set.items():
        if not names:
            continue
        results[pattern] = []
        for name in names:
            if calls and delay_s > 0:
                await sleep(delay_s)
            calls += 1
            response = await check_availability(client, [f"{name}.{tld}" for tld in tlds])
            results[pattern].extend(
                project_product(product) for product in response.products if product.is_available
            )
        logger.debug("pattern %s: %d candidate(s), %d available", pattern, len(names), len(results[pattern]))
    return results


async def suggest_domains(
    client: GandiClient,
    base_name: str,
    config: CheckerConfig,
    *,
    tlds: list[str] | None = None,
    include_exact: bool = True,
    include_variations: bool = True,
    sleep: Sleep = asyncio.sleep,
) -> SuggestionResult:
    """Check ``base_name`` across TLDs and, optionally, its name variations.

    ``tlds`` overrides both the exact-match TLD list and the primary TLDs used
    for variations. The first ``ApiError`` propagates and nothing is returned.
    """
    result = SuggestionResult()

    if include_exact:
        exact_tlds = resolve_tlds(config, tlds)
        logger.info("checking %s across %d TLD(s)", base_name, len(exact_tlds))
        result.exact = await check_exact_matches(client, base_name, exact_tlds, config, sleep=sleep)

    if include_variations and config.variations.enabled:
        variation_tlds = primary_tlds(config, tlds)
        logger.info("checking variations of %s on %s", base_name, ", ".join(variation_tlds))
        result.variations = await check_variations(client, base_name, variation_tlds, config, sleep=sleep)

    return result
