from __future__ import annotations

import logging

from .client import API_PREFIX, GandiClient, parse_model
from .models import CheckResponse


logger = logging.getLogger(__name__)

CHECK_ENDPOINT = f"{API_PREFIX}/domain/check"


def normalize_domain_names(domain_names: str | list[str]) -> list[str]:
    if isinstance(domain_names, str):
        return [domain_names]
    return list(domain_names)


async def check_availability(client: GandiClient, domain_names: str | list[str]) -> CheckResponse:
    """Query availability and pricing for every name in one request.

    Names are sent as repeated ``name`` parameters and are not validated here;
    the API reports malformed names as products with ``status == "error"``.
    Callers chunk large lists themselves.
    """
    names = normalize_domain_names(domain_names)
    logger.debug("checking %d domain(s): %s", len(names), ", ".join(names))
    response = await client.request(CHECK_ENDPOINT, "GET", None, {"name": names})
    return parse_model(CheckResponse, response.data, endpoint=CHECK_ENDPOINT)
