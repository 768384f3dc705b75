from __future__ import annotations

import json
import logging
from typing import Any, Mapping, TypeVar

import httpx
from pydantic import TypeAdapter
from pydantic import ValidationError as SchemaError

from .config import Credentials
from .errors import ApiError, ConfigError, UnexpectedResponseError
from .models import ApiResponse, AuthResult, DnsRecord
from .records import normalize_record_type, sanitize_domain_name, sanitize_record_name


logger = logging.getLogger(__name__)

API_PREFIX = "/v5"
BODY_METHODS = frozenset({"POST", "PUT", "PATCH"})

T = TypeVar("T")


def _parse_body(text: str) -> Any:
    if not text:
        return {}
    try:
        return json.loads(text)
    except json.JSONDecodeError:
        return text


def _encode_query(query_params: Mapping[str, Any] | None) -> list[tuple[str, str]]:
    encoded: list[tuple[str, str]] = []
    if not query_params:
        return encoded
    for key, value in query_params.items():
        if value is None:
            continue
        values = value if isinstance(value, (list, tuple)) else [value]
        for item in values:
            if item is None:
                continue
            if isinstance(item, bool):
                encoded.append((key, "true" if item else "false"))
            else:
                encoded.append((key, str(item)))
    return encoded


def parse_model(target: type[T], data: Any, *, endpoint: str) -> T:
    try:
        return TypeAdapter(target).validate_python(data)
    except SchemaError as exc:
        raise UnexpectedResponseError(
            f"Unexpected response shape from {endpoint}: {exc.error_count()} validation error(s)",
            response_body=data,
        ) from exc


class GandiClient:
    """Thin async wrapper around the Gandi v5 REST API.

    One request per call: no retries, no caching, httpx default timeouts.
    """

    def __init__(
        self,
        credentials: Credentials,
        *,
        http_client: httpx.AsyncClient | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._credentials = credentials
        self._owns_client = http_client is None
        self._client = http_client or httpx.AsyncClient(transport=transport)

    async def __aenter__(self) -> GandiClient:
        return self

    async def __aexit__(self, *_exc_info: object) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    @property
    def base_url(self) -> str:
        return self._credentials.api_url

    def build_url(self, endpoint: str) -> httpx.URL:
        try:
            return httpx.URL(self._credentials.api_url).join(endpoint)
        except httpx.InvalidURL as exc:
            raise ConfigError(f"Invalid API URL {self._credentials.api_url!r}: {exc}") from exc

    async def request(
        self,
        endpoint: str,
        method: str = "GET",
        body: Any = None,
        query_params: Mapping[str, Any] | None = None,
    ) -> ApiResponse:
        method = method.upper()
        url = self.build_url(endpoint)
        headers = {
            "Authorization": f"Bearer {self._credentials.token}",
            "Accept": "application/json",
        }
        if body is not None and method in BODY_METHODS:
            headers["Content-Type"] = "application/json"
        content = json.dumps(body) if body is not None else None

        logger.debug("%s %s", method, url)
        try:
            response = await self._client.request(
                method,
                url,
                params=_encode_query(query_params),
                headers=headers,
                content=content,
            )
        except httpx.HTTPError as exc:
            raise ApiError(str(exc) or exc.__class__.__name__) from exc

        logger.debug("%s %s -> %s", method, url, response.status_code)
        text = response.text
        if 200 <= response.status_code < 300:
            return ApiResponse(
                status_code=response.status_code,
                data=_parse_body(text),
                headers=dict(response.headers),
            )

        try:
            error_body = json.loads(text)
        except json.JSONDecodeError:
            error_body = {"message": text}

        message = error_body.get("message") if isinstance(error_body, dict) else None
        if not message:
            message = f"HTTP {response.status_code}: {response.reason_phrase}"
        raise ApiError(str(message), status_code=response.status_code, response_body=error_body)

    async def get_json(self, endpoint: str, query_params: Mapping[str, Any] | None = None) -> Any:
        response = await self.request(endpoint, query_params=query_params)
        return response.data

    async def test_auth(self) -> AuthResult:
        try:
            response = await self.request(f"{API_PREFIX}/organization/organizations")
        except ApiError as exc:
            return AuthResult(success=False, error=exc.message, status_code=exc.status_code)
        return AuthResult(success=True, organizations=response.data)

    async def list_domains(self, **options: Any) -> Any:
        """List domains in the account; ``page``, ``per_page``, ``sort_by`` and
        ``sharing_id`` are passed through as query parameters."""
        return await self.get_json(f"{API_PREFIX}/domain/domains", query_params=options)

    async def get_domain(self, domain: str) -> Any:
        fqdn = sanitize_domain_name(domain)
        return await self.get_json(f"{API_PREFIX}/domain/domains/{fqdn}")

    async def list_dns_records(self, domain: str) -> list[DnsRecord]:
        fqdn = sanitize_domain_name(domain)
        endpoint = f"{API_PREFIX}/livedns/domains/{fqdn}/records"
        data = await self.get_json(endpoint)
        return parse_model(list[DnsRecord], data, endpoint=endpoint)

    async def get_dns_record(self, domain: str, name: str, record_type: str) -> DnsRecord:
        endpoint = self._record_endpoint(domain, name, record_type)
        data = await self.get_json(endpoint)
        return parse_model(DnsRecord, data, endpoint=endpoint)

    async def create_dns_record(
        self,
        domain: str,
        name: str,
        record_type: str,
        values: list[str],
        ttl: int | None = None,
    ) -> Any:
        fqdn = sanitize_domain_name(domain)
        body: dict[str, Any] = {
            "rrset_name": sanitize_record_name(name),
            "rrset_type": normalize_record_type(record_type),
            "rrset_values": list(values),
        }
        if ttl is not None:
            body["rrset_ttl"] = ttl
        response = await self.request(f"{API_PREFIX}/livedns/domains/{fqdn}/records", "POST", body)
        return response.data

    async def update_dns_record(
        self,
        domain: str,
        name: str,
        record_type: str,
        values: list[str],
        ttl: int | None = None,
    ) -> Any:
        body: dict[str, Any] = {"rrset_values": list(values)}
        if ttl is not None:
            body["rrset_ttl"] = ttl
        response = await self.request(self._record_endpoint(domain, name, record_type), "PUT", body)
        return response.data

    async def delete_dns_record(self, domain: str, name: str, record_type: str) -> None:
        await self.request(self._record_endpoint(domain, name, record_type), "DELETE")

    def _record_endpoint(self, domain: str, name: str, record_type: str) -> str:
        fqdn = sanitize_domain_name(domain)
        record_name = sanitize_record_name(name)
        rtype = normalize_record_type(record_type)
        return f"{API_PREFIX}/livedns/domains/{fqdn}/records/{record_name}/{rtype}"
