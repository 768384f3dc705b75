from __future__ import annotations

import json

import httpx
import pytest

from gandiscout_api.client import GandiClient
from gandiscout_api.config import Credentials
from gandiscout_api.errors import ApiError, ConfigError, UnexpectedResponseError, ValidationError


CREDENTIALS = Credentials(token="test-token", api_url="https://api.test.gandi")


def _client(handler) -> GandiClient:
    return GandiClient(CREDENTIALS, transport=httpx.MockTransport(handler))


@pytest.mark.asyncio
async def test_get_request_sends_auth_headers_and_repeated_query_params() -> None:
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json={"products": []}, headers={"X-Total-Count": "0"})

    async with _client(handler) as client:
        response = await client.request(
            "/v5/domain/check",
            query_params={"name": ["example.com", "example.net"], "currency": None},
        )

    request = seen[0]
    assert request.method == "GET"
    assert request.url.host == "api.test.gandi"
    assert request.url.path == "/v5/domain/check"
    assert request.url.params.get_list("name") == ["example.com", "example.net"]
    assert "currency" not in request.url.params
    assert request.headers["Authorization"] == "Bearer test-token"
    assert request.headers["Accept"] == "application/json"
    assert "Content-Type" not in request.headers
    assert response.status_code == 200
    assert response.data == {"products": []}
    assert response.headers["x-total-count"] == "0"


@pytest.mark.asyncio
async def test_post_with_body_sets_json_content_type() -> None:
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(201, json={"message": "DNS Record Created"})

    async with _client(handler) as client:
        response = await client.request("/v5/livedns/domains/example.com/records", "post", {"rrset_name": "www"})

    assert seen[0].method == "POST"
    assert seen[0].headers["Content-Type"] == "application/json"
    assert json.loads(seen[0].content) == {"rrset_name": "www"}
    assert response.status_code == 201


@pytest.mark.asyncio
async def test_success_body_falls_back_to_text_or_empty_dict() -> None:
    bodies = iter([b"plain text body", b""])

    def handler(_request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, content=next(bodies))

    async with _client(handler) as client:
        text_response = await client.request("/v5/anything")
        empty_response = await client.request("/v5/anything")

    assert text_response.data == "plain text body"
    assert empty_response.data == {}


@pytest.mark.asyncio
async def test_error_response_carries_status_and_parsed_message() -> None:
    def handler(_request: httpx.Request) -> httpx.Response:
        return httpx.Response(403, json={"code": 403, "message": "Access was denied to this resource.", "object": "HTTPForbidden"})

    async with _client(handler) as client:
        with pytest.raises(ApiError) as excinfo:
            await client.request("/v5/domain/domains")

    err = excinfo.value
    assert err.status_code == 403
    assert err.message == "Access was denied to this resource."
    assert err.response_body["object"] == "HTTPForbidden"


@pytest.mark.asyncio
async def test_error_response_with_raw_body() -> None:
    bodies = iter([b"upstream exploded", b""])

    def handler(_request: httpx.Request) -> httpx.Response:
        return httpx.Response(502, content=next(bodies))

    async with _client(handler) as client:
        with pytest.raises(ApiError) as raw_error:
            await client.request("/v5/domain/domains")
        with pytest.raises(ApiError) as empty_error:
            await client.request("/v5/domain/domains")

    assert raw_error.value.message == "upstream exploded"
    assert raw_error.value.response_body == {"message": "upstream exploded"}
    assert empty_error.value.message == "HTTP 502: Bad Gateway"
    assert empty_error.value.status_code == 502


@pytest.mark.asyncio
async def test_transport_failure_becomes_api_error() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    async with _client(handler) as client:
        with pytest.raises(ApiError) as excinfo:
            await client.request("/v5/domain/domains")

    assert excinfo.value.status_code is None
    assert "connection refused" in excinfo.value.message


@pytest.mark.asyncio
async def test_malformed_api_url_is_a_config_error_before_any_request() -> None:
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json={})

    credentials = Credentials(token="test-token", api_url="https://api.test.gandi:notaport")
    async with GandiClient(credentials, transport=httpx.MockTransport(handler)) as client:
        with pytest.raises(ConfigError, match="Invalid API URL"):
            await client.request("/v5/domain/domains")

    assert seen == []


@pytest.mark.asyncio
async def test_auth_smoke_test_reports_failure_without_raising() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        assert request.url.path == "/v5/organization/organizations"
        return httpx.Response(401, json={"message": "The server could not verify that you are authorized"})

    async with _client(handler) as client:
        result = await client.test_auth()

    assert result.success is False
    assert result.status_code == 401
    assert "authorized" in (result.error or "")


@pytest.mark.asyncio
async def test_auth_smoke_test_success() -> None:
    def handler(_request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json=[{"id": "org-1", "name": "me"}])

    async with _client(handler) as client:
        result = await client.test_auth()

    assert result.success is True
    assert result.organizations == [{"id": "org-1", "name": "me"}]


@pytest.mark.asyncio
async def test_list_domains_passes_pagination_params() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        assert request.url.path == "/v5/domain/domains"
        assert request.url.params["page"] == "2"
        assert request.url.params["per_page"] == "50"
        assert "sort_by" not in request.url.params
        return httpx.Response(200, json=[{"fqdn": "example.com"}])

    async with _client(handler) as client:
        domains = await client.list_domains(page=2, per_page=50, sort_by=None)

    assert domains == [{"fqdn": "example.com"}]


@pytest.mark.asyncio
async def test_dns_records_are_parsed_into_models() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        if request.url.path.endswith("/records"):
            return httpx.Response(
                200,
                json=[
                    {"rrset_name": "@", "rrset_type": "A", "rrset_values": ["192.0.2.1"], "rrset_ttl": 10800},
                    {"rrset_name": "www", "rrset_type": "CNAME", "rrset_values": ["example.com."]},
                ],
            )
        assert request.url.path == "/v5/livedns/domains/example.com/records/_dmarc/TXT"
        return httpx.Response(200, json={"rrset_name": "_dmarc", "rrset_type": "TXT", "rrset_values": ['"v=DMARC1"']})

    async with _client(handler) as client:
        records = await client.list_dns_records("Example.com")
        dmarc = await client.get_dns_record("example.com", "_dmarc", "txt")

    assert [r.rrset_name for r in records] == ["@", "www"]
    assert records[0].rrset_ttl == 10800
    assert dmarc.rrset_type == "TXT"


@pytest.mark.asyncio
async def test_dns_records_with_unexpected_shape_raise() -> None:
    def handler(_request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json={"not": "a list"})

    async with _client(handler) as client:
        with pytest.raises(UnexpectedResponseError):
            await client.list_dns_records("example.com")


@pytest.mark.asyncio
async def test_invalid_record_name_is_rejected_before_any_request() -> None:
    def handler(_request: httpx.Request) -> httpx.Response:
        raise AssertionError("no request should be sent for an invalid record name")

    async with _client(handler) as client:
        with pytest.raises(ValidationError):
            await client.get_dns_record("example.com", "../../domain", "A")


@pytest.mark.asyncio
async def test_record_write_operations_use_livedns_endpoints() -> None:
    seen: list[tuple[str, str, dict | None]] = []

    def handler(request: httpx.Request) -> httpx.Response:
        body = json.loads(request.content) if request.content else None
        seen.append((request.method, request.url.path, body))
        if request.method == "DELETE":
            return httpx.Response(204)
        return httpx.Response(201, json={"message": "ok"})

    async with _client(handler) as client:
        await client.create_dns_record("example.com", "www", "cname", ["example.com."], ttl=300)
        await client.update_dns_record("example.com", "@", "A", ["192.0.2.10"])
        await client.delete_dns_record("example.com", "old", "TXT")

    assert seen == [
        (
            "POST",
            "/v5/livedns/domains/example.com/records",
            {"rrset_name": "www", "rrset_type": "CNAME", "rrset_values": ["example.com."], "rrset_ttl": 300},
        ),
        ("PUT", "/v5/livedns/domains/example.com/records/@/A", {"rrset_values": ["192.0.2.10"]}),
        ("DELETE", "/v5/livedns/domains/example.com/records/old/TXT", None),
    ]
