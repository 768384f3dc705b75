from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field


ProductStatus = Literal["available", "unavailable", "pending", "error", "other"]
KNOWN_STATUSES = frozenset({"available", "unavailable", "pending", "error"})


@dataclass(frozen=True)
class ApiResponse:
    status_code: int
    data: Any
    headers: dict[str, str] = field(default_factory=dict)


@dataclass(frozen=True)
class AuthResult:
    success: bool
    organizations: Any = None
    error: str | None = None
    status_code: int | None = None


class Price(BaseModel):
    model_config = ConfigDict(extra="ignore")

    duration_unit: str | None = None
    min_duration: int | None = None
    max_duration: int | None = None
    price_after_taxes: int | float | str | None = None
    price_before_taxes: int | float | str | None = None
    currency: str | None = None
    taxes: Any = None

    def label(self) -> str:
        return f"{format_amount(self.price_after_taxes)} {self.currency}"


def format_amount(value: int | float | str | None) -> str:
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


class DomainProduct(BaseModel):
    model_config = ConfigDict(extra="ignore")

    name: str
    status: str
    prices: list[Price] | None = None
    process: list[str] | None = None
    tld: str | None = None
    message: str | None = None
    taxes_included: bool | None = None

    @property
    def status_kind(self) -> ProductStatus:
        if self.status in KNOWN_STATUSES:
            return self.status  # type: ignore[return-value]
        return "other"

    @property
    def is_available(self) -> bool:
        return self.status == "available"

    @property
    def first_price(self) -> Price | None:
        if not self.prices:
            return None
        return self.prices[0]


class CheckResponse(BaseModel):
    model_config = ConfigDict(extra="ignore")

    products: list[DomainProduct] = Field(default_factory=list)
    currency: str | None = None
    grid: str | None = None


class DnsRecord(BaseModel):
    model_config = ConfigDict(extra="ignore")

    rrset_name: str
    rrset_type: str
    rrset_values: list[str] = Field(default_factory=list)
    rrset_ttl: int | None = None
    rrset_href: str | None = None
