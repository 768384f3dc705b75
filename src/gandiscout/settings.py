from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Literal

import jsonschema
from pydantic import BaseModel, ConfigDict, Field
from pydantic import ValidationError as SchemaError

from .schema_utils import validate_payload


logger = logging.getLogger(__name__)

PATTERNS = ("hyphenated", "abbreviated", "prefix", "suffix", "numbers")
PRIMARY_TLD_COUNT = 3


class TldConfig(BaseModel):
    model_config = ConfigDict(extra="forbid")

    mode: Literal["extend", "replace"] = "extend"
    defaults: list[str] = Field(default_factory=lambda: ["com", "net", "org", "io", "dev", "app", "co", "ai"])
    custom: list[str] = Field(default_factory=list)


class VariationConfig(BaseModel):
    model_config = ConfigDict(extra="forbid", populate_by_name=True)

    enabled: bool = True
    patterns: list[str] = Field(default_factory=lambda: list(PATTERNS))
    prefixes: list[str] = Field(default_factory=lambda: ["get", "my", "the", "try"])
    suffixes: list[str] = Field(default_factory=lambda: ["app", "hq", "hub", "io"])
    max_numbers: int = Field(default=3, ge=0, le=100, alias="maxNumbers")


class RateLimitConfig(BaseModel):
    model_config = ConfigDict(extra="forbid", populate_by_name=True)

    max_concurrent: int = Field(default=10, ge=1, alias="maxConcurrent")
    delay_ms: int = Field(default=100, ge=0, alias="delayMs")


class CheckerConfig(BaseModel):
    model_config = ConfigDict(extra="forbid", populate_by_name=True)

    tlds: TldConfig = Field(default_factory=TldConfig)
    variations: VariationConfig = Field(default_factory=VariationConfig)
    rate_limit: RateLimitConfig = Field(default_factory=RateLimitConfig, alias="rateLimit")


def default_checker_config() -> CheckerConfig:
    return CheckerConfig()


def load_checker_config(path: Path) -> CheckerConfig:
    """Read the domain-checker JSON file, falling back to built-in defaults.

    A missing file is silent; unreadable, malformed or invalid files log a
    warning before the fallback.
    """
    if not path.exists():
        return default_checker_config()
    try:
        raw = json.loads(path.read_text(encoding="utf-8"))
        validate_payload(raw, "checker_config.schema.json")
        return CheckerConfig.model_validate(raw)
    except (OSError, UnicodeDecodeError, json.JSONDecodeError, jsonschema.ValidationError, SchemaError) as exc:
        logger.warning("Ignoring domain checker config %s: %s", path, exc)
        return default_checker_config()


def resolve_tlds(config: CheckerConfig, override: list[str] | None = None) -> list[str]:
    if override:
        return list(override)
    tld_config = config.tlds
    if tld_config.mode == "replace" and tld_config.custom:
        return list(tld_config.custom)
    return [*tld_config.defaults, *tld_config.custom]


def primary_tlds(config: CheckerConfig, override: list[str] | None = None) -> list[str]:
    if override:
        return list(override)
    return config.tlds.defaults[:PRIMARY_TLD_COUNT]


def parse_tld_list(raw: str) -> list[str]:
    return [tld.strip().lstrip(".").lower() for tld in raw.split(",") if tld.strip().lstrip(".")]
