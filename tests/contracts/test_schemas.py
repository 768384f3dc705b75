from __future__ import annotations

import jsonschema
import pytest

from gandiscout.pipeline import DomainSuggestion, SuggestionResult
from gandiscout.schema_utils import load_schema, validate_payload
from gandiscout.settings import default_checker_config


def test_default_config_matches_config_schema() -> None:
    payload = default_checker_config().model_dump(mode="json", by_alias=True)
    validate_payload(payload, "checker_config.schema.json")


def test_config_schema_rejects_unknown_pattern() -> None:
    schema = load_schema("checker_config.schema.json")
    with pytest.raises(jsonschema.ValidationError):
        jsonschema.validate({"variations": {"patterns": ["reversed"]}}, schema)


def test_config_schema_rejects_zero_batch_size() -> None:
    schema = load_schema("checker_config.schema.json")
    with pytest.raises(jsonschema.ValidationError):
        jsonschema.validate({"rateLimit": {"maxConcurrent": 0}}, schema)


def test_suggestion_result_dump_matches_output_schema() -> None:
    result = SuggestionResult(
        exact=[
            DomainSuggestion(domain="brand.com", available=False, status="unavailable", price=None, tld="com"),
            DomainSuggestion(domain="brand.io", available=True, status="available", price="39 EUR", tld="io"),
        ],
        variations={
            "numbers": [DomainSuggestion(domain="brand2.com", available=True, status="available", price="12 EUR", tld="com")],
            "prefix": [],
        },
    )
    validate_payload(result.model_dump(mode="json"), "suggestion_result.schema.json")


def test_output_schema_rejects_unavailable_variation() -> None:
    schema = load_schema("suggestion_result.schema.json")
    payload = {
        "exact": [],
        "variations": {
            "suffix": [{"domain": "brandhq.com", "available": False, "status": "unavailable", "price": None, "tld": "com"}]
        },
    }
    with pytest.raises(jsonschema.ValidationError):
        jsonschema.validate(payload, schema)


def test_output_schema_rejects_unknown_pattern_key() -> None:
    schema = load_schema("suggestion_result.schema.json")
    with pytest.raises(jsonschema.ValidationError):
        jsonschema.validate({"exact": [], "variations": {"reversed": []}}, schema)
