from __future__ import annotations

import json
from functools import lru_cache
from importlib import resources

import jsonschema


@lru_cache(maxsize=None)
def load_schema(name: str) -> dict:
    return json.loads(resources.files(__package__).joinpath("schemas", name).read_text(encoding="utf-8"))


def validate_payload(payload: dict, schema_name: str) -> None:
    jsonschema.validate(payload, load_schema(schema_name))
