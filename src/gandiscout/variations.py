from __future__ import annotations

import re

from .settings import PATTERNS, VariationConfig


CAMEL_BOUNDARY_RE = re.compile(r"([a-z])([A-Z])")
SYLLABLE_RE = re.compile(r"[^aeiou]+[aeiou]+", re.IGNORECASE)
VOWEL_RE = re.compile(r"[aeiou]", re.IGNORECASE)
MIN_ABBREVIATION_LENGTH = 3

VariationSet = dict[str, list[str]]


def hyphenated_variants(base_name: str) -> list[str]:
    variants: list[str] = []

    camel = CAMEL_BOUNDARY_RE.sub(r"\1-\2", base_name).lower()
    if camel != base_name.lower() and "--" not in camel:
        variants.append(camel)

    chunks = SYLLABLE_RE.findall(base_name)
    if len(chunks) >= 2:
        syllables = "-".join(chunks).lower()
        if "--" not in syllables:
            variants.append(syllables)

    return variants


def abbreviated_variants(base_name: str) -> list[str]:
    abbreviated = VOWEL_RE.sub("", base_name)
    if len(abbreviated) >= MIN_ABBREVIATION_LENGTH and abbreviated != base_name:
        return [abbreviated]
    return []


def prefixed_variants(base_name: str, prefixes: list[str]) -> list[str]:
    variants: list[str] = []
    for prefix in prefixes:
        variants.append(f"{prefix}-{base_name}")
        variants.append(f"{prefix}{base_name}")
    return variants


def suffixed_variants(base_name: str, suffixes: list[str]) -> list[str]:
    variants: list[str] = []
    for suffix in suffixes:
        variants.append(f"{base_name}-{suffix}")
        variants.append(f"{base_name}{suffix}")
    return variants


def numbered_variants(base_name: str, max_numbers: int) -> list[str]:
    return [f"{base_name}{n}" for n in range(2, max_numbers + 2)]


def generate_variations(base_name: str, config: VariationConfig) -> VariationSet:
    """Derive alternative base names from ``base_name``.

    Every pattern key is present in the result, in a fixed order; patterns
    missing from ``config.patterns`` map to an empty list. Candidates are not
    deduplicated within or across patterns.
    """
    enabled = set(config.patterns)
    builders = {
        "hyphenated": lambda: hyphenated_variants(base_name),
        "abbreviated": lambda: abbreviated_variants(base_name),
        "prefix": lambda: prefixed_variants(base_name, config.prefixes),
        "suffix": lambda: suffixed_variants(base_name, config.suffixes),
        "numbers": lambda: numbered_variants(base_name, config.max_numbers),
    }
    return {pattern: builders[pattern]() if pattern in enabled else [] for pattern in PATTERNS}
