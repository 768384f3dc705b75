from __future__ import annotations

__all__ = ["CheckerConfig", "SuggestionResult", "generate_variations", "suggest_domains"]


def __getattr__(name: str):
    if name in {"SuggestionResult", "suggest_domains"}:
        from .pipeline import SuggestionResult, suggest_domains

        return {"SuggestionResult": SuggestionResult, "suggest_domains": suggest_domains}[name]
    if name == "CheckerConfig":
        from .settings import CheckerConfig

        return CheckerConfig
    if name == "generate_variations":
        from .variations import generate_variations

        return generate_variations
    raise AttributeError(name)
