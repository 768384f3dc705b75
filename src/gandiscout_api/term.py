from __future__ import annotations

import os
import sys

from .models import DomainProduct, ProductStatus


# Unknown statuses keep their raw text; only the colour is shared.
STATUS_STYLES: dict[ProductStatus, tuple[str | None, str]] = {
    "available": ("AVAILABLE", "1;32"),
    "unavailable": ("UNAVAILABLE", "1;31"),
    "pending": ("PENDING", "1;33"),
    "error": ("ERROR", "1;35"),
    "other": (None, "1;90"),
}


def supports_color() -> bool:
    if os.environ.get("NO_COLOR"):
        return False
    return sys.stdout.isatty()


def ansi(text: str, code: str, *, enabled: bool) -> str:
    if not enabled:
        return text
    return f"\033[{code}m{text}\033[0m"


def status_label(product: DomainProduct, *, color: bool) -> str:
    label, code = STATUS_STYLES[product.status_kind]
    return ansi(label or product.status.upper(), code, enabled=color)
