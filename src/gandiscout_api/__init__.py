from __future__ import annotations

__all__ = ["GandiClient", "check_availability", "load_credentials"]


def __getattr__(name: str):
    if name == "GandiClient":
        from .client import GandiClient

        return GandiClient
    if name == "check_availability":
        from .checker import check_availability

        return check_availability
    if name == "load_credentials":
        from .config import load_credentials

        return load_credentials
    raise AttributeError(name)
