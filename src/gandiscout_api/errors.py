from __future__ import annotations

from typing import Any


class GandiError(Exception):
    """Base class for every error this toolkit raises on purpose."""


class ConfigError(GandiError):
    pass


class ApiError(GandiError):
    def __init__(self, message: str, status_code: int | None = None, response_body: Any = None) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.response_body = response_body


class UnexpectedResponseError(ApiError):
    """The API answered 2xx but the payload does not have the expected shape."""


class ValidationError(GandiError, ValueError):
    pass
