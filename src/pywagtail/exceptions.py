from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .enums import FetchErrorCode


class WagtailAPIError(RuntimeError):
    """Base exception for Wagtail API client failures."""


class ConfigurationError(WagtailAPIError, ValueError):
    """Raised when a client is constructed with a malformed configuration."""


class RequestValidationError(WagtailAPIError, ValueError):
    """Raised before any request is sent when a query combination is invalid."""


class WagtailFetchError(WagtailAPIError):
    """Raised by the transport for HTTP-level and unexpected failures.

    Branch on :attr:`code` rather than on the message.
    """

    def __init__(
        self,
        message: str,
        code: FetchErrorCode,
        *,
        status_code: int | None = None,
        cause: BaseException | None = None,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.status_code = status_code
        self.cause = cause

    def __repr__(self) -> str:
        return f"{type(self).__name__}({str(self)!r}, code={self.code.value!r})"
