from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Callable, Mapping

import requests

from .enums import CachePolicy, FetchErrorCode
from .exceptions import WagtailFetchError
from .utils import cache_control_header

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class FetchErrorRecord:
    """Diagnostic record emitted for every failed request."""

    method: str
    url: str
    data: Any
    headers: Mapping[str, str] | None
    error: BaseException


ErrorSink = Callable[[FetchErrorRecord], None]


def log_fetch_error(record: FetchErrorRecord) -> None:
    """Default sink: log the failed request on ``pywagtail.fetch``."""

    logger.error(
        "FETCH_REQUEST_ERROR method=%s url=%s data=%r headers=%r error=%r",
        record.method,
        record.url,
        record.data,
        record.headers,
        record.error,
        extra={"fetch_error": record},
    )


def _emit(on_error: ErrorSink | None, record: FetchErrorRecord) -> None:
    sink = on_error or log_fetch_error
    try:
        sink(record)
    except Exception:  # noqa: BLE001 - a broken sink must not mask the request error
        logger.debug("Error sink %r failed", sink, exc_info=True)


def _request_headers(
    headers: Mapping[str, str] | None, cache: CachePolicy | str | None
) -> dict[str, str]:
    merged = dict(headers or {})
    cache_control = cache_control_header(cache)
    if cache_control and not any(k.lower() == "cache-control" for k in merged):
        merged["Cache-Control"] = cache_control
    return merged


def fetch_request(
    method: str,
    url: str,
    data: Any = None,
    headers: Mapping[str, str] | None = None,
    cache: CachePolicy | str | None = CachePolicy.FORCE_CACHE,
    *,
    session: requests.Session | None = None,
    timeout_s: float | None = None,
    on_error: ErrorSink | None = None,
) -> Any:
    """Perform one HTTP request and return the decoded JSON body.

    ``GET`` requests carry no body; other methods send ``data`` as JSON.

    Raises:
        WagtailFetchError: ``REQUEST_FAILED`` for a non-2xx status,
            ``UNEXPECTED_ERROR`` for anything else that goes wrong (network
            failure, undecodable body). The failure is reported to
            ``on_error`` before it is raised.
    """

    method = method.upper()
    http = session or requests.Session()
    kwargs: dict[str, Any] = {
        "headers": _request_headers(headers, cache),
        "timeout": timeout_s,
    }
    if method != "GET":
        kwargs["json"] = data

    try:
        resp = http.request(method, url, **kwargs)
        if not resp.ok:
            raise WagtailFetchError(
                f"Request failed: HTTP {resp.status_code}",
                FetchErrorCode.REQUEST_FAILED,
                status_code=resp.status_code,
            )
        return resp.json()
    except WagtailFetchError as exc:
        _emit(on_error, FetchErrorRecord(method, url, data, headers, exc))
        raise
    except Exception as exc:
        _emit(on_error, FetchErrorRecord(method, url, data, headers, exc))
        raise WagtailFetchError(
            "An unexpected error occurred",
            FetchErrorCode.UNEXPECTED_ERROR,
            cause=exc,
        ) from exc
    finally:
        if session is None:
            http.close()
