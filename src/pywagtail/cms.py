from __future__ import annotations

from typing import Mapping

import requests

from .enums import CachePolicy, ContentFamily, FetchErrorCode
from .exceptions import RequestValidationError, WagtailFetchError
from .fetch import ErrorSink, fetch_request
from .models import ContentItem, ContentList, Queries
from .utils import TREE_FILTER_KEYS, build_query_string, has_value, parse_content_path


def validate_queries(family: ContentFamily, queries: Queries | None) -> None:
    """Reject query combinations the API cannot serve.

    Checks only which parameters are present, never their values.
    """

    if not queries:
        return
    if has_value(queries.get("order")) and has_value(queries.get("offset")):
        raise RequestValidationError("random ordering with offset is not supported")
    if family is not ContentFamily.PAGES and any(
        has_value(queries.get(key)) for key in TREE_FILTER_KEYS
    ):
        raise RequestValidationError("tree-position filtering is supported only for pages")


def build_content_url(
    base_url: str,
    api_path: str,
    content: ContentFamily | str,
    queries: Queries | None = None,
) -> str:
    path = content.value if isinstance(content, ContentFamily) else content
    return f"{base_url}{api_path}/{path}/?{build_query_string(queries)}"


def fetch_content(
    base_url: str,
    api_path: str,
    content: ContentFamily | str,
    queries: Queries | None = None,
    headers: Mapping[str, str] | None = None,
    cache: CachePolicy | str | None = CachePolicy.FORCE_CACHE,
    *,
    session: requests.Session | None = None,
    timeout_s: float | None = None,
    on_error: ErrorSink | None = None,
) -> ContentList | ContentItem:
    """Fetch a collection (``"pages"``) or a single item (``"pages/3"``).

    Validation happens before anything is sent. Transport failures propagate
    unchanged as :class:`WagtailFetchError`.

    Raises:
        RequestValidationError: unknown content path, ``order`` combined with
            ``offset``, or a tree filter on images/documents.
        WagtailFetchError: the request failed or the body has the wrong shape.
    """

    family, item_id = parse_content_path(content)
    validate_queries(family, queries)

    url = build_content_url(base_url, api_path, content, queries)
    payload = fetch_request(
        "GET",
        url,
        None,
        headers,
        cache,
        session=session,
        timeout_s=timeout_s,
        on_error=on_error,
    )

    try:
        if item_id is None:
            return ContentList.from_dict(payload, family)
        return ContentItem.from_dict(payload, family)
    except (AttributeError, TypeError, ValueError) as exc:
        raise WagtailFetchError(
            f"Unexpected response shape for {url}",
            FetchErrorCode.UNEXPECTED_ERROR,
            cause=exc,
        ) from exc
