"""Python client for the Wagtail v2 content API.

Primary entrypoint: :class:`pywagtail.client.WagtailClient`.
"""

from .client import ClientConfig, WagtailClient
from .cms import fetch_content
from .enums import CachePolicy, ContentFamily, FetchErrorCode, MediaType, SearchOperator
from .exceptions import (
    ConfigurationError,
    RequestValidationError,
    WagtailAPIError,
    WagtailFetchError,
)
from .fetch import FetchErrorRecord, fetch_request
from .models import ContentItem, ContentList, ContentQueries, MediaMeta, NotFoundResult, PageMeta
from .utils import build_query_string, content_path

__all__ = [
    "WagtailClient",
    "ClientConfig",
    "fetch_content",
    "fetch_request",
    "build_query_string",
    "content_path",
    "WagtailAPIError",
    "ConfigurationError",
    "RequestValidationError",
    "WagtailFetchError",
    "FetchErrorRecord",
    "FetchErrorCode",
    "CachePolicy",
    "ContentFamily",
    "MediaType",
    "SearchOperator",
    "ContentItem",
    "ContentList",
    "ContentQueries",
    "PageMeta",
    "MediaMeta",
    "NotFoundResult",
]
