from __future__ import annotations

from enum import Enum


class ContentFamily(str, Enum):
    """Top-level resource collections exposed by the Wagtail v2 API."""

    PAGES = "pages"
    IMAGES = "images"
    DOCUMENTS = "documents"


class MediaType(str, Enum):
    """``meta.type`` values of the media families."""

    IMAGE = "wagtailimages.Image"
    DOCUMENT = "wagtaildocs.Document"


class FetchErrorCode(str, Enum):
    """Machine-readable codes carried by :class:`WagtailFetchError`."""

    REQUEST_FAILED = "REQUEST_FAILED"
    UNEXPECTED_ERROR = "UNEXPECTED_ERROR"


class CachePolicy(str, Enum):
    """Cache hints accepted by the client, named after the Fetch API modes."""

    DEFAULT = "default"
    NO_STORE = "no-store"
    RELOAD = "reload"
    NO_CACHE = "no-cache"
    FORCE_CACHE = "force-cache"
    ONLY_IF_CACHED = "only-if-cached"


class SearchOperator(str, Enum):
    """Valid values for the ``search_operator`` query parameter."""

    AND = "and"
    OR = "or"
