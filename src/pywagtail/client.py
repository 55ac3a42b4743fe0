from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Callable, Mapping
from urllib.parse import urlsplit

import requests

from .cms import fetch_content
from .enums import CachePolicy, ContentFamily, MediaType
from .exceptions import ConfigurationError, RequestValidationError, WagtailFetchError
from .fetch import ErrorSink
from .models import ContentItem, ContentList, MediaMeta, NotFoundResult, Queries
from .utils import content_path

logger = logging.getLogger(__name__)

UNKNOWN_ERROR_MESSAGE = "An unknown error occurred"


@dataclass(frozen=True, slots=True)
class ClientConfig:
    """Connection settings for a :class:`WagtailClient`.

    ``base_url``, ``api_path`` and ``media_base_url`` are joined verbatim, so
    none of them may end with ``/``.
    """

    base_url: str
    api_path: str
    media_base_url: str | None = None
    headers: Mapping[str, str] | None = None
    cache: CachePolicy | str = CachePolicy.FORCE_CACHE
    timeout_s: float | None = 30.0
    on_error: ErrorSink | None = field(default=None, compare=False)

    def __post_init__(self) -> None:
        for name in ("base_url", "api_path", "media_base_url"):
            value = getattr(self, name)
            if value is not None and value.endswith("/"):
                raise ConfigurationError(
                    'base_url, api_path and media_base_url must not end with "/" '
                    f"(got {name}={value!r})"
                )
        if self.headers is not None:
            object.__setattr__(self, "headers", MappingProxyType(dict(self.headers)))

    @classmethod
    def from_env(cls, **overrides: Any) -> ClientConfig:
        """Build a config from ``WAGTAIL_*`` environment variables.

        Keyword arguments that are not ``None`` win over the environment.
        """

        values: dict[str, Any] = {
            "base_url": os.getenv("WAGTAIL_BASE_URL"),
            "api_path": os.getenv("WAGTAIL_API_PATH", "/api/v2"),
            "media_base_url": os.getenv("WAGTAIL_MEDIA_BASE_URL") or None,
            "cache": os.getenv("WAGTAIL_CACHE") or CachePolicy.FORCE_CACHE,
        }
        timeout_env = os.getenv("WAGTAIL_TIMEOUT_S")
        if timeout_env:
            try:
                values["timeout_s"] = float(timeout_env)
            except ValueError as exc:
                raise ConfigurationError(
                    f"WAGTAIL_TIMEOUT_S must be a number, got {timeout_env!r}"
                ) from exc
        values.update({k: v for k, v in overrides.items() if v is not None})

        if not values.get("base_url"):
            raise ConfigurationError("base_url is required (set WAGTAIL_BASE_URL)")
        return cls(**values)

    @property
    def media_base(self) -> str:
        return self.media_base_url or self.base_url


class WagtailClient:
    """A requests-based client for the Wagtail v2 content API.

    Lookups by id or slug (``fetch_page``, ``fetch_image``,
    ``fetch_document``) return a :class:`NotFoundResult` instead of raising
    when nothing is found. Collection fetches raise.
    """

    def __init__(
        self,
        config: ClientConfig | None = None,
        *,
        session: requests.Session | None = None,
        user_agent: str = "pywagtail/0.1.0",
        **config_kwargs: Any,
    ) -> None:
        if config is not None and config_kwargs:
            raise TypeError("Pass either a ClientConfig or keyword settings, not both")
        self._config = config or ClientConfig.from_env(**config_kwargs)
        self._owns_session = session is None
        self._session = session or requests.Session()
        self._session.headers.setdefault("User-Agent", user_agent)

    @property
    def config(self) -> ClientConfig:
        return self._config

    @property
    def session(self) -> requests.Session:
        return self._session

    def close(self) -> None:
        """Close the HTTP session if this client created it."""

        if self._owns_session:
            self._session.close()

    def __enter__(self) -> WagtailClient:
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    # --- Core request ---

    def fetch_content(
        self,
        content: ContentFamily | str,
        queries: Queries | None = None,
        headers: Mapping[str, str] | None = None,
        cache: CachePolicy | str | None = None,
    ) -> ContentList | ContentItem:
        """Fetch ``content`` (e.g. ``"pages"`` or ``"images/3"``).

        ``headers`` and ``cache`` replace the configured defaults for this
        call.
        """

        cfg = self._config
        return fetch_content(
            cfg.base_url,
            cfg.api_path,
            content,
            queries,
            headers or cfg.headers,
            cache or cfg.cache,
            session=self._session,
            timeout_s=cfg.timeout_s,
            on_error=cfg.on_error,
        )

    # --- Identity lookups ---

    def fetch_page(
        self,
        id_or_slug: int | str,
        queries: Queries | None = None,
        headers: Mapping[str, str] | None = None,
        cache: CachePolicy | str | None = None,
    ) -> ContentItem | NotFoundResult:
        """Fetch one page by numeric id or by slug.

        A missing page or a failed request gives a :class:`NotFoundResult`.
        An empty slug matches nothing and never reaches the API.

        Raises:
            RequestValidationError: the queries are invalid (for example
                ``order`` together with ``offset``). This is not turned into
                a :class:`NotFoundResult`.
        """

        if isinstance(id_or_slug, str):
            if not id_or_slug:
                return NotFoundResult("Page not found", None)
            return self._lookup(
                "Page not found",
                lambda: self._first_by_slug(id_or_slug, queries, headers, cache),
            )
        return self._fetch_by_id(ContentFamily.PAGES, "Page not found", id_or_slug, queries, headers, cache)

    def fetch_image(
        self,
        id: int,
        queries: Queries | None = None,
        headers: Mapping[str, str] | None = None,
        cache: CachePolicy | str | None = None,
    ) -> ContentItem | NotFoundResult:
        return self._fetch_by_id(ContentFamily.IMAGES, "Image not found", id, queries, headers, cache)

    def fetch_document(
        self,
        id: int,
        queries: Queries | None = None,
        headers: Mapping[str, str] | None = None,
        cache: CachePolicy | str | None = None,
    ) -> ContentItem | NotFoundResult:
        return self._fetch_by_id(ContentFamily.DOCUMENTS, "Document not found", id, queries, headers, cache)

    def _first_by_slug(
        self,
        slug: str,
        queries: Queries | None,
        headers: Mapping[str, str] | None,
        cache: CachePolicy | str | None,
    ) -> ContentItem | NotFoundResult:
        pages = self.fetch_content(ContentFamily.PAGES, {"slug": slug, **(queries or {})}, headers, cache)
        if isinstance(pages, ContentList) and pages.items:
            return pages.items[0]
        return NotFoundResult("Page not found", pages)

    def _fetch_by_id(
        self,
        family: ContentFamily,
        not_found: str,
        item_id: int,
        queries: Queries | None,
        headers: Mapping[str, str] | None,
        cache: CachePolicy | str | None,
    ) -> ContentItem | NotFoundResult:
        if isinstance(item_id, bool) or not isinstance(item_id, int):
            raise TypeError(f"{family.value} can only be looked up by integer id, got {item_id!r}")
        path = content_path(family, item_id)
        return self._lookup(not_found, lambda: self.fetch_content(path, queries, headers, cache))

    def _lookup(
        self, not_found: str, fetch: Callable[[], ContentItem | NotFoundResult]
    ) -> ContentItem | NotFoundResult:
        try:
            return fetch()
        except RequestValidationError:
            raise
        except WagtailFetchError as exc:
            return NotFoundResult(not_found, exc)
        except Exception as exc:
            logger.exception("%s during lookup", UNKNOWN_ERROR_MESSAGE)
            return NotFoundResult(UNKNOWN_ERROR_MESSAGE, exc)

    # --- Collections ---

    def fetch_pages(
        self,
        queries: Queries | None = None,
        headers: Mapping[str, str] | None = None,
        cache: CachePolicy | str | None = None,
    ) -> ContentList:
        return self.fetch_content(ContentFamily.PAGES, queries, headers, cache)  # type: ignore[return-value]

    def fetch_images(
        self,
        queries: Queries | None = None,
        headers: Mapping[str, str] | None = None,
        cache: CachePolicy | str | None = None,
    ) -> ContentList:
        return self.fetch_content(ContentFamily.IMAGES, queries, headers, cache)  # type: ignore[return-value]

    def fetch_documents(
        self,
        queries: Queries | None = None,
        headers: Mapping[str, str] | None = None,
        cache: CachePolicy | str | None = None,
    ) -> ContentList:
        return self.fetch_content(ContentFamily.DOCUMENTS, queries, headers, cache)  # type: ignore[return-value]

    # --- Media ---

    def get_media_src(self, media: ContentItem | MediaMeta | Mapping[str, Any]) -> str | None:
        """Build the public URL of an image or document.

        Image ``download_url`` values are relative and get the media base
        prepended. Document ``download_url`` values are absolute; only their
        path is kept. Other types yield ``None``.
        """

        if isinstance(media, ContentItem):
            if media.family is ContentFamily.PAGES:
                return None
            media = media.meta
        if isinstance(media, MediaMeta):
            media_type, download_url = media.type, media.download_url
        else:
            media_type, download_url = media.get("type"), media.get("download_url")

        if not download_url:
            return None
        if media_type == MediaType.IMAGE.value:
            return self._config.media_base + download_url
        if media_type == MediaType.DOCUMENT.value:
            return self._config.media_base + urlsplit(download_url).path
        return None
