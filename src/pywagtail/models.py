from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Iterator, Mapping, Sequence, TypedDict, Union

from .enums import ContentFamily, SearchOperator

QueryValue = Union[str, int, float, bool, Enum, Sequence[Union[str, int]], None]
Queries = Mapping[str, QueryValue]


class ContentQueries(TypedDict, total=False):
    """Query parameters understood by the Wagtail v2 API.

    Any other key is passed through unchanged.

    See https://docs.wagtail.org/en/stable/advanced_topics/api/v2/usage.html
    """

    type: str
    offset: int
    limit: int
    order: str
    slug: str
    child_of: int
    ancestor_of: int
    descendant_of: int
    site: str
    search: str
    search_operator: SearchOperator | str
    locale: str
    translation_of: int
    fields: Sequence[str]
    show_in_menus: bool


def _split_known(data: Mapping[str, Any], known: Sequence[str]) -> dict[str, Any]:
    return {k: v for k, v in data.items() if k not in known}


@dataclass(frozen=True, slots=True)
class PageMeta:
    """``meta`` block of a page."""

    slug: str
    type: str
    locale: str | None = None
    html_url: str | None = None
    detail_url: str | None = None
    seo_title: str | None = None
    search_description: str | None = None
    extra: Mapping[str, Any] = field(default_factory=dict)

    _KNOWN = (
        "slug",
        "type",
        "locale",
        "html_url",
        "detail_url",
        "seo_title",
        "search_description",
    )

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> PageMeta:
        return cls(
            slug=str(data.get("slug", "")),
            type=str(data.get("type", "")),
            locale=data.get("locale"),
            html_url=data.get("html_url"),
            detail_url=data.get("detail_url"),
            seo_title=data.get("seo_title"),
            search_description=data.get("search_description"),
            extra=_split_known(data, cls._KNOWN),
        )


@dataclass(frozen=True, slots=True)
class MediaMeta:
    """``meta`` block of an image or a document."""

    type: str
    download_url: str
    detail_url: str | None = None
    tags: tuple[str, ...] = ()
    extra: Mapping[str, Any] = field(default_factory=dict)

    _KNOWN = ("type", "download_url", "detail_url", "tags")

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> MediaMeta:
        return cls(
            type=str(data.get("type", "")),
            download_url=str(data.get("download_url", "")),
            detail_url=data.get("detail_url"),
            tags=tuple(data.get("tags") or ()),
            extra=_split_known(data, cls._KNOWN),
        )


Meta = Union[PageMeta, MediaMeta]


@dataclass(frozen=True, slots=True)
class ContentItem:
    """A single page, image or document.

    ``family`` tells which shape ``meta`` has. Fields the client does not
    model (page body, image width, ...) are kept in ``extra``.
    """

    id: int
    title: str
    meta: Meta
    family: ContentFamily
    extra: Mapping[str, Any] = field(default_factory=dict)

    _KNOWN = ("id", "title", "meta")

    @classmethod
    def from_dict(cls, data: Mapping[str, Any], family: ContentFamily) -> ContentItem:
        if not isinstance(data, Mapping) or "id" not in data:
            raise ValueError("Content item must be an object with an 'id'")
        raw_meta = data.get("meta") or {}
        if not isinstance(raw_meta, Mapping):
            raise ValueError("Content item 'meta' must be an object")

        meta: Meta
        if family is ContentFamily.PAGES:
            meta = PageMeta.from_dict(raw_meta)
        else:
            meta = MediaMeta.from_dict(raw_meta)

        return cls(
            id=int(data["id"]),
            title=str(data.get("title", "")),
            meta=meta,
            family=family,
            extra=_split_known(data, cls._KNOWN),
        )

    def __getitem__(self, key: str) -> Any:
        """Look up an extra field returned by the API (e.g. ``item["body"]``)."""

        return self.extra[key]


@dataclass(frozen=True, slots=True)
class ContentList:
    """A collection response: ``meta.total_count`` plus the items."""

    total_count: int
    items: tuple[ContentItem, ...]
    family: ContentFamily

    @classmethod
    def from_dict(cls, data: Mapping[str, Any], family: ContentFamily) -> ContentList:
        if not isinstance(data, Mapping):
            raise ValueError("Content list must be an object")
        raw_items = data.get("items")
        if not isinstance(raw_items, list):
            raise ValueError("Content list must contain an 'items' array")
        meta = data.get("meta") or {}
        items = tuple(ContentItem.from_dict(item, family) for item in raw_items)
        return cls(
            total_count=int(meta.get("total_count", len(items))),
            items=items,
            family=family,
        )

    def __len__(self) -> int:
        return len(self.items)

    def __iter__(self) -> Iterator[ContentItem]:
        return iter(self.items)


@dataclass(frozen=True, slots=True)
class NotFoundResult:
    """Returned (never raised) by identity lookups that found nothing.

    ``data`` is the empty :class:`ContentList` or the exception that caused
    the miss.
    """

    message: str
    data: Any = None

    def __bool__(self) -> bool:
        return False
