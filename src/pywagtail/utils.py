from __future__ import annotations

import re
from enum import Enum
from typing import Any

from .enums import CachePolicy, ContentFamily
from .exceptions import RequestValidationError
from .models import Queries

TREE_FILTER_KEYS = ("child_of", "ancestor_of", "descendant_of")

_CONTENT_PATH_RE = re.compile(r"^(?P<family>pages|images|documents)(?:/(?P<id>\d+))?$")

_CACHE_CONTROL = {
    CachePolicy.NO_STORE.value: "no-store",
    CachePolicy.NO_CACHE.value: "no-cache",
    CachePolicy.RELOAD.value: "no-cache",
}


def has_value(value: Any) -> bool:
    """Whether a query value takes part in serialization."""

    return value is not None and value != ""


def render_value(value: Any) -> str:
    if isinstance(value, Enum):
        value = value.value
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    if isinstance(value, (list, tuple)):
        return ",".join(render_value(v) for v in value)
    return str(value)


def build_query_string(queries: Queries | None) -> str:
    """Serialize query parameters in insertion order.

    ``None`` and empty-string values are dropped and sequences are joined
    with commas. Values are not URL-encoded.
    """

    if not queries:
        return ""

    pairs: list[str] = []
    for key, value in queries.items():
        if not has_value(value):
            continue
        pairs.append(f"{key}={render_value(value)}")
    return "&".join(pairs)


def content_path(family: ContentFamily | str, item_id: int | None = None) -> str:
    """Build a content path such as ``"pages"`` or ``"images/3"``."""

    name = ContentFamily(family).value
    if item_id is None:
        return name
    return f"{name}/{int(item_id)}"


def parse_content_path(content: ContentFamily | str) -> tuple[ContentFamily, int | None]:
    """Split a content path into its family and optional item id."""

    raw = content.value if isinstance(content, ContentFamily) else str(content)
    match = _CONTENT_PATH_RE.match(raw)
    if match is None:
        raise RequestValidationError(f"Unknown content path: {raw!r}")
    item_id = match.group("id")
    return ContentFamily(match.group("family")), int(item_id) if item_id is not None else None


def cache_control_header(cache: CachePolicy | str | None) -> str | None:
    """Translate a Fetch-style cache hint into a ``Cache-Control`` value."""

    if cache is None:
        return None
    key = cache.value if isinstance(cache, CachePolicy) else str(cache)
    return _CACHE_CONTROL.get(key)
