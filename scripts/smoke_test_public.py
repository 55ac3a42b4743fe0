from __future__ import annotations

import argparse
import time
from dataclasses import dataclass
from typing import Callable

from pywagtail import ClientConfig, NotFoundResult, WagtailClient
from pywagtail.exceptions import RequestValidationError, WagtailFetchError


@dataclass(frozen=True, slots=True)
class SmokeResult:
    name: str
    ok: bool
    detail: str


def _short(text: str) -> str:
    text = text.replace("\n", " ").strip()
    if len(text) > 140:
        text = text[:140] + "…"
    return text


def _run(name: str, fn: Callable[[], str]) -> SmokeResult:
    try:
        return SmokeResult(name=name, ok=True, detail=fn())
    except WagtailFetchError as exc:
        return SmokeResult(name=name, ok=False, detail=_short(f"{exc.code.value}: {exc}"))
    except Exception as exc:  # noqa: BLE001 - smoke tests should not crash
        return SmokeResult(name=name, ok=False, detail=_short(f"{type(exc).__name__}: {exc}"))


def main() -> int:
    parser = argparse.ArgumentParser(
        description=(
            "Public smoke tests for the Wagtail API client. "
            "Prints one line per endpoint."
        )
    )
    parser.add_argument("--base-url", required=True, help="Site root, e.g. https://cms.example.com")
    parser.add_argument("--api-path", default="/api/v2", help="Path of the v2 API.")
    parser.add_argument("--media-base-url", default=None, help="Host serving media files.")
    parser.add_argument(
        "--sleep-between",
        type=float,
        default=1.0,
        help="Seconds to sleep between endpoint calls.",
    )
    args = parser.parse_args()

    client = WagtailClient(
        ClientConfig(
            base_url=args.base_url,
            api_path=args.api_path,
            media_base_url=args.media_base_url,
            cache="no-store",
        )
    )

    checks: list[tuple[str, Callable[[], str]]] = [
        ("pages", lambda: _smoke_pages(client)),
        ("page by slug", lambda: _smoke_page_by_slug(client)),
        ("images", lambda: _smoke_images(client)),
        ("documents", lambda: _smoke_documents(client)),
        ("order+offset rejected", lambda: _smoke_validation(client)),
    ]

    results: list[SmokeResult] = []
    for name, fn in checks:
        print(f"--> Testing {name}...")
        res = _run(name, fn)
        results.append(res)
        print(f"    {'✓' if res.ok else '✗'} {res.detail}")
        if args.sleep_between > 0:
            time.sleep(args.sleep_between)

    failed = 0
    for r in results:
        status = "OK" if r.ok else "FAIL"
        print(f"{r.name}:{status} ({r.detail})")
        if not r.ok:
            failed += 1

    client.close()
    return 0 if failed == 0 else 2


def _smoke_pages(client: WagtailClient) -> str:
    pages = client.fetch_pages({"limit": 5})
    return f"total={pages.total_count} returned={len(pages)}"


def _smoke_page_by_slug(client: WagtailClient) -> str:
    pages = client.fetch_pages({"limit": 1})
    if not pages.items:
        return "no pages to look up"
    slug = pages.items[0].meta.slug
    page = client.fetch_page(slug)
    if isinstance(page, NotFoundResult):
        raise RuntimeError(f"{slug}: {page.message}")
    return f"slug={slug} id={page.id}"


def _smoke_images(client: WagtailClient) -> str:
    images = client.fetch_images({"limit": 1})
    if not images.items:
        return "total=0"
    image = client.fetch_image(images.items[0].id)
    if isinstance(image, NotFoundResult):
        raise RuntimeError(image.message)
    return f"total={images.total_count} src={client.get_media_src(image)}"


def _smoke_documents(client: WagtailClient) -> str:
    docs = client.fetch_documents({"limit": 1})
    src = client.get_media_src(docs.items[0]) if docs.items else None
    return f"total={docs.total_count} src={src}"


def _smoke_validation(client: WagtailClient) -> str:
    try:
        client.fetch_pages({"order": "random", "offset": 1})
    except RequestValidationError as exc:
        return str(exc)
    raise RuntimeError("order+offset was not rejected")


if __name__ == "__main__":
    raise SystemExit(main())
