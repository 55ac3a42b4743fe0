from __future__ import annotations

import os
import unittest
from unittest.mock import MagicMock, patch

import requests

from pywagtail import (
    ClientConfig,
    ConfigurationError,
    ContentFamily,
    ContentItem,
    ContentList,
    FetchErrorCode,
    MediaMeta,
    NotFoundResult,
    RequestValidationError,
    WagtailClient,
    WagtailFetchError,
)

BASE = "https://cms.example.com"

HOME = {"id": 3, "title": "Home", "meta": {"type": "home.HomePage", "slug": "home"}}


def _session(*, ok: bool = True, status_code: int = 200, payload: object = None) -> MagicMock:
    session = MagicMock()
    response = MagicMock()
    response.ok = ok
    response.status_code = status_code
    response.json.return_value = payload
    session.request.return_value = response
    session.headers = {}
    return session


def _client(session: MagicMock, **kwargs: object) -> WagtailClient:
    config = ClientConfig(base_url=BASE, api_path="/api/v2", **kwargs)
    return WagtailClient(config, session=session)


class TestClientConfig(unittest.TestCase):
    def test_trailing_slash_fails_construction(self) -> None:
        for kwargs in (
            {"base_url": BASE + "/", "api_path": "/api/v2"},
            {"base_url": BASE, "api_path": "/api/v2/"},
            {"base_url": BASE, "api_path": "/api/v2", "media_base_url": "https://media/"},
        ):
            with self.subTest(**kwargs), self.assertRaises(ConfigurationError) as ctx:
                ClientConfig(**kwargs)
            self.assertIn("base_url, api_path and media_base_url", str(ctx.exception))

    def test_from_env(self) -> None:
        env = {"WAGTAIL_BASE_URL": BASE, "WAGTAIL_TIMEOUT_S": "5", "WAGTAIL_CACHE": "no-store"}
        with patch.dict(os.environ, env, clear=True):
            config = ClientConfig.from_env(api_path="/cms/api")
        self.assertEqual(config.base_url, BASE)
        self.assertEqual(config.api_path, "/cms/api")
        self.assertEqual(config.timeout_s, 5.0)
        self.assertEqual(config.cache, "no-store")

    def test_headers_are_copied_and_read_only(self) -> None:
        headers = {"Authorization": "a"}
        config = ClientConfig(base_url=BASE, api_path="/api/v2", headers=headers)

        headers["Authorization"] = "changed"

        self.assertEqual(config.headers, {"Authorization": "a"})
        with self.assertRaises(TypeError):
            config.headers["Authorization"] = "b"  # type: ignore[index]

    def test_from_env_rejects_bad_timeout(self) -> None:
        env = {"WAGTAIL_BASE_URL": BASE, "WAGTAIL_TIMEOUT_S": "abc"}
        with patch.dict(os.environ, env, clear=True), self.assertRaises(ConfigurationError):
            ClientConfig.from_env()

    def test_from_env_requires_base_url(self) -> None:
        with patch.dict(os.environ, {}, clear=True), self.assertRaises(ConfigurationError):
            ClientConfig.from_env()

    def test_client_accepts_keyword_settings(self) -> None:
        session = _session()
        with patch.dict(os.environ, {}, clear=True):
            client = WagtailClient(base_url=BASE, api_path="/api/v2", session=session)
        self.assertEqual(client.config.base_url, BASE)
        self.assertIn("User-Agent", session.headers)


class TestFetchContent(unittest.TestCase):
    def test_default_and_per_call_headers(self) -> None:
        session = _session(payload={"meta": {"total_count": 0}, "items": []})
        client = _client(session, headers={"Authorization": "default"}, cache="no-cache")

        client.fetch_pages()
        _, kwargs = session.request.call_args
        self.assertEqual(kwargs["headers"], {"Authorization": "default", "Cache-Control": "no-cache"})

        client.fetch_pages(headers={"X-Other": "1"}, cache="force-cache")
        _, kwargs = session.request.call_args
        self.assertEqual(kwargs["headers"], {"X-Other": "1"})

    def test_timeout_is_passed_to_session(self) -> None:
        session = _session(payload={"meta": {"total_count": 0}, "items": []})
        client = _client(session, timeout_s=2.5)

        client.fetch_images()

        _, kwargs = session.request.call_args
        self.assertEqual(kwargs["timeout"], 2.5)


class TestFetchPage(unittest.TestCase):
    def test_slug_returns_first_item(self) -> None:
        session = _session(payload={"meta": {"total_count": 1}, "items": [HOME]})
        client = _client(session)

        page = client.fetch_page("home", {"fields": ["body"]})

        self.assertIsInstance(page, ContentItem)
        self.assertEqual(page.id, 3)
        args, _ = session.request.call_args
        self.assertEqual(args[1], f"{BASE}/api/v2/pages/?slug=home&fields=body")

    def test_slug_with_no_items_is_not_found(self) -> None:
        session = _session(payload={"meta": {"total_count": 0}, "items": []})
        client = _client(session)

        result = client.fetch_page("missing")

        self.assertIsInstance(result, NotFoundResult)
        self.assertEqual(result.message, "Page not found")
        self.assertIsInstance(result.data, ContentList)
        self.assertEqual(result.data.items, ())

    def test_empty_slug_is_not_found_without_request(self) -> None:
        session = _session(payload={"meta": {"total_count": 1}, "items": [HOME]})
        client = _client(session)

        result = client.fetch_page("")

        self.assertIsInstance(result, NotFoundResult)
        self.assertEqual(result.message, "Page not found")
        self.assertIsNone(result.data)
        session.request.assert_not_called()

    def test_slug_request_failure_is_not_found(self) -> None:
        session = _session(ok=False, status_code=500)
        client = _client(session, on_error=lambda record: None)

        result = client.fetch_page("home")

        self.assertIsInstance(result, NotFoundResult)
        self.assertEqual(result.message, "Page not found")
        self.assertEqual(result.data.code, FetchErrorCode.REQUEST_FAILED)

    def test_slug_not_found_carries_empty_listing(self) -> None:
        session = _session(payload={"meta": {"total_count": 0}, "items": []})
        client = _client(session)

        result = client.fetch_page("gone")

        self.assertEqual(result.data.total_count, 0)

    def test_id_lookup(self) -> None:
        session = _session(payload=HOME)
        client = _client(session)

        page = client.fetch_page(3)

        self.assertEqual(page.meta.slug, "home")
        args, _ = session.request.call_args
        self.assertEqual(args[1], f"{BASE}/api/v2/pages/3/?")

    def test_id_request_failure_is_not_found(self) -> None:
        session = _session(ok=False, status_code=404)
        client = _client(session, on_error=lambda record: None)

        result = client.fetch_page(42)

        self.assertIsInstance(result, NotFoundResult)
        self.assertEqual(result.message, "Page not found")
        self.assertIsInstance(result.data, WagtailFetchError)
        self.assertEqual(result.data.code, FetchErrorCode.REQUEST_FAILED)

    def test_unknown_error_is_not_found(self) -> None:
        session = _session(payload=HOME)
        client = _client(session)

        with patch("pywagtail.client.fetch_content", side_effect=KeyError("boom")):
            with self.assertLogs("pywagtail.client", level="ERROR"):
                result = client.fetch_page(3)

        self.assertEqual(result.message, "An unknown error occurred")
        self.assertIsInstance(result.data, KeyError)

    def test_validation_error_propagates(self) -> None:
        session = _session()
        client = _client(session)

        with self.assertRaises(RequestValidationError):
            client.fetch_page(3, {"order": "random", "offset": 5})
        with self.assertRaises(RequestValidationError):
            client.fetch_page("home", {"order": "random", "offset": 5})
        session.request.assert_not_called()


class TestMediaLookups(unittest.TestCase):
    def test_fetch_image(self) -> None:
        session = _session(
            payload={"id": 1, "title": "Logo", "meta": {"type": "wagtailimages.Image", "download_url": "/a.png"}}
        )
        client = _client(session)

        image = client.fetch_image(1)

        self.assertEqual(image.family, ContentFamily.IMAGES)
        self.assertIsInstance(image.meta, MediaMeta)

    def test_fetch_document_network_failure(self) -> None:
        session = _session()
        session.request.side_effect = requests.ConnectionError("down")
        client = _client(session, on_error=lambda record: None)

        result = client.fetch_document(9)

        self.assertEqual(result.message, "Document not found")
        self.assertEqual(result.data.code, FetchErrorCode.UNEXPECTED_ERROR)

    def test_media_lookup_requires_integer_id(self) -> None:
        client = _client(_session())
        with self.assertRaises(TypeError):
            client.fetch_image("logo")  # type: ignore[arg-type]

    def test_list_failures_propagate(self) -> None:
        session = _session(ok=False, status_code=500)
        client = _client(session, on_error=lambda record: None)

        with self.assertRaises(WagtailFetchError):
            client.fetch_documents()
        with self.assertRaises(RequestValidationError):
            client.fetch_images({"child_of": 1})

    def test_empty_collection_is_a_result(self) -> None:
        session = _session(payload={"meta": {"total_count": 0}, "items": []})
        client = _client(session)

        result = client.fetch_documents()

        self.assertIsInstance(result, ContentList)
        self.assertEqual(result.total_count, 0)


class TestGetMediaSrc(unittest.TestCase):
    def test_image_uses_relative_download_url(self) -> None:
        client = _client(_session())
        src = client.get_media_src({"type": "wagtailimages.Image", "download_url": "/images/1/a.jpg"})
        self.assertEqual(src, f"{BASE}/images/1/a.jpg")

    def test_document_keeps_only_path(self) -> None:
        client = _client(_session())
        src = client.get_media_src(
            MediaMeta(type="wagtaildocs.Document", download_url="https://other/docs/1/")
        )
        self.assertEqual(src, f"{BASE}/docs/1/")

    def test_media_base_url_preferred(self) -> None:
        client = _client(_session(), media_base_url="https://media.example.com")
        item = ContentItem.from_dict(
            {"id": 1, "title": "a", "meta": {"type": "wagtailimages.Image", "download_url": "/a.jpg"}},
            ContentFamily.IMAGES,
        )
        self.assertEqual(client.get_media_src(item), "https://media.example.com/a.jpg")

    def test_unknown_type_yields_none(self) -> None:
        client = _client(_session())
        self.assertIsNone(client.get_media_src({"type": "custom.Video", "download_url": "/v.mp4"}))
        page = ContentItem.from_dict(HOME, ContentFamily.PAGES)
        self.assertIsNone(client.get_media_src(page))


if __name__ == "__main__":
    unittest.main()
