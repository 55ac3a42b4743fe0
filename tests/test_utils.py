from __future__ import annotations

import unittest

from pywagtail import CachePolicy, ContentFamily, RequestValidationError, SearchOperator
from pywagtail.utils import (
    build_query_string,
    cache_control_header,
    content_path,
    parse_content_path,
)


class TestBuildQueryString(unittest.TestCase):
    def test_missing_or_empty_queries_give_empty_string(self) -> None:
        self.assertEqual(build_query_string(None), "")
        self.assertEqual(build_query_string({}), "")

    def test_lists_are_comma_joined_in_insertion_order(self) -> None:
        self.assertEqual(build_query_string({"a": 1, "b": ["x", "y"]}), "a=1&b=x,y")
        self.assertEqual(build_query_string({"b": ["x", "y"], "a": 1}), "b=x,y&a=1")

    def test_none_and_empty_string_values_are_dropped(self) -> None:
        self.assertEqual(build_query_string({"a": "", "b": None, "c": "v"}), "c=v")

    def test_booleans_and_enums(self) -> None:
        query = build_query_string(
            {"show_in_menus": True, "search_operator": SearchOperator.OR, "limit": 0}
        )
        self.assertEqual(query, "show_in_menus=true&search_operator=or&limit=0")

    def test_whole_floats_render_as_integers(self) -> None:
        self.assertEqual(build_query_string({"limit": 10.0, "ratio": 1.5}), "limit=10&ratio=1.5")

    def test_values_are_not_url_encoded(self) -> None:
        self.assertEqual(build_query_string({"search": "a b&c"}), "search=a b&c")


class TestContentPath(unittest.TestCase):
    def test_build(self) -> None:
        self.assertEqual(content_path(ContentFamily.PAGES), "pages")
        self.assertEqual(content_path("images", 3), "images/3")

    def test_parse(self) -> None:
        self.assertEqual(parse_content_path("documents"), (ContentFamily.DOCUMENTS, None))
        self.assertEqual(parse_content_path("pages/42"), (ContentFamily.PAGES, 42))
        self.assertEqual(parse_content_path(ContentFamily.IMAGES), (ContentFamily.IMAGES, None))

    def test_parse_rejects_unknown_paths(self) -> None:
        for bad in ("snippets", "pages/", "pages/abc", "/pages"):
            with self.subTest(path=bad), self.assertRaises(RequestValidationError):
                parse_content_path(bad)


class TestCacheControlHeader(unittest.TestCase):
    def test_mapping(self) -> None:
        self.assertEqual(cache_control_header(CachePolicy.NO_STORE), "no-store")
        self.assertEqual(cache_control_header("reload"), "no-cache")
        self.assertIsNone(cache_control_header(CachePolicy.FORCE_CACHE))
        self.assertIsNone(cache_control_header(None))


if __name__ == "__main__":
    unittest.main()
