"""
Example: Page Lookup
Looks a page up by slug (or numeric id) and prints its children.

Usage: python examples/page_by_slug.py home
"""

import sys

from pywagtail import NotFoundResult, WagtailClient


def main():
    key = sys.argv[1] if len(sys.argv) > 1 else "home"
    client = WagtailClient()

    page = client.fetch_page(int(key) if key.isdigit() else key, {"fields": ["*"]})
    if isinstance(page, NotFoundResult):
        print(f"{page.message}: {page.data!r}")
        return

    print(f"{page.title} (id={page.id}, type={page.meta.type}, locale={page.meta.locale})")

    children = client.fetch_pages({"child_of": page.id, "fields": ["title"]})
    for child in children:
        print(f"  - {child.title} /{child.meta.slug}/")


if __name__ == "__main__":
    main()
