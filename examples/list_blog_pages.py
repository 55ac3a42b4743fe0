"""
Example: Blog Listing
Fetches the newest blog pages from a Wagtail site and prints their titles
and URLs, paging through the results with limit/offset.
"""

import os
from pathlib import Path

from pywagtail import WagtailClient, WagtailFetchError


def load_env():
    """Simple .env loader to avoid extra dependencies."""
    env_path = Path(__file__).parent.parent / ".env"
    if env_path.exists():
        for line in env_path.read_text().splitlines():
            if line.strip() and not line.startswith("#"):
                key, value = line.split("=", 1)
                os.environ[key.strip()] = value.strip().strip('"').strip("'")


def main():
    load_env()
    # Reads WAGTAIL_BASE_URL / WAGTAIL_API_PATH from the environment
    client = WagtailClient()

    page_type = os.getenv("WAGTAIL_BLOG_TYPE", "blog.BlogPage")
    limit = 10
    offset = 0

    try:
        while True:
            # Ordering cannot be combined with offset, so page in API order
            pages = client.fetch_pages(
                {"type": page_type, "fields": ["title"], "limit": limit, "offset": offset}
            )
            if offset == 0:
                print(f"{pages.total_count} pages of type {page_type}\n")

            for page in pages:
                print(f"- [{page.id}] {page.title}  {page.meta.html_url}")

            offset += limit
            if len(pages) < limit or offset >= pages.total_count:
                break
    except WagtailFetchError as e:
        print(f"Request failed ({e.code.value}): {e}")


if __name__ == "__main__":
    main()
