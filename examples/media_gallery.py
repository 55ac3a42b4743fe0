"""
Example: Media Gallery
Lists the images and documents of a Wagtail site together with the public
URL of each file.
"""

from pywagtail import WagtailClient


def main():
    client = WagtailClient()

    images = client.fetch_images({"fields": ["title", "tags"], "limit": 20})
    print(f"Images ({images.total_count}):")
    for image in images:
        # List responses omit download_url unless it is asked for
        detail = client.fetch_image(image.id)
        if not detail:
            print(f"  [{image.id}] {image.title}: {detail.message}")
            continue
        tags = ", ".join(detail.meta.tags) or "-"
        print(f"  [{image.id}] {detail.title} ({tags}) -> {client.get_media_src(detail)}")

    documents = client.fetch_documents({"limit": 20})
    print(f"\nDocuments ({documents.total_count}):")
    for doc in documents:
        print(f"  [{doc.id}] {doc.title} -> {client.get_media_src(doc)}")


if __name__ == "__main__":
    main()
