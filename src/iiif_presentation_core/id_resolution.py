from __future__ import annotations

from .classification import Category
from .descriptors import ResourceDescriptor
from .exceptions import MissingDimension
from .urls import IMAGE_MEDIA_ROUTE, MEDIA_ROUTE, ImageUrlBuilder


def resolve_body_id(
    descriptor: ResourceDescriptor,
    category: Category,
    image_url_builder: ImageUrlBuilder,
) -> str | None:
    """Return the `id` of an annotation body.

    Images point to a full-size jpg rendered by the image server, audio and
    video to the media server, anything else to the original file.
    """
    if category is Category.IMAGE:
        if not descriptor.has_dimensions():
            raise MissingDimension(
                f"Image resource {descriptor.resource_id!r} has no width/height "
                f"(width={descriptor.width}, height={descriptor.height})",
                resource_id=descriptor.resource_id,
            )
        return image_url_builder(
            IMAGE_MEDIA_ROUTE,
            {
                "id": descriptor.resource_id,
                "region": "full",
                "size": f"{descriptor.width},{descriptor.height}",
                "rotation": 0,
                "quality": "default",
                "format": "jpg",
            },
        )

    if category in (Category.AUDIO, Category.VIDEO):
        return image_url_builder(
            MEDIA_ROUTE,
            {
                "id": descriptor.resource_id,
                "format": descriptor.extension or "",
            },
        )

    return descriptor.source_url


def resolve_rendering_id(descriptor: ResourceDescriptor, site_slug: str | None = None) -> str | None:
    """Return the `id` of a rendering: the original file, else the site page."""
    if descriptor.source_url:
        return descriptor.source_url
    if site_slug:
        # TODO: allow the item page instead of the media page via a setting.
        return descriptor.page_url(site_slug)
    return None
