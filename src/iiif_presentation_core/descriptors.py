"""Resource descriptors: the repository metadata a fragment is derived from."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, replace
from enum import Enum
from typing import Any, Final

from .logger import get_logger

logger = get_logger(__name__)


class ResourceKind(str, Enum):
    """Kind of repository resource wrapped by a descriptor."""

    MEDIA = "media"
    ITEM = "item"
    ITEM_SET = "item_set"


_KEY_ALIASES: Final = {
    "resourceId": "resource_id",
    "id": "resource_id",
    "mediaType": "media_type",
    "media-type": "media_type",
    "sourceUrl": "source_url",
    "originalUrl": "source_url",
    "sitePageUrl": "site_page_url",
    "localPath": "local_path",
}


def _positive_int(value: Any) -> int | None:
    try:
        number = int(value)
    except (TypeError, ValueError):
        return None
    return number if number > 0 else None


def _positive_float(value: Any) -> float | None:
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    return number if number > 0 else None


def _clean_str(value: Any) -> str | None:
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def _parse_kind(value: Any, resource_id: Any) -> ResourceKind:
    """Read a resource kind; a missing kind means a media.

    Plural and dashed spellings ("medias", "item-set") are accepted. Anything
    else is reported and treated as a non-media resource.
    """
    raw = _clean_str(value)
    if raw is None:
        return ResourceKind.MEDIA

    token = raw.lower().replace("-", "_").replace(" ", "_")
    token = {"itemset": "item_set", "itemsets": "item_set"}.get(token, token)
    for candidate in (token, token.removesuffix("s")):
        try:
            return ResourceKind(candidate)
        except ValueError:
            continue

    logger.warning("Unknown kind %r for resource %s, handled as a non-media item", raw, resource_id)
    return ResourceKind.ITEM


@dataclass(frozen=True)
class ResourceDescriptor:
    """Immutable view over one repository resource.

    `site_page_url` may hold a `{site_slug}` placeholder that is filled by
    `page_url()` when a rendering falls back to the public site page.
    """

    resource_id: Any
    kind: ResourceKind = ResourceKind.MEDIA
    media_type: str | None = None
    renderer: str | None = None
    extension: str | None = None
    width: int | None = None
    height: int | None = None
    duration: float | None = None
    source_url: str | None = None
    site_page_url: str | None = None
    local_path: str | None = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> ResourceDescriptor:
        """Build a descriptor from a JSON-like mapping, tolerating camelCase keys."""
        fields: dict[str, Any] = {}
        for key, value in (data or {}).items():
            fields[_KEY_ALIASES.get(key, key)] = value

        return cls(
            resource_id=fields.get("resource_id"),
            kind=_parse_kind(fields.get("kind"), fields.get("resource_id")),
            media_type=_clean_str(fields.get("media_type")),
            renderer=_clean_str(fields.get("renderer")),
            extension=_clean_str(fields.get("extension")),
            width=_positive_int(fields.get("width")),
            height=_positive_int(fields.get("height")),
            duration=_positive_float(fields.get("duration")),
            source_url=_clean_str(fields.get("source_url")),
            site_page_url=_clean_str(fields.get("site_page_url")),
            local_path=_clean_str(fields.get("local_path")),
        )

    @property
    def is_media(self) -> bool:
        return self.kind is ResourceKind.MEDIA

    def has_dimensions(self) -> bool:
        return self.width is not None and self.height is not None

    def page_url(self, site_slug: str | None) -> str | None:
        """Return the public page of the resource on the site `site_slug`."""
        if not self.site_page_url or not site_slug:
            return None
        return self.site_page_url.replace("{site_slug}", site_slug)

    def with_dimensions(self, width: int | None, height: int | None) -> ResourceDescriptor:
        """Return a copy carrying the given dimensions."""
        return replace(self, width=_positive_int(width), height=_positive_int(height))
