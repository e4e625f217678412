"""Image API service descriptors for annotation bodies.

Two shapes exist, one per Image API version; the version is chosen once per
build context and never guessed from a single resource.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Final

from .classification import Category
from .logger import get_logger

logger = get_logger(__name__)

LEVEL2_PROFILE_V2: Final = "http://iiif.io/api/image/2/level2.json"
LEVEL2_PROFILE_V3: Final = "level2"


class ImageApiVersion(str, Enum):
    V2_1 = "2.1"
    V3_0 = "3.0"

    @classmethod
    def from_setting(cls, value: Any) -> ImageApiVersion:
        """Map a configured version string to a known version, 2.1 by default."""
        raw = str(value or "").strip()
        for version in cls:
            if version.value == raw:
                return version
        if raw in ("2", "2.0"):
            return cls.V2_1
        if raw == "3":
            return cls.V3_0
        logger.debug("Unknown image api version %r, using %s", value, cls.V2_1.value)
        return cls.V2_1


@dataclass(frozen=True)
class ImageService2:
    """Image API 2.1 service, with JSON-LD `@id`/`@type` keys."""

    id: str
    profile: str = LEVEL2_PROFILE_V2

    def to_dict(self) -> dict[str, str]:
        return {"@id": self.id, "@type": "ImageService2", "profile": self.profile}


@dataclass(frozen=True)
class ImageService3:
    """Image API 3.0 service, with plain `id`/`type` keys."""

    id: str
    profile: str = LEVEL2_PROFILE_V3

    def to_dict(self) -> dict[str, str]:
        return {"id": self.id, "type": "ImageService3", "profile": self.profile}


ServiceDescriptor = ImageService2 | ImageService3


def build_service(
    id_url: str,
    api_version: ImageApiVersion | str,
    category: Category = Category.IMAGE,
) -> ServiceDescriptor | None:
    """Return the image service for `id_url`, or None for non-image resources."""
    if category is not Category.IMAGE:
        return None

    if not isinstance(api_version, ImageApiVersion):
        api_version = ImageApiVersion.from_setting(api_version)

    if api_version is ImageApiVersion.V3_0:
        return ImageService3(id=id_url)
    return ImageService2(id=id_url)
