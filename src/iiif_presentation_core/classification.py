"""Infer the IIIF resource category of a repository media.

Classification runs an ordered list of lookup stages. Each stage answers
`StageMatch(matched, category)`; the first stage that maps the key to a
category decides. A key mapped to `None` (known but unclassified) does not
stop the search, so it behaves like a missing entry. `explain()` still
reports it, so "unclassified" and "no entry" can be told apart when no later
stage decides.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass
from enum import Enum
from typing import Final, NamedTuple

from .descriptors import ResourceDescriptor
from .logger import get_logger

logger = get_logger(__name__)


class Category(str, Enum):
    """IIIF content resource types handled here."""

    IMAGE = "Image"
    AUDIO = "Audio"
    VIDEO = "Video"
    TEXT = "Text"
    DATASET = "Dataset"
    UNKNOWN = "Unknown"


MEDIA_TYPE_FAMILIES: Final[Mapping[str, Category]] = {
    "audio": Category.AUDIO,
    "image": Category.IMAGE,
    "text": Category.TEXT,
    "video": Category.VIDEO,
}

# Common media types outside the families above. `None` marks a media type
# that is known but has no IIIF category (archives, executables).
MEDIA_TYPES: Final[Mapping[str, Category | None]] = {
    "application/msword": Category.TEXT,
    "application/ogg": Category.VIDEO,
    "application/pdf": Category.TEXT,
    "application/rtf": Category.TEXT,
    "application/vnd.ms-access": Category.DATASET,
    "application/vnd.ms-excel": Category.DATASET,
    "application/vnd.ms-powerpoint": Category.TEXT,
    "application/vnd.ms-project": Category.DATASET,
    "application/vnd.ms-write": Category.TEXT,
    "application/vnd.oasis.opendocument.chart": Category.IMAGE,
    "application/vnd.oasis.opendocument.database": Category.DATASET,
    "application/vnd.oasis.opendocument.formula": Category.TEXT,
    "application/vnd.oasis.opendocument.graphics": Category.IMAGE,
    "application/vnd.oasis.opendocument.presentation": Category.TEXT,
    "application/vnd.oasis.opendocument.spreadsheet": Category.DATASET,
    "application/vnd.oasis.opendocument.text": Category.TEXT,
    "application/vnd.openxmlformats-officedocument.wordprocessingml.document": Category.TEXT,
    "application/vnd.openxmlformats-officedocument.presentationml.presentation": Category.TEXT,
    "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet": Category.DATASET,
    "application/x-gzip": None,
    "application/x-ms-wmp": None,
    "application/x-msdownload": None,
    "application/x-shockwave-flash": None,
    "application/x-tar": None,
    "application/zip": None,
    "application/xml": Category.TEXT,
    "application/vnd.recordare.musicxml": Category.TEXT,
    "application/vnd.mei+xml": Category.TEXT,
}

RENDERERS: Final[Mapping[str, Category | None]] = {
    "file": None,
    "oembed": Category.TEXT,
    "youtube": Category.VIDEO,
    "html": Category.TEXT,
    "iiif": Category.IMAGE,
    "tile": Category.IMAGE,
}


class StageMatch(NamedTuple):
    matched: bool
    category: Category | None = None


NO_MATCH: Final = StageMatch(False)


@dataclass(frozen=True)
class Classification:
    """Outcome of a classification with the stage that produced it."""

    category: Category
    stage: str | None
    code: str


def _lookup(table: Mapping[str, Category | None], key: str | None) -> StageMatch:
    if key is None or key not in table:
        return NO_MATCH
    return StageMatch(True, table[key])


def _media_type(descriptor: ResourceDescriptor) -> str | None:
    # Media types are case-insensitive; the tables hold lower-case keys.
    if not descriptor.media_type:
        return None
    return descriptor.media_type.strip().lower() or None


def match_media_type_family(descriptor: ResourceDescriptor) -> StageMatch:
    """Match on the top-level token of the media type (`image` in `image/png`)."""
    media_type = _media_type(descriptor)
    if not media_type:
        return NO_MATCH
    return _lookup(MEDIA_TYPE_FAMILIES, media_type.split("/", 1)[0].strip())


def match_media_type(descriptor: ResourceDescriptor) -> StageMatch:
    """Match the full media type against the table of common media types."""
    return _lookup(MEDIA_TYPES, _media_type(descriptor))


def match_renderer(descriptor: ResourceDescriptor) -> StageMatch:
    """Match the renderer that ingested the media (youtube, iiif, ...)."""
    renderer = (descriptor.renderer or "").strip().lower()
    return _lookup(RENDERERS, renderer or None)


Stage = Callable[[ResourceDescriptor], StageMatch]

STAGES: Final[tuple[tuple[str, Stage], ...]] = (
    ("media-type-family", match_media_type_family),
    ("media-type", match_media_type),
    ("renderer", match_renderer),
)


def explain(descriptor: ResourceDescriptor) -> Classification:
    """Classify `descriptor` and report the deciding stage.

    Codes:
      - `media-type-family`, `media-type`, `renderer`: a stage mapped the key.
      - `media-type-unclassified`, `renderer-unclassified`: a stage knows the
        key but maps it to no category.
      - `no-match`: no stage knows anything about the descriptor.
    """
    if descriptor is None:
        return Classification(Category.UNKNOWN, None, "no-match")

    unclassified: Classification | None = None
    for stage_name, stage in STAGES:
        matched, category = stage(descriptor)
        if not matched:
            continue
        if category is None:
            # Known but unclassified: remember it and let the next stages decide.
            if unclassified is None:
                stage_key = "media-type" if stage_name.startswith("media-type") else stage_name
                unclassified = Classification(Category.UNKNOWN, stage_name, f"{stage_key}-unclassified")
            continue
        return Classification(category, stage_name, stage_name)

    return unclassified or Classification(Category.UNKNOWN, None, "no-match")


def classify(descriptor: ResourceDescriptor) -> Category:
    """Return the IIIF category of `descriptor`; never raises."""
    result = explain(descriptor)
    if descriptor is not None:
        logger.debug(
            "Resource %s classified as %s (%s; media_type=%r, renderer=%r)",
            descriptor.resource_id,
            result.category.value,
            result.code,
            descriptor.media_type,
            descriptor.renderer,
        )
    return result.category
