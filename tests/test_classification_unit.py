import pytest

from iiif_presentation_core.classification import (
    MEDIA_TYPES,
    Category,
    StageMatch,
    classify,
    explain,
    match_media_type,
    match_renderer,
)
from iiif_presentation_core.descriptors import ResourceDescriptor


def _d(media_type=None, renderer=None):
    return ResourceDescriptor(resource_id=1, media_type=media_type, renderer=renderer)


@pytest.mark.parametrize(
    ("media_type", "expected"),
    [
        ("image/jpeg", Category.IMAGE),
        ("image/x-whatever", Category.IMAGE),
        ("audio/mpeg", Category.AUDIO),
        ("video/webm", Category.VIDEO),
        ("text/plain", Category.TEXT),
        ("text/vnd.custom+xml", Category.TEXT),
    ],
)
def test_media_type_family_wins_regardless_of_subtype(media_type, expected):
    """The top-level token of the media type decides the category."""
    assert classify(_d(media_type)) is expected
    assert explain(_d(media_type)).code == "media-type-family"


def test_exact_media_type_table():
    """Application media types are resolved through the exact table."""
    assert classify(_d("application/pdf")) is Category.TEXT
    assert classify(_d("application/vnd.ms-excel")) is Category.DATASET
    assert classify(_d("application/ogg")) is Category.VIDEO
    assert classify(_d("application/vnd.oasis.opendocument.graphics")) is Category.IMAGE


def test_unclassified_media_type_is_distinct_from_no_match():
    """Known-but-unclassified and unknown media types both give Unknown, with different codes."""
    tar = explain(_d("application/x-tar"))
    assert tar.category is Category.UNKNOWN
    assert tar.code == "media-type-unclassified"
    assert tar.stage == "media-type"
    assert "application/x-tar" in MEDIA_TYPES

    unknown = explain(_d("application/x-never-seen"))
    assert unknown.category is Category.UNKNOWN
    assert unknown.code == "no-match"
    assert unknown.stage is None


def test_unclassified_media_type_falls_through_to_renderer():
    """A media type known as unclassified lets the renderer decide, like a missing entry."""
    result = explain(_d("application/zip", renderer="youtube"))
    assert result.category is Category.VIDEO
    assert result.code == "renderer"

    assert classify(_d("application/x-tar", renderer="iiif")) is classify(_d("application/x-never-seen", renderer="iiif"))
    assert classify(_d("application/x-tar", renderer="iiif")) is Category.IMAGE


def test_unclassified_code_kept_when_nothing_else_matches():
    """The first unclassified stage is reported when no later stage decides."""
    assert explain(_d("application/zip", renderer="file")).code == "media-type-unclassified"
    assert explain(_d("application/zip", renderer="unknown-renderer")).code == "media-type-unclassified"
    assert explain(_d("application/x-never-seen", renderer="file")).code == "renderer-unclassified"


def test_media_types_are_case_insensitive():
    """Exact media types match regardless of case, like the family token."""
    assert classify(_d("Application/PDF")) is Category.TEXT
    assert classify(_d(" application/vnd.MS-Excel ")) is Category.DATASET
    assert classify(_d("IMAGE/PNG")) is Category.IMAGE
    assert classify(_d(renderer="YouTube")) is Category.VIDEO


def test_renderer_fallback():
    """Without a media type the renderer decides."""
    assert classify(_d(renderer="youtube")) is Category.VIDEO
    assert classify(_d(renderer="iiif")) is Category.IMAGE
    assert classify(_d(renderer="oembed")) is Category.TEXT

    file_result = explain(_d(renderer="file"))
    assert file_result.category is Category.UNKNOWN
    assert file_result.code == "renderer-unclassified"


def test_media_type_family_beats_renderer():
    """A media type family match is never overridden by the renderer."""
    assert classify(_d("audio/ogg", renderer="youtube")) is Category.AUDIO


def test_classify_is_total():
    """Missing information yields Unknown and never raises."""
    assert classify(_d()) is Category.UNKNOWN
    assert classify(None) is Category.UNKNOWN
    assert classify(_d("", renderer="")) is Category.UNKNOWN
    assert classify(_d("nonsense")) is Category.UNKNOWN


def test_stage_matches():
    """Stages report matched/unmatched separately from the category."""
    assert match_media_type(_d("application/x-gzip")) == StageMatch(True, None)
    assert match_media_type(_d("application/x-other")) == StageMatch(False, None)
    assert match_renderer(_d(renderer="tile")) == StageMatch(True, Category.IMAGE)
