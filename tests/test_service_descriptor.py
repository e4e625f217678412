from iiif_presentation_core.classification import Category
from iiif_presentation_core.service_descriptor import (
    ImageApiVersion,
    ImageService2,
    ImageService3,
    build_service,
)

URL = "https://repo.example.org/iiif-img/42"


def test_service_v3_shape():
    """Image API 3.0 services use plain id/type keys."""
    service = build_service(URL, "3.0")
    assert isinstance(service, ImageService3)
    assert service.to_dict() == {"id": URL, "type": "ImageService3", "profile": "level2"}


def test_service_v2_shape():
    """Image API 2.1 services use JSON-LD @id/@type keys."""
    service = build_service(URL, "2.1")
    assert isinstance(service, ImageService2)
    assert service.to_dict() == {
        "@id": URL,
        "@type": "ImageService2",
        "profile": "http://iiif.io/api/image/2/level2.json",
    }


def test_unknown_version_falls_back_to_v2():
    """Unrecognized versions use the 2.1 shape instead of failing."""
    assert ImageApiVersion.from_setting("9.9") is ImageApiVersion.V2_1
    assert ImageApiVersion.from_setting(None) is ImageApiVersion.V2_1
    assert "@id" in build_service(URL, "banana").to_dict()


def test_version_aliases():
    """Short version strings map to the matching API."""
    assert ImageApiVersion.from_setting("3") is ImageApiVersion.V3_0
    assert ImageApiVersion.from_setting(" 3.0 ") is ImageApiVersion.V3_0
    assert ImageApiVersion.from_setting("2") is ImageApiVersion.V2_1


def test_no_service_for_non_images():
    """Only image resources carry an image service."""
    for category in (Category.AUDIO, Category.VIDEO, Category.TEXT, Category.DATASET, Category.UNKNOWN):
        assert build_service(URL, ImageApiVersion.V3_0, category) is None
