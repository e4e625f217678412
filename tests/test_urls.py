import pytest

from iiif_presentation_core.urls import (
    IMAGE_ID_ROUTE,
    IMAGE_MEDIA_ROUTE,
    MEDIA_ROUTE,
    ForceBaseUrl,
    RouteUrlBuilder,
)


def test_route_builder_relative_and_canonical():
    """Paths are relative unless canonical urls are requested."""
    builder = RouteUrlBuilder("https://repo.example.org/")
    assert builder(IMAGE_ID_ROUTE, {"id": 7}) == "/iiif-img/7"
    assert builder(IMAGE_ID_ROUTE, {"id": 7}, {"force_canonical": True}) == "https://repo.example.org/iiif-img/7"

    always = RouteUrlBuilder("https://repo.example.org", always_canonical=True)
    assert always(MEDIA_ROUTE, {"id": 7, "format": "mp3"}) == "https://repo.example.org/ixif-media/7.mp3"


def test_route_builder_keeps_iiif_size_syntax():
    """Commas of the size parameter stay readable."""
    builder = RouteUrlBuilder("https://repo.example.org", always_canonical=True)
    url = builder(
        IMAGE_MEDIA_ROUTE,
        {"id": 7, "region": "full", "size": "800,600", "rotation": 0, "quality": "default", "format": "jpg"},
    )
    assert url == "https://repo.example.org/iiif-img/7/full/800,600/0/default.jpg"


def test_route_builder_errors():
    """Unknown routes and missing parameters are programming errors."""
    builder = RouteUrlBuilder("https://repo.example.org")
    with pytest.raises(KeyError):
        builder("nope/route", {})
    with pytest.raises(ValueError):
        builder(MEDIA_ROUTE, {"id": 1})


def test_custom_routes_override_defaults():
    """Deployments can remap a route template."""
    builder = RouteUrlBuilder("https://img.example.org", {IMAGE_ID_ROUTE: "/iiif/3/{id}"})
    assert builder(IMAGE_ID_ROUTE, {"id": "a b"}, {"force_canonical": True}) == "https://img.example.org/iiif/3/a%20b"


def test_force_base_url_rewrites_prefix():
    """Configured overrides replace the scheme and host."""
    rewriter = ForceBaseUrl("http://localhost", "https://public.example.org")
    assert rewriter.is_configured
    assert rewriter("http://localhost/iiif-img/1") == "https://public.example.org/iiif-img/1"
    assert rewriter("https://other.example.org/x") == "https://other.example.org/x"


def test_force_base_url_is_noop_when_unconfigured():
    """Without both sides of the override the url passes through."""
    for rewriter in (ForceBaseUrl(), ForceBaseUrl("http://localhost", ""), ForceBaseUrl("", "https://x")):
        assert not rewriter.is_configured
        assert rewriter("http://localhost/iiif-img/1") == "http://localhost/iiif-img/1"
