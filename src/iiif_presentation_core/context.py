"""Build context shared, read-only, by every node of a batch."""

from __future__ import annotations

from dataclasses import dataclass

from .config_manager import ConfigManager, get_config_manager
from .service_descriptor import ImageApiVersion
from .urls import BaseUrlRewriter, CanonicalUrlBuilder, ForceBaseUrl, ImageUrlBuilder, RouteUrlBuilder


def _passthrough(url: str) -> str:
    return url


@dataclass(frozen=True)
class BuildContext:
    """Capabilities and settings resolved once before building nodes."""

    image_url_builder: ImageUrlBuilder
    url_builder: CanonicalUrlBuilder
    base_url_rewriter: BaseUrlRewriter = _passthrough
    api_version: ImageApiVersion = ImageApiVersion.V2_1
    site_slug: str | None = None

    @classmethod
    def from_config(
        cls,
        cm: ConfigManager | None = None,
        *,
        api_version: str | None = None,
        base_url: str | None = None,
        site_slug: str | None = None,
    ) -> BuildContext:
        """Create a context from `config.json` settings; explicit arguments win."""
        cm = cm or get_config_manager()
        base = base_url or cm.get_setting("iiif.base_url", "http://localhost")
        version = api_version or cm.get_setting("iiif.api_version", "2.1")
        slug = site_slug if site_slug is not None else cm.get_setting("iiif.site_slug", "")

        return cls(
            image_url_builder=RouteUrlBuilder(base, always_canonical=True),
            url_builder=RouteUrlBuilder(base),
            base_url_rewriter=ForceBaseUrl(
                cm.get_setting("iiif.force_url_from", ""),
                cm.get_setting("iiif.force_url_to", ""),
            ),
            api_version=ImageApiVersion.from_setting(version),
            site_slug=slug or None,
        )
