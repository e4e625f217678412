"""URL capabilities used by the fragment nodes.

The nodes only see three narrow callables (`ImageUrlBuilder`,
`CanonicalUrlBuilder`, `BaseUrlRewriter`). `RouteUrlBuilder` and
`ForceBaseUrl` are the default implementations, driven by configuration.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Final, Protocol
from urllib.parse import quote

from .logger import get_logger

logger = get_logger(__name__)

IMAGE_MEDIA_ROUTE: Final = "imageserver/media"
IMAGE_ID_ROUTE: Final = "imageserver/id"
MEDIA_ROUTE: Final = "mediaserver/media"

DEFAULT_ROUTES: Final[Mapping[str, str]] = {
    IMAGE_MEDIA_ROUTE: "/iiif-img/{id}/{region}/{size}/{rotation}/{quality}.{format}",
    IMAGE_ID_ROUTE: "/iiif-img/{id}",
    MEDIA_ROUTE: "/ixif-media/{id}.{format}",
}


class ImageUrlBuilder(Protocol):
    def __call__(self, route_name: str, params: Mapping[str, Any]) -> str: ...


class CanonicalUrlBuilder(Protocol):
    def __call__(
        self,
        route_name: str,
        params: Mapping[str, Any],
        options: Mapping[str, Any] | None = None,
    ) -> str: ...


class BaseUrlRewriter(Protocol):
    def __call__(self, url: str) -> str: ...


class RouteUrlBuilder:
    """Build URLs from named route templates.

    Route parameters are percent-encoded except for the `,` and `!` used by
    IIIF size expressions. The result is a path relative to the site unless
    the builder is `always_canonical` or the call asks for
    `{"force_canonical": True}`.
    """

    def __init__(self, base_url: str, routes: Mapping[str, str] | None = None, *, always_canonical: bool = False):
        self.base_url = (base_url or "").rstrip("/")
        self.routes = dict(DEFAULT_ROUTES)
        self.routes.update(routes or {})
        self.always_canonical = always_canonical

    def __call__(
        self,
        route_name: str,
        params: Mapping[str, Any],
        options: Mapping[str, Any] | None = None,
    ) -> str:
        template = self.routes.get(route_name)
        if template is None:
            raise KeyError(f"Unknown route '{route_name}'")

        encoded = {key: quote(str(value), safe=",!") for key, value in params.items()}
        try:
            path = template.format(**encoded)
        except KeyError as exc:
            raise ValueError(f"Route '{route_name}' is missing parameter {exc}") from exc

        force_canonical = bool((options or {}).get("force_canonical"))
        if force_canonical or self.always_canonical:
            return f"{self.base_url}{path}"
        return path


class ForceBaseUrl:
    """Replace the scheme/host prefix of a URL, e.g. behind a proxy.

    With no `force_from` or no `force_to` configured the rewriter returns the
    URL unchanged.
    """

    def __init__(self, force_from: str | None = None, force_to: str | None = None):
        self.force_from = (force_from or "").strip()
        self.force_to = (force_to or "").strip()

    @property
    def is_configured(self) -> bool:
        return bool(self.force_from and self.force_to)

    def __call__(self, url: str) -> str:
        if not self.is_configured or not url.startswith(self.force_from):
            return url
        rewritten = self.force_to + url[len(self.force_from) :]
        logger.debug("Forced base url: %s -> %s", url, rewritten)
        return rewritten
