"""Fill in missing image dimensions before building a body.

An image body cannot be built without width and height. Stored files are
measured with Pillow; media ingested through the `iiif` renderer are measured
from the remote `info.json`.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Final

import requests
from PIL import Image, UnidentifiedImageError

from .classification import Category, classify
from .descriptors import ResourceDescriptor
from .logger import get_logger

logger = get_logger(__name__)

DEFAULT_HEADERS: Final = {
    "User-Agent": "iiif-presentation-fragments/0.3 (+https://iiif.io)",
    "Accept": "application/ld+json, application/json;q=0.9, */*;q=0.5",
}


def _as_positive(value: Any) -> int | None:
    try:
        number = int(value or 0)
    except (TypeError, ValueError):
        return None
    return number if number > 0 else None


def probe_local_dimensions(path: str | Path) -> tuple[int | None, int | None]:
    """Return `(width, height)` of a stored image file, or `(None, None)`."""
    try:
        with Image.open(path) as img:
            width, height = img.size
    except (OSError, UnidentifiedImageError, Image.DecompressionBombError, ValueError) as exc:
        logger.warning("Cannot read image size of %s: %s", path, exc)
        return None, None
    return _as_positive(width), _as_positive(height)


def _info_url(url: str) -> str:
    base = url.rstrip("/")
    if base.endswith("/info.json"):
        return base
    return base + "/info.json"


def probe_info_dimensions(url: str, *, timeout_s: int = 12) -> tuple[int | None, int | None]:
    """Return `(width, height)` declared by a IIIF image `info.json`."""
    info_url = _info_url(url)
    try:
        response = requests.get(info_url, headers=DEFAULT_HEADERS, timeout=max(3, int(timeout_s)))
        response.raise_for_status()
        payload = response.json() if response.content else {}
    except (requests.RequestException, ValueError) as exc:
        logger.warning("Cannot fetch %s: %s", info_url, exc)
        return None, None

    if not isinstance(payload, dict):
        return None, None
    return _as_positive(payload.get("width")), _as_positive(payload.get("height"))


def complete_dimensions(descriptor: ResourceDescriptor, *, timeout_s: int = 12) -> ResourceDescriptor:
    """Return `descriptor` with width/height filled when they can be measured.

    Only image resources are probed; descriptors that already carry both
    dimensions are returned as is.
    """
    if descriptor.has_dimensions() or classify(descriptor) is not Category.IMAGE:
        return descriptor

    width, height = None, None
    if descriptor.local_path and Path(descriptor.local_path).is_file():
        width, height = probe_local_dimensions(descriptor.local_path)
    if (width is None or height is None) and descriptor.renderer == "iiif" and descriptor.source_url:
        width, height = probe_info_dimensions(descriptor.source_url, timeout_s=timeout_s)

    if width is None or height is None:
        logger.info("No dimensions found for image resource %s", descriptor.resource_id)
        return descriptor

    logger.debug("Resource %s measured %sx%s", descriptor.resource_id, width, height)
    return descriptor.with_dimensions(width, height)
