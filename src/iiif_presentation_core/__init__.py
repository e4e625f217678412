"""Derive IIIF annotation bodies and canvas renderings from repository media metadata."""

__version__ = "0.3.0"
