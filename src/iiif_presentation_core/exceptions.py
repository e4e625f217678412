"""Errors raised while building a single IIIF fragment.

Every error aborts the node it was raised for. Batch callers catch
`FragmentBuildError` per resource and keep going.
"""

from __future__ import annotations


class FragmentBuildError(RuntimeError):
    """Base class for failures while building one body or rendering."""

    def __init__(self, message: str, *, resource_id=None):
        super().__init__(message)
        self.resource_id = resource_id


class InvalidConstruction(FragmentBuildError):
    """A node was built without its descriptor or a required capability."""


class InvalidResourceKind(FragmentBuildError):
    """A rendering was requested for something that is not a media."""


class MissingDimension(FragmentBuildError):
    """An image body id needs both width and height."""


class MissingRequiredField(FragmentBuildError):
    """A REQUIRED key resolved to null when serializing a node."""

    def __init__(self, node: str, field: str, *, resource_id=None):
        super().__init__(f"{node} of resource {resource_id!r} has no value for required key '{field}'", resource_id=resource_id)
        self.node = node
        self.field = field
