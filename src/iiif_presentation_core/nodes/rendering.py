from __future__ import annotations

from ..classification import Category, classify
from ..context import BuildContext
from ..descriptors import ResourceDescriptor
from ..exceptions import InvalidConstruction, InvalidResourceKind
from ..id_resolution import resolve_rendering_id
from .base import FieldPolicy, LanguageValue, ResourceNode


class Rendering(ResourceNode):
    """Alternative representation of a media, linked from its canvas.

    See https://iiif.io/api/presentation/3.0/#rendering
    """

    NODE_NAME = "Rendering"
    KEYS = {
        "id": FieldPolicy.REQUIRED,
        "type": FieldPolicy.REQUIRED,
        "label": FieldPolicy.OPTIONAL,
        "format": FieldPolicy.OPTIONAL,
    }

    def __init__(self, descriptor: ResourceDescriptor | None, context: BuildContext | None = None):
        if descriptor is None:
            raise InvalidConstruction("A rendering requires a resource descriptor")
        if not descriptor.is_media:
            raise InvalidResourceKind(
                f"A media is required to build a rendering, got a {descriptor.kind.value}",
                resource_id=descriptor.resource_id,
            )

        super().__init__(descriptor)
        self.site_slug = context.site_slug if context is not None else None

        # The label reads the type, so resolve it first.
        self.type = self.get_type()
        self._values = {
            "id": self.get_id(),
            "type": self.type,
            "label": self.get_label(),
            "format": self.get_format(),
        }

    def get_id(self) -> str | None:
        return resolve_rendering_id(self.descriptor, self.site_slug)

    def get_type(self) -> str | None:
        category = classify(self.descriptor)
        if category is Category.UNKNOWN:
            return None
        return category.value

    def get_label(self) -> LanguageValue | None:
        """The label is the kind of file, since the main label is already known."""
        if not self.type:
            return None

        fmt = self.get_format()
        if not fmt:
            return None
        return LanguageValue.none(f"{self.type} [{fmt}]")

    def get_format(self) -> str | None:
        return self.descriptor.media_type or None
