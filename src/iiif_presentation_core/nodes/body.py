from __future__ import annotations

from ..classification import Category, classify
from ..context import BuildContext
from ..descriptors import ResourceDescriptor
from ..exceptions import InvalidConstruction
from ..id_resolution import resolve_body_id
from ..service_descriptor import ServiceDescriptor, build_service
from ..urls import IMAGE_ID_ROUTE
from .base import FieldPolicy, ResourceNode


class Body(ResourceNode):
    """Annotation body describing the media painted on a canvas.

    The body is never a top-level IIIF document, so `@context` is not allowed
    even when the caller's defaults would add one.
    """

    NODE_NAME = "Body"
    KEYS = {
        "@context": FieldPolicy.NOT_ALLOWED,
        "id": FieldPolicy.REQUIRED,
        "type": FieldPolicy.REQUIRED,
        "format": FieldPolicy.REQUIRED,
        # Required or useless depending on the type (image, audio, video).
        "service": FieldPolicy.RECOMMENDED,
        "height": FieldPolicy.RECOMMENDED,
        "width": FieldPolicy.RECOMMENDED,
        "duration": FieldPolicy.RECOMMENDED,
    }

    def __init__(self, descriptor: ResourceDescriptor | None, context: BuildContext | None):
        if descriptor is None:
            raise InvalidConstruction("An annotation body requires a resource descriptor")
        if context is None or context.image_url_builder is None:
            raise InvalidConstruction(
                "An annotation body requires an image url builder",
                resource_id=descriptor.resource_id,
            )

        super().__init__(descriptor)
        self.context = context
        self.category = classify(descriptor)
        self._values = {
            "id": self.get_id(),
            "type": self.get_type(),
            "format": self.get_format(),
            "service": self.get_service(),
            "height": descriptor.height,
            "width": descriptor.width,
            "duration": descriptor.duration,
        }

    def get_id(self) -> str | None:
        return resolve_body_id(self.descriptor, self.category, self.context.image_url_builder)

    def get_type(self) -> str | None:
        if self.category is Category.UNKNOWN:
            return None
        return self.category.value

    def get_format(self) -> str | None:
        return self.descriptor.media_type

    def get_service(self) -> ServiceDescriptor | None:
        if self.category is not Category.IMAGE:
            return None

        url = self.context.url_builder(
            IMAGE_ID_ROUTE,
            {"id": self.descriptor.resource_id},
            {"force_canonical": True},
        )
        service_id = self.context.base_url_rewriter(url)
        return build_service(service_id, self.context.api_version, self.category)
