from __future__ import annotations

from collections.abc import Mapping
from enum import Enum
from typing import Any, ClassVar

from ..exceptions import MissingRequiredField


class FieldPolicy(Enum):
    REQUIRED = "required"
    RECOMMENDED = "recommended"
    OPTIONAL = "optional"
    NOT_ALLOWED = "not_allowed"


class LanguageValue(dict):
    """IIIF language map, e.g. `{"none": "Text [application/pdf]"}`."""

    @classmethod
    def none(cls, value: str) -> LanguageValue:
        return cls({"none": value})


def _jsonable(value: Any) -> Any:
    if hasattr(value, "to_dict"):
        return value.to_dict()
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, Mapping):
        return {k: _jsonable(v) for k, v in value.items()}
    return value


class ResourceNode:
    """Base class of the fragment nodes.

    Subclasses declare `KEYS` (output key -> `FieldPolicy`, in output order)
    and compute every value once at construction into `_values`.
    `to_dict()` then applies the policy: REQUIRED nulls raise, RECOMMENDED
    and OPTIONAL nulls are dropped, NOT_ALLOWED keys are never written.
    """

    NODE_NAME: ClassVar[str] = "Resource"
    KEYS: ClassVar[Mapping[str, FieldPolicy]] = {}

    _values: dict[str, Any]

    def __init__(self, descriptor):
        self.descriptor = descriptor
        self._values = {}

    def get(self, key: str) -> Any:
        return self._values.get(key)

    def to_dict(self, extra: Mapping[str, Any] | None = None) -> dict[str, Any]:
        """Serialize the node into a JSON-compatible dict.

        `extra` holds keys injected by the surrounding document (such as a
        default `@context`); they are dropped when the node forbids them and
        never override a computed value.
        """
        output: dict[str, Any] = {}
        for key, policy in self.KEYS.items():
            if policy is FieldPolicy.NOT_ALLOWED:
                continue
            value = self._values.get(key)
            if value is None:
                if policy is FieldPolicy.REQUIRED:
                    raise MissingRequiredField(self.NODE_NAME, key, resource_id=self.descriptor.resource_id)
                continue
            output[key] = _jsonable(value)

        for key, value in (extra or {}).items():
            if self.KEYS.get(key) is FieldPolicy.NOT_ALLOWED or key in output or value is None:
                continue
            output[key] = _jsonable(value)
        return output

    def __repr__(self) -> str:
        return f"<{type(self).__name__} resource={self.descriptor.resource_id!r}>"
