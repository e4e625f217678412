"""Fragment nodes: annotation bodies and canvas renderings."""

from .base import FieldPolicy, LanguageValue, ResourceNode
from .body import Body
from .rendering import Rendering

__all__ = ["Body", "FieldPolicy", "LanguageValue", "Rendering", "ResourceNode"]
