"""EDN tag transformers and registry."""

from __future__ import annotations

from collections.abc import Callable, Mapping
from typing import Any
from uuid import UUID

from edn_py.edn.datetime_utils import parse_datetime
from edn_py.exceptions import EDNLiteralError

# Type for tag transformer functions
TagTransformer = Callable[[Any], Any]


def transform_inst(value: Any) -> Any:
    """Handle #inst tag for datetime values."""
    if isinstance(value, str):
        return parse_datetime(value)
    return value


def transform_uuid(value: Any) -> Any:
    """Handle #uuid tag for UUID values. Not registered by default."""
    if isinstance(value, str):
        try:
            return UUID(value)
        except ValueError as e:
            raise EDNLiteralError(f"Invalid #uuid value: {value!r}") from e
    return value


class TagRegistry:
    """Registry mapping tag names to transformer functions.

    A new registry starts with the built-in ``inst`` transformer. The reader
    never mutates the registry it is given.
    """

    def __init__(self) -> None:
        self._handlers: dict[str, TagTransformer] = {}
        self._register_defaults()

    def _register_defaults(self) -> None:
        """Register the default EDN tag transformers."""
        self.register("inst", transform_inst)

    def register(self, tag: str, handler: TagTransformer) -> None:
        """Register a tag transformer.

        Args:
            tag: The tag name (without #), e.g. ``"myapp/Person"``.
            handler: A callable taking the read value and returning its replacement.
        """
        if not callable(handler):
            raise TypeError(f"Transformer for #{tag} must be callable")
        self._handlers[tag] = handler

    def unregister(self, tag: str) -> None:
        """Unregister a tag transformer. Unknown tags are ignored."""
        self._handlers.pop(tag, None)

    def get_handler(self, tag: str) -> TagTransformer | None:
        """Return the transformer for ``tag``, or None if not registered."""
        return self._handlers.get(tag)

    def is_known(self, tag: str) -> bool:
        """Check if a tag is registered."""
        return tag in self._handlers

    @property
    def known_tags(self) -> set[str]:
        """Get the set of all registered tag names."""
        return set(self._handlers.keys())

    def copy(self) -> TagRegistry:
        """Return an independent registry with the same transformers."""
        clone = TagRegistry.__new__(TagRegistry)
        clone._handlers = dict(self._handlers)
        return clone

    def merged(
        self,
        overrides: Mapping[str, TagTransformer | None] | TagRegistry | None,
    ) -> TagRegistry:
        """Return a copy of this registry with ``overrides`` applied.

        A :class:`TagRegistry` passed as ``overrides`` is used as-is (copied),
        since it already carries its own defaults. In a mapping, a ``None``
        value removes that tag.
        """
        if isinstance(overrides, TagRegistry):
            return overrides.copy()
        merged = self.copy()
        for tag, handler in (overrides or {}).items():
            if handler is None:
                merged.unregister(tag)
            else:
                merged.register(tag, handler)
        return merged


# Default tag registry instance
default_registry = TagRegistry()
