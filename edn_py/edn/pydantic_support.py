"""
Pydantic model support for tagged EDN records.

Builds tag transformers that validate the map following a tag into a Pydantic
model, and turns model instances back into tagged maps for the writer.

Usage:
    from pydantic import BaseModel
    from edn_py import parse
    from edn_py.edn.pydantic_support import model_transformer

    class Person(BaseModel):
        name: str
        email: str

    people = parse(
        '#myapp/Person {:name "Ann" :email "ann@example.com"}',
        {"myapp/Person": model_transformer(Person)},
    )
    # -> EdnList([Person(name='Ann', email='ann@example.com')])
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from typing import Any, TypeVar

from pydantic import BaseModel, ValidationError

from edn_py.edn.types import EdnMap, Keyword, Tagged
from edn_py.exceptions import EDNTagError

M = TypeVar("M", bound=BaseModel)


def field_name(key: Any) -> str:
    """Turn an EDN map key into a Python field name.

    Namespaces are dropped and dashes become underscores, so ``:person/first-name``
    maps to ``first_name``.
    """
    text = str(key).lstrip(":")
    return text.rpartition("/")[2].replace("-", "_").replace("?", "")


def model_transformer(
    model: type[M],
    field_mapping: Mapping[str, str] | None = None,
) -> Callable[[Any], M]:
    """
    Build a tag transformer producing ``model`` instances.

    Args:
        model: The Pydantic model class to validate into.
        field_mapping: Optional explicit EDN key -> field name overrides,
            consulted before the default :func:`field_name` conversion.

    Returns:
        A transformer suitable for a tag registry.

    Example:
        registry = TagRegistry()
        registry.register("myapp/Person", model_transformer(Person))

    """
    mapping = dict(field_mapping or {})
    model_fields = set(model.model_fields.keys())

    def transform(value: Any) -> M:
        if not isinstance(value, Mapping):
            raise EDNTagError(
                f"{model.__name__} expects a map, got {type(value).__name__}"
            )
        kwargs: dict[str, Any] = {}
        for key, item in value.items():
            name = mapping.get(str(key), field_name(key))
            if name in model_fields:
                kwargs[name] = item
        try:
            return model.model_validate(kwargs)
        except ValidationError as e:
            raise EDNTagError(f"Invalid {model.__name__} record: {e}") from e

    transform.__name__ = f"transform_{model.__name__}"
    return transform


def model_to_tagged(tag: str, instance: BaseModel) -> Tagged:
    """Wrap a model instance as a tagged map the writer can serialize.

    Field names become keywords with underscores turned into dashes.
    """
    data = instance.model_dump()
    return Tagged(
        tag,
        EdnMap((Keyword(name.replace("_", "-")), item) for name, item in data.items()),
    )
