"""EDN writer/serializer implementation.

The writer is not a canonical-form printer. Lists and vectors both render as
``[...]``, so a round trip turns an :class:`EdnList` into an
:class:`EdnVector`. Map keys always render as quoted text.

Aliasing guard: the identity of every non-empty container is recorded while
writing. Meeting the same object twice raises, whether it forms a cycle or
is merely shared by two parents. Empty containers are exempt because they
cannot hold a cycle and the interpreter may share them freely.
"""

from __future__ import annotations

import math
from collections.abc import Mapping
from datetime import datetime
from typing import Any
from uuid import UUID

from edn_py.edn.datetime_utils import format_instant
from edn_py.edn.types import NAMED_CHARS, Char, EdnSet, Keyword, Symbol, Tagged
from edn_py.exceptions import EDNSerializeError
from edn_py.logging import get_logger

logger = get_logger(__name__)

_CHAR_NAMES = {char: name for name, char in NAMED_CHARS.items()}


def stringify(obj: Any) -> str:
    """Serialize a value tree to an EDN string.

    Args:
        obj: The value to serialize.

    Returns:
        The EDN text.

    Raises:
        EDNSerializeError: If the value (or something inside it) cannot be
            serialized, or a container is reached twice.

    Examples:
        >>> stringify(["hi", (1, 2), {"zee": "zow"}])
        '["hi",[1,2],{"zee" "zow"}]'
    """
    try:
        return _serialize(obj, set())
    except EDNSerializeError as e:
        logger.debug("edn serialization failed", error=str(e))
        raise


def _serialize(obj: Any, seen: set[int]) -> str:
    """Serialize a Python object to EDN format."""
    if obj is None:
        return "nil"

    if isinstance(obj, bool):
        return "true" if obj else "false"

    if isinstance(obj, int):
        return int.__repr__(obj)

    if isinstance(obj, float):
        if not math.isfinite(obj):
            raise EDNSerializeError(f"Cannot serialize non-finite float {obj!r}")
        return float.__repr__(obj)

    if isinstance(obj, Keyword):
        return f":{obj}"

    if isinstance(obj, Symbol):
        return str(obj)

    if isinstance(obj, Char):
        return _serialize_char(obj)

    if isinstance(obj, str):
        return _serialize_string(obj)

    if isinstance(obj, datetime):
        return f'#inst "{format_instant(obj)}"'

    if isinstance(obj, UUID):
        return f'#uuid "{obj}"'

    if isinstance(obj, Tagged):
        _mark_seen(obj, seen)
        return f"#{obj.tag} {_serialize(obj.value, seen)}"

    if isinstance(obj, (list, tuple)):
        _mark_seen(obj, seen)
        return "[" + ",".join(_serialize(item, seen) for item in obj) + "]"

    if isinstance(obj, (set, frozenset, EdnSet)):
        _mark_seen(obj, seen)
        return "#{" + ",".join(_serialize(item, seen) for item in obj) + "}"

    if isinstance(obj, Mapping):
        _mark_seen(obj, seen)
        pairs = [
            f"{_serialize_key(key)} {_serialize(value, seen)}"
            for key, value in obj.items()
        ]
        return "{" + ",".join(pairs) + "}"

    raise EDNSerializeError(f"Cannot serialize type {type(obj).__name__} to EDN")


def _mark_seen(obj: Any, seen: set[int]) -> None:
    if isinstance(obj, (list, tuple, set, frozenset, EdnSet, Mapping)) and not obj:
        return
    if id(obj) in seen:
        raise EDNSerializeError(
            f"Cannot serialize recursive or shared {type(obj).__name__} to EDN"
        )
    seen.add(id(obj))


def _serialize_string(s: str) -> str:
    """Serialize a string with proper escaping."""
    escaped = s.replace("\\", "\\\\")
    escaped = escaped.replace('"', '\\"')
    escaped = escaped.replace("\n", "\\n")
    escaped = escaped.replace("\r", "\\r")
    escaped = escaped.replace("\t", "\\t")
    return f'"{escaped}"'


def _serialize_char(c: str) -> str:
    if c in _CHAR_NAMES:
        return "\\" + _CHAR_NAMES[c]
    if ord(c) > 0xFFFF:
        raise EDNSerializeError(f"Cannot serialize character {c!r} outside the BMP")
    return f"\\u{ord(c):04X}"


def _serialize_key(key: Any) -> str:
    """Render a map key as quoted text."""
    if isinstance(key, str):
        return _serialize_string(str(key))
    if key is None or isinstance(key, (bool, int, float)):
        return f'"{_serialize(key, set())}"'
    raise EDNSerializeError(
        f"Cannot serialize map key of type {type(key).__name__} to EDN"
    )
