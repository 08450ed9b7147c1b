"""EDN value model.

Scalars map onto Python builtins where one exists (``nil`` -> ``None``,
booleans, ``int``, ``float``, ``str``). Symbols, keywords and characters are
``str`` subclasses so they keep their origin while still comparing equal to
their plain text. Collections carry their :class:`Kind` as part of their
identity: an :class:`EdnList` never equals an :class:`EdnVector` with the same
items, and neither equals a plain ``tuple``.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping
from collections.abc import Set as AbstractSet
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Any, Union
from uuid import UUID


class Kind(str, Enum):
    """Collection kinds recognized by the reader."""

    LIST = "list"
    VECTOR = "vector"
    MAP = "map"
    SET = "set"


# Named characters mapping
NAMED_CHARS: dict[str, str] = {
    "newline": "\n",
    "space": " ",
    "tab": "\t",
    "return": "\r",
}


class _Named(str):
    """Text with an optional ``namespace/`` prefix."""

    __slots__ = ()

    @property
    def namespace(self) -> str | None:
        """The part before ``/``, or None for un-namespaced names."""
        if self == "/" or "/" not in self:
            return None
        return self.partition("/")[0]

    @property
    def name(self) -> str:
        """The part after ``/`` (the whole text when not namespaced)."""
        if self.namespace is None:
            return str(self)
        return self.partition("/")[2]

    def __repr__(self) -> str:
        return f"{type(self).__name__}({str.__repr__(self)})"


class Symbol(_Named):
    """A bare EDN symbol such as ``foo`` or ``my.ns/bar``."""

    __slots__ = ()


class Keyword(_Named):
    """An EDN keyword. Holds the name without the leading ``:``."""

    __slots__ = ()


class Char(str):
    """A single decoded EDN character literal."""

    __slots__ = ()

    def __repr__(self) -> str:
        return f"Char({str.__repr__(self)})"


def structural_key(value: Any) -> Any:
    """Return the object used to compare and hash ``value`` inside collections.

    Python treats ``True == 1 == 1.0``, but booleans, integers and floats are
    distinct EDN values, so numbers are paired with their type. Model
    collections and :class:`Tagged` already compare this way and are
    returned unchanged, as is everything else.
    """
    if isinstance(value, bool):
        return (bool, value)
    if isinstance(value, int):
        return (int, value)
    if isinstance(value, float):
        return (float, value)
    return value


class _EdnSequence(tuple):
    """Immutable ordered collection that compares by kind and contents."""

    __slots__ = ()
    kind: Kind

    def __new__(cls, items: Iterable[Any] = ()):
        return super().__new__(cls, items)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, _EdnSequence) or other.kind is not self.kind:
            return False
        if len(self) != len(other):
            return False
        return all(
            structural_key(a) == structural_key(b) for a, b in zip(self, other)
        )

    def __ne__(self, other: object) -> bool:
        return not self.__eq__(other)

    def __hash__(self) -> int:
        return hash((self.kind, tuple(structural_key(item) for item in self)))

    def __repr__(self) -> str:
        return f"{type(self).__name__}({list(self)!r})"


class EdnList(_EdnSequence):
    """An EDN list, written ``(a b c)``."""

    __slots__ = ()
    kind = Kind.LIST


class EdnVector(_EdnSequence):
    """An EDN vector, written ``[a b c]``."""

    __slots__ = ()
    kind = Kind.VECTOR


class EdnSet(AbstractSet):
    """An immutable EDN set, written ``#{a b c}``.

    Elements are unique by structural equality. When two inserted elements
    are equal, the later one is kept (in the earlier one's position).
    """

    __slots__ = ("_data",)
    kind = Kind.SET

    def __init__(self, items: Iterable[Any] = ()):
        data: dict[Any, Any] = {}
        for item in items:
            data[structural_key(item)] = item
        self._data = data

    def __contains__(self, item: object) -> bool:
        return structural_key(item) in self._data

    def __iter__(self) -> Iterator[Any]:
        return iter(self._data.values())

    def __len__(self) -> int:
        return len(self._data)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, EdnSet):
            return False
        return self._data.keys() == other._data.keys()

    def __ne__(self, other: object) -> bool:
        return not self.__eq__(other)

    def __hash__(self) -> int:
        return hash((self.kind, frozenset(self._data)))

    def __repr__(self) -> str:
        return f"EdnSet({list(self)!r})"


class EdnMap(Mapping):
    """An immutable, insertion-ordered EDN map, written ``{k v}``.

    Keys are unique by structural equality. A repeated key keeps its first
    position and takes the later key and value.
    """

    __slots__ = ("_data",)
    kind = Kind.MAP

    def __init__(self, items: Mapping[Any, Any] | Iterable[tuple[Any, Any]] = ()):
        pairs = items.items() if isinstance(items, Mapping) else items
        data: dict[Any, tuple[Any, Any]] = {}
        for key, value in pairs:
            data[structural_key(key)] = (key, value)
        self._data = data

    def __getitem__(self, key: Any) -> Any:
        try:
            return self._data[structural_key(key)][1]
        except KeyError:
            raise KeyError(key) from None

    def __iter__(self) -> Iterator[Any]:
        return (key for key, _ in self._data.values())

    def __len__(self) -> int:
        return len(self._data)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, EdnMap) or len(self) != len(other):
            return False
        for skey, (_, value) in self._data.items():
            if skey not in other._data:
                return False
            if structural_key(value) != structural_key(other._data[skey][1]):
                return False
        return True

    def __ne__(self, other: object) -> bool:
        return not self.__eq__(other)

    def __hash__(self) -> int:
        return hash(
            (
                self.kind,
                frozenset(
                    (skey, structural_key(value))
                    for skey, (_, value) in self._data.items()
                ),
            )
        )

    def __repr__(self) -> str:
        return f"EdnMap({dict(self.items())!r})"


@dataclass(frozen=True, eq=False)
class Tagged:
    """A value read under a tag that has no registered transformer."""

    tag: str
    value: Any

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Tagged):
            return False
        return self.tag == other.tag and (
            structural_key(self.value) == structural_key(other.value)
        )

    def __ne__(self, other: object) -> bool:
        return not self.__eq__(other)

    def __hash__(self) -> int:
        return hash((self.tag, structural_key(self.value)))


# EDN value type - represents all possible EDN values
EDNValue = Union[
    None,
    bool,
    int,
    float,
    str,
    Symbol,
    Keyword,
    Char,
    datetime,
    UUID,
    EdnList,
    EdnVector,
    EdnMap,
    EdnSet,
    Tagged,
]
