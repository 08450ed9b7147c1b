"""EDN reader/parser implementation."""

from __future__ import annotations

from typing import Any

from edn_py.edn.lexer import EdnLexer, Token, TokenType
from edn_py.edn.tags import TagRegistry, default_registry
from edn_py.edn.types import (
    EdnList,
    EdnMap,
    EdnSet,
    EdnVector,
    Kind,
    Tagged,
    structural_key,
)
from edn_py.exceptions import (
    EDNParseError,
    EDNStructureError,
    EDNTagError,
)
from edn_py.logging import get_logger

logger = get_logger(__name__)

# Which open collection kinds each closing character may close
_CLOSES: dict[str, tuple[Kind, ...]] = {
    ")": (Kind.LIST,),
    "]": (Kind.VECTOR,),
    "}": (Kind.MAP, Kind.SET),
}

_NO_KEY = object()


class _Builder:
    """An open collection under construction."""

    __slots__ = ("kind", "tag", "pos", "items", "key")

    def __init__(self, kind: Kind, tag: str | None, pos: int):
        self.kind = kind
        self.tag = tag
        self.pos = pos
        # map entries are kept as (key, value) pairs until build
        self.items: list[Any] = []
        self.key: Any = _NO_KEY

    def add(self, value: Any, pos: int) -> None:
        if self.kind is not Kind.MAP:
            self.items.append(value)
        elif self.key is _NO_KEY:
            self.key = value
        else:
            key, self.key = self.key, _NO_KEY
            try:
                hash(structural_key(key))
            except TypeError as e:
                raise EDNParseError(
                    f"Unhashable map key {key!r} at position {pos}"
                ) from e
            self.items.append((key, value))

    def build(self) -> EdnList | EdnVector | EdnMap | EdnSet:
        if self.kind is Kind.LIST:
            return EdnList(self.items)
        if self.kind is Kind.VECTOR:
            return EdnVector(self.items)
        if self.kind is Kind.MAP:
            return EdnMap(self.items)
        try:
            return EdnSet(self.items)
        except TypeError as e:
            raise EDNParseError(
                f"Unhashable set element in set at position {self.pos}"
            ) from e


class EdnReader:
    """EDN reader/parser class.

    Parses a whole EDN document into an :class:`EdnList` of its top-level
    forms. Collections are built on an explicit stack, so nesting depth is
    bounded by ``max_depth`` rather than the interpreter's recursion limit.

    Attributes:
        s: The EDN string being parsed.
        max_depth: Maximum nesting depth allowed.
    """

    def __init__(
        self,
        s: str,
        max_depth: int = 100,
        tag_registry: TagRegistry | None = None,
    ):
        """Initialize the EDN reader.

        Args:
            s: The EDN string to parse.
            max_depth: Maximum nesting depth allowed (default 100).
            tag_registry: Optional tag registry. Uses the default if not provided.
        """
        self.s = s
        self.max_depth = max_depth
        self._tag_registry = tag_registry or default_registry
        self._stack: list[_Builder] = []
        self._tag: str | None = None
        self._tag_pos = 0

    def read_all(self) -> EdnList:
        """Read every top-level form.

        Returns:
            An EdnList of the top-level forms in input order.

        Raises:
            EDNParseError: If the input is not valid EDN.
        """
        self._stack = [_Builder(Kind.LIST, None, 0)]
        self._tag = None

        for token in EdnLexer(self.s):
            if token.type is TokenType.OPEN:
                self._open(token)
            elif token.type is TokenType.CLOSE:
                self._close(token)
            elif token.type is TokenType.TAG:
                self._set_tag(token)
            else:
                self._emit_scalar(token)

        if self._tag is not None:
            raise EDNTagError(
                f"Tag #{self._tag} with no value at position {self._tag_pos}"
            )
        if len(self._stack) > 1:
            top = self._stack[-1]
            raise EDNStructureError(
                f"Unterminated {top.kind.value} at position {top.pos}"
            )

        result = self._stack[0].build()
        logger.debug("parsed edn", forms=len(result), chars=len(self.s))
        return result

    def _open(self, token: Token) -> None:
        if len(self._stack) > self.max_depth:
            raise EDNParseError(
                f"Maximum nesting depth ({self.max_depth}) exceeded at position {token.pos}"
            )
        # A pending tag belongs to the whole collection and applies at close
        tag, self._tag = self._tag, None
        self._stack.append(_Builder(token.value, tag, token.pos))

    def _close(self, token: Token) -> None:
        top = self._stack[-1]
        if len(self._stack) == 1 or top.kind not in _CLOSES[token.value]:
            raise EDNStructureError(
                f"Unmatched closing {token.value!r} at position {token.pos}"
            )
        if self._tag is not None:
            raise EDNTagError(
                f"Tag #{self._tag} with no value at position {self._tag_pos}"
            )
        if top.key is not _NO_KEY:
            raise EDNStructureError(
                f"Map at position {top.pos} has a key with no value"
            )
        self._stack.pop()
        value = top.build()
        if top.tag is not None:
            value = self._apply_tag(top.tag, value)
        self._stack[-1].add(value, token.pos)

    def _set_tag(self, token: Token) -> None:
        if self._tag is not None:
            raise EDNTagError(
                f"Two tags in a row (#{self._tag} #{token.value}) at position {token.pos}"
            )
        self._tag = token.value
        self._tag_pos = token.pos

    def _emit_scalar(self, token: Token) -> None:
        value = token.value
        if self._tag is not None:
            tag, self._tag = self._tag, None
            if self._is_number(value) and not self._may_tag_number(tag):
                raise EDNTagError(
                    f"Tag #{tag} cannot be applied to the number {value!r} "
                    f"at position {token.pos}"
                )
            value = self._apply_tag(tag, value)
        self._stack[-1].add(value, token.pos)

    def _apply_tag(self, tag: str, value: Any) -> Any:
        handler = self._tag_registry.get_handler(tag)
        if handler is None:
            logger.debug("unregistered tag kept", tag=tag)
            return Tagged(tag, value)
        return handler(value)

    @staticmethod
    def _is_number(value: Any) -> bool:
        return isinstance(value, (int, float)) and not isinstance(value, bool)

    def _may_tag_number(self, tag: str) -> bool:
        # Only registered transformers and namespaced (user) tags accept numbers
        return self._tag_registry.is_known(tag) or "/" in tag
